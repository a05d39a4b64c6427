"""
Tests for the Session Formatter
"""

from conftest import make_session, utc

from insight_engine.insights.formatter import (
    NO_SESSIONS_TEXT,
    SESSION_SEPARATOR,
    format_date,
    format_session,
    format_sessions,
)
from insight_engine.schemas.session import (
    MedicationNote,
    RiskAssessment,
    SelfHarm,
    SessionType,
    SuicidalIdeation,
    TherapistRole,
)


class TestFormatSessions:
    def test_empty_list(self):
        assert format_sessions([]) == NO_SESSIONS_TEXT
        assert NO_SESSIONS_TEXT == "No completed sessions available for analysis."

    def test_sessions_numbered_and_separated(self):
        sessions = [make_session(utc(2024, 1, 1)), make_session(utc(2024, 1, 15))]

        text = format_sessions(sessions)

        blocks = text.split(SESSION_SEPARATOR)
        assert len(blocks) == 2
        assert blocks[0].startswith("SESSION 1\nDate: 2024-01-01")
        assert blocks[1].startswith("SESSION 2\nDate: 2024-01-15")
        assert SESSION_SEPARATOR == "\n\n" + "=" * 80 + "\n\n"

    def test_format_date(self):
        assert format_date(utc(2024, 2, 1, hour=23)) == "2024-02-01"


class TestFormatSession:
    def test_header_and_soap_sections(self):
        session = make_session(
            utc(2024, 1, 1),
            role=TherapistRole.SOCIAL_WORKER,
            subjective="Feeling low",
            objective="Flat affect",
            assessment="Mild depression",
            plan="Weekly sessions",
        )
        session.session_type = SessionType.FAMILY_THERAPY

        text = format_session(session, number=3)

        assert "SESSION 3" in text
        assert "Therapist Role: Social Worker" in text
        assert "Session Type: family therapy" in text
        assert "Duration: 50 minutes" in text
        assert "--- SOAP NOTES ---" in text
        assert "Subjective: Feeling low" in text
        assert "Objective: Flat affect" in text
        assert "Assessment: Mild depression" in text
        assert "Plan: Weekly sessions" in text

    def test_soap_sections_present_when_empty(self):
        session = make_session(utc(2024, 1, 1), subjective="")

        text = format_session(session)

        assert "Objective: " in text
        assert "Plan:" in text

    def test_optional_sections_omitted_when_absent(self):
        text = format_session(make_session(utc(2024, 1, 1)))

        assert "Chief Complaint" not in text
        assert "--- RISK ASSESSMENT ---" not in text
        assert "--- MEDICATIONS ---" not in text
        assert "Homework" not in text

    def test_optional_sections_rendered(self):
        session = make_session(
            utc(2024, 1, 1),
            chief_complaint="Insomnia",
            interventions_used=["CBT", "Mindfulness"],
            progress_toward_goals="Sleeping 5 hours",
            risk_assessment=RiskAssessment(
                suicidal_ideation=SuicidalIdeation.PASSIVE,
                self_harm=SelfHarm.HISTORY,
                safety_plan_reviewed=True,
                notes="Monitor closely",
            ),
            medications=[
                MedicationNote(name="Sertraline", dosage="50mg", frequency="daily", side_effects="nausea"),
                MedicationNote(name="Melatonin", dosage="3mg", frequency="nightly"),
            ],
            homework="Sleep diary",
            next_session_plan="Review diary",
            additional_notes="Arrived late",
        )

        text = format_session(session)

        assert "Chief Complaint: Insomnia" in text
        assert "Interventions Used: CBT, Mindfulness" in text
        assert "Progress Toward Goals: Sleeping 5 hours" in text
        assert "--- RISK ASSESSMENT ---" in text
        assert "Suicidal Ideation: Passive ideation" in text
        assert "Homicidal Ideation: None" in text
        assert "Self-Harm: History of self-harm" in text
        assert "Safety Plan Reviewed: Yes" in text
        assert "Notes: Monitor closely" in text
        assert "Sertraline 50mg daily (Side effects: nausea)" in text
        assert "Melatonin 3mg nightly\n" in text
        assert "Homework: Sleep diary" in text
        assert "Next Session Plan: Review diary" in text
        assert text.endswith("Additional Notes: Arrived late")
