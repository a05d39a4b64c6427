"""
Session Formatter

Renders therapy sessions into the canonical text blocks sent to the
text-completion service. The layout is fixed so the generator sees the same
template for every session: SOAP fields are always present, optional
sections appear only when recorded.
"""

from datetime import datetime

from insight_engine.schemas.session import (
    Session,
    RiskAssessment,
    MedicationNote,
    THERAPIST_ROLE_LABELS,
    SUICIDAL_IDEATION_LABELS,
    HOMICIDAL_IDEATION_LABELS,
    SELF_HARM_LABELS,
    SUBSTANCE_USE_LABELS,
)

SESSION_SEPARATOR = "\n\n" + "=" * 80 + "\n\n"
NO_SESSIONS_TEXT = "No completed sessions available for analysis."


def format_date(value: datetime) -> str:
    """Calendar date (YYYY-MM-DD) used for headers and session references."""
    return value.date().isoformat()


def format_sessions(sessions: list[Session]) -> str:
    """Join formatted sessions with a separator rule between them."""
    if not sessions:
        return NO_SESSIONS_TEXT

    return SESSION_SEPARATOR.join(
        format_session(session, number)
        for number, session in enumerate(sessions, start=1)
    )


def format_session(session: Session, number: int = 1) -> str:
    notes = session.notes
    sections = [
        f"SESSION {number}",
        f"Date: {format_date(session.scheduled_at)}",
        f"Therapist Role: {THERAPIST_ROLE_LABELS[session.therapist_role]}",
        f"Session Type: {session.session_type.value.replace('_', ' ')}",
        f"Duration: {session.duration} minutes",
        "",
        "--- SOAP NOTES ---",
        f"Subjective: {notes.subjective}",
        "",
        f"Objective: {notes.objective}",
        "",
        f"Assessment: {notes.assessment}",
        "",
        f"Plan: {notes.plan}",
        "",
    ]

    if notes.chief_complaint:
        sections += [f"Chief Complaint: {notes.chief_complaint}", ""]

    if notes.interventions_used:
        sections += [f"Interventions Used: {', '.join(notes.interventions_used)}", ""]

    if notes.progress_toward_goals:
        sections += [f"Progress Toward Goals: {notes.progress_toward_goals}", ""]

    if notes.risk_assessment:
        sections += [
            "--- RISK ASSESSMENT ---",
            format_risk_assessment(notes.risk_assessment),
            "",
        ]

    if notes.medications:
        sections += [
            "--- MEDICATIONS ---",
            "\n".join(format_medication(m) for m in notes.medications),
            "",
        ]

    if notes.homework:
        sections += [f"Homework: {notes.homework}", ""]

    if notes.next_session_plan:
        sections += [f"Next Session Plan: {notes.next_session_plan}", ""]

    if notes.additional_notes:
        sections += [f"Additional Notes: {notes.additional_notes}", ""]

    return "\n".join(sections).strip()


def format_risk_assessment(risk: RiskAssessment) -> str:
    lines = [
        f"Suicidal Ideation: {SUICIDAL_IDEATION_LABELS[risk.suicidal_ideation]}",
        f"Homicidal Ideation: {HOMICIDAL_IDEATION_LABELS[risk.homicidal_ideation]}",
        f"Self-Harm: {SELF_HARM_LABELS[risk.self_harm]}",
        f"Substance Use: {SUBSTANCE_USE_LABELS[risk.substance_use]}",
        f"Safety Plan Reviewed: {'Yes' if risk.safety_plan_reviewed else 'No'}",
    ]
    if risk.notes:
        lines.append(f"Notes: {risk.notes}")
    return "\n".join(lines)


def format_medication(medication: MedicationNote) -> str:
    line = f"{medication.name} {medication.dosage} {medication.frequency}"
    if medication.side_effects:
        line += f" (Side effects: {medication.side_effects})"
    return line
