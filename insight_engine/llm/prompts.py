"""
LLM Prompt Templates for Clinical Insight Generation

These prompts guide the text-completion service to analyze a patient's
therapy history across sessions, and to summarize single sessions in the
professional language of each therapist role.

CRITICAL: All output is framed as observations for clinician review, never
as diagnoses.
"""

from pydantic import BaseModel

from insight_engine.schemas.session import TherapistRole, require_complete


# =============================================================================
# CROSS-SESSION PATIENT INSIGHTS
# =============================================================================

PATIENT_INSIGHT_SYSTEM = """You are a clinical analyst reviewing a mental health patient's complete therapy history.

Analyze the provided session notes and identify insights in FOUR categories:

1. PATTERNS: Recurring themes, behaviors, emotional patterns, relationship dynamics, or coping mechanisms that appear across sessions. Look for:
   - Consistent emotional triggers or stressors
   - Repeated thought patterns or cognitive distortions
   - Recurring interpersonal dynamics
   - Habitual coping strategies (adaptive or maladaptive)
   - Themes the patient keeps bringing to sessions

2. PROGRESS_TRENDS: Evidence of improvement or decline over time in symptoms, daily functioning, goal achievement, or treatment engagement. Consider:
   - Changes in symptom severity or frequency
   - Changes in daily functioning
   - Goals attained and milestones reached
   - Homework completion and engagement
   - Shifts in insight and self-awareness

3. RISK_INDICATORS: Safety concerns noted across sessions. Flag:
   - Any suicidal or homicidal thoughts
   - Self-harm behaviors, current or historical
   - Substance use patterns or changes
   - Social isolation or withdrawal
   - Crisis events or escalating distress

4. TREATMENT_GAPS: Concerns that have not been adequately addressed, or recommended interventions that have not been implemented. Note:
   - Patient concerns mentioned but not followed up
   - Referrals suggested but not completed
   - Interventions recommended but not tried
   - Areas the patient avoids discussing
   - Possible conditions suggested by patterns but not yet assessed

Output your analysis as JSON in EXACTLY this format:
{
  "patterns": [
    {
      "content": "Detailed description of the pattern",
      "confidence": 0.85,
      "sessionRefs": ["2024-01-15", "2024-02-01", "2024-02-15"]
    }
  ],
  "progressTrends": [
    {
      "content": "Detailed description of the trend",
      "confidence": 0.90,
      "firstSeen": "2024-01-01",
      "lastSeen": "2024-03-01"
    }
  ],
  "riskIndicators": [
    {
      "content": "Detailed description of the risk indicator",
      "confidence": 0.95,
      "sessionRefs": ["2024-02-15"]
    }
  ],
  "treatmentGaps": [
    {
      "content": "Detailed description of the treatment gap",
      "confidence": 0.75
    }
  ]
}

CONFIDENCE SCORES:
- 0.9 and above: clear evidence across multiple sessions
- 0.7 to 0.9: moderate evidence with some support
- Below 0.7: tentative pattern that needs more data

GUIDELINES:
- Provide 2-5 insights per category (fewer if the data does not support more)
- If a category has no relevant findings, return an empty array
- Match the language of the input (Hebrew or English); for Hebrew input, write every insight in Hebrew
- Reference specific session dates when supporting an insight
- Be clinically precise but accessible to all mental health professionals
- Focus on insights that inform treatment planning
- Prioritize patient safety: flag any concerning pattern prominently"""

PATIENT_INSIGHT_USER = """Patient Session History ({session_count} {session_noun}):

{formatted_sessions}

Please analyze these sessions and provide insights in the four categories (patterns, progressTrends, riskIndicators, treatmentGaps)."""


def build_insight_user_prompt(formatted_sessions: str, session_count: int) -> str:
    """Embed formatted session text and the session count in the user prompt."""
    return PATIENT_INSIGHT_USER.format(
        session_count=session_count,
        session_noun="session" if session_count == 1 else "sessions",
        formatted_sessions=formatted_sessions,
    )


# =============================================================================
# SESSION SUMMARY - ROLE SPECIFIC
# =============================================================================

SESSION_SUMMARY_USER = """Generate a professional clinical session summary based on the following documentation.

SOAP NOTES:
{soap_notes}

SESSION TRANSCRIPT:
{transcript}

Instructions:
1. If a transcript is provided, integrate relevant clinical observations from it
2. If no transcript is available, base the summary solely on the SOAP notes
3. Emphasize the focus areas of your discipline
4. Highlight interventions used and the patient's response
5. Document progress toward treatment goals
6. Flag any risk factors or safety concerns"""

NO_TRANSCRIPT_TEXT = "No transcript available"

_SUMMARY_SYSTEM_TEMPLATE = """You are an expert {title} writing clinical session documentation.

Your role is to generate professional session summaries that:
{responsibilities}

Write summaries appropriate for clinical documentation reviewed by other professionals. Match the language of the input (Hebrew or English) in your response."""

_SUMMARY_OUTPUT_FORMAT = """The summary should include:
1. A 2-3 paragraph clinical narrative covering presenting concerns, session content, and observations
2. Key points in bullet format: concerns addressed, interventions and response, progress indicators, plan
3. A professional tone consistent with the documentation standards of the discipline"""


class SessionSummaryPrompt(BaseModel):
    """Prompt configuration for one therapist role."""
    role: TherapistRole
    system_prompt: str
    user_prompt_template: str = SESSION_SUMMARY_USER
    focus_areas: list[str]
    output_format: str = _SUMMARY_OUTPUT_FORMAT


def _role_prompt(role: TherapistRole, title: str, focus_areas: list[str]) -> SessionSummaryPrompt:
    return SessionSummaryPrompt(
        role=role,
        system_prompt=_SUMMARY_SYSTEM_TEMPLATE.format(
            title=title,
            responsibilities="\n".join(f"- Address {area.lower()}" for area in focus_areas),
        ),
        focus_areas=focus_areas,
    )


SESSION_SUMMARY_PROMPTS: dict[TherapistRole, SessionSummaryPrompt] = require_complete({
    TherapistRole.PSYCHOLOGIST: _role_prompt(
        TherapistRole.PSYCHOLOGIST,
        "clinical psychologist",
        [
            "Cognitive patterns and thought distortions",
            "Psychological assessments (PHQ-9, GAD-7, BDI-II, BAI, PCL-5)",
            "Therapeutic techniques (CBT, DBT, ACT, exposure therapy)",
            "Treatment formulation and case conceptualization",
            "Risk assessment and safety planning",
        ],
    ),
    TherapistRole.PSYCHIATRIST: _role_prompt(
        TherapistRole.PSYCHIATRIST,
        "psychiatrist",
        [
            "Mental status examination findings",
            "Medication response, adherence and side effects",
            "Diagnostic considerations in DSM-5 terms",
            "Sleep, appetite and somatic symptoms",
            "Suicide and violence risk assessment",
        ],
    ),
    TherapistRole.SOCIAL_WORKER: _role_prompt(
        TherapistRole.SOCIAL_WORKER,
        "clinical social worker",
        [
            "Psychosocial stressors and supports",
            "Housing, financial and benefit needs",
            "Family and community resources",
            "Care coordination and advocacy",
            "Safety concerns in the home environment",
        ],
    ),
    TherapistRole.OCCUPATIONAL_THERAPIST: _role_prompt(
        TherapistRole.OCCUPATIONAL_THERAPIST,
        "occupational therapist",
        [
            "Activities of daily living and independence",
            "Sensory processing and regulation",
            "Fine motor and functional skills",
            "Environmental adaptations and routines",
            "Participation in work, school and leisure",
        ],
    ),
    TherapistRole.SPEECH_THERAPIST: _role_prompt(
        TherapistRole.SPEECH_THERAPIST,
        "speech-language pathologist",
        [
            "Receptive and expressive language",
            "Articulation, fluency and voice",
            "Pragmatic and social communication",
            "Swallowing and feeding concerns",
            "Home practice and caregiver training",
        ],
    ),
    TherapistRole.PHYSICAL_THERAPIST: _role_prompt(
        TherapistRole.PHYSICAL_THERAPIST,
        "physical therapist",
        [
            "Pain levels and functional limitations",
            "Range of motion, strength and balance",
            "Therapeutic exercise and manual techniques",
            "Mobility and gait",
            "Home exercise program adherence",
        ],
    ),
    TherapistRole.COUNSELOR: _role_prompt(
        TherapistRole.COUNSELOR,
        "licensed counselor",
        [
            "Presenting concerns and emotional state",
            "Coping skills and strengths",
            "Therapeutic alliance and engagement",
            "Goal progress and life transitions",
            "Risk indicators and safety",
        ],
    ),
    TherapistRole.ART_THERAPIST: _role_prompt(
        TherapistRole.ART_THERAPIST,
        "art therapist",
        [
            "Art materials, process and product",
            "Symbolic and thematic content of artwork",
            "Emotional expression through creative work",
            "Verbal processing of the artwork",
            "Changes in creative engagement over time",
        ],
    ),
    TherapistRole.MUSIC_THERAPIST: _role_prompt(
        TherapistRole.MUSIC_THERAPIST,
        "music therapist",
        [
            "Musical interventions and instruments used",
            "Rhythmic, melodic and vocal responses",
            "Emotional and social engagement through music",
            "Attention, regulation and motor responses",
            "Carryover of musical strategies outside sessions",
        ],
    ),
    TherapistRole.FAMILY_THERAPIST: _role_prompt(
        TherapistRole.FAMILY_THERAPIST,
        "marriage and family therapist",
        [
            "Family structure, roles and boundaries",
            "Communication and conflict patterns",
            "Systemic dynamics and alliances",
            "Strengths and resilience of the family system",
            "Safety concerns within the family",
        ],
    ),
}, TherapistRole)


def get_prompt_for_role(role: TherapistRole) -> SessionSummaryPrompt:
    return SESSION_SUMMARY_PROMPTS[role]


def get_supported_roles() -> list[TherapistRole]:
    return list(SESSION_SUMMARY_PROMPTS)
