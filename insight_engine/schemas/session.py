"""
Session Schemas

Pydantic schemas for therapy sessions as read from the session store.
Sessions are read-only inputs to the insight pipeline.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class TherapistRole(str, Enum):
    PSYCHOLOGIST = "psychologist"
    PSYCHIATRIST = "psychiatrist"
    SOCIAL_WORKER = "social_worker"
    OCCUPATIONAL_THERAPIST = "occupational_therapist"
    SPEECH_THERAPIST = "speech_therapist"
    PHYSICAL_THERAPIST = "physical_therapist"
    COUNSELOR = "counselor"
    ART_THERAPIST = "art_therapist"
    MUSIC_THERAPIST = "music_therapist"
    FAMILY_THERAPIST = "family_therapist"


class SessionType(str, Enum):
    INITIAL_ASSESSMENT = "initial_assessment"
    INDIVIDUAL_THERAPY = "individual_therapy"
    GROUP_THERAPY = "group_therapy"
    FAMILY_THERAPY = "family_therapy"
    EVALUATION = "evaluation"
    FOLLOW_UP = "follow_up"
    CRISIS_INTERVENTION = "crisis_intervention"
    DISCHARGE_PLANNING = "discharge_planning"


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class SessionLocation(str, Enum):
    IN_PERSON = "in_person"
    TELEHEALTH = "telehealth"
    HOME_VISIT = "home_visit"


class SuicidalIdeation(str, Enum):
    NONE = "none"
    PASSIVE = "passive"
    ACTIVE_NO_PLAN = "active_no_plan"
    ACTIVE_WITH_PLAN = "active_with_plan"


class HomicidalIdeation(str, Enum):
    NONE = "none"
    PRESENT = "present"


class SelfHarm(str, Enum):
    NONE = "none"
    HISTORY = "history"
    CURRENT = "current"


class SubstanceUse(str, Enum):
    NONE = "none"
    ACTIVE = "active"
    IN_RECOVERY = "in_recovery"


def require_complete(table: dict, enum_cls: type[Enum]) -> dict:
    """
    Check that a lookup table keyed by an enum covers every member.

    Called at import time on every enum-keyed table so a new member without
    an entry fails loudly instead of falling through at runtime.
    """
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise TypeError(
            f"{enum_cls.__name__} table is missing entries for: {', '.join(missing)}"
        )
    return table


# =============================================================================
# Display vocabularies
# =============================================================================

THERAPIST_ROLE_LABELS: dict[TherapistRole, str] = require_complete({
    TherapistRole.PSYCHOLOGIST: "Psychologist",
    TherapistRole.PSYCHIATRIST: "Psychiatrist",
    TherapistRole.SOCIAL_WORKER: "Social Worker",
    TherapistRole.OCCUPATIONAL_THERAPIST: "Occupational Therapist",
    TherapistRole.SPEECH_THERAPIST: "Speech Therapist",
    TherapistRole.PHYSICAL_THERAPIST: "Physical Therapist",
    TherapistRole.COUNSELOR: "Counselor",
    TherapistRole.ART_THERAPIST: "Art Therapist",
    TherapistRole.MUSIC_THERAPIST: "Music Therapist",
    TherapistRole.FAMILY_THERAPIST: "Family Therapist",
}, TherapistRole)

SUICIDAL_IDEATION_LABELS: dict[SuicidalIdeation, str] = require_complete({
    SuicidalIdeation.NONE: "None",
    SuicidalIdeation.PASSIVE: "Passive ideation",
    SuicidalIdeation.ACTIVE_NO_PLAN: "Active ideation (no plan)",
    SuicidalIdeation.ACTIVE_WITH_PLAN: "Active ideation with plan",
}, SuicidalIdeation)

HOMICIDAL_IDEATION_LABELS: dict[HomicidalIdeation, str] = require_complete({
    HomicidalIdeation.NONE: "None",
    HomicidalIdeation.PRESENT: "Present",
}, HomicidalIdeation)

SELF_HARM_LABELS: dict[SelfHarm, str] = require_complete({
    SelfHarm.NONE: "None",
    SelfHarm.HISTORY: "History of self-harm",
    SelfHarm.CURRENT: "Current self-harm",
}, SelfHarm)

SUBSTANCE_USE_LABELS: dict[SubstanceUse, str] = require_complete({
    SubstanceUse.NONE: "None",
    SubstanceUse.ACTIVE: "Active use",
    SubstanceUse.IN_RECOVERY: "In recovery",
}, SubstanceUse)


# =============================================================================
# Session Schemas
# =============================================================================

class RiskAssessment(BaseModel):
    suicidal_ideation: SuicidalIdeation = SuicidalIdeation.NONE
    homicidal_ideation: HomicidalIdeation = HomicidalIdeation.NONE
    self_harm: SelfHarm = SelfHarm.NONE
    substance_use: SubstanceUse = SubstanceUse.NONE
    safety_plan_reviewed: bool = False
    notes: Optional[str] = None


class MedicationNote(BaseModel):
    name: str
    dosage: str
    frequency: str
    prescribed_by: Optional[str] = None
    side_effects: Optional[str] = None


class SessionNotes(BaseModel):
    """SOAP notes plus optional structured sections."""
    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""
    chief_complaint: Optional[str] = None
    interventions_used: list[str] = Field(default_factory=list)
    progress_toward_goals: Optional[str] = None
    risk_assessment: Optional[RiskAssessment] = None
    medications: list[MedicationNote] = Field(default_factory=list)
    homework: Optional[str] = None
    next_session_plan: Optional[str] = None
    additional_notes: Optional[str] = None


class Session(BaseModel):
    id: str
    patient_id: str
    therapist_id: Optional[str] = None
    therapist_role: TherapistRole
    session_type: SessionType = SessionType.INDIVIDUAL_THERAPY
    scheduled_at: datetime
    duration: int = Field(default=50, ge=0)  # minutes
    status: SessionStatus = SessionStatus.SCHEDULED
    location: SessionLocation = SessionLocation.IN_PERSON
    notes: SessionNotes = Field(default_factory=SessionNotes)

    class Config:
        from_attributes = True


class SessionCreate(BaseModel):
    patient_id: str
    therapist_id: Optional[str] = None
    therapist_role: TherapistRole
    session_type: SessionType = SessionType.INDIVIDUAL_THERAPY
    scheduled_at: datetime
    duration: int = Field(default=50, ge=0)
    status: SessionStatus = SessionStatus.SCHEDULED
    location: SessionLocation = SessionLocation.IN_PERSON
    notes: SessionNotes = Field(default_factory=SessionNotes)


class SessionSummaryRequest(BaseModel):
    transcript: Optional[str] = None


class SessionSummaryResponse(BaseModel):
    summary: str
    mode: str
    model: Optional[str] = None
    tokens_used: Optional[int] = None
    generated_at: datetime
