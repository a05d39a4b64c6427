"""
Insight Schemas

Entities produced by the cross-session insight pipeline.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum

from insight_engine.schemas.session import Session


class GenerationMode(str, Enum):
    MOCK = "mock"
    REAL = "real"


class InsightOutcome(str, Enum):
    GENERATED = "generated"
    NO_SESSIONS = "no_sessions"  # nothing to analyze yet
    GENERATION_FAILED = "generation_failed"  # transport or service contract error
    PARSE_FAILED = "parse_failed"  # no decodable object in the generated text


class InsightCategory(str, Enum):
    PATTERNS = "patterns"
    PROGRESS_TRENDS = "progress_trends"
    RISK_INDICATORS = "risk_indicators"
    TREATMENT_GAPS = "treatment_gaps"


class InsightItem(BaseModel):
    """One confidence-scored clinical observation."""
    content: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    session_refs: Optional[list[str]] = None
    first_seen: Optional[datetime] = None  # progress trends only
    last_seen: Optional[datetime] = None


class PatientInsights(BaseModel):
    id: str
    patient_id: str
    patterns: list[InsightItem] = Field(default_factory=list)
    progress_trends: list[InsightItem] = Field(default_factory=list)
    risk_indicators: list[InsightItem] = Field(default_factory=list)
    treatment_gaps: list[InsightItem] = Field(default_factory=list)
    generated_at: datetime
    mode: GenerationMode
    model: Optional[str] = None
    tokens_used: Optional[int] = None
    outcome: InsightOutcome = InsightOutcome.GENERATED
    saved_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_empty(self) -> bool:
        return not (
            self.patterns or self.progress_trends
            or self.risk_indicators or self.treatment_gaps
        )


class DateRange(BaseModel):
    earliest: datetime
    latest: datetime


class AggregatedSessions(BaseModel):
    """A patient's completed sessions in chronological order. Never persisted."""
    patient_id: str
    session_count: int = Field(ge=0)
    date_range: Optional[DateRange] = None
    sessions: list[Session] = Field(default_factory=list)
