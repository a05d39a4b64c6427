from sqlalchemy import String, Integer, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from datetime import datetime
from typing import Optional

from insight_engine.models.base import Base, TimestampMixin


def _session_id() -> str:
    return str(uuid4())


class TherapySession(Base, TimestampMixin):
    """A single therapy session with its SOAP notes."""

    __tablename__ = "therapy_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_session_id)
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False)
    therapist_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Session metadata
    therapist_role: Mapped[str] = mapped_column(String(50), nullable=False)
    session_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="scheduled")
    # scheduled, in_progress, completed, cancelled, no_show
    location: Mapped[str] = mapped_column(String(20), default="in_person")

    # Timing
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, default=50)  # minutes

    # SOAP notes and optional sections, stored as one document
    notes: Mapped[dict] = mapped_column(JSON, default=dict)

    __table_args__ = (
        Index("ix_therapy_sessions_patient_id", "patient_id"),
    )

    def __repr__(self) -> str:
        return f"<TherapySession {self.id} patient={self.patient_id} status={self.status}>"
