"""
Patient Insight Models

Durable record of the most recent insight set accepted for a patient.
"""

from sqlalchemy import String, Integer, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from typing import Optional

from insight_engine.models.base import Base, TimestampMixin


class PatientInsightsRecord(Base, TimestampMixin):
    """
    One saved insight set per patient.

    No unique constraint on patient_id. Saving is an unguarded
    read-modify-write, so two racing first saves may both insert.
    Lookups pick the most recently written row (latest updated_at).
    """
    __tablename__ = "patient_insights"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Category payloads: lists of serialized InsightItem dicts
    patterns: Mapped[list] = mapped_column(JSON, default=list)
    progress_trends: Mapped[list] = mapped_column(JSON, default=list)
    risk_indicators: Mapped[list] = mapped_column(JSON, default=list)
    treatment_gaps: Mapped[list] = mapped_column(JSON, default=list)

    # Generation metadata
    generated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    mode: Mapped[str] = mapped_column(String(10), nullable=False)  # mock, real
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tokens_used: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    outcome: Mapped[str] = mapped_column(String(30), default="generated")

    saved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_patient_insights_patient_id", "patient_id"),
    )

    def __repr__(self) -> str:
        return f"<PatientInsightsRecord {self.id} patient={self.patient_id} mode={self.mode}>"
