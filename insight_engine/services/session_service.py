from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from insight_engine.insights.aggregator import as_utc
from insight_engine.models.session import TherapySession
from insight_engine.schemas.session import Session, SessionCreate


def to_session(row: TherapySession) -> Session:
    session = Session.model_validate(row)
    # SQLite drops tzinfo; stored values are UTC
    session.scheduled_at = as_utc(session.scheduled_at)
    return session


class SessionService:
    """Session store backed by the therapy_sessions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_session(self, data: SessionCreate) -> Session:
        row = TherapySession(
            patient_id=data.patient_id,
            therapist_id=data.therapist_id,
            therapist_role=data.therapist_role.value,
            session_type=data.session_type.value,
            status=data.status.value,
            location=data.location.value,
            scheduled_at=data.scheduled_at,
            duration=data.duration,
            notes=data.notes.model_dump(mode="json"),
        )
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return to_session(row)

    async def get_session(self, session_id: str) -> Optional[Session]:
        row = await self.db.get(TherapySession, session_id)
        return to_session(row) if row else None

    async def find_by_patient(self, patient_id: str) -> list[Session]:
        """All sessions for a patient, any status, in no particular order."""
        result = await self.db.execute(
            select(TherapySession).where(TherapySession.patient_id == patient_id)
        )
        return [to_session(row) for row in result.scalars().all()]
