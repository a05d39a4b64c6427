"""
Session Aggregator

Collects a patient's completed sessions in chronological order for
cross-session analysis.
"""

import logging
from datetime import datetime, timezone
from typing import Protocol

from insight_engine.schemas.session import Session, SessionStatus
from insight_engine.schemas.insights import AggregatedSessions, DateRange

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionSource(Protocol):
    """Read-only view of the session store."""

    async def find_by_patient(self, patient_id: str) -> list[Session]:
        ...


class SessionAggregator:
    """Loads, filters and orders sessions for one patient."""

    def __init__(self, source: SessionSource):
        self.source = source

    async def aggregate(self, patient_id: str) -> AggregatedSessions:
        """
        Fetch all completed sessions for a patient, oldest first.

        Never raises: a failing session store is logged and treated as a
        patient with no sessions.
        """
        try:
            sessions = await self.source.find_by_patient(patient_id)
        except Exception:
            logger.exception(f"Failed to load sessions for patient {patient_id}")
            sessions = []

        completed = [
            s.model_copy(update={"scheduled_at": as_utc(s.scheduled_at)})
            for s in sessions
            if s.status == SessionStatus.COMPLETED
        ]
        completed.sort(key=lambda s: s.scheduled_at)

        date_range = None
        if completed:
            date_range = DateRange(
                earliest=completed[0].scheduled_at,
                latest=completed[-1].scheduled_at,
            )

        logger.info(
            f"Aggregated {len(completed)} completed of {len(sessions)} sessions "
            f"for patient {patient_id}"
        )
        return AggregatedSessions(
            patient_id=patient_id,
            session_count=len(completed),
            date_range=date_range,
            sessions=completed,
        )
