"""
Insight Store

Persists accepted insight sets, one record per patient. Saving replaces the
patient's existing record in place rather than appending.

Saves are an unguarded read-modify-write: no lock, no transaction spanning
the read, no version check. Concurrent saves for one patient race and the
later write wins: every save stamps updated_at, and reads serve the most
recently written record.
"""

import logging
import time
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from insight_engine.models.insights import PatientInsightsRecord
from insight_engine.schemas.insights import PatientInsights

logger = logging.getLogger(__name__)


def generate_record_id() -> str:
    return f"insights-{int(time.time() * 1000)}-{uuid4().hex[:9]}"


def to_insights(record: PatientInsightsRecord) -> PatientInsights:
    return PatientInsights.model_validate(record)


def _record_values(insights: PatientInsights, saved_at: datetime) -> dict:
    return {
        "patterns": [i.model_dump(mode="json") for i in insights.patterns],
        "progress_trends": [i.model_dump(mode="json") for i in insights.progress_trends],
        "risk_indicators": [i.model_dump(mode="json") for i in insights.risk_indicators],
        "treatment_gaps": [i.model_dump(mode="json") for i in insights.treatment_gaps],
        "generated_at": insights.generated_at,
        "mode": insights.mode.value,
        "model": insights.model,
        "tokens_used": insights.tokens_used,
        "outcome": insights.outcome.value,
        "saved_at": saved_at,
    }


class InsightStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _latest_record(self, patient_id: str) -> Optional[PatientInsightsRecord]:
        result = await self.db.execute(
            select(PatientInsightsRecord)
            .where(PatientInsightsRecord.patient_id == patient_id)
            .order_by(
                PatientInsightsRecord.updated_at.desc(),
                PatientInsightsRecord.generated_at.desc(),
            )
            .limit(1)
        )
        return result.scalars().first()

    async def find_by_patient_id(self, patient_id: str) -> Optional[PatientInsights]:
        """Most recently saved insights for a patient, or None."""
        record = await self._latest_record(patient_id)
        return to_insights(record) if record else None

    async def save_for_patient(self, insights: PatientInsights) -> PatientInsights:
        """
        Create or update the patient's saved insights.

        An existing record keeps its id and is overwritten with the new
        content; otherwise a record is created with a fresh id. saved_at is
        stamped only if the insights do not already carry one.
        """
        now = datetime.now().astimezone()
        values = _record_values(insights, saved_at=insights.saved_at or now)
        values["updated_at"] = now

        record = await self._latest_record(insights.patient_id)
        if record:
            for field, value in values.items():
                setattr(record, field, value)
            logger.info(f"Updated saved insights {record.id} for patient {insights.patient_id}")
        else:
            record = PatientInsightsRecord(
                id=generate_record_id(),
                patient_id=insights.patient_id,
                **values,
            )
            self.db.add(record)
            logger.info(f"Created saved insights {record.id} for patient {insights.patient_id}")

        await self.db.commit()
        await self.db.refresh(record)
        return to_insights(record)

    async def delete_by_patient_id(self, patient_id: str) -> bool:
        """Remove the patient's saved insights. Returns False if there were none."""
        result = await self.db.execute(
            delete(PatientInsightsRecord).where(PatientInsightsRecord.patient_id == patient_id)
        )
        await self.db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted saved insights for patient {patient_id}")
        return deleted
