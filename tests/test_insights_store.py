"""
Tests for saved-insight persistence
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import utc

from insight_engine.models import PatientInsightsRecord
from insight_engine.schemas.insights import (
    GenerationMode,
    InsightItem,
    InsightOutcome,
    PatientInsights,
)
from insight_engine.services.insights_store import InsightStore


def build_insights(patient_id: str = "patient-1", content: str = "Avoids conflict", **overrides) -> PatientInsights:
    values = dict(
        id=f"insights-{patient_id}-1",
        patient_id=patient_id,
        patterns=[InsightItem(content=content, confidence=0.8, session_refs=["2024-01-01"])],
        progress_trends=[
            InsightItem(
                content="Sleep improving",
                confidence=0.7,
                first_seen=utc(2024, 1, 1),
                last_seen=utc(2024, 2, 1),
            ),
        ],
        risk_indicators=[InsightItem(content="No active ideation", confidence=0.95)],
        treatment_gaps=[],
        generated_at=utc(2024, 2, 2),
        mode=GenerationMode.REAL,
        model="test-model",
        tokens_used=100,
    )
    values.update(overrides)
    return PatientInsights(**values)


async def count_records(db: AsyncSession, patient_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(PatientInsightsRecord)
        .where(PatientInsightsRecord.patient_id == patient_id)
    )
    return result.scalar_one()


@pytest.fixture
def store(db_session: AsyncSession) -> InsightStore:
    return InsightStore(db_session)


class TestFindAndSave:
    @pytest.mark.asyncio
    async def test_find_missing(self, store):
        assert await store.find_by_patient_id("nobody") is None

    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        insights = build_insights()

        saved = await store.save_for_patient(insights)
        found = await store.find_by_patient_id("patient-1")

        assert found is not None
        assert found.id == saved.id
        assert found.id.startswith("insights-")
        assert found.id != insights.id
        assert found.patterns == insights.patterns
        assert found.progress_trends == insights.progress_trends
        assert found.risk_indicators == insights.risk_indicators
        assert found.treatment_gaps == insights.treatment_gaps
        assert found.mode == GenerationMode.REAL
        assert found.model == "test-model"
        assert found.outcome == InsightOutcome.GENERATED
        assert found.saved_at is not None

    @pytest.mark.asyncio
    async def test_second_save_replaces_first(self, store, db_session):
        first = await store.save_for_patient(build_insights(content="First observation"))
        second = await store.save_for_patient(
            build_insights(content="Second observation", mode=GenerationMode.MOCK, model="mock-v1"),
        )

        assert await count_records(db_session, "patient-1") == 1
        assert second.id == first.id

        found = await store.find_by_patient_id("patient-1")
        assert found.patterns[0].content == "Second observation"
        assert found.mode == GenerationMode.MOCK

    @pytest.mark.asyncio
    async def test_existing_saved_at_kept(self, store):
        insights = build_insights(saved_at=utc(2024, 3, 1))

        saved = await store.save_for_patient(insights)

        assert saved.saved_at.replace(tzinfo=None) == utc(2024, 3, 1).replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_patients_are_independent(self, store, db_session):
        await store.save_for_patient(build_insights("patient-1"))
        await store.save_for_patient(build_insights("patient-2", content="Other patient"))

        assert await count_records(db_session, "patient-1") == 1
        found = await store.find_by_patient_id("patient-2")
        assert found.patterns[0].content == "Other patient"

    @pytest.mark.asyncio
    async def test_empty_failed_insights_can_be_saved(self, store):
        insights = build_insights(
            patterns=[],
            progress_trends=[],
            risk_indicators=[],
            outcome=InsightOutcome.PARSE_FAILED,
        )

        await store.save_for_patient(insights)
        found = await store.find_by_patient_id("patient-1")

        assert found.is_empty
        assert found.outcome == InsightOutcome.PARSE_FAILED


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.save_for_patient(build_insights())

        assert await store.delete_by_patient_id("patient-1") is True
        assert await store.find_by_patient_id("patient-1") is None
        assert await store.delete_by_patient_id("patient-1") is False


class TestConcurrentSaves:
    @pytest.mark.asyncio
    async def test_racing_saves_leave_a_well_formed_record(self, store, db_session):
        # Both writers read before either writes, so neither sees the other's record
        with patch.object(InsightStore, "_latest_record", new_callable=AsyncMock, return_value=None):
            await store.save_for_patient(build_insights(content="Writer A", generated_at=utc(2024, 2, 2)))
            await store.save_for_patient(build_insights(content="Writer B", generated_at=utc(2024, 2, 3)))

        assert await count_records(db_session, "patient-1") == 2

        found = await store.find_by_patient_id("patient-1")
        assert found.patterns[0].content == "Writer B"
        assert len(found.progress_trends) == 1

    @pytest.mark.asyncio
    async def test_racing_later_write_wins_over_newer_generation(self, store, db_session):
        with patch.object(InsightStore, "_latest_record", new_callable=AsyncMock, return_value=None):
            await store.save_for_patient(build_insights(content="Writer A", generated_at=utc(2024, 2, 3)))
            await store.save_for_patient(build_insights(content="Writer B", generated_at=utc(2024, 2, 2)))

        assert await count_records(db_session, "patient-1") == 2

        found = await store.find_by_patient_id("patient-1")
        assert found.patterns[0].content == "Writer B"

        # The next save updates the record that reads are served from
        await store.save_for_patient(build_insights(content="Writer C", generated_at=utc(2024, 1, 1)))
        found = await store.find_by_patient_id("patient-1")
        assert found.patterns[0].content == "Writer C"
        assert await count_records(db_session, "patient-1") == 2

    @pytest.mark.asyncio
    async def test_later_write_wins(self, store):
        await store.save_for_patient(build_insights(content="Writer A", generated_at=utc(2024, 2, 3)))
        await store.save_for_patient(build_insights(content="Writer B", generated_at=utc(2024, 2, 2)))

        found = await store.find_by_patient_id("patient-1")
        assert found.patterns[0].content == "Writer B"

    @pytest.mark.asyncio
    async def test_delete_removes_every_record(self, store, db_session):
        with patch.object(InsightStore, "_latest_record", new_callable=AsyncMock, return_value=None):
            await store.save_for_patient(build_insights(content="Writer A"))
            await store.save_for_patient(build_insights(content="Writer B"))

        assert await store.delete_by_patient_id("patient-1") is True
        assert await count_records(db_session, "patient-1") == 0
