"""
Patient Insight Generator

Cross-session insight pipeline:

    aggregate sessions -> build prompts -> dispatch (mock | real)
        -> parse and normalize (real only) -> map to PatientInsights

generate() never raises. Every failure degrades to a well-formed
PatientInsights whose outcome field says what happened; error details go
to the log only.
"""

import logging
from datetime import datetime
from typing import Optional

from insight_engine.config import AIConfig, get_ai_config
from insight_engine.insights.aggregator import SessionAggregator, SessionSource
from insight_engine.insights.formatter import format_sessions
from insight_engine.insights.mapper import empty_insights, map_parsed_insights
from insight_engine.insights.mock import generate_mock_insights
from insight_engine.insights.parser import parse_insight_response
from insight_engine.llm.client import CompletionClient
from insight_engine.llm.dispatcher import generate_completion
from insight_engine.llm.prompts import PATIENT_INSIGHT_SYSTEM, build_insight_user_prompt
from insight_engine.schemas.insights import (
    AggregatedSessions,
    GenerationMode,
    InsightOutcome,
    PatientInsights,
)

logger = logging.getLogger(__name__)


def build_insight_prompts(aggregated: AggregatedSessions) -> tuple[str, str]:
    """System and user prompts for one patient's aggregated history."""
    user_prompt = build_insight_user_prompt(
        format_sessions(aggregated.sessions),
        aggregated.session_count,
    )
    return PATIENT_INSIGHT_SYSTEM, user_prompt


class InsightPipeline:
    """Generates cross-session insights for patients."""

    def __init__(
        self,
        sessions: SessionSource,
        config: AIConfig,
        client: Optional[CompletionClient] = None,
    ):
        self.aggregator = SessionAggregator(sessions)
        self.config = config
        self.client = client

    @property
    def mode(self) -> GenerationMode:
        return self.config.mode

    async def generate(self, patient_id: str) -> PatientInsights:
        generated_at = datetime.now().astimezone()
        aggregated = await self.aggregator.aggregate(patient_id)

        if aggregated.session_count == 0:
            logger.info(f"No completed sessions for patient {patient_id}")
            return empty_insights(
                patient_id,
                self.mode,
                InsightOutcome.NO_SESSIONS,
                generated_at=generated_at,
            )

        if self.mode == GenerationMode.MOCK:
            return generate_mock_insights(aggregated, generated_at)

        return await self._generate_real(aggregated, generated_at)

    async def _generate_real(
        self,
        aggregated: AggregatedSessions,
        generated_at: datetime,
    ) -> PatientInsights:
        patient_id = aggregated.patient_id
        system_prompt, user_prompt = build_insight_prompts(aggregated)

        result = await generate_completion(
            system_prompt,
            user_prompt,
            self.config,
            client=self.client,
        )

        if result.error:
            logger.error(f"AI insight generation failed for patient {patient_id}: {result.error}")
            return empty_insights(
                patient_id,
                GenerationMode.REAL,
                InsightOutcome.GENERATION_FAILED,
                model=result.model,
                generated_at=generated_at,
            )

        parsed = parse_insight_response(result.text)
        if not parsed.ok:
            return empty_insights(
                patient_id,
                GenerationMode.REAL,
                InsightOutcome.PARSE_FAILED,
                model=result.model,
                generated_at=generated_at,
            )

        insights = map_parsed_insights(
            patient_id,
            parsed.insights,
            generated_at=generated_at,
            model=result.model,
            tokens_used=result.tokens_used,
        )
        logger.info(
            f"Generated insights for patient {patient_id}: "
            f"{len(insights.patterns)} patterns, {len(insights.progress_trends)} trends, "
            f"{len(insights.risk_indicators)} risks, {len(insights.treatment_gaps)} gaps"
        )
        return insights


async def generate_patient_insights(
    patient_id: str,
    sessions: SessionSource,
    config: Optional[AIConfig] = None,
) -> PatientInsights:
    """
    Generate insights for a patient from their completed session history.

    Configuration is read once here when not supplied.

    Returns:
        PatientInsights; never raises
    """
    pipeline = InsightPipeline(sessions, config or get_ai_config())
    return await pipeline.generate(patient_id)
