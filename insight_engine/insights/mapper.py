"""
Insight Mapper

Turns parsed category arrays into PatientInsights entities.
"""

import logging
import time
from datetime import datetime
from typing import Any, Optional

from insight_engine.insights.parser import ParsedInsights, normalize_confidence, parse_date
from insight_engine.schemas.insights import (
    GenerationMode,
    InsightItem,
    InsightOutcome,
    PatientInsights,
)

logger = logging.getLogger(__name__)


def build_insights_id(patient_id: str) -> str:
    return f"insights-{patient_id}-{int(time.time() * 1000)}"


def empty_insights(
    patient_id: str,
    mode: GenerationMode,
    outcome: InsightOutcome,
    model: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> PatientInsights:
    return PatientInsights(
        id=build_insights_id(patient_id),
        patient_id=patient_id,
        generated_at=generated_at or datetime.now().astimezone(),
        mode=mode,
        model=model,
        outcome=outcome,
    )


def _session_refs(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    return [str(ref) for ref in value if isinstance(ref, (str, int, float))]


def map_item(raw: Any, with_dates: bool = False) -> Optional[InsightItem]:
    """
    Build one InsightItem from a raw generator item.

    Items that are not objects or lack text content are dropped.
    """
    if not isinstance(raw, dict):
        logger.warning(f"Skipping non-object insight item: {raw!r}"[:200])
        return None

    content = raw.get("content")
    if not isinstance(content, str) or not content.strip():
        logger.warning("Skipping insight item without content")
        return None

    return InsightItem(
        content=content.strip(),
        confidence=normalize_confidence(raw.get("confidence")),
        session_refs=_session_refs(raw.get("sessionRefs")),
        first_seen=parse_date(raw.get("firstSeen")) if with_dates else None,
        last_seen=parse_date(raw.get("lastSeen")) if with_dates else None,
    )


def _map_items(raw_items: list[Any], with_dates: bool = False) -> list[InsightItem]:
    items = (map_item(raw, with_dates) for raw in raw_items)
    return [item for item in items if item is not None]


def map_parsed_insights(
    patient_id: str,
    parsed: ParsedInsights,
    generated_at: Optional[datetime] = None,
    model: Optional[str] = None,
    tokens_used: Optional[int] = None,
) -> PatientInsights:
    return PatientInsights(
        id=build_insights_id(patient_id),
        patient_id=patient_id,
        patterns=_map_items(parsed.patterns),
        progress_trends=_map_items(parsed.progress_trends, with_dates=True),
        risk_indicators=_map_items(parsed.risk_indicators),
        treatment_gaps=_map_items(parsed.treatment_gaps),
        generated_at=generated_at or datetime.now().astimezone(),
        mode=GenerationMode.REAL,
        model=model,
        tokens_used=tokens_used,
        outcome=InsightOutcome.GENERATED,
    )
