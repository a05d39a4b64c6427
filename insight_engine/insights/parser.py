"""
Insight Response Parser

Extracts the four-category insight payload from free text produced by the
text-completion service, and normalizes the loosely typed values inside it.

The generator is untrusted: its output may be wrapped in prose or code
fences, may not contain an object at all, or may carry out-of-range values.
parse_insight_response never raises; callers branch on ParseResult.ok.
"""

import json
import logging
import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.5

# Generator-facing keys, as requested in the system prompt
CATEGORY_KEYS = {
    "patterns": "patterns",
    "progress_trends": "progressTrends",
    "risk_indicators": "riskIndicators",
    "treatment_gaps": "treatmentGaps",
}


class ParsedInsights(BaseModel):
    """Raw category arrays, items not yet validated."""
    patterns: list[Any] = Field(default_factory=list)
    progress_trends: list[Any] = Field(default_factory=list)
    risk_indicators: list[Any] = Field(default_factory=list)
    treatment_gaps: list[Any] = Field(default_factory=list)


class ParseResult(BaseModel):
    insights: Optional[ParsedInsights] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.insights is not None

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(error=error)


def extract_json_object(text: str) -> ParseResult:
    """
    Decode the span from the first '{' to the last '}' as a JSON object.

    Returns a ParseResult whose insights field is unset on failure.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return ParseResult.failure("No JSON object found in response")

    try:
        decoded = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        return ParseResult.failure(f"Invalid JSON in response: {e}")

    if not isinstance(decoded, dict):
        return ParseResult.failure(f"Expected a JSON object, got {type(decoded).__name__}")

    return ParseResult(insights=_categories_from(decoded))


def _categories_from(decoded: dict) -> ParsedInsights:
    categories = {}
    for field, key in CATEGORY_KEYS.items():
        value = decoded.get(key)
        if value is not None and not isinstance(value, list):
            logger.warning(f"Category '{key}' is not an array, treating as empty")
        categories[field] = value if isinstance(value, list) else []
    return ParsedInsights(**categories)


def parse_insight_response(text: str) -> ParseResult:
    result = extract_json_object(text or "")
    if not result.ok:
        logger.error(f"Failed to parse insight response: {result.error}. Raw: {(text or '')[:200]!r}")
    return result


def normalize_confidence(value: Any) -> float:
    """Clamp into [0, 1]; anything non-numeric (or NaN) becomes 0.5."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    try:
        value = float(value)
    except OverflowError:
        # JSON integers are unbounded
        return DEFAULT_CONFIDENCE
    if math.isnan(value):
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, value))


def parse_date(value: Any) -> Optional[datetime]:
    """ISO date or datetime string to datetime; missing or unparseable gives None."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        logger.warning(f"Ignoring unparseable date: {value!r}")
        return None
