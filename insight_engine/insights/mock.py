"""
Mock Insight Generator

Deterministic, bilingual sample insights used when no API key is configured.
Session references and trend dates come from the patient's real aggregated
sessions so the output reflects the actual history.
"""

import logging
from datetime import datetime

from pydantic import BaseModel

from insight_engine.insights.formatter import format_date
from insight_engine.insights.mapper import build_insights_id, empty_insights
from insight_engine.llm.mock import MOCK_MODEL, Language, detect_language
from insight_engine.schemas.insights import (
    AggregatedSessions,
    GenerationMode,
    InsightItem,
    InsightOutcome,
    PatientInsights,
)
from insight_engine.schemas.session import require_complete

logger = logging.getLogger(__name__)


class SampleInsight(BaseModel):
    content: str
    confidence: float


class SampleSet(BaseModel):
    patterns: list[SampleInsight]
    progress_trends: list[SampleInsight]
    risk_indicators: list[SampleInsight]
    treatment_gaps: list[SampleInsight]


SAMPLE_SETS: dict[Language, SampleSet] = require_complete({
    Language.ENGLISH: SampleSet(
        patterns=[
            SampleInsight(
                content="Patient consistently reports increased anxiety when discussing work-related topics, suggesting occupational stress as a primary trigger.",
                confidence=0.88,
            ),
            SampleInsight(
                content="Recurring pattern of negative self-talk when discussing interpersonal relationships, particularly around themes of inadequacy and fear of rejection.",
                confidence=0.82,
            ),
        ],
        progress_trends=[
            SampleInsight(
                content="Patient demonstrates improved ability to identify and articulate emotional states over the course of treatment.",
                confidence=0.91,
            ),
            SampleInsight(
                content="Gradual decrease in reported sleep disturbances, from nightly disruption to 1-2 times per week.",
                confidence=0.85,
            ),
        ],
        risk_indicators=[
            SampleInsight(
                content="No active suicidal ideation reported. Passive ideation mentioned in early sessions has not recurred in recent visits.",
                confidence=0.95,
            ),
        ],
        treatment_gaps=[
            SampleInsight(
                content="Family conflict mentioned in early sessions has not been explored in depth. Consider a family systems approach.",
                confidence=0.72,
            ),
            SampleInsight(
                content="Sleep hygiene was discussed but specific behavioral strategies have not been formally introduced.",
                confidence=0.78,
            ),
        ],
    ),
    Language.HEBREW: SampleSet(
        patterns=[
            SampleInsight(
                content="המטופל/ת מדווח/ת באופן עקבי על חרדה מוגברת בעת דיון בנושאים הקשורים לעבודה, מה שמצביע על לחץ תעסוקתי כטריגר עיקרי.",
                confidence=0.88,
            ),
            SampleInsight(
                content="דפוס חוזר של שיח עצמי שלילי בעת דיון ביחסים בינאישיים, במיוחד סביב תחושת חוסר מסוגלות ופחד מדחייה.",
                confidence=0.82,
            ),
        ],
        progress_trends=[
            SampleInsight(
                content="המטופל/ת מפגין/ה יכולת משופרת לזהות ולבטא מצבים רגשיים לאורך מהלך הטיפול.",
                confidence=0.91,
            ),
            SampleInsight(
                content="ירידה הדרגתית בהפרעות שינה מדווחות, מהפרעה לילית לפעם או פעמיים בשבוע.",
                confidence=0.85,
            ),
        ],
        risk_indicators=[
            SampleInsight(
                content="לא דווחה אידאציה אובדנית פעילה. אידאציה פסיבית שהוזכרה במפגשים מוקדמים לא חזרה בביקורים האחרונים.",
                confidence=0.95,
            ),
        ],
        treatment_gaps=[
            SampleInsight(
                content="קונפליקט משפחתי שהוזכר במפגשים מוקדמים לא נחקר לעומק. יש לשקול גישה מערכתית משפחתית.",
                confidence=0.72,
            ),
            SampleInsight(
                content="היגיינת שינה נדונה אך אסטרטגיות התנהגותיות ספציפיות לא הוצגו באופן פורמלי.",
                confidence=0.78,
            ),
        ],
    ),
}, Language)


def detect_session_language(aggregated: AggregatedSessions) -> Language:
    """Hebrew if any session's subjective notes contain Hebrew characters."""
    return detect_language(*(s.notes.subjective for s in aggregated.sessions))


def generate_mock_insights(
    aggregated: AggregatedSessions,
    generated_at: datetime | None = None,
) -> PatientInsights:
    generated_at = generated_at or datetime.now().astimezone()

    if aggregated.session_count == 0:
        return empty_insights(
            aggregated.patient_id,
            GenerationMode.MOCK,
            InsightOutcome.NO_SESSIONS,
            generated_at=generated_at,
        )

    language = detect_session_language(aggregated)
    samples = SAMPLE_SETS[language]
    session_dates = [format_date(s.scheduled_at) for s in aggregated.sessions]
    first_seen = aggregated.date_range.earliest if aggregated.date_range else None
    last_seen = aggregated.date_range.latest if aggregated.date_range else None

    # Pattern i cites up to three sessions starting at session i
    patterns = [
        InsightItem(
            content=sample.content,
            confidence=sample.confidence,
            session_refs=session_dates[i:i + 3],
        )
        for i, sample in enumerate(samples.patterns)
    ]
    progress_trends = [
        InsightItem(
            content=sample.content,
            confidence=sample.confidence,
            first_seen=first_seen,
            last_seen=last_seen,
        )
        for sample in samples.progress_trends
    ]
    risk_indicators = [
        InsightItem(
            content=sample.content,
            confidence=sample.confidence,
            session_refs=session_dates[:1],
        )
        for sample in samples.risk_indicators
    ]
    treatment_gaps = [
        InsightItem(content=sample.content, confidence=sample.confidence)
        for sample in samples.treatment_gaps
    ]

    logger.info(
        f"Generated mock insights ({language.value}) for patient "
        f"{aggregated.patient_id} from {aggregated.session_count} sessions"
    )
    return PatientInsights(
        id=build_insights_id(aggregated.patient_id),
        patient_id=aggregated.patient_id,
        patterns=patterns,
        progress_trends=progress_trends,
        risk_indicators=risk_indicators,
        treatment_gaps=treatment_gaps,
        generated_at=generated_at,
        mode=GenerationMode.MOCK,
        model=MOCK_MODEL,
        outcome=InsightOutcome.GENERATED,
    )
