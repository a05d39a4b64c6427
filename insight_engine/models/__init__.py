from insight_engine.models.base import Base
from insight_engine.models.session import TherapySession
from insight_engine.models.insights import PatientInsightsRecord

__all__ = [
    "Base",
    "TherapySession",
    "PatientInsightsRecord",
]
