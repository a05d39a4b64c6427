from insight_engine.services.session_service import SessionService
from insight_engine.services.insights_store import InsightStore

__all__ = [
    "SessionService",
    "InsightStore",
]
