"""
Health Endpoints

Liveness plus the two things an operator needs to know about this service:
whether insights come from the mock or the live completion service, and
whether the session and insight tables are reachable.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from insight_engine.config import AIConfig, get_ai_config
from insight_engine.database import get_db
from insight_engine.models import PatientInsightsRecord, TherapySession

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check(config: AIConfig = Depends(get_ai_config)):
    return {
        "status": "healthy",
        "timestamp": _now(),
        "generation": {
            "mode": config.mode.value,
            "model": config.model,
        },
    }


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """Health check with row counts for the session and insight tables."""
    counts = {}
    try:
        for name, table in (("sessions", TherapySession), ("saved_insights", PatientInsightsRecord)):
            result = await db.execute(select(func.count()).select_from(table))
            counts[name] = result.scalar_one()
        db_status = "connected"
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "timestamp": _now(),
        "database": db_status,
        "counts": counts,
    }
