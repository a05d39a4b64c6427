from fastapi import APIRouter

from insight_engine.api.insights import router as insights_router
from insight_engine.api.sessions import router as sessions_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(insights_router)
api_router.include_router(sessions_router)
