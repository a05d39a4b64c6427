import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insight_engine import __version__
from insight_engine.config import get_settings, get_ai_config
from insight_engine.database import init_db
from insight_engine.api.router import api_router
from insight_engine.api.health import router as health_router
from insight_engine.llm.client import close_shared_client

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    # Mode is re-read per request; this only reports the startup state
    config = get_ai_config()
    logger.info(f"Insight engine ready ({config.mode.value} mode, model {config.model})")

    yield

    await close_shared_client()
    logger.info("Insight engine stopped")


app = FastAPI(
    title=settings.app_name,
    description="Cross-session AI insights over therapy session history",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(api_router)


@app.get("/")
async def root():
    return {
        "app": settings.app_name,
        "version": __version__,
        "mode": get_ai_config().mode.value,
        "docs": "/docs",
    }
