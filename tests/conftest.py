import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from insight_engine.main import app
from insight_engine.config import AIConfig, get_ai_config
from insight_engine.database import get_db
from insight_engine.models import Base
from insight_engine.schemas.session import (
    Session,
    SessionNotes,
    SessionStatus,
    TherapistRole,
)

# In-memory database, one shared connection per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database and session for each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    test_async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with test_async_session() as session:
        yield session

    await test_engine.dispose()


@pytest.fixture
def mock_config() -> AIConfig:
    """Configuration without an API key (mock mode)."""
    return AIConfig()


@pytest.fixture
def real_config() -> AIConfig:
    return AIConfig(
        api_key="test-key",
        api_endpoint="https://completions.test/v1/chat/completions",
        model="test-model",
        max_tokens=500,
    )


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession, mock_config: AIConfig) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session and AI config overrides."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_config] = lambda: mock_config

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def make_session(
    scheduled_at: datetime,
    patient_id: str = "patient-1",
    subjective: str = "Patient reports feeling anxious at work.",
    status: SessionStatus = SessionStatus.COMPLETED,
    role: TherapistRole = TherapistRole.PSYCHOLOGIST,
    session_id: Optional[str] = None,
    **notes,
) -> Session:
    """Build a Session entity for pipeline tests."""
    return Session(
        id=session_id or f"session-{scheduled_at:%Y%m%d}",
        patient_id=patient_id,
        therapist_role=role,
        scheduled_at=scheduled_at,
        status=status,
        notes=SessionNotes(subjective=subjective, **notes),
    )


def utc(year: int, month: int, day: int, hour: int = 10) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)
