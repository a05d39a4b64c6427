from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from insight_engine.config import get_settings
from insight_engine.models.base import Base


settings = get_settings()

# NullPool for Postgres poolers (PgBouncer in transaction mode)
engine_kwargs = {"echo": settings.debug, "future": True}
if settings.database_url.startswith("postgresql"):
    engine_kwargs["poolclass"] = NullPool
    engine_kwargs["connect_args"] = {
        "timeout": 60,
        "command_timeout": 60,
    }

engine = create_async_engine(settings.database_url, **engine_kwargs)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db():
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Create tables that do not exist yet."""
    # Import models so they register on Base.metadata
    import insight_engine.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
