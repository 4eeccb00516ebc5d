"""Async database engine and sessions for the news_articles store."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from app.config import Settings, get_settings


def build_engine(settings: Settings | None = None, **kwargs) -> AsyncEngine:
    """Engine for settings.database_url; SQL echo follows the debug flag."""
    settings = settings or get_settings()
    return create_async_engine(settings.database_url, echo=settings.debug, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Articles stay readable after commit for logging and counters
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(pool_pre_ping=True)
async_session = build_session_factory(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create the news_articles table (and its enum type) if missing."""
    import app.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with async_session() as session:
        yield session
