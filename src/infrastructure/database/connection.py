"""Database engine and session management for the Supabase Postgres database."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings

logger = structlog.get_logger(__name__)

# Supabase's transaction pooler (pgbouncer) cannot hold prepared statements
SUPABASE_POOLER_HOST = "pooler.supabase.com"


def async_database_url(url: str) -> str:
    """Rewrite a plain driver URL to its async driver."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        return {"echo": settings.debug}

    options: Dict[str, Any] = {
        "echo": settings.debug,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }
    if SUPABASE_POOLER_HOST in url:
        options["connect_args"] = {"statement_cache_size": 0}
    return options


class DatabaseSessionManager:
    """
    Owns the async engine and hands out one session per unit of work.

    A session commits when the unit of work finishes cleanly and rolls back
    when it raises, so multi-row changes such as approving an application
    and leasing its property land together.
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    def init(self, database_url: str | None = None):
        url = async_database_url(database_url or settings.database_url)

        self._engine = create_async_engine(url, **engine_options(url))
        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("database_initialized", driver=url.split("://", 1)[0])

    async def create_all(self) -> None:
        """Create any missing tables."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")

        from .models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")

        session = self._sessionmaker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


db_manager = DatabaseSessionManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one committed-or-rolled-back session per request."""
    async with db_manager.session() as session:
        yield session
