"""Async engine and sessions for the SQL key-value store.

SQLite (aiosqlite) serves development and tests; PostgreSQL (asyncpg)
serves deployments.
"""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from twinship.config import Settings
from twinship.persistence.tables import metadata


def _engine_options(url: str) -> dict[str, Any]:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        # The database only exists while its one connection is open
        options["poolclass"] = StaticPool
    return options


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the engine for ``settings.storage.url``; SQL is echoed in debug."""
    url = settings.storage.url
    return create_async_engine(url, echo=settings.debug, **_engine_options(url))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Records are read back after commit, so keep them loaded
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def ensure_schema(engine: AsyncEngine) -> None:
    """Create the store table if it is missing.

    Deployed databases are upgraded with Alembic instead.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
