"""Database engine and async session factory.

Provides connectivity to the order store queried by the existence oracle.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import get_settings


def create_engine_from_url(database_url: str) -> AsyncEngine:
    """Create an async engine for the given URL.

    Pool settings only apply to PostgreSQL (not SQLite).
    """
    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": False,
    }

    if not database_url.startswith("sqlite"):
        engine_kwargs["pool_size"] = 5
        engine_kwargs["max_overflow"] = 10

    return create_async_engine(database_url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used by repositories.

    expire_on_commit=False keeps loaded rows usable after the session closes.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating it on first use."""
    global _session_factory
    if _session_factory is None:
        engine = create_engine_from_url(get_settings().DATABASE_URL)
        _session_factory = create_session_factory(engine)
    return _session_factory
