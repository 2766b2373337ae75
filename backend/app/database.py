"""
PlantPlan Backend - Database Engine Management
==============================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   The engine is created lazily on first use, so a service running the
       in-memory store never loads a database driver or opens a pool.
Who:   Used by DatabasePlanStore and by the application lifespan.
When:  Engine on first `get_engine()` call; sessions per store operation.

SQLite URLs register a Unicode-aware lower() on every new connection.

Connection Pooling Strategy (non-SQLite URLs):
    pool_size / max_overflow: from settings
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour
"""

import logging
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models; owns the shared metadata."""
    pass


def create_engine_for_url(url: str) -> AsyncEngine:
    """
    Build an async engine for `url` with pool settings that suit its dialect.

    SQLite engines get no pool sizing arguments: aiosqlite runs every
    connection on its own thread and the sizing knobs do not apply.
    """
    kwargs = {
        "echo": settings.log_level == "DEBUG",
        "pool_pre_ping": settings.db_pool_pre_ping,
    }
    if url.startswith("sqlite"):
        engine = create_async_engine(url, **kwargs)
        event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
        return engine

    kwargs.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=3600,
    )
    return create_async_engine(url, **kwargs)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() folds ASCII only; case-insensitive search
    # must fold the same characters as str.lower()
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps ORM attributes readable after commit, so
    stores can build response objects once the transaction has closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Process-wide Engine ───────────────────────────────────────────────────
_engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """Return the process-wide engine for `settings.database_url`, creating it once."""
    global _engine
    if _engine is None:
        _engine = create_engine_for_url(settings.database_url)
        logger.info("Database engine created for dialect %s", _engine.dialect.name)
    return _engine


async def init_models(engine: AsyncEngine) -> None:
    """
    Create every table registered on `Base.metadata` if it does not exist.

    There is no migration tooling; the table layout is created as-is.
    """
    # Registers PlantPlanRecord on Base.metadata
    from app.models import plan  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
