"""
Noteful Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all store connection logic in one place.
How:   Creates one async engine per process, provides a session dependency
       that rolls back on error and always closes the session.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import and disposed on shutdown;
       sessions are created per-request.

Connection Lifecycle:
    The engine (and its pool) is the single long-lived store handle of the
    process. Route handlers never open or close connections themselves:
    they receive an AsyncSession bound to the shared engine, issue one
    operation, and hand the session back.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteful.config import settings


def _engine_options() -> Dict[str, Any]:
    """
    Keyword arguments for create_async_engine.

    SQLite (aiosqlite) does not use a sized QueuePool the way PostgreSQL
    does, so pool sizing is only passed for server databases.
    """
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so a Note
# can be serialized into the response without another round trip
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Alembic for migrations and by
    create_schema() for local bootstrapping.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the service commits its own writes)
        3. On error: rolls back the transaction (discards changes)
        4. Always: closes the session (returns connection to pool)

    Raises:
        Any exception is propagated to the global error handlers,
        which return appropriate HTTP status codes.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema() -> None:
    """
    Create all tables registered on Base.metadata if they do not exist.

    When:  Startup with DB_CREATE_SCHEMA=true, and the test suite.
    """
    # Models must be imported so their tables are registered
    from noteful.models import note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema() -> None:
    """Drop all tables registered on Base.metadata (test teardown)."""
    from noteful.models import note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
