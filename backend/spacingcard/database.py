"""
SpacingCard — Database Session Management
===========================================

What:  Async SQLAlchemy engine, session factory, FastAPI dependency and the
       startup helpers (wait for the database, create tables, dispose).
How:   Creates an async engine with connection pooling; provides a session
       dependency that commits on success and rolls back on error.
Who:   Route handlers (via Depends), the app lifespan, and the tests.
When:  Engine is created at module import; sessions are created per-request.

Every data-access call receives its session explicitly. There is no shared
module-level connection object; the pool hands each request its own.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from spacingcard.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for the given URL.

    SQLite (used by the test suite) gets a single static connection so an
    in-memory database survives across sessions; every other backend gets
    the configured pool.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        options.update(
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
@retry(
    # Connection refused surfaces as OSError from the driver, or as a
    # wrapped DBAPIError once SQLAlchemy has a DBAPI connection attempt
    retry=retry_if_exception_type((OSError, DBAPIError)),
    stop=stop_after_attempt(settings.db_wait_attempts),
    wait=wait_exponential(multiplier=0.5, max=settings.db_wait_max_seconds),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def wait_for_database() -> None:
    """
    Block until the database accepts connections.

    What:  Runs SELECT 1, retrying with exponential backoff.
    When:  First step of application startup, before tables are created.
    Raises the last connection error once all attempts are used.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database is accepting connections")


async def create_tables() -> None:
    """
    Create spacing_table and example_table when they do not exist yet.

    Runs Base.metadata.create_all; existing tables are left untouched.
    """
    # Models must be imported so they register with Base.metadata
    from spacingcard.models import example, spacing  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def dispose_engine() -> None:
    """Closes all pooled connections; called during application shutdown."""
    await engine.dispose()
