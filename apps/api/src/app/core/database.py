"""
Database Configuration

Async SQLAlchemy engine and session management.

The engine (and its connection pool) lives in a DatabaseHandle created by the
application lifespan and stored on ``app.state.database``. Endpoints receive
sessions through the ``get_db`` dependency.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


class DatabaseUnavailableError(Exception):
    """Raised when no database connection could be established."""

    def __init__(self, reason: str | None = None):
        self.message = "Service temporarily unavailable. Please try again later."
        self.error_code = "DATABASE_UNAVAILABLE"
        self.status_code = 500
        self.reason = reason
        super().__init__(self.message)


@dataclass
class ConnectionResult:
    """Outcome of a bounded connection attempt."""

    ok: bool
    attempts: int
    reason: str | None = None


@dataclass
class DatabaseHandle:
    """Process-scoped engine plus session factory."""

    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    ready: bool = False


def create_database(config: Settings = settings) -> DatabaseHandle:
    """Create the engine and session factory. Does not connect yet."""
    engine = create_async_engine(
        config.sqlalchemy_database_url,
        echo=False,
        pool_pre_ping=True,
    )
    session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    return DatabaseHandle(engine=engine, session_maker=session_maker)


async def connect_with_retry(
    engine: AsyncEngine,
    attempts: int = 3,
    delay_seconds: float = 2.0,
) -> ConnectionResult:
    """
    Try to open a connection and run ``SELECT 1``.

    Makes at most ``attempts`` tries with a fixed sleep between them.
    Never raises; the caller decides what a failure means.

    Args:
        engine: The engine to test
        attempts: Maximum number of connection attempts
        delay_seconds: Fixed delay between attempts

    Returns:
        ConnectionResult with the number of attempts made and the last error text
    """
    attempts = max(1, attempts)
    last_error: str | None = None

    for attempt in range(1, attempts + 1):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return ConnectionResult(ok=True, attempts=attempt)
        except (SQLAlchemyError, OSError) as e:
            last_error = str(e)
            logger.warning(f"Database connection attempt {attempt}/{attempts} failed: {e}")
            if attempt < attempts:
                await asyncio.sleep(delay_seconds)

    return ConnectionResult(ok=False, attempts=attempts, reason=last_error)


async def init_db(handle: DatabaseHandle, config: Settings = settings) -> ConnectionResult:
    """
    Verify connectivity and optionally create tables.

    Call this on application startup.
    """
    result = await connect_with_retry(
        handle.engine,
        attempts=config.db_connect_retries,
        delay_seconds=config.db_connect_retry_delay,
    )
    handle.ready = result.ok

    if result.ok and config.db_create_tables:
        # Import models so they register with Base.metadata
        from app.modules.applications import models as _application_models  # noqa: F401
        from app.modules.contacts import models as _contact_models  # noqa: F401

        async with handle.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    return result


async def close_db(handle: DatabaseHandle) -> None:
    """Dispose the engine and its pool."""
    await handle.engine.dispose()
    handle.ready = False


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that yields a database session.

    If startup could not reach the database, connection is retried here
    before the request proceeds.

    Raises:
        DatabaseUnavailableError: If the database cannot be reached
    """
    handle: DatabaseHandle | None = getattr(request.app.state, "database", None)
    if handle is None:
        raise DatabaseUnavailableError("database handle not initialized")

    if not handle.ready:
        result = await connect_with_retry(
            handle.engine,
            attempts=settings.db_connect_retries,
            delay_seconds=settings.db_connect_retry_delay,
        )
        if not result.ok:
            logger.error(
                f"Database unavailable after {result.attempts} attempts: {result.reason}"
            )
            raise DatabaseUnavailableError(result.reason)
        handle.ready = True

    async with handle.session_maker() as session:
        yield session
