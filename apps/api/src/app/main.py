"""
School Website API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database connection (with bounded retry)
- Database-unavailable error handler
- Form endpoints
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.api import api_router
from app.core.config import settings
from app.core.database import DatabaseUnavailableError, close_db, create_database, init_db
from app.core.responses import EnvelopeResponse, envelope, response_headers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Owns the database handle: created and verified on startup, disposed on
    shutdown.
    """
    # Startup
    logger.info(f"Starting school website API in {settings.python_env} mode...")

    app.state.database = create_database(settings)
    result = await init_db(app.state.database, settings)
    if result.ok:
        logger.info(f"[OK] Database connected after {result.attempts} attempt(s)")
    else:
        logger.error(f"[FAIL] Database connection failed: {result.reason}")
        if settings.is_production:
            await close_db(app.state.database)
            raise DatabaseUnavailableError(result.reason)

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down school website API...")
    await close_db(app.state.database)
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="School Website API",
    description="Admission application and contact form processing",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.exception_handler(DatabaseUnavailableError)
async def database_unavailable_handler(
    _request: Request, exc: DatabaseUnavailableError
) -> EnvelopeResponse:
    logger.error(f"Request failed, database unavailable: {exc.reason}")
    return envelope(exc.status_code, exc.message)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": f"Welcome to the {settings.school_name} API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check(request: Request) -> EnvelopeResponse:
    """Readiness check endpoint; ready once the database has been reached."""
    handle = getattr(request.app.state, "database", None)
    if handle is not None and handle.ready:
        return EnvelopeResponse(content={"status": "ready"}, headers=response_headers())
    return EnvelopeResponse(
        content={"status": "not ready"}, status_code=503, headers=response_headers()
    )
