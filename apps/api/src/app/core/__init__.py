"""
Core module - Configuration, database, request intake, responses and email.
"""

from app.core.config import get_settings, settings
from app.core.database import (
    Base,
    ConnectionResult,
    DatabaseHandle,
    DatabaseUnavailableError,
    close_db,
    connect_with_retry,
    create_database,
    get_db,
    init_db,
)
from app.core.responses import envelope, preflight_response

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "ConnectionResult",
    "DatabaseHandle",
    "DatabaseUnavailableError",
    "create_database",
    "connect_with_retry",
    "get_db",
    "init_db",
    "close_db",
    # Responses
    "envelope",
    "preflight_response",
]
