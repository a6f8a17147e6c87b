"""
Core module initialization for the AI Career Coach backend.

This module provides access to the core infrastructure: configuration,
database, security (identity) and logging components.

Usage:
    from careercoach.core import get_settings, setup_logging
    from careercoach.core.security import require_identity
    from careercoach.core.database import DatabaseManager, get_db
"""

from .config import Settings, get_settings

from .database import Base, DatabaseManager, get_db

from .logging import (
    setup_logging,
    get_logger,
    set_request_context,
    clear_request_context,
    StructuredFormatter,
    ColoredConsoleFormatter,
    RequestFilter,
    PerformanceLogger,
    SecurityLogger,
    performance_logger,
    security_logger,
    log_startup_info,
    log_shutdown_info,
    request_id_var,
    user_id_var
)

from .security import (
    Identity,
    create_access_token,
    verify_token,
    identity_from_claims,
    require_identity,
    get_current_identity,
    bearer_scheme
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",

    # Database
    "Base",
    "DatabaseManager",
    "get_db",

    # Logging
    "setup_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "StructuredFormatter",
    "ColoredConsoleFormatter",
    "RequestFilter",
    "PerformanceLogger",
    "SecurityLogger",
    "performance_logger",
    "security_logger",
    "log_startup_info",
    "log_shutdown_info",
    "request_id_var",
    "user_id_var",

    # Security
    "Identity",
    "create_access_token",
    "verify_token",
    "identity_from_claims",
    "require_identity",
    "get_current_identity",
    "bearer_scheme",
]
