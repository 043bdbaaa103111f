"""FastAPI framework layer - routers, middleware, utilities."""

from .dependencies import get_database, get_session, set_database
from .middleware import (
    RequestLoggingMiddleware,
    add_error_handlers,
    add_logging_middleware,
    catalog_error_handler,
    database_error_handler,
    validation_error_handler,
)
from .router import Router
from .routers import HealthRouter, HealthState, HealthStatus
from .service_builder import BaseServiceBuilder, ServiceInfo
from .utilities import build_location_url, run_app

__all__ = [
    # Base router class
    "Router",
    # Service builder
    "BaseServiceBuilder",
    "ServiceInfo",
    # Dependencies
    "get_database",
    "set_database",
    "get_session",
    # Middleware
    "RequestLoggingMiddleware",
    "add_error_handlers",
    "add_logging_middleware",
    "catalog_error_handler",
    "database_error_handler",
    "validation_error_handler",
    # Routers
    "HealthRouter",
    "HealthState",
    "HealthStatus",
    # Utilities
    "build_location_url",
    "run_app",
]
