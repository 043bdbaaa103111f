"""FastAPI application assembly for catalog services."""

from catalogkit.core.api import (
    BaseServiceBuilder,
    HealthRouter,
    HealthState,
    HealthStatus,
    Router,
    ServiceInfo,
    add_error_handlers,
    add_logging_middleware,
    build_location_url,
    run_app,
)
from catalogkit.core.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    reset_request_context,
)
from catalogkit.modules.config import ConfigRouter
from catalogkit.modules.product import ProductRouter

from .dependencies import get_product_manager
from .service_builder import ServiceBuilder

__all__ = [
    # Base classes
    "Router",
    "BaseServiceBuilder",
    # Routers
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "ProductRouter",
    "ConfigRouter",
    # Dependencies
    "get_product_manager",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    # Logging
    "configure_logging",
    "get_logger",
    "add_request_context",
    "clear_request_context",
    "reset_request_context",
    # Builders
    "ServiceBuilder",
    "ServiceInfo",
    # Utilities
    "build_location_url",
    "run_app",
]
