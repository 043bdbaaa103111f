"""Catalogkit - twelve-factor product catalog service on FastAPI and async SQLAlchemy."""

# Core framework
from catalogkit.core import (
    AppSettings,
    Base,
    BaseManager,
    BaseRepository,
    CatalogError,
    ConstraintViolationError,
    Database,
    Entity,
    HeartbeatService,
    HeartbeatState,
    MalformedRequestError,
    Manager,
    NotFoundError,
    StorageUnavailableError,
    resolve_database_url,
)

# Product feature
from catalogkit.modules.product import (
    Product,
    ProductIn,
    ProductManager,
    ProductOut,
    ProductRepository,
    ensure_schema,
)

__version__ = "1.0.0"

__all__ = [
    # Core framework
    "Database",
    "Base",
    "Entity",
    "BaseRepository",
    "Manager",
    "BaseManager",
    "AppSettings",
    "resolve_database_url",
    "HeartbeatService",
    "HeartbeatState",
    # Errors
    "CatalogError",
    "ConstraintViolationError",
    "MalformedRequestError",
    "NotFoundError",
    "StorageUnavailableError",
    # Product feature
    "Product",
    "ProductIn",
    "ProductOut",
    "ProductRepository",
    "ProductManager",
    "ensure_schema",
    # Version
    "__version__",
]
