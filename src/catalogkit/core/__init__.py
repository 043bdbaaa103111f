"""Core framework: database, repositories, managers, settings, and lifecycle."""

from .database import Database
from .exceptions import (
    CatalogError,
    ConstraintViolationError,
    ErrorType,
    MalformedRequestError,
    NotFoundError,
    StorageUnavailableError,
)
from .heartbeat import HeartbeatService, HeartbeatState
from .manager import BaseManager, Manager
from .models import Base, Entity
from .repository import BaseRepository, translate_storage_errors
from .schemas import ProblemDetail
from .settings import AppSettings, resolve_database_url
from .types import DecimalNumber

__all__ = [
    # Database
    "Database",
    "Base",
    "Entity",
    "BaseRepository",
    "translate_storage_errors",
    "Manager",
    "BaseManager",
    # Settings
    "AppSettings",
    "resolve_database_url",
    # Lifecycle
    "HeartbeatService",
    "HeartbeatState",
    # Errors
    "CatalogError",
    "ConstraintViolationError",
    "ErrorType",
    "MalformedRequestError",
    "NotFoundError",
    "StorageUnavailableError",
    "ProblemDetail",
    # Types
    "DecimalNumber",
]
