"""Application settings resolved once from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from .exceptions import StorageUnavailableError

CONNECTION_ENV_VAR = "POSTGRESQL_CONNECTION"
DEFAULT_CONNECTION_STRING = "DefaultConnectionString"
IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Key aliases accepted in "Key=Value;" connection strings
_KEY_ALIASES = {
    "host": "host",
    "server": "host",
    "port": "port",
    "database": "database",
    "username": "username",
    "user id": "username",
    "userid": "username",
    "user": "username",
    "password": "password",
    "pwd": "password",
}


class AppSettings(BaseModel):
    """Immutable process configuration shared read-only by request handlers."""

    connection_string: str = DEFAULT_CONNECTION_STRING

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Load settings, substituting the placeholder when the variable is unset or empty."""
        env = os.environ if environ is None else environ
        value = env.get(CONNECTION_ENV_VAR) or DEFAULT_CONNECTION_STRING
        return cls(connection_string=value)

    @property
    def uses_default_connection(self) -> bool:
        """True when no connection string was configured."""
        return self.connection_string == DEFAULT_CONNECTION_STRING

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL derived from the connection string."""
        return resolve_database_url(self.connection_string)


def _parse_key_value_connection_string(connection_string: str) -> URL:
    """Convert a "Host=db;Database=mydb;Username=u;Password=p" string into a URL."""
    parts: dict[str, str] = {}
    for segment in connection_string.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        if not sep:
            raise StorageUnavailableError(f"Malformed connection string segment '{segment.strip()}'")
        canonical = _KEY_ALIASES.get(key.strip().lower())
        if canonical is not None:
            parts[canonical] = value.strip()

    if "host" not in parts:
        raise StorageUnavailableError("Connection string does not name a Host")

    port = parts.get("port")
    if port is not None and not port.isdigit():
        raise StorageUnavailableError(f"Connection string port '{port}' is not a number")

    return URL.create(
        "postgresql+asyncpg",
        username=parts.get("username"),
        password=parts.get("password"),
        host=parts["host"],
        port=int(port) if port else None,
        database=parts.get("database"),
    )


def resolve_database_url(connection_string: str) -> str:
    """Map a configured connection string onto an async SQLAlchemy URL.

    The placeholder selects an in-memory SQLite store. URLs are used as given,
    except that plain postgres schemes are pointed at the asyncpg driver.
    "Key=Value;" strings are treated as PostgreSQL connection parameters.
    """
    if connection_string == DEFAULT_CONNECTION_STRING:
        return IN_MEMORY_DATABASE_URL

    if "://" in connection_string:
        try:
            url = make_url(connection_string)
        except ArgumentError as e:
            raise StorageUnavailableError(f"Invalid database URL: {e}") from e
        if url.drivername in ("postgres", "postgresql"):
            url = url.set(drivername="postgresql+asyncpg")
        return url.render_as_string(hide_password=False)

    if "=" in connection_string:
        return _parse_key_value_connection_string(connection_string).render_as_string(hide_password=False)

    raise StorageUnavailableError("Unrecognized connection string format")
