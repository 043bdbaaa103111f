"""Async SQLAlchemy engine and session management for the catalog store."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import ConnectionPoolEntry

from .logging import get_logger

logger = get_logger(__name__)

# Applied to every new SQLite connection; busy_timeout is in milliseconds
SQLITE_PRAGMAS: tuple[tuple[str, str], ...] = (
    ("foreign_keys", "ON"),
    ("synchronous", "NORMAL"),
    ("busy_timeout", "30000"),
    ("temp_store", "MEMORY"),
)


def _apply_sqlite_pragmas(dbapi_conn: sqlite3.Connection, _record: ConnectionPoolEntry) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for name, value in SQLITE_PRAGMAS:
            cursor.execute(f"PRAGMA {name}={value};")
    finally:
        cursor.close()


class Database:
    """Owns the async engine and hands out sessions.

    The same class serves PostgreSQL (asyncpg) and SQLite (aiosqlite). For
    SQLite every connection gets ``SQLITE_PRAGMAS``, and file databases are
    switched to WAL journaling on ``init()``. An in-memory SQLite URL keeps a
    single shared connection, so all sessions see the same rows.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self._parsed_url: URL = make_url(url)
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _apply_sqlite_pragmas)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def is_sqlite(self) -> bool:
        """True when the backing store is SQLite."""
        return self._parsed_url.get_backend_name() == "sqlite"

    @property
    def is_memory(self) -> bool:
        """True for an in-memory SQLite store."""
        return self.is_sqlite and self._parsed_url.database in (None, "", ":memory:")

    @property
    def safe_url(self) -> str:
        """URL with the password masked, for logs."""
        return self._parsed_url.render_as_string(hide_password=True)

    async def init(self) -> None:
        """Create every mapped table that does not exist yet."""
        from catalogkit.core.models import Base

        if self.is_sqlite and not self.is_memory:
            async with self.engine.connect() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.debug("database.initialized", url=self.safe_url, tables=sorted(Base.metadata.tables))

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session that is closed when the block exits."""
        async with self._session_factory() as session:
            yield session

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
