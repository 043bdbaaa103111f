"""Generic async repository over a single SQLAlchemy model."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import ConstraintViolationError, StorageUnavailableError

# SQLSTATE 23505 (Postgres) and the SQLite message for a duplicate primary key
_PRIMARY_KEY_MARKERS = ("23505", "UNIQUE constraint failed", "duplicate key")


def _is_primary_key_collision(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = f"{code or ''} {orig}"
    return any(marker in message for marker in _PRIMARY_KEY_MARKERS)


@contextmanager
def translate_storage_errors() -> Iterator[None]:
    """Re-raise driver and SQLAlchemy failures as catalog storage errors."""
    try:
        yield
    except IntegrityError as e:
        status = 500 if _is_primary_key_collision(e) else 400
        raise ConstraintViolationError(str(e.orig), status=status) from e
    except DataError as e:
        raise ConstraintViolationError(str(e.orig)) from e
    except (OperationalError, InterfaceError) as e:
        raise StorageUnavailableError(f"Database unavailable: {e.orig}") from e
    except DBAPIError as e:
        if e.connection_invalidated:
            raise StorageUnavailableError(f"Database connection lost: {e.orig}") from e
        raise
    except OSError as e:
        raise StorageUnavailableError(f"Database unreachable: {e}") from e


class BaseRepository[T, IdT]:
    """Base repository providing persistence operations for one model."""

    def __init__(self, session: AsyncSession, model: type[T]) -> None:
        """Initialize repository with a session and the mapped model class."""
        self.s = session
        self.model = model

    async def save(self, entity: T) -> T:
        """Add an entity to the session (persisted on commit)."""
        self.s.add(entity)
        return entity

    async def save_all(self, entities: Iterable[T]) -> Sequence[T]:
        """Add several entities to the session."""
        entity_list = list(entities)
        self.s.add_all(entity_list)
        return entity_list

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.s.commit()

    async def refresh_many(self, entities: Iterable[T]) -> None:
        """Reload entity state (generated columns) from the database."""
        for entity in entities:
            await self.s.refresh(entity)

    async def find_all(self) -> Sequence[T]:
        """Return every row of the model's table ordered by primary key."""
        pk: Any = getattr(self.model, "id")
        result = await self.s.scalars(select(self.model).order_by(pk))
        return result.all()

    async def find_by_id(self, id: IdT) -> T | None:
        """Return the entity with the given primary key, or None."""
        return await self.s.get(self.model, id)

    async def count(self) -> int:
        """Return the number of rows in the model's table."""
        result = await self.s.scalar(select(func.count()).select_from(self.model))
        return int(result or 0)
