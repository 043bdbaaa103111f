"""Manager layer: converts between Pydantic schemas and ORM entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydantic import BaseModel

from .repository import BaseRepository, translate_storage_errors


class Manager[InSchemaT: BaseModel, OutSchemaT: BaseModel, IdT](ABC):
    """Abstract manager interface, implemented by real managers and test fakes."""

    @abstractmethod
    async def save(self, data: InSchemaT) -> OutSchemaT:
        """Persist a new entity and return its stored form."""

    @abstractmethod
    async def save_all(self, items: Iterable[InSchemaT]) -> list[OutSchemaT]:
        """Persist several new entities."""

    @abstractmethod
    async def find_all(self) -> list[OutSchemaT]:
        """Return all entities."""

    @abstractmethod
    async def find_by_id(self, id: IdT) -> OutSchemaT | None:
        """Return one entity by id, or None."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored entities."""


class BaseManager[ModelT, InSchemaT: BaseModel, OutSchemaT: BaseModel, IdT](Manager[InSchemaT, OutSchemaT, IdT]):
    """Manager backed by a BaseRepository; storage failures become catalog errors."""

    def __init__(
        self,
        repo: BaseRepository[ModelT, IdT],
        model_cls: type[ModelT],
        out_schema_cls: type[OutSchemaT],
    ) -> None:
        """Initialize manager with repository, model class, and output schema class."""
        self.repo = repo
        self.model_cls = model_cls
        self.out_schema_cls = out_schema_cls

    async def save(self, data: InSchemaT) -> OutSchemaT:
        """Insert one entity, commit, and return it with generated columns."""
        entity = self.model_cls(**data.model_dump())
        with translate_storage_errors():
            await self.repo.save(entity)
            await self.repo.commit()
            await self.repo.refresh_many([entity])
        return self._to_output_schema(entity)

    async def save_all(self, items: Iterable[InSchemaT]) -> list[OutSchemaT]:
        """Insert several entities in one transaction."""
        entities = [self.model_cls(**item.model_dump()) for item in items]
        with translate_storage_errors():
            await self.repo.save_all(entities)
            await self.repo.commit()
            await self.repo.refresh_many(entities)
        return [self._to_output_schema(entity) for entity in entities]

    async def find_all(self) -> list[OutSchemaT]:
        """Return every entity ordered by id."""
        with translate_storage_errors():
            entities = await self.repo.find_all()
        return [self._to_output_schema(entity) for entity in entities]

    async def find_by_id(self, id: IdT) -> OutSchemaT | None:
        """Return the entity with this id, or None."""
        with translate_storage_errors():
            entity = await self.repo.find_by_id(id)
        return self._to_output_schema(entity) if entity is not None else None

    async def count(self) -> int:
        """Return the number of stored entities."""
        with translate_storage_errors():
            return await self.repo.count()

    def _to_output_schema(self, entity: ModelT) -> OutSchemaT:
        """Convert ORM entity to output schema."""
        return self.out_schema_cls.model_validate(entity, from_attributes=True)
