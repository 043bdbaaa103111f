"""Base class for class-based FastAPI routers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter

from catalogkit.core.exceptions import ErrorType, MalformedRequestError

# Range of a signed 32-bit INTEGER primary key
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


class Router(ABC):
    """Base class wrapping an APIRouter; subclasses register their routes."""

    def __init__(self, prefix: str, tags: Sequence[str], **kwargs: Any) -> None:
        """Initialize the underlying APIRouter and register routes."""
        self.router = APIRouter(prefix=prefix, tags=list(tags), **kwargs)
        self._register_routes()

    @classmethod
    def create(cls, prefix: str, tags: Sequence[str], **kwargs: Any) -> APIRouter:
        """Build the router and return the configured APIRouter."""
        return cls(prefix=prefix, tags=tags, **kwargs).router

    @abstractmethod
    def _register_routes(self) -> None:
        """Register routes on self.router."""
        ...

    @staticmethod
    def _parse_id(entity_id: str) -> int:
        """Parse a path id; non-integers and ids outside the INTEGER range are 400 problems."""
        try:
            value = int(entity_id)
        except ValueError:
            value = None
        if value is None or not MIN_ID <= value <= MAX_ID:
            raise MalformedRequestError(
                f"Invalid id format: {entity_id}",
                type_uri=ErrorType.INVALID_ID,
                title="Invalid Identifier",
            )
        return value
