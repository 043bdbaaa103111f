"""Shared Pydantic schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .exceptions import CatalogError


class ProblemDetail(BaseModel):
    """RFC 9457 problem details body returned for every error response."""

    type: str = Field(default="about:blank", description="URI reference identifying the problem type")
    title: str = Field(description="Short, human-readable summary of the problem type")
    status: int = Field(description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation specific to this occurrence")
    instance: str | None = Field(default=None, description="URI reference identifying this occurrence")

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_exception(cls, exc: CatalogError, *, instance: str | None = None) -> ProblemDetail:
        """Build a problem detail from a CatalogError."""
        return cls(
            type=exc.type_uri,
            title=exc.title,
            status=exc.status,
            detail=exc.detail,
            instance=exc.instance or instance,
            **exc.extensions,
        )
