"""Catalog exception hierarchy rendered as RFC 9457 problem details."""

from __future__ import annotations

from typing import Any


class ErrorType:
    """URN identifiers for catalog problem types."""

    INVALID_ID = "urn:catalogkit:error:invalid-id"
    NOT_FOUND = "urn:catalogkit:error:not-found"
    MALFORMED_REQUEST = "urn:catalogkit:error:malformed-request"
    CONSTRAINT_VIOLATION = "urn:catalogkit:error:constraint-violation"
    STORAGE_UNAVAILABLE = "urn:catalogkit:error:storage-unavailable"
    INTERNAL_ERROR = "urn:catalogkit:error:internal"


class CatalogError(Exception):
    """Base exception carrying the fields of a problem detail response."""

    type_uri: str = ErrorType.INTERNAL_ERROR
    title: str = "Internal Server Error"
    status: int = 500

    def __init__(
        self,
        detail: str,
        *,
        type_uri: str | None = None,
        title: str | None = None,
        status: int | None = None,
        instance: str | None = None,
        **extensions: Any,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        if type_uri is not None:
            self.type_uri = type_uri
        if title is not None:
            self.title = title
        if status is not None:
            self.status = status
        self.instance = instance
        self.extensions = extensions


class NotFoundError(CatalogError):
    """Requested resource does not exist."""

    type_uri = ErrorType.NOT_FOUND
    title = "Resource Not Found"
    status = 404


class MalformedRequestError(CatalogError):
    """Request body or parameters could not be parsed or validated."""

    type_uri = ErrorType.MALFORMED_REQUEST
    title = "Malformed Request"
    status = 400


class ConstraintViolationError(CatalogError):
    """Storage rejected a write because of a schema constraint.

    The status is 400 when the client payload caused the violation and 500
    when the server did (for example a generated id colliding).
    """

    type_uri = ErrorType.CONSTRAINT_VIOLATION
    title = "Constraint Violation"
    status = 400


class StorageUnavailableError(CatalogError):
    """Backing service could not be reached or configured."""

    type_uri = ErrorType.STORAGE_UNAVAILABLE
    title = "Storage Unavailable"
    status = 500
