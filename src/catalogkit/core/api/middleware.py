"""Request logging middleware and problem-detail error handlers."""

from __future__ import annotations

import time
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from ulid import ULID

from catalogkit.core.exceptions import CatalogError, ErrorType
from catalogkit.core.logging import add_request_context, get_logger, reset_request_context
from catalogkit.core.schemas import ProblemDetail

logger = get_logger(__name__)

PROBLEM_JSON = "application/problem+json"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log each request's outcome."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(ULID())
        reset_request_context()
        add_request_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        logger.info("http.request.start", query=str(request.url.query) or None)

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception("http.request.failed", duration_ms=round(duration_ms, 2))
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "http.request.complete",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response


def _problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_JSON,
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Render a CatalogError as a problem detail response."""
    if exc.status >= 500:
        logger.error("request.failed", error=type(exc).__name__, detail=exc.detail)
    else:
        logger.info("request.rejected", error=type(exc).__name__, detail=exc.detail)
    return _problem_response(ProblemDetail.from_exception(exc, instance=str(request.url.path)))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 malformed-request problems."""
    errors: list[dict[str, Any]] = jsonable_encoder(exc.errors())
    problem = ProblemDetail(
        type=ErrorType.MALFORMED_REQUEST,
        title="Malformed Request",
        status=status.HTTP_400_BAD_REQUEST,
        detail="Request body or parameters failed validation",
        instance=str(request.url.path),
        errors=errors,
    )
    logger.info("request.malformed", error_count=len(errors))
    return _problem_response(problem)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Render untranslated SQLAlchemy errors as 500 problems."""
    logger.error("database.error", error=type(exc).__name__, detail=str(exc))
    problem = ProblemDetail(
        type=ErrorType.INTERNAL_ERROR,
        title="Database Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected database error occurred",
        instance=str(request.url.path),
    )
    return _problem_response(problem)


def add_error_handlers(app: FastAPI) -> None:
    """Register problem-detail exception handlers on the app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]


def add_logging_middleware(app: FastAPI) -> None:
    """Add request logging middleware to the app."""
    app.add_middleware(RequestLoggingMiddleware)
