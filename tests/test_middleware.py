"""Tests for request logging middleware and problem-detail handlers."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from structlog.testing import capture_logs
from ulid import ULID

from catalogkit.api import ServiceBuilder, ServiceInfo
from catalogkit.core.exceptions import ConstraintViolationError


@pytest.fixture
def logged_client(service_info: ServiceInfo) -> Generator[TestClient, None, None]:
    """Client for an app with request logging and a few failing routes."""
    router = APIRouter(prefix="/boom")

    @router.get("/constraint")
    async def constraint() -> None:
        raise ConstraintViolationError("price out of range")

    @router.get("/database")
    async def database() -> None:
        raise SQLAlchemyError("driver exploded")

    app = ServiceBuilder(info=service_info).with_logging().with_products().include_router(router).build()
    with TestClient(app) as client:
        yield client


def test_request_id_is_generated(logged_client: TestClient) -> None:
    response = logged_client.get("/products")

    request_id = response.headers["X-Request-ID"]
    assert str(ULID.from_str(request_id)) == request_id


def test_request_id_is_propagated(logged_client: TestClient) -> None:
    response = logged_client.get("/products", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_request_is_logged(logged_client: TestClient) -> None:
    with capture_logs() as logs:
        logged_client.get("/products")

    complete = [entry for entry in logs if entry["event"] == "http.request.complete"]
    assert len(complete) == 1
    assert complete[0]["status_code"] == 200
    assert complete[0]["duration_ms"] >= 0
    assert "http.request.start" in [entry["event"] for entry in logs]


def test_catalog_error_renders_problem(logged_client: TestClient) -> None:
    response = logged_client.get("/boom/constraint")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json() == {
        "type": "urn:catalogkit:error:constraint-violation",
        "title": "Constraint Violation",
        "status": 400,
        "detail": "price out of range",
        "instance": "/boom/constraint",
    }


def test_untranslated_database_error_is_500(logged_client: TestClient) -> None:
    response = logged_client.get("/boom/database")

    assert response.status_code == 500
    problem = response.json()
    assert problem["title"] == "Database Error"
    assert "driver exploded" not in problem["detail"]
