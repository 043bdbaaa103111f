"""Shared fixtures for catalogkit tests."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Generator, Iterator

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from catalogkit import Database
from catalogkit.api import ServiceBuilder, ServiceInfo
from catalogkit.core.settings import AppSettings


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging so captured streams do not leak between tests."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == "catalogkit"]:
        root.removeHandler(handler)


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Provide an initialized in-memory database."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.init()
    yield db
    await db.dispose()


@pytest.fixture
def service_info() -> ServiceInfo:
    """Provide basic service info for tests."""
    return ServiceInfo(display_name="Test Catalog", version="1.0.0", summary="Catalog under test")


@pytest.fixture
def catalog_app(service_info: ServiceInfo) -> FastAPI:
    """Catalog app over a fresh in-memory store, seeded at startup."""
    settings = AppSettings(connection_string="Host=db;Database=mydb;Username=myuser;Password=mypassword")
    return (
        ServiceBuilder(info=service_info)
        .with_database("sqlite+aiosqlite:///:memory:")
        .with_products()
        .with_config_echo(settings)
        .build()
    )


@pytest.fixture
def client(catalog_app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient running the catalog app's lifespan."""
    with TestClient(catalog_app) as test_client:
        yield test_client
