"""Tests for ServiceBuilder assembly and application lifespan."""

from __future__ import annotations

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from catalogkit import Database, HeartbeatService, HeartbeatState, ProductManager, ProductRepository
from catalogkit.api import ServiceBuilder, ServiceInfo
from catalogkit.core.api.dependencies import get_database
from catalogkit.core.api.routers.health import HealthState
from catalogkit.core.settings import AppSettings


def test_build_returns_fastapi_app(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).build()

    assert isinstance(app, FastAPI)
    assert app.title == "Test Catalog"
    assert app.version == "1.0.0"


def test_info_endpoint(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).build()

    with TestClient(app) as client:
        response = client.get("/api/v1/info")

    assert response.status_code == 200
    assert response.json() == {
        "display_name": "Test Catalog",
        "version": "1.0.0",
        "summary": "Catalog under test",
        "description": None,
    }


def test_health_includes_database_check(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).with_health().build()

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "checks": {"database": {"state": "healthy"}}}


def test_health_custom_check_degrades_status(service_info: ServiceInfo) -> None:
    async def cache_check() -> tuple[HealthState, str | None]:
        return (HealthState.DEGRADED, "cache cold")

    app = ServiceBuilder(info=service_info).with_health(checks={"cache": cache_check}).build()

    with TestClient(app) as client:
        data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["checks"]["cache"] == {"state": "degraded", "message": "cache cold"}


def test_invalid_health_check_name_raises(service_info: ServiceInfo) -> None:
    async def check() -> tuple[HealthState, str | None]:
        return (HealthState.HEALTHY, None)

    builder = ServiceBuilder(info=service_info).with_health(checks={"bad name!": check})

    with pytest.raises(ValueError, match="invalid characters"):
        builder.build()


def test_products_disabled_by_default(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).build()

    with TestClient(app) as client:
        assert client.get("/products").status_code == 404


def test_products_without_seed_start_empty(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).with_products(seed=False).build()

    with TestClient(app) as client:
        assert client.get("/products").json() == []


def test_products_custom_prefix(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).with_products(prefix="/api/products").build()

    with TestClient(app) as client:
        response = client.post("/api/products", json={"name": "Desk", "price": 120})

    assert response.status_code == 201
    assert response.headers["location"].endswith(f"/api/products/{response.json()['id']}")


def test_with_settings_uses_resolved_database_url(service_info: ServiceInfo) -> None:
    builder = ServiceBuilder(info=service_info).with_settings(AppSettings(connection_string="DefaultConnectionString"))

    app = builder.build()

    assert app.state.database_url == "sqlite+aiosqlite:///:memory:"


def test_injected_database_is_used(service_info: ServiceInfo) -> None:
    database = Database("sqlite+aiosqlite:///:memory:")

    async def dispose(app: FastAPI) -> None:
        await database.dispose()

    app = (
        ServiceBuilder(info=service_info)
        .with_database_instance(database)
        .with_products()
        .on_shutdown(dispose)
        .build()
    )

    with TestClient(app) as client:
        assert app.state.database is database
        assert get_database() is database
        assert len(client.get("/products").json()) == 3


def test_heartbeat_runs_for_app_lifetime(service_info: ServiceInfo) -> None:
    heartbeat = HeartbeatService(interval=0.01)
    app = ServiceBuilder(info=service_info).with_heartbeat(service=heartbeat).build()

    with TestClient(app):
        assert heartbeat.is_running
        assert heartbeat.state == HeartbeatState.RUNNING

    assert heartbeat.state == HeartbeatState.STOPPED
    assert heartbeat.ticks >= 1


def test_lifespan_logs_start_and_stop(service_info: ServiceInfo) -> None:
    app = ServiceBuilder(info=service_info).with_heartbeat(interval=5.0).build()

    with capture_logs() as logs:
        with TestClient(app):
            pass

    events = [entry["event"] for entry in logs]
    assert events.index("app.started") < events.index("app.stopping")
    assert events.index("app.stopping") < events.index("heartbeat.stopped")
    assert events[-1] == "app.stopped"


def test_config_echo_logs_exposure_warning(service_info: ServiceInfo) -> None:
    settings = AppSettings(connection_string="Host=db;Password=secret")
    app = ServiceBuilder(info=service_info).with_config_echo(settings).build()

    with capture_logs() as logs:
        with TestClient(app):
            pass

    warnings = [entry for entry in logs if entry["event"] == "config.exposes_connection_string"]
    assert len(warnings) == 1
    assert warnings[0]["log_level"] == "warning"


def test_startup_and_shutdown_hooks(service_info: ServiceInfo) -> None:
    calls: list[str] = []

    async def on_start(app: FastAPI) -> None:
        get_database()
        calls.append("start")

    async def on_stop(app: FastAPI) -> None:
        calls.append("stop")

    app = ServiceBuilder(info=service_info).on_startup(on_start).on_shutdown(on_stop).build()

    with TestClient(app):
        assert calls == ["start"]

    assert calls == ["start", "stop"]


def test_startup_hook_sees_seeded_products(service_info: ServiceInfo) -> None:
    """Module hooks (seeding) run before user startup hooks."""
    counts: list[int] = []

    async def count_products(app: FastAPI) -> None:
        async with get_database().session() as session:
            counts.append(await ProductManager(ProductRepository(session)).count())

    app = ServiceBuilder(info=service_info).with_products().on_startup(count_products).build()

    with TestClient(app):
        pass

    assert counts == [3]


def test_include_custom_router(service_info: ServiceInfo) -> None:
    router = APIRouter(prefix="/extra")

    @router.get("/ping")
    async def ping() -> dict[str, str]:
        return {"pong": "ok"}

    app = ServiceBuilder(info=service_info).include_router(router).build()

    with TestClient(app) as client:
        assert client.get("/extra/ping").json() == {"pong": "ok"}


def test_create_classmethod(service_info: ServiceInfo) -> None:
    app = ServiceBuilder.create(info=service_info)

    assert isinstance(app, FastAPI)
