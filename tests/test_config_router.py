"""Tests for the config echo endpoint."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from catalogkit.core.settings import AppSettings
from catalogkit.modules.config import ConfigRouter


def test_config_echoes_connection_string(client: TestClient) -> None:
    response = client.get("/config")

    assert response.status_code == 200
    assert response.json() == {
        "connectionString": "Host=db;Database=mydb;Username=myuser;Password=mypassword",
    }


def test_config_echoes_placeholder_verbatim() -> None:
    app = FastAPI()
    settings = AppSettings(connection_string="DefaultConnectionString")
    app.include_router(ConfigRouter.create(prefix="/config", tags=["Config"], settings=settings))

    response = TestClient(app).get("/config")

    assert response.json() == {"connectionString": "DefaultConnectionString"}


def test_config_is_stable_across_requests(client: TestClient) -> None:
    first = client.get("/config").json()
    client.post("/products", json={"name": "Chair", "price": 30})

    assert client.get("/config").json() == first
