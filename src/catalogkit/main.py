"""Application factory and process entry point for the catalog service."""

from __future__ import annotations

from fastapi import FastAPI

from catalogkit.api import ServiceBuilder, ServiceInfo, run_app
from catalogkit.core.settings import AppSettings

SERVICE_INFO = ServiceInfo(
    display_name="Product Catalog Service",
    version="1.0.0",
    summary="Twelve-factor product catalog with externalized configuration",
    description="Lists and creates products in a relational backing service configured through "
    "POSTGRESQL_CONNECTION, echoes its configuration, and runs a heartbeat loop for its lifetime.",
)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the catalog service from settings (read from the environment by default)."""
    resolved = settings or AppSettings.from_env()
    return (
        ServiceBuilder(info=SERVICE_INFO)
        .with_settings(resolved)
        .with_logging()
        .with_health()
        .with_monitoring(enable_traces=True)
        .with_products()
        .with_config_echo(resolved)
        .with_heartbeat(interval=1.0)
        .build()
    )


def main() -> None:
    """Run the catalog service with uvicorn."""
    run_app("catalogkit.main:create_app", factory=True)


if __name__ == "__main__":
    main()
