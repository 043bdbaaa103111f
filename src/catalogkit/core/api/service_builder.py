"""Fluent builder assembling the FastAPI app, its routers, and its lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncContextManager, AsyncIterator, Awaitable, Callable, Self

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel, ConfigDict

from catalogkit.core import Database, HeartbeatService
from catalogkit.core.logging import configure_logging, get_logger
from catalogkit.core.settings import IN_MEMORY_DATABASE_URL

from .dependencies import get_database, set_database
from .middleware import add_error_handlers, add_logging_middleware
from .routers import HealthRouter
from .routers.health import HealthCheck, HealthState

logger = get_logger(__name__)

LifecycleHook = Callable[[FastAPI], Awaitable[None]]


class ServiceInfo(BaseModel):
    """Service metadata shown in OpenAPI and at /api/v1/info."""

    display_name: str
    version: str = "1.0.0"
    summary: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


@dataclass(slots=True)
class _HealthOptions:
    prefix: str
    tags: list[str]
    checks: dict[str, HealthCheck]


@dataclass(slots=True)
class _MonitoringOptions:
    metrics_path: str
    service_name: str | None
    enable_traces: bool


@dataclass(slots=True)
class _LifespanPlan:
    """Everything the lifespan needs, frozen at build time."""

    database_url: str
    database_instance: Database | None
    configure_logs: bool
    instrument_database: bool
    heartbeat: HeartbeatService | None
    startup_hooks: list[LifecycleHook] = field(default_factory=list)
    shutdown_hooks: list[LifecycleHook] = field(default_factory=list)


class BaseServiceBuilder:
    """Builds the core of a service: database, errors, logging, health, monitoring, heartbeat.

    Subclasses add feature modules through ``_register_module_routers`` and
    ``_module_startup_hooks``.
    """

    def __init__(
        self,
        *,
        info: ServiceInfo,
        database_url: str = IN_MEMORY_DATABASE_URL,
        include_error_handlers: bool = True,
        include_logging: bool = False,
    ) -> None:
        self.info = info
        self._database_url = database_url
        self._database_instance: Database | None = None
        self._include_error_handlers = include_error_handlers
        self._include_logging = include_logging
        self._health: _HealthOptions | None = None
        self._monitoring: _MonitoringOptions | None = None
        self._heartbeat: HeartbeatService | None = None
        self._custom_routers: list[APIRouter] = []
        self._dependency_overrides: dict[Callable[..., object], Callable[..., object]] = {}
        self._startup_hooks: list[LifecycleHook] = []
        self._shutdown_hooks: list[LifecycleHook] = []

    # --------------------------------------------------------------------- Fluent configuration

    def with_database(self, url: str) -> Self:
        """Use the database at ``url``; the app owns and disposes it."""
        self._database_url = url
        return self

    def with_database_instance(self, database: Database) -> Self:
        """Use an existing Database; the caller keeps ownership."""
        self._database_instance = database
        return self

    def with_logging(self, enabled: bool = True) -> Self:
        """Configure structlog at startup and log every request."""
        self._include_logging = enabled
        return self

    def with_health(
        self,
        *,
        prefix: str = "/health",
        tags: list[str] | None = None,
        checks: dict[str, HealthCheck] | None = None,
        include_database_check: bool = True,
    ) -> Self:
        """Serve a health probe; the database check is on by default."""
        all_checks = dict(checks or {})
        if include_database_check:
            all_checks["database"] = self._create_database_health_check()
        self._health = _HealthOptions(prefix=prefix, tags=list(tags) if tags else ["Health"], checks=all_checks)
        return self

    def with_monitoring(
        self,
        *,
        metrics_path: str = "/metrics",
        service_name: str | None = None,
        enable_traces: bool = False,
    ) -> Self:
        """Instrument with OpenTelemetry and serve Prometheus metrics."""
        self._monitoring = _MonitoringOptions(metrics_path, service_name, enable_traces)
        return self

    def with_heartbeat(self, *, interval: float = 1.0, service: HeartbeatService | None = None) -> Self:
        """Run a heartbeat loop between startup and shutdown."""
        self._heartbeat = service or HeartbeatService(interval=interval)
        return self

    def include_router(self, router: APIRouter) -> Self:
        """Include a custom router."""
        self._custom_routers.append(router)
        return self

    def override_dependency(self, dependency: Callable[..., object], override: Callable[..., object]) -> Self:
        """Override a dependency for testing or customization."""
        self._dependency_overrides[dependency] = override
        return self

    def on_startup(self, hook: LifecycleHook) -> Self:
        """Run ``hook`` after the database is ready and module hooks have run."""
        self._startup_hooks.append(hook)
        return self

    def on_shutdown(self, hook: LifecycleHook) -> Self:
        """Run ``hook`` after the heartbeat stops, before the database is released."""
        self._shutdown_hooks.append(hook)
        return self

    # --------------------------------------------------------------------- Build

    def build(self) -> FastAPI:
        """Validate the configuration and assemble the FastAPI application."""
        self._validate_configuration()
        self._validate_module_configuration()

        app = FastAPI(
            title=self.info.display_name,
            description=self.info.description or self.info.summary or "",
            version=self.info.version,
            lifespan=self._build_lifespan(),
        )
        app.state.database_url = self._database_url

        if self._include_error_handlers:
            add_error_handlers(app)
        if self._include_logging:
            add_logging_middleware(app)

        if self._monitoring is not None:
            from .monitoring import setup_monitoring

            setup_monitoring(
                app,
                service_name=self._monitoring.service_name or self.info.display_name,
                metrics_path=self._monitoring.metrics_path,
                enable_traces=self._monitoring.enable_traces,
            )

        if self._health is not None:
            app.include_router(
                HealthRouter.create(prefix=self._health.prefix, tags=self._health.tags, checks=self._health.checks)
            )

        self._register_module_routers(app)

        for router in self._custom_routers:
            app.include_router(router)

        app.dependency_overrides.update(self._dependency_overrides)
        self._install_info_endpoint(app, info=self.info)
        return app

    # --------------------------------------------------------------------- Extension points

    def _validate_module_configuration(self) -> None:
        """Validate module options; subclasses raise ValueError on bad combinations."""

    def _register_module_routers(self, app: FastAPI) -> None:
        """Include module routers on the app."""

    def _module_startup_hooks(self) -> list[LifecycleHook]:
        """Hooks that must run before user startup hooks, such as seeding."""
        return []

    # --------------------------------------------------------------------- Internals

    def _validate_configuration(self) -> None:
        if self._health is None:
            return
        for name in self._health.checks:
            if not name.replace("_", "").replace("-", "").isalnum():
                raise ValueError(
                    f"Health check name '{name}' contains invalid characters. "
                    "Only alphanumeric characters, underscores, and hyphens are allowed."
                )

    def _build_lifespan(self) -> Callable[[FastAPI], AsyncContextManager[None]]:
        plan = _LifespanPlan(
            database_url=self._database_url,
            database_instance=self._database_instance,
            configure_logs=self._include_logging,
            instrument_database=self._monitoring is not None,
            heartbeat=self._heartbeat,
            startup_hooks=self._module_startup_hooks() + self._startup_hooks,
            shutdown_hooks=list(self._shutdown_hooks),
        )

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            if plan.configure_logs:
                configure_logging()

            owns_database = plan.database_instance is None
            database = plan.database_instance or Database(plan.database_url)
            await database.init()
            set_database(database)
            app.state.database = database

            if plan.instrument_database:
                from .monitoring import instrument_database

                instrument_database(database)

            for hook in plan.startup_hooks:
                await hook(app)

            if plan.heartbeat is not None:
                await plan.heartbeat.start()
                app.state.heartbeat = plan.heartbeat

            logger.info("app.started", service=app.title, database=database.safe_url)
            try:
                yield
            finally:
                logger.info("app.stopping", service=app.title)

                if plan.heartbeat is not None:
                    await plan.heartbeat.stop()

                for hook in plan.shutdown_hooks:
                    await hook(app)

                app.state.database = None
                set_database(None)
                if owns_database:
                    await database.dispose()

                logger.info("app.stopped", service=app.title)

        return lifespan

    @staticmethod
    def _create_database_health_check() -> HealthCheck:
        async def check_database() -> tuple[HealthState, str | None]:
            try:
                await get_database().ping()
            except Exception as e:
                return (HealthState.UNHEALTHY, f"Database connection failed: {e}")
            return (HealthState.HEALTHY, None)

        return check_database

    @staticmethod
    def _install_info_endpoint(app: FastAPI, *, info: ServiceInfo) -> None:
        @app.get("/api/v1/info", include_in_schema=False, response_model=type(info))
        async def get_info() -> ServiceInfo:
            return info

    @classmethod
    def create(cls, *, info: ServiceInfo, **kwargs: object) -> FastAPI:
        """Create and build an application in one call."""
        return cls(info=info, **kwargs).build()  # type: ignore[arg-type]
