"""Service builder with module integration (products, config echo)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Self

from fastapi import FastAPI

from catalogkit.core.api.dependencies import get_database
from catalogkit.core.api.service_builder import BaseServiceBuilder, ServiceInfo
from catalogkit.core.logging import get_logger
from catalogkit.core.settings import AppSettings
from catalogkit.modules.config import ConfigRouter
from catalogkit.modules.product import ProductRouter, ensure_schema

from .dependencies import get_product_manager

logger = get_logger(__name__)


@dataclass(slots=True)
class _ProductOptions:
    """Internal product options for ServiceBuilder."""

    prefix: str = "/products"
    tags: List[str] = field(default_factory=lambda: ["Products"])
    seed: bool = True


@dataclass(slots=True)
class _ConfigEchoOptions:
    """Internal config echo options for ServiceBuilder."""

    settings: AppSettings
    prefix: str = "/config"
    tags: List[str] = field(default_factory=lambda: ["Config"])


class ServiceBuilder(BaseServiceBuilder):
    """Service builder with integrated module support (products, config echo)."""

    def __init__(self, **kwargs: Any) -> None:
        """Initialize service builder with module-specific state."""
        super().__init__(**kwargs)
        self._product_options: _ProductOptions | None = None
        self._config_echo_options: _ConfigEchoOptions | None = None

    # --------------------------------------------------------------------- Module-specific fluent methods

    def with_settings(self, settings: AppSettings) -> Self:
        """Use the database named by the settings' connection string."""
        return self.with_database(settings.database_url)

    def with_products(
        self,
        *,
        prefix: str = "/products",
        tags: List[str] | None = None,
        seed: bool = True,
    ) -> Self:
        """Enable product endpoints; with seed, an empty table gets the default rows at startup."""
        self._product_options = _ProductOptions(
            prefix=prefix,
            tags=list(tags) if tags else ["Products"],
            seed=seed,
        )
        return self

    def with_config_echo(
        self,
        settings: AppSettings,
        *,
        prefix: str = "/config",
        tags: List[str] | None = None,
    ) -> Self:
        """Expose the given settings read-only, connection string included."""
        self._config_echo_options = _ConfigEchoOptions(
            settings=settings,
            prefix=prefix,
            tags=list(tags) if tags else ["Config"],
        )
        return self

    # --------------------------------------------------------------------- Extension point implementations

    def _register_module_routers(self, app: FastAPI) -> None:
        """Register module-specific routers (products, config echo)."""
        if self._product_options:
            product_options = self._product_options
            product_router = ProductRouter.create(
                prefix=product_options.prefix,
                tags=product_options.tags,
                manager_factory=get_product_manager,
            )
            app.include_router(product_router)

        if self._config_echo_options:
            config_options = self._config_echo_options
            config_router = ConfigRouter.create(
                prefix=config_options.prefix,
                tags=config_options.tags,
                settings=config_options.settings,
            )
            app.include_router(config_router)

    def _module_startup_hooks(self) -> List[Callable[[FastAPI], Awaitable[None]]]:
        """Seed products and warn about the config echo before user hooks run."""
        hooks: List[Callable[[FastAPI], Awaitable[None]]] = []

        if self._product_options and self._product_options.seed:

            async def seed_products(app: FastAPI) -> None:
                await ensure_schema(get_database())

            hooks.append(seed_products)

        if self._config_echo_options:
            config_prefix = self._config_echo_options.prefix

            async def warn_config_echo(app: FastAPI) -> None:
                logger.warning(
                    "config.exposes_connection_string",
                    path=config_prefix,
                    message="Connection string, including credentials, is served in cleartext",
                )

            hooks.append(warn_config_echo)

        return hooks
