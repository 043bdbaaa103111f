"""Config echo router exposing the resolved application settings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from catalogkit.core.api.router import Router
from catalogkit.core.settings import AppSettings


class ConfigRouter(Router):
    """Read-only router returning the settings the process started with.

    The connection string is returned verbatim, credentials included. Keep
    this router out of deployments reachable by untrusted clients.
    """

    def __init__(self, prefix: str, tags: Sequence[str], settings: AppSettings, **kwargs: Any) -> None:
        """Initialize config router with the immutable settings to echo."""
        self.settings = settings
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _register_routes(self) -> None:
        """Register config endpoint."""
        settings = self.settings

        @self.router.get("", summary="Current configuration", response_model=AppSettings)
        async def get_config() -> AppSettings:
            return settings
