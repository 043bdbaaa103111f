"""Small helpers shared by routers and entry points."""

from __future__ import annotations

import os
from typing import Any

from fastapi import Request


def build_location_url(request: Request, path: str) -> str:
    """Build an absolute URL for a resource path on the current host."""
    return f"{request.url.scheme}://{request.url.netloc}{path}"


def run_app(
    app: Any,
    *,
    host: str | None = None,
    port: int | None = None,
    workers: int | None = None,
    reload: bool | None = None,
    log_level: str | None = None,
    **uvicorn_kwargs: Any,
) -> None:
    """Run an ASGI app with uvicorn, reading unset options from the environment.

    Environment variables: HOST (default 0.0.0.0), PORT (default 8080),
    WORKERS (default 1), RELOAD (default false), LOG_LEVEL (default info).
    """
    import uvicorn

    resolved_host = host or os.getenv("HOST", "0.0.0.0")
    resolved_port = port or int(os.getenv("PORT", "8080"))
    resolved_workers = workers or int(os.getenv("WORKERS", "1"))
    resolved_reload = reload if reload is not None else os.getenv("RELOAD", "false").lower() == "true"
    resolved_log_level = (log_level or os.getenv("LOG_LEVEL", "info")).lower()

    # Reload and multiple workers need an import string rather than an app object
    if (resolved_reload or resolved_workers > 1) and not isinstance(app, str):
        raise ValueError("reload and workers > 1 require the app as an import string, e.g. 'module:app'")

    uvicorn.run(
        app,
        host=resolved_host,
        port=resolved_port,
        workers=resolved_workers if not resolved_reload else None,
        reload=resolved_reload,
        log_level=resolved_log_level,
        log_config=None,
        **uvicorn_kwargs,
    )
