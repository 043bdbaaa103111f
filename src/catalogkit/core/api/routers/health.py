"""Health probe reporting the database and any extra checks."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from ..router import Router


class HealthState(StrEnum):
    """State of one check, or of the service as a whole."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


_SEVERITY = {HealthState.HEALTHY: 0, HealthState.DEGRADED: 1, HealthState.UNHEALTHY: 2}

HealthCheck = Callable[[], Awaitable[tuple[HealthState, str | None]]]


class CheckResult(BaseModel):
    """Outcome of a single named check."""

    state: HealthState
    message: str | None = Field(default=None, description="Why the check is not healthy")


class HealthStatus(BaseModel):
    """Probe response: the worst check state plus per-check results."""

    status: HealthState
    checks: dict[str, CheckResult] | None = None


async def run_checks(checks: Mapping[str, HealthCheck]) -> HealthStatus:
    """Run every check in order; a check that raises counts as unhealthy."""
    if not checks:
        return HealthStatus(status=HealthState.HEALTHY)

    results: dict[str, CheckResult] = {}
    for name, check in checks.items():
        try:
            state, message = await check()
        except Exception as e:
            state, message = HealthState.UNHEALTHY, f"Check failed: {e}"
        results[name] = CheckResult(state=state, message=message)

    worst = max((result.state for result in results.values()), key=_SEVERITY.__getitem__)
    return HealthStatus(status=worst, checks=results)


class HealthRouter(Router):
    """GET endpoint running the configured checks on every call."""

    def __init__(
        self,
        prefix: str,
        tags: list[str],
        checks: Mapping[str, HealthCheck] | None = None,
        **kwargs: Any,
    ) -> None:
        self.checks = dict(checks or {})
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _register_routes(self) -> None:
        checks = self.checks

        @self.router.get("", summary="Health check", response_model=HealthStatus, response_model_exclude_none=True)
        async def health_check() -> HealthStatus:
            return await run_checks(checks)
