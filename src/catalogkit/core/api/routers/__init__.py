"""Core routers for operational endpoints."""

from .health import CheckResult, HealthCheck, HealthRouter, HealthState, HealthStatus, run_checks

__all__ = [
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "HealthCheck",
    "CheckResult",
    "run_checks",
]
