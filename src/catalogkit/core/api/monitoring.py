"""OpenTelemetry instrumentation with a Prometheus scrape endpoint."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import Response
from opentelemetry import metrics, trace
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from catalogkit.core.database import Database
from catalogkit.core.logging import get_logger

logger = get_logger(__name__)

# OpenTelemetry providers can only be set once per process
_meter_provider_initialized = False
_tracer_provider_initialized = False
_sqlalchemy_instrumented = False
_metric_reader: PrometheusMetricReader | None = None


def setup_monitoring(
    app: FastAPI,
    *,
    service_name: str | None = None,
    metrics_path: str = "/metrics",
    enable_traces: bool = False,
) -> PrometheusMetricReader:
    """Instrument the app and mount the Prometheus endpoint.

    Metrics from FastAPI, SQLAlchemy, and the catalog's own meters are exposed
    at ``metrics_path``. With ``enable_traces`` an SDK tracer provider is
    installed so request spans are recorded and their ids reach the logs;
    span exporters are left to deployment tooling.
    """
    global _meter_provider_initialized, _tracer_provider_initialized, _metric_reader

    name = service_name or app.title
    resource = Resource.create({SERVICE_NAME: name})

    if not _meter_provider_initialized or _metric_reader is None:
        _metric_reader = PrometheusMetricReader()
        metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[_metric_reader]))
        _meter_provider_initialized = True
        logger.info("monitoring.metrics_enabled", service_name=name, path=metrics_path)
    else:
        logger.debug("monitoring.meter_provider_reused", service_name=name)

    if enable_traces and not _tracer_provider_initialized:
        trace.set_tracer_provider(TracerProvider(resource=resource))
        _tracer_provider_initialized = True
        logger.info("monitoring.traces_enabled", service_name=name)

    FastAPIInstrumentor.instrument_app(app, excluded_urls=metrics_path)

    @app.get(metrics_path, tags=["monitoring"], summary="Prometheus metrics", response_class=Response)
    async def prometheus_metrics() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

    return _metric_reader


def instrument_database(database: Database) -> None:
    """Trace SQL statements issued through the database engine.

    The SQLAlchemy instrumentor is process-wide, so only the first engine
    passed here is instrumented.
    """
    global _sqlalchemy_instrumented

    if _sqlalchemy_instrumented:
        return
    SQLAlchemyInstrumentor().instrument(engine=database.engine.sync_engine)
    _sqlalchemy_instrumented = True


def teardown_monitoring(app: FastAPI | None = None) -> None:
    """Remove instrumentation installed by setup_monitoring and instrument_database."""
    global _sqlalchemy_instrumented

    if _sqlalchemy_instrumented:
        SQLAlchemyInstrumentor().uninstrument()
        _sqlalchemy_instrumented = False

    if app is not None:
        FastAPIInstrumentor.uninstrument_app(app)
    logger.debug("monitoring.teardown")
