from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ..core import system
from ..core.config import Settings

logger = logging.getLogger(__name__)


def build_tracer_provider(settings: Settings) -> TracerProvider:
    """Tracer provider tagged with this instance, batching spans to the OTLP collector."""
    provider = TracerProvider(
        resource=Resource(
            attributes={
                "service.name": settings.otel.service_name,
                "service.environment": settings.app.env.value,
                "host.name": system.hostname(),
            }
        )
    )
    exporter = OTLPSpanExporter(
        endpoint=settings.otel.exporter_otlp_endpoint,
        insecure=True,
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def init_otel(app: FastAPI, settings: Settings) -> bool:
    """
    Trace every request when OTEL_ENABLED is set; returns whether tracing is on.

    The provider is kept on ``app.state.tracer_provider``; the server runner
    shuts it down after draining so the last spans still reach the collector.
    """
    app.state.tracer_provider = None
    if not settings.otel.enabled:
        return False

    provider = build_tracer_provider(settings)
    # The global provider can only be set once per process; the app keeps its own.
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    app.state.tracer_provider = provider

    logger.info(
        "OpenTelemetry tracing enabled",
        extra={
            "endpoint": settings.otel.exporter_otlp_endpoint,
            "service_name": settings.otel.service_name,
        },
    )
    return True


def shutdown_otel(app: FastAPI) -> None:
    provider = getattr(app.state, "tracer_provider", None)
    if provider is not None:
        provider.shutdown()
