import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from backend.app.application import create_app
from backend.app.core.config import Settings
from backend.app.observability import otel


@pytest.fixture
def exporter(monkeypatch):
    memory = InMemorySpanExporter()
    monkeypatch.setattr(otel, "OTLPSpanExporter", lambda **kwargs: memory)
    return memory


@pytest.fixture
def traced_app(monkeypatch, exporter):
    monkeypatch.setenv("OTEL_ENABLED", "true")
    monkeypatch.setenv("OTEL_SERVICE_NAME", "healing-test")
    return create_app(Settings(_env_file=None))


def test_tracing_is_off_by_default(app, settings):
    assert app.state.tracer_provider is None
    assert otel.init_otel(FastAPI(), settings) is False


def test_init_otel_reports_enabled(traced_app, exporter):
    settings = Settings(_env_file=None)
    assert otel.init_otel(FastAPI(), settings) is True
    provider = traced_app.state.tracer_provider
    assert provider is not None
    assert provider.resource.attributes["service.name"] == "healing-test"


def test_requests_produce_spans(traced_app, exporter):
    TestClient(traced_app).get("/api/health")
    traced_app.state.tracer_provider.force_flush()

    spans = exporter.get_finished_spans()
    assert spans
    assert any(span.attributes.get("http.route") == "/api/health" for span in spans)


def test_request_logs_carry_trace_ids(traced_app, exporter, caplog):
    caplog.set_level(logging.INFO, logger="request")

    TestClient(traced_app).get("/api/info")

    records = [r for r in caplog.records if r.name == "request"]
    assert records
    for record in records:
        assert record.trace_id is not None and len(record.trace_id) == 32
        assert record.span_id is not None and len(record.span_id) == 16


def test_shutdown_otel_flushes_provider(traced_app, exporter):
    TestClient(traced_app).get("/api/health")
    otel.shutdown_otel(traced_app)
    assert exporter.get_finished_spans()
