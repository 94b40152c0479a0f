import json
import logging
import re

from backend.app.observability.logging import JsonFormatter


def _record(msg, *args, **extra):
    record = logging.LogRecord("request", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_one_json_line_with_extras():
    line = JsonFormatter().format(
        _record("%s %s - %s", "GET", "/api/health", "127.0.0.1", method="GET", path="/api/health")
    )

    payload = json.loads(line)
    assert "\n" not in line
    assert payload["level"] == "INFO"
    assert payload["logger"] == "request"
    assert payload["message"] == "GET /api/health - 127.0.0.1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/api/health"
    assert "time" in payload


def test_json_formatter_includes_trace_ids_when_present():
    payload = json.loads(
        JsonFormatter().format(_record("hello", trace_id="a" * 32, span_id="b" * 16))
    )
    assert payload["trace_id"] == "a" * 32
    assert payload["span_id"] == "b" * 16


def test_json_formatter_skips_empty_trace_ids():
    payload = json.loads(JsonFormatter().format(_record("hello", trace_id=None, span_id=None)))
    assert "trace_id" not in payload
    assert "span_id" not in payload


def test_every_request_is_logged_before_dispatch(client, caplog):
    caplog.set_level(logging.INFO, logger="request")

    client.get("/api/info")

    records = [r for r in caplog.records if r.name == "request"]
    assert len(records) == 2
    first, completed = records

    assert re.fullmatch(
        r"\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] GET /api/info - testclient",
        first.getMessage(),
    )
    assert first.method == "GET"
    assert first.path == "/api/info"
    assert first.client == "testclient"

    assert completed.getMessage() == "Completed request"
    assert completed.status_code == 200
    assert completed.duration_ms >= 0


def test_unmatched_requests_are_logged_too(client, caplog):
    caplog.set_level(logging.INFO, logger="request")

    client.get("/does-not-exist")

    completed = [r for r in caplog.records if r.name == "request"][-1]
    assert completed.path == "/does-not-exist"
    assert completed.status_code == 404
