import pytest
from fastapi.testclient import TestClient

from backend.app.application import create_app
from backend.app.core.config import Settings


@pytest.fixture
def settings(monkeypatch):
    for name in ("PORT", "HOST", "LOG_LEVEL", "EXPOSE_ERROR_DETAILS", "OTEL_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
