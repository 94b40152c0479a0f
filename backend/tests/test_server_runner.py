import signal
import subprocess
import sys
from pathlib import Path

import pytest
import uvicorn

from backend.app import server as server_module
from backend.app.server import EXIT_FORCED, GracefulServer, build_server


class _FakeTimer:
    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        _FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def fake_timer(monkeypatch):
    _FakeTimer.created = []
    monkeypatch.setattr(server_module.threading, "Timer", _FakeTimer)
    return _FakeTimer


def _server(app, grace=10.0):
    return GracefulServer(uvicorn.Config(app, log_config=None), grace_seconds=grace)


def test_build_server_uses_configured_port_and_grace(settings, app):
    server = build_server(settings, app)
    assert server.config.port == 8080
    assert server.config.host == "0.0.0.0"
    assert server.grace_seconds == 10.0


def test_first_signal_arms_shutdown_deadline_once(app, fake_timer):
    server = _server(app, grace=3.0)

    server.handle_exit(signal.SIGTERM, None)
    server.handle_exit(signal.SIGTERM, None)

    assert server.should_exit is True
    assert len(fake_timer.created) == 1
    timer = fake_timer.created[0]
    assert timer.interval == 3.0
    assert timer.daemon is True
    assert timer.started is True


def test_clean_shutdown_cancels_deadline(app, fake_timer):
    server = _server(app)
    server.handle_exit(signal.SIGINT, None)
    server.cancel_deadline()
    assert fake_timer.created[0].cancelled is True


def test_deadline_forces_exit_code_one(app, monkeypatch):
    codes = []
    monkeypatch.setattr(server_module.os, "_exit", codes.append)

    _server(app)._force_exit()

    assert codes == [EXIT_FORCED] == [1]


def test_run_returns_zero_after_clean_shutdown(settings, monkeypatch):
    monkeypatch.setattr(GracefulServer, "run", lambda self, sockets=None: None)
    assert server_module.run(settings) == 0


def test_bind_failure_aborts_startup(settings, monkeypatch):
    def fail_to_bind(self, sockets=None):
        raise SystemExit(1)

    monkeypatch.setattr(GracefulServer, "run", fail_to_bind)
    with pytest.raises(SystemExit) as excinfo:
        server_module.run(settings)
    assert excinfo.value.code == 1


def test_importing_runner_does_not_build_module_app():
    root = Path(__file__).resolve().parents[2]
    code = (
        "import sys, backend.app.server; "
        "print('backend.app.main' in sys.modules)"
    )
    out = subprocess.run(
        [sys.executable, "-c", code],
        cwd=root,
        capture_output=True,
        text=True,
        check=True,
    )
    assert out.stdout.strip().splitlines()[-1] == "False"


def test_run_builds_a_single_app(settings, monkeypatch):
    built = []
    real_create_app = server_module.create_app

    def counting_create_app(*args, **kwargs):
        app = real_create_app(*args, **kwargs)
        built.append(app)
        return app

    monkeypatch.setattr(server_module, "create_app", counting_create_app)
    monkeypatch.setattr(GracefulServer, "run", lambda self, sockets=None: None)

    server_module.run(settings)

    assert len(built) == 1
