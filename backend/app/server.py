from __future__ import annotations

import contextlib
import logging
import os
import signal
import sys
import threading
from typing import Generator, Optional

import uvicorn
from fastapi import FastAPI

from .application import create_app
from .core import system
from .core.config import Settings, get_settings
from .observability.logging import get_logger
from .observability.otel import shutdown_otel

logger = get_logger("server")

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

EXIT_OK = 0
EXIT_FORCED = 1


class GracefulServer(uvicorn.Server):
    """
    uvicorn server with a hard deadline on graceful shutdown.

    On the first SIGINT/SIGTERM uvicorn stops accepting connections and
    drains in-flight requests; a timer armed at the same moment kills the
    process with exit code 1 if draining outlasts ``grace_seconds``.
    """

    def __init__(self, config: uvicorn.Config, grace_seconds: float) -> None:
        super().__init__(config)
        self.grace_seconds = grace_seconds
        self._deadline: Optional[threading.Timer] = None

    def handle_exit(self, sig: int, frame) -> None:  # type: ignore[override]
        if self._deadline is None:
            logger.info(
                "%s received, shutting down gracefully...",
                signal.Signals(sig).name,
                extra={"grace_seconds": self.grace_seconds},
            )
            self._deadline = threading.Timer(self.grace_seconds, self._force_exit)
            self._deadline.daemon = True
            self._deadline.start()
        super().handle_exit(sig, frame)

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        # Same as uvicorn's, minus re-raising the signal afterwards so a clean
        # drain exits 0 instead of dying by the signal.
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        original_handlers = {
            sig: signal.signal(sig, self.handle_exit) for sig in HANDLED_SIGNALS
        }
        try:
            yield
        finally:
            for sig, handler in original_handlers.items():
                signal.signal(sig, handler)

    def cancel_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()

    def _force_exit(self) -> None:
        logger.error(
            "Forced shutdown", extra={"grace_seconds": self.grace_seconds}
        )
        for handler in logging.getLogger().handlers:
            handler.flush()
        os._exit(EXIT_FORCED)


def log_banner(settings: Settings, healthy: bool) -> None:
    port = settings.app.port
    rule = "=" * 60
    logger.info(rule)
    logger.info("Auto-Healing MIG Application Started")
    logger.info(rule)
    logger.info("Port: %s", port)
    logger.info("Hostname: %s", system.hostname())
    logger.info("Python: %s", system.python_version())
    logger.info("Health Status: %s", "HEALTHY" if healthy else "UNHEALTHY")
    logger.info(rule)
    logger.info("Health endpoint: http://localhost:%s/api/health", port)
    logger.info(rule)


def build_server(settings: Settings, app: FastAPI) -> GracefulServer:
    config = uvicorn.Config(
        app,
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,
        access_log=False,
        log_level=settings.app.log_level.lower(),
    )
    return GracefulServer(config, grace_seconds=settings.app.shutdown_grace_seconds)


def run(settings: Optional[Settings] = None) -> int:
    """
    Serve until a termination signal, then drain.

    Returns 0 after a clean shutdown. A port that cannot be bound makes
    uvicorn abort startup with SystemExit(1); a drain that outlasts the grace
    period terminates the process with exit code 1.
    """
    settings = settings or get_settings()
    app = create_app(settings)
    server = build_server(settings, app)
    log_banner(settings, app.state.server_state.healthy)

    try:
        server.run()
    finally:
        server.cancel_deadline()
        shutdown_otel(app)

    logger.info("Server closed")
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
