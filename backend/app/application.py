from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_exception_handlers
from .api.router import router as api_router
from .core.config import Settings, get_settings
from .core.state import ServerState
from .observability import otel
from .observability.logging import setup_logging
from .observability.middleware import RequestLoggingMiddleware


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    - Sets up JSON logging with trace/span IDs
    - Creates the health flag / check counter state owned by this app
    - Attaches HTTP middlewares (CORS, request logging)
    - Registers routes plus the not-found and server-error fallbacks
    - Configures OpenTelemetry tracing when enabled
    """
    settings = settings or get_settings()

    setup_logging(settings.app.log_level)

    app = FastAPI(
        title=settings.app.name,
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.server_state = ServerState()

    # Middlewares
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)
    register_exception_handlers(app)

    # Instrument last so the tracing middleware wraps the request logger.
    otel.init_otel(app, settings)

    return app

