from __future__ import annotations

from .application import create_app

# ASGI entry point: uvicorn backend.app.main:app
app = create_app()
