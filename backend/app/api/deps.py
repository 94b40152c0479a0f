from __future__ import annotations

from fastapi import Request

from ..core.config import Settings
from ..core.state import ServerState

# Read-only routes answer HEAD with the same handler; load balancers often health-check with it.
GET_METHODS = ["GET", "HEAD"]


def get_server_state(request: Request) -> ServerState:
    return request.app.state.server_state


def get_settings_for_app(request: Request) -> Settings:
    return request.app.state.settings
