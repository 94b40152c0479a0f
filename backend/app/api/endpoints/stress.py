from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...core import system
from ...core.clock import iso_timestamp
from ...core.config import Settings
from ...core.stress import burn_cpu, parse_duration
from ...observability.logging import get_logger
from ...schemas.response import StressResponse
from ..deps import GET_METHODS, get_settings_for_app

logger = get_logger("api.stress")

router = APIRouter(prefix="/api/stress", tags=["stress"])


@router.api_route(
    "/",
    methods=GET_METHODS,
    response_model=StressResponse,
    include_in_schema=False,
)
@router.api_route(
    "",
    methods=GET_METHODS,
    response_model=StressResponse,
    summary="CPU stress test",
)
def stress(
    duration: Optional[str] = Query(
        default=None,
        description="Busy-wait duration in milliseconds (default 5000).",
    ),
    settings: Settings = Depends(get_settings_for_app),
) -> StressResponse:
    """
    Burn one core for the requested duration, then answer.

    Declared sync so FastAPI runs it on the worker thread pool: the loop ties
    up that thread only, and the event loop keeps serving other requests.
    No upper bound is applied to ``duration``.
    """
    duration_ms = parse_duration(duration, settings.app.stress_default_duration_ms)
    logger.info("Stress test started", extra={"duration_ms": duration_ms})
    burn_cpu(duration_ms)

    return StressResponse(
        message="Stress test completed",
        duration=duration_ms,
        hostname=system.hostname(),
        timestamp=iso_timestamp(),
    )
