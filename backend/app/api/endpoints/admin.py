from __future__ import annotations

from fastapi import APIRouter, Depends

from ...core.clock import iso_timestamp
from ...core.state import ServerState
from ...observability.logging import get_logger
from ...schemas.response import BreakHealthResponse, RestoreHealthResponse
from ..deps import get_server_state

logger = get_logger("api.admin")

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/break-health/",
    response_model=BreakHealthResponse,
    include_in_schema=False,
)
@router.post(
    "/break-health",
    response_model=BreakHealthResponse,
    summary="Simulate failure: make /api/health answer 503.",
)
async def break_health(
    state: ServerState = Depends(get_server_state),
) -> BreakHealthResponse:
    state.break_health()
    logger.warning("Health status set to UNHEALTHY - auto-healing will trigger")
    return BreakHealthResponse(
        message="Health status set to unhealthy",
        note="Health checks will fail and auto-healing should recreate this instance",
        timestamp=iso_timestamp(),
    )


@router.post(
    "/restore-health/",
    response_model=RestoreHealthResponse,
    include_in_schema=False,
)
@router.post(
    "/restore-health",
    response_model=RestoreHealthResponse,
    summary="Restore health.",
)
async def restore_health(
    state: ServerState = Depends(get_server_state),
) -> RestoreHealthResponse:
    state.restore_health()
    logger.info("Health status restored to HEALTHY")
    return RestoreHealthResponse(
        message="Health status restored",
        timestamp=iso_timestamp(),
    )
