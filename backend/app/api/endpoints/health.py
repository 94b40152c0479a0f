from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core import system
from ...core.clock import iso_timestamp
from ...core.state import ServerState
from ...schemas.response import HealthyResponse, UnhealthyResponse
from ..deps import GET_METHODS, get_server_state

router = APIRouter(
    prefix="/api/health",
    tags=["health"],
)

UNHEALTHY_MESSAGE = "Service is unhealthy - auto-healing should trigger"


@router.api_route(
    "/",
    methods=GET_METHODS,
    response_model=HealthyResponse,
    include_in_schema=False,
)
@router.api_route(
    "",
    methods=GET_METHODS,
    summary="Service health check",
    response_model=HealthyResponse,
    responses={503: {"model": UnhealthyResponse}},
)
async def health_check(
    state: ServerState = Depends(get_server_state),
) -> Union[HealthyResponse, JSONResponse]:
    """
    Endpoint polled by the load balancer / auto-healing policy.

    Every call is counted, whatever the outcome. While the health flag is
    down the endpoint answers 503 so the orchestrator replaces the instance.
    """
    check = state.record_health_check()

    if check.healthy:
        return HealthyResponse(
            timestamp=iso_timestamp(),
            hostname=system.hostname(),
            uptime=state.uptime_seconds(),
            checks=check.checks,
        )

    body = UnhealthyResponse(
        timestamp=iso_timestamp(),
        hostname=system.hostname(),
        message=UNHEALTHY_MESSAGE,
    )
    return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))
