from __future__ import annotations

from fastapi import APIRouter, Depends

from ...core import system
from ...core.clock import iso_timestamp
from ...core.state import ServerState
from ...schemas.response import (
    CpuInfoItem,
    CpuTimesInfo,
    InstanceInfoResponse,
    MemoryInfo,
)
from ..deps import GET_METHODS, get_server_state

router = APIRouter(prefix="/api/info", tags=["info"])


@router.api_route(
    "/",
    methods=GET_METHODS,
    response_model=InstanceInfoResponse,
    include_in_schema=False,
)
@router.api_route(
    "",
    methods=GET_METHODS,
    response_model=InstanceInfoResponse,
    summary="Instance information",
)
async def instance_info(
    state: ServerState = Depends(get_server_state),
) -> InstanceInfoResponse:
    """Snapshot of host, runtime and health state. Read-only."""
    memory = system.memory_stats()
    current = state.snapshot()

    return InstanceInfoResponse(
        hostname=system.hostname(),
        platform=system.os_platform(),
        arch=system.arch(),
        python_version=system.python_version(),
        uptime=state.uptime_seconds(),
        health_status=current.healthy,
        health_check_count=current.checks,
        memory=MemoryInfo(total=memory.total, free=memory.free, used=memory.used),
        cpu=[
            CpuInfoItem(
                model=cpu.model,
                speed=cpu.speed,
                times=CpuTimesInfo(
                    user=cpu.times.user,
                    nice=cpu.times.nice,
                    sys=cpu.times.sys,
                    idle=cpu.times.idle,
                    irq=cpu.times.irq,
                ),
            )
            for cpu in system.cpu_info()
        ],
        load_average=list(system.load_average()),
        timestamp=iso_timestamp(),
    )
