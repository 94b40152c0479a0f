from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthyResponse(CamelModel):
    status: str = "healthy"
    timestamp: str
    hostname: str
    uptime: float
    checks: int


class UnhealthyResponse(CamelModel):
    status: str = "unhealthy"
    timestamp: str
    hostname: str
    message: str


class MemoryInfo(CamelModel):
    total: int
    free: int
    used: int


class CpuTimesInfo(CamelModel):
    user: int
    nice: int
    sys: int
    idle: int
    irq: int


class CpuInfoItem(CamelModel):
    model: str
    speed: int
    times: CpuTimesInfo


class InstanceInfoResponse(CamelModel):
    hostname: str
    platform: str
    arch: str
    python_version: str
    uptime: float
    health_status: bool
    health_check_count: int
    memory: MemoryInfo
    cpu: List[CpuInfoItem]
    load_average: List[float]
    timestamp: str


class BreakHealthResponse(CamelModel):
    message: str
    note: str
    timestamp: str


class RestoreHealthResponse(CamelModel):
    message: str
    timestamp: str


class StressResponse(CamelModel):
    message: str
    duration: int
    hostname: str
    timestamp: str


class NotFoundResponse(CamelModel):
    error: str = "Not Found"
    path: str
    timestamp: str


class ErrorResponse(CamelModel):
    error: str = "Internal Server Error"
    message: str
    timestamp: str
