from __future__ import annotations

import platform
import socket
import sys
from dataclasses import dataclass
from typing import List, Tuple

import psutil


@dataclass
class MemoryStats:
    total: int
    free: int

    @property
    def used(self) -> int:
        return self.total - self.free


@dataclass
class CpuTimes:
    user: int
    nice: int
    sys: int
    idle: int
    irq: int


@dataclass
class CpuInfo:
    model: str
    speed: int
    times: CpuTimes


def hostname() -> str:
    return socket.gethostname()


def os_platform() -> str:
    return sys.platform


def arch() -> str:
    return platform.machine() or "unknown"


def python_version() -> str:
    return platform.python_version()


def memory_stats() -> MemoryStats:
    """
    Read total and free memory in bytes.

    "Free" is the memory available to new processes without swapping, which
    includes reclaimable page cache.
    """
    vm = psutil.virtual_memory()
    return MemoryStats(total=int(vm.total), free=int(vm.available))


def _seconds_to_ms(value: float) -> int:
    return int(round(value * 1000))


def cpu_info() -> List[CpuInfo]:
    """Per-logical-CPU model, current frequency (MHz) and cumulative times (ms)."""
    model = platform.processor() or platform.machine() or "unknown"
    times = psutil.cpu_times(percpu=True)
    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (NotImplementedError, OSError, AttributeError):
        freqs = []

    cpus: List[CpuInfo] = []
    for idx, t in enumerate(times):
        freq = freqs[idx] if idx < len(freqs) else (freqs[0] if freqs else None)
        cpus.append(
            CpuInfo(
                model=model,
                speed=int(freq.current) if freq is not None else 0,
                times=CpuTimes(
                    user=_seconds_to_ms(t.user),
                    nice=_seconds_to_ms(getattr(t, "nice", 0.0)),
                    sys=_seconds_to_ms(t.system),
                    idle=_seconds_to_ms(t.idle),
                    irq=_seconds_to_ms(getattr(t, "irq", 0.0)),
                ),
            )
        )
    return cpus


def load_average() -> Tuple[float, float, float]:
    one, five, fifteen = psutil.getloadavg()
    return (one, five, fifteen)
