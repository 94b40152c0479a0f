from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class HealthSnapshot:
    healthy: bool
    checks: int


@dataclass
class ServerState:
    """
    Process-wide mutable state owned by the application.

    The health flag starts healthy and only changes through ``break_health``
    and ``restore_health``. The check counter only ever grows. Mutations go
    through the lock since sync endpoints run on worker threads.
    """

    healthy: bool = True
    health_check_count: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _started_monotonic: float = field(default_factory=time.monotonic, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_health_check(self) -> HealthSnapshot:
        """Count one health check and return the flag/counter as seen by that check."""
        with self._lock:
            self.health_check_count += 1
            return HealthSnapshot(healthy=self.healthy, checks=self.health_check_count)

    def break_health(self) -> None:
        with self._lock:
            self.healthy = False

    def restore_health(self) -> None:
        with self._lock:
            self.healthy = True

    def snapshot(self) -> HealthSnapshot:
        with self._lock:
            return HealthSnapshot(healthy=self.healthy, checks=self.health_check_count)

    def uptime_seconds(self) -> float:
        return time.monotonic() - self._started_monotonic
