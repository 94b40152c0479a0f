from __future__ import annotations

import math
import random
import re
import time
from typing import Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_duration(raw: Optional[str], default_ms: int) -> int:
    """
    Parse the ``duration`` query value in milliseconds.

    Only the leading integer is used ("250ms" -> 250). Missing, non-numeric
    and zero values fall back to ``default_ms``. There is no upper bound.
    """
    if raw is None:
        return default_ms
    match = _LEADING_INT.match(raw)
    if match is None:
        return default_ms
    value = int(match.group(1))
    return value or default_ms


def burn_cpu(duration_ms: int) -> int:
    """
    Busy-wait for ``duration_ms`` of wall-clock time doing trivial float work.

    Returns the number of loop iterations performed. Non-positive durations
    return immediately.
    """
    iterations = 0
    deadline = duration_ms / 1000.0
    start = time.monotonic()
    while time.monotonic() - start < deadline:
        math.sqrt(random.random())
        iterations += 1
    return iterations
