from __future__ import annotations

import time
from typing import Callable


Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds.

    Use this for slice budgets and long-task measurements.
    """

    return time.perf_counter() * 1000.0


def wall_ms() -> int:
    """Wall clock time in milliseconds."""

    return int(time.time() * 1000)


class ManualClock:
    """A clock that only moves when told to.

    Handy for driving time-sliced code deterministically.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def __call__(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError(f"cannot move a clock backwards (ms={ms})")
        self._now += ms
