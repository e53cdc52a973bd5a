from __future__ import annotations

import asyncio
from typing import Any, Callable

from raghad_site.core.clock import Clock, monotonic_ms


class Debouncer:
    """Run ``handler`` once, ``delay_ms`` after the last call in a burst.

    Each call cancels the pending timer and arms a new one with the latest
    arguments.
    """

    def __init__(self, handler: Callable[..., Any], *, delay_ms: float = 250) -> None:
        self._handler = handler
        self._delay_s = float(delay_ms) / 1000.0
        self._timer: asyncio.TimerHandle | None = None
        self.fired = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def __call__(self, *args: Any) -> None:
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay_s, self._fire, args)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._timer = None
        self.fired += 1
        self._handler(*args)


class FrameCoalescer:
    """Coalesce bursts of events into at most one handler run per frame.

    A new request cancels the frame callback still waiting, so the handler
    always sees the most recent arguments.
    """

    def __init__(self, handler: Callable[..., Any], *, frame_interval_ms: float = 16) -> None:
        self._handler = handler
        self._interval_s = float(frame_interval_ms) / 1000.0
        self._frame: asyncio.TimerHandle | None = None
        self.frames = 0

    def __call__(self, *args: Any) -> None:
        if self._frame is not None:
            self._frame.cancel()
        loop = asyncio.get_running_loop()
        self._frame = loop.call_later(self._interval_s, self._run_frame, args)

    def cancel(self) -> None:
        if self._frame is not None:
            self._frame.cancel()
            self._frame = None

    def _run_frame(self, args: tuple[Any, ...]) -> None:
        self._frame = None
        self.frames += 1
        self._handler(*args)


async def animate(
    duration_ms: float,
    callback: Callable[[float], Any],
    *,
    frame_interval_ms: float = 16,
    clock: Clock = monotonic_ms,
) -> int:
    """Call ``callback(progress)`` once per frame until progress reaches 1.0.

    Returns the number of frames rendered. A zero duration renders one frame
    at full progress.
    """

    start = clock()
    frames = 0
    while True:
        elapsed = clock() - start
        progress = 1.0 if duration_ms <= 0 else min(elapsed / duration_ms, 1.0)
        callback(progress)
        frames += 1
        if progress >= 1.0:
            return frames
        await asyncio.sleep(frame_interval_ms / 1000.0)
