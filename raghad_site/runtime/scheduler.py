"""Cooperative task scheduler for a page session.

Callbacks are queued and drained in FIFO order in short time slices so a long
run of small jobs never monopolises the event loop. When a slice runs over
its budget with work left, the drain yields back to the host and resumes on
the next idle callback (or a zero-delay timer when the host has none).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from raghad_site.core.clock import Clock, monotonic_ms, wall_ms


logger = logging.getLogger(__name__)


TaskCallback = Callable[[], "Awaitable[Any] | Any"]
HostCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class QueuedTask:
    callback: TaskCallback
    # Stored for callers' benefit only; the drain order is strictly FIFO.
    priority: str
    enqueued_at_ms: int


@dataclass(frozen=True, slots=True)
class Host:
    """The scheduling primitives the drain loop yields to."""

    set_timeout: Callable[[HostCallback], object]
    request_idle_callback: Callable[[HostCallback], object] | None = None


def asyncio_host(loop: asyncio.AbstractEventLoop, *, idle: bool = True) -> Host:
    """Host backed by an asyncio loop.

    The idle callback runs once the loop's current ready queue is processed;
    the timer fallback is a zero-delay ``call_later``.
    """

    return Host(
        set_timeout=lambda cb: loop.call_later(0, cb),
        request_idle_callback=loop.call_soon if idle else None,
    )


class TaskScheduler:
    def __init__(
        self,
        *,
        slice_budget_ms: float = 5.0,
        long_task_ms: float = 50.0,
        clock: Clock = monotonic_ms,
        host: Host | None = None,
    ) -> None:
        if slice_budget_ms <= 0:
            raise ValueError(f"slice_budget_ms must be > 0, got {slice_budget_ms}")

        self._budget_ms = float(slice_budget_ms)
        self._long_task_ms = float(long_task_ms)
        self._clock = clock
        self._host = host

        self._queue: deque[QueuedTask] = deque()
        self._running = False
        self._idle = asyncio.Event()
        self._idle.set()
        self._drain_task: asyncio.Task[None] | None = None

        self.executed = 0
        self.failed = 0
        self.yields = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return len(self._queue)

    def enqueue(self, callback: TaskCallback, priority: str = "normal") -> None:
        """Queue ``callback`` and start draining unless a drain is active.

        Must be called from within the event loop thread.
        """

        self._queue.append(QueuedTask(callback=callback, priority=priority, enqueued_at_ms=wall_ms()))
        self._schedule()

    async def wait_idle(self) -> None:
        """Wait until the queue is empty and the drain has stopped."""

        await self._idle.wait()

    def _schedule(self) -> None:
        if self._running:
            return
        self._running = True
        self._idle.clear()
        loop = asyncio.get_running_loop()
        host = self._host
        if host is None:
            host = self._host = asyncio_host(loop)
        self._drain_task = loop.create_task(self._drain(host))

    def _resume(self) -> None:
        self._running = False
        self._schedule()

    async def _drain(self, host: Host) -> None:
        started = self._clock()

        while self._queue and (self._clock() - started) < self._budget_ms:
            task = self._queue.popleft()
            await self._run(task)

        if not self._queue:
            self._running = False
            self._idle.set()
            return

        self.yields += 1
        logger.debug(
            "scheduler_yield",
            extra={"pending": len(self._queue), "slice_ms": round(self._clock() - started, 3)},
        )
        if host.request_idle_callback is not None:
            host.request_idle_callback(self._resume)
        else:
            host.set_timeout(self._resume)

    async def _run(self, task: QueuedTask) -> None:
        t0 = self._clock()
        self.executed += 1
        try:
            result = task.callback()
            if inspect.isawaitable(result):
                await result
        except Exception:
            self.failed += 1
            logger.exception("task_failed", extra={"priority": task.priority})
        finally:
            duration_ms = self._clock() - t0
            if duration_ms > self._long_task_ms:
                logger.warning("long_task_detected", extra={"duration_ms": round(duration_ms, 3)})
