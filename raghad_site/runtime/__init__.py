from __future__ import annotations

from raghad_site.runtime.scheduler import Host, QueuedTask, TaskScheduler, asyncio_host
from raghad_site.runtime.throttle import Debouncer, FrameCoalescer, animate

__all__ = [
    "Debouncer",
    "FrameCoalescer",
    "Host",
    "QueuedTask",
    "TaskScheduler",
    "animate",
    "asyncio_host",
]
