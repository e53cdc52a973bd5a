from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field

from raghad_site.runtime.scheduler import TaskScheduler


logger = logging.getLogger(__name__)


NOTIFICATION_COLORS = {
    "success": "#28a745",
    "error": "#dc3545",
    "warning": "#ffc107",
    "info": "#17a2b8",
}


def notification_color(kind: str) -> str:
    return NOTIFICATION_COLORS.get(kind, NOTIFICATION_COLORS["info"])


@dataclass(slots=True)
class Toast:
    id: int
    message: str
    kind: str
    color: str
    # "entering" -> "shown" -> "leaving"; removed from the notifier afterwards.
    phase: str = "entering"
    style: dict[str, str] = field(default_factory=dict)

    @property
    def css_class(self) -> str:
        return f"notification notification-{self.kind}"


class Notifier:
    """Transient toast messages.

    Creating a toast is queued on the page scheduler. Each toast stays visible
    for ``visible_ms`` then slides out for ``transition_ms`` before removal.
    Nothing is kept once a toast is gone.
    """

    def __init__(self, scheduler: TaskScheduler, *, visible_ms: int = 5000, transition_ms: int = 300) -> None:
        self._scheduler = scheduler
        self._visible_s = visible_ms / 1000.0
        self._transition_s = transition_ms / 1000.0
        self._ids = itertools.count(1)
        self._active: list[Toast] = []
        self.shown = 0

    @property
    def active(self) -> list[Toast]:
        return list(self._active)

    def show(self, message: str, kind: str = "info") -> None:
        self._scheduler.enqueue(lambda: self._create(message, kind))

    def _create(self, message: str, kind: str) -> Toast:
        toast = Toast(
            id=next(self._ids),
            message=message,
            kind=kind,
            color=notification_color(kind),
            style={
                "position": "fixed",
                "top": "20px",
                "right": "20px",
                "background-color": notification_color(kind),
                "transform": "translateX(100%)",
            },
        )
        self._active.append(toast)
        self.shown += 1
        logger.info("notification_shown", extra={"kind": kind, "toast_id": toast.id})

        loop = asyncio.get_running_loop()
        loop.call_soon(self._enter, toast)
        loop.call_later(self._visible_s, self._leave, toast)
        return toast

    def _enter(self, toast: Toast) -> None:
        toast.phase = "shown"
        toast.style["transform"] = "translateX(0)"

    def _leave(self, toast: Toast) -> None:
        toast.phase = "leaving"
        toast.style["transform"] = "translateX(100%)"
        asyncio.get_running_loop().call_later(self._transition_s, self._remove, toast)

    def _remove(self, toast: Toast) -> None:
        if toast in self._active:
            self._active.remove(toast)
