from __future__ import annotations

import asyncio

from raghad_site.runtime.scheduler import TaskScheduler
from raghad_site.ui.notifications import Notifier, notification_color


def test_colors_by_kind() -> None:
    assert notification_color("success") == "#28a745"
    assert notification_color("error") == "#dc3545"
    assert notification_color("warning") == "#ffc107"
    assert notification_color("info") == "#17a2b8"
    assert notification_color("unknown") == "#17a2b8"


def test_toast_lifecycle() -> None:
    phases: dict[str, object] = {}

    async def main() -> Notifier:
        sched = TaskScheduler()
        notifier = Notifier(sched, visible_ms=100, transition_ms=20)
        notifier.show("Saved", "success")
        assert notifier.active == []
        await sched.wait_idle()

        [toast] = notifier.active
        phases["created"] = (toast.css_class, toast.color)
        await asyncio.sleep(0.01)
        phases["shown"] = (toast.phase, toast.style["transform"])
        await asyncio.sleep(0.12)
        phases["leaving"] = toast.phase
        await asyncio.sleep(0.1)
        return notifier

    notifier = asyncio.run(main())
    assert phases["created"] == ("notification notification-success", "#28a745")
    assert phases["shown"] == ("shown", "translateX(0)")
    assert phases["leaving"] == "leaving"
    assert notifier.active == []
    assert notifier.shown == 1


def test_toasts_get_distinct_ids() -> None:
    async def main() -> list[int]:
        sched = TaskScheduler()
        notifier = Notifier(sched)
        notifier.show("one")
        notifier.show("two", "warning")
        await sched.wait_idle()
        return [t.id for t in notifier.active]

    assert asyncio.run(main()) == [1, 2]
