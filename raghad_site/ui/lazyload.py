from __future__ import annotations

import logging
from typing import Callable, Iterable

from raghad_site.page.document import Document, Element
from raghad_site.runtime.scheduler import TaskScheduler


logger = logging.getLogger(__name__)


class ViewportObserver:
    """Dispatch viewport intersections for a set of observed elements.

    The host reports which elements currently intersect the viewport; every
    one of them still observed gets ``callback(element)`` queued on the
    scheduler.
    """

    def __init__(self, scheduler: TaskScheduler, callback: Callable[[Element], object]) -> None:
        self._scheduler = scheduler
        self._callback = callback
        self._observed: list[Element] = []

    def observe(self, element: Element) -> None:
        if not self.is_observing(element):
            self._observed.append(element)

    def unobserve(self, element: Element) -> None:
        self._observed = [el for el in self._observed if el is not element]

    def is_observing(self, element: Element) -> bool:
        return any(el is element for el in self._observed)

    @property
    def observed(self) -> list[Element]:
        return list(self._observed)

    def report(self, intersecting: Iterable[Element]) -> int:
        dispatched = 0
        for element in intersecting:
            if self.is_observing(element):
                self._scheduler.enqueue(lambda el=element: self._callback(el))
                dispatched += 1
        return dispatched


class LazyImageLoader:
    """Attach deferred image sources once the image reaches the viewport."""

    def __init__(self, scheduler: TaskScheduler) -> None:
        self.observer = ViewportObserver(scheduler, self._load)
        self.loaded = 0

    def attach(self, document: Document) -> int:
        images = document.deferred_images()
        for img in images:
            self.observer.observe(img)
        return len(images)

    def _load(self, img: Element) -> None:
        # Two reports can queue the same image before the first load runs.
        if not self.observer.is_observing(img):
            return
        src = img.get("data-src")
        if src:
            img.set("src", src)
        img.add_class("loaded")
        img.remove_class("lazy")
        self.observer.unobserve(img)
        self.loaded += 1
        logger.debug("image_loaded", extra={"src": src})


class FadeInObserver:
    """Mark ``.fade-in`` elements visible the first time they intersect."""

    def __init__(self, scheduler: TaskScheduler) -> None:
        self.observer = ViewportObserver(scheduler, self._reveal)

    def attach(self, document: Document) -> int:
        elements = document.query_all(lambda el: el.has_class("fade-in"))
        for el in elements:
            self.observer.observe(el)
        return len(elements)

    def _reveal(self, element: Element) -> None:
        element.add_class("visible")
        self.observer.unobserve(element)


def apply_missing_sources(document: Document, *, skip: Callable[[Element], bool] | None = None) -> int:
    """Give every deferred image that still lacks a ``src`` its real source.

    Images for which ``skip`` returns True (typically those still waiting on a
    viewport observer) are left alone.
    """

    applied = 0
    for img in document.deferred_images():
        if skip is not None and skip(img):
            continue
        src = img.get("data-src")
        if src and not img.get("src"):
            img.set("src", src)
            applied += 1
    return applied


def ensure_native_lazy(document: Document) -> int:
    """Add ``loading="lazy"`` to images that do not set a loading mode."""

    changed = 0
    for img in document.images():
        if not img.get("loading"):
            img.set("loading", "lazy")
            changed += 1
    return changed
