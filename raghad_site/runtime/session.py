"""One page session: the client-side initialization pass over a document.

A session owns exactly one scheduler. ``start()`` attaches the lazy image
loader, the fade-in observer, form handling and the scroll/resize handlers.
The host then feeds it events: scrolls, resizes, viewport intersections and
form submits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from raghad_site.config.model import SiteConfig
from raghad_site.page.document import Document, Element, Form, by_class
from raghad_site.runtime.scheduler import Host, TaskScheduler
from raghad_site.runtime.throttle import Debouncer, FrameCoalescer
from raghad_site.ui.forms import AiohttpTransport, FormSubmitter, FormTransport, transport_from_config
from raghad_site.ui.lazyload import FadeInObserver, LazyImageLoader, apply_missing_sources, ensure_native_lazy
from raghad_site.ui.notifications import Notifier


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Viewport:
    width: int = 1280
    height: int = 800
    scroll_height: int = 4000
    scroll_y: int = 0


def scroll_progress(scroll_y: int, *, scroll_height: int, viewport_height: int) -> float:
    """Percentage of the page scrolled, capped at 100."""

    scrollable = scroll_height - viewport_height
    if scrollable <= 0:
        return 100.0
    return min(scroll_y / scrollable * 100.0, 100.0)


class PageSession:
    def __init__(
        self,
        document: Document,
        cfg: SiteConfig,
        *,
        transport: FormTransport | None = None,
        base_url: str | None = None,
        host: Host | None = None,
        viewport: Viewport | None = None,
    ) -> None:
        """Without a ``transport`` the session posts forms over aiohttp, using
        ``cfg.forms`` for the timeout and ``base_url`` for relative actions.
        """

        self.document = document
        self.cfg = cfg
        self.viewport = viewport or Viewport()

        self.scheduler = TaskScheduler(
            slice_budget_ms=cfg.scheduler.slice_budget_ms,
            long_task_ms=cfg.scheduler.long_task_ms,
            host=host,
        )
        self.notifier = Notifier(
            self.scheduler,
            visible_ms=cfg.notifications.visible_ms,
            transition_ms=cfg.notifications.transition_ms,
        )
        self.images = LazyImageLoader(self.scheduler)
        self.fade_in = FadeInObserver(self.scheduler)
        self._owned_transport: AiohttpTransport | None = None
        if transport is None:
            transport = self._owned_transport = transport_from_config(cfg.forms, base_url=base_url)
        self.transport = transport
        self.forms = FormSubmitter(self.scheduler, self.notifier, transport, cfg.forms)

        self._on_scroll = FrameCoalescer(self._handle_scroll, frame_interval_ms=cfg.ui.frame_interval_ms)
        self._on_resize = Debouncer(self._handle_resize, delay_ms=cfg.ui.resize_debounce_ms)
        self.started = False

    def start(self) -> None:
        if self.started:
            return
        images = self.images.attach(self.document)
        faders = self.fade_in.attach(self.document)
        forms = self.forms.attach(self.document)
        ensure_native_lazy(self.document)
        self.started = True
        logger.info("page_session_started", extra={"deferred_images": images, "fade_in": faders, "forms": forms})

    async def close(self) -> None:
        self._on_scroll.cancel()
        self._on_resize.cancel()
        if self._owned_transport is not None:
            await self._owned_transport.close()

    # -- host events ---------------------------------------------------------

    def scroll(self, scroll_y: int) -> None:
        self.viewport.scroll_y = scroll_y
        self._on_scroll(scroll_y)

    def resize(self, width: int, height: int | None = None) -> None:
        self.viewport.width = width
        if height is not None:
            self.viewport.height = height
        self._on_resize(width)

    def intersect(self, elements: list[Element]) -> None:
        self.images.observer.report(elements)
        self.fade_in.observer.report(elements)

    def submit(self, form: Form) -> bool:
        return self.forms.submit(form)

    # -- handlers ------------------------------------------------------------

    def _handle_scroll(self, scroll_y: int) -> None:
        navbar = self.document.first(by_class("navbar"))
        if navbar is not None:
            navbar.toggle_class("scrolled", scroll_y > self.cfg.ui.navbar_scrolled_offset)

        bar = self.document.first(by_class("scroll-progress"))
        if bar is not None:
            progress = scroll_progress(
                scroll_y, scroll_height=self.viewport.scroll_height, viewport_height=self.viewport.height
            )
            bar.style["width"] = f"{progress:g}%"

    def _handle_resize(self, width: int) -> None:
        menu = self.document.first(by_class("mobile-menu"))
        if menu is not None and width > self.cfg.ui.mobile_breakpoint:
            menu.remove_class("active")
        if not self.started:
            # Deferred sources wait for the observers attached by start().
            logger.debug("resize_handled", extra={"width": width, "sources_applied": 0})
            return
        applied = apply_missing_sources(self.document, skip=self.images.observer.is_observing)
        logger.debug("resize_handled", extra={"width": width, "sources_applied": applied})
