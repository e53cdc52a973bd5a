from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Mapping

import pytest

from raghad_site.config.model import FormsConfig, SiteConfig, UiConfig
from raghad_site.page.document import Document, by_class
from raghad_site.page.renderer import PageRenderer
from raghad_site.runtime.session import PageSession, Viewport, scroll_progress
from raghad_site.ui.forms import AiohttpTransport


class OkTransport:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def post(self, url: str, data: Mapping[str, str]) -> int:
        self.calls.append(url)
        return 200


def _session(cfg: SiteConfig, **kwargs) -> PageSession:  # noqa: ANN003
    doc = Document.from_html(PageRenderer(cfg.page).render())
    return PageSession(doc, cfg, transport=OkTransport(), **kwargs)


def test_scroll_progress_is_capped() -> None:
    assert scroll_progress(0, scroll_height=2000, viewport_height=1000) == 0.0
    assert scroll_progress(500, scroll_height=2000, viewport_height=1000) == 50.0
    assert scroll_progress(5000, scroll_height=2000, viewport_height=1000) == 100.0
    assert scroll_progress(10, scroll_height=500, viewport_height=1000) == 100.0


def test_start_attaches_enhancements_once(site_cfg: SiteConfig) -> None:
    session = _session(site_cfg)
    session.start()
    session.start()

    assert len(session.images.observer.observed) == 1
    assert len(session.fade_in.observer.observed) == 6
    assert len(session.forms.forms) == 1
    assert all(img.get("loading") == "lazy" for img in session.document.images())


def test_scroll_updates_navbar_and_progress_bar(site_cfg: SiteConfig) -> None:
    session = _session(site_cfg, viewport=Viewport(height=1000, scroll_height=3000))

    async def main() -> None:
        session.start()
        for y in (50, 150, 1000):
            session.scroll(y)
        await asyncio.sleep(0.1)

    asyncio.run(main())
    navbar = session.document.first(by_class("navbar"))
    bar = session.document.first(by_class("scroll-progress"))
    assert navbar is not None and navbar.has_class("scrolled")
    assert bar is not None and bar.style["width"] == "50%"


def test_resize_burst_closes_mobile_menu_once(site_cfg: SiteConfig) -> None:
    cfg = replace(site_cfg, ui=UiConfig(resize_debounce_ms=50))
    session = _session(cfg)
    menu = session.document.first(by_class("mobile-menu"))
    assert menu is not None
    menu.add_class("active")

    async def main() -> None:
        session.start()
        for width in (600, 700, 1024):
            session.resize(width)
            await asyncio.sleep(0.01)
        assert menu.has_class("active")
        await asyncio.sleep(0.15)

    asyncio.run(main())
    assert not menu.has_class("active")
    assert session._on_resize.fired == 1
    # The hero image is still waiting on the viewport observer.
    [hero] = session.document.deferred_images()
    assert hero.get("src") is None


@pytest.mark.parametrize("width", [500, 768])
def test_narrow_resize_keeps_mobile_menu_open(site_cfg: SiteConfig, width: int) -> None:
    cfg = replace(site_cfg, ui=UiConfig(resize_debounce_ms=10))
    session = _session(cfg)
    menu = session.document.first(by_class("mobile-menu"))
    assert menu is not None
    menu.add_class("active")

    async def main() -> None:
        session.resize(width)
        await asyncio.sleep(0.05)

    asyncio.run(main())
    assert menu.has_class("active")


def test_intersection_loads_hero_and_reveals_cards(site_cfg: SiteConfig) -> None:
    session = _session(site_cfg)

    async def main() -> None:
        session.start()
        visible = session.document.images() + session.document.query_all(by_class("fade-in"))[:2]
        session.intersect(visible)
        await session.scheduler.wait_idle()

    asyncio.run(main())
    [hero] = session.document.deferred_images()
    assert hero.get("src") == "/theme/assets/images/hero-image.jpg"
    assert len(session.document.query_all(by_class("visible"))) == 2


def test_session_form_submit_goes_through_one_scheduler(site_cfg: SiteConfig) -> None:
    session = _session(site_cfg)

    async def main() -> None:
        session.start()
        [form] = session.forms.forms
        assert session.submit(form) is True
        await session.scheduler.wait_idle()

    asyncio.run(main())
    assert session.forms.requests == 1
    assert [t.kind for t in session.notifier.active] == ["success"]


def test_resize_before_start_leaves_deferred_sources_alone(site_cfg: SiteConfig) -> None:
    cfg = replace(site_cfg, ui=UiConfig(resize_debounce_ms=10))
    session = _session(cfg)

    async def main() -> None:
        session.resize(1024)
        await asyncio.sleep(0.05)

    asyncio.run(main())
    assert session._on_resize.fired == 1
    [hero] = session.document.deferred_images()
    assert hero.get("src") is None


def test_default_transport_uses_configured_timeout(site_cfg: SiteConfig) -> None:
    cfg = replace(site_cfg, forms=FormsConfig(timeout_s=2.5))
    doc = Document.from_html(PageRenderer(cfg.page).render())

    async def main() -> PageSession:
        session = PageSession(doc, cfg, base_url="http://127.0.0.1:8080/")
        await session.close()
        return session

    session = asyncio.run(main())
    assert isinstance(session.transport, AiohttpTransport)
    assert session.transport._timeout.total == 2.5
    assert session.transport._resolve("/contact") == "http://127.0.0.1:8080/contact"
