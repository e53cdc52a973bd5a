from __future__ import annotations

import asyncio

from raghad_site.page.document import Document
from raghad_site.runtime.scheduler import TaskScheduler
from raghad_site.ui.lazyload import FadeInObserver, LazyImageLoader, apply_missing_sources, ensure_native_lazy


HTML = """
<img data-src="/hero.jpg" class="lazy" alt="hero">
<img data-src="/team.jpg" class="lazy" alt="team">
<img src="/logo.png" loading="eager">
<div class="feature-item fade-in"></div>
"""


def test_source_is_applied_only_after_intersection() -> None:
    doc = Document.from_html(HTML)
    hero, team = doc.deferred_images()

    async def main() -> LazyImageLoader:
        sched = TaskScheduler()
        loader = LazyImageLoader(sched)
        assert loader.attach(doc) == 2
        await asyncio.sleep(0)
        assert hero.get("src") is None

        loader.observer.report([hero])
        await sched.wait_idle()
        return loader

    loader = asyncio.run(main())
    assert hero.get("src") == "/hero.jpg"
    assert hero.has_class("loaded") and not hero.has_class("lazy")
    assert team.get("src") is None
    assert team.has_class("lazy")
    assert not loader.observer.is_observing(hero)
    assert loader.observer.is_observing(team)


def test_image_is_loaded_once_and_not_reobserved() -> None:
    doc = Document.from_html(HTML)
    hero, _ = doc.deferred_images()

    async def main() -> tuple[LazyImageLoader, list[int]]:
        sched = TaskScheduler()
        loader = LazyImageLoader(sched)
        loader.attach(doc)
        # Two reports queued before the first load runs.
        dispatched = [loader.observer.report([hero]), loader.observer.report([hero])]
        await sched.wait_idle()
        hero.set("src", "/changed.jpg")
        dispatched.append(loader.observer.report([hero]))
        await sched.wait_idle()
        return loader, dispatched

    loader, dispatched = asyncio.run(main())
    assert dispatched == [1, 1, 0]
    assert loader.loaded == 1
    assert hero.get("src") == "/changed.jpg"


def test_fade_in_elements_become_visible_on_intersection() -> None:
    doc = Document.from_html(HTML)

    async def main() -> None:
        sched = TaskScheduler()
        fader = FadeInObserver(sched)
        assert fader.attach(doc) == 1
        fader.observer.report(fader.observer.observed)
        await sched.wait_idle()

    asyncio.run(main())
    el = doc.first(lambda e: e.has_class("fade-in"))
    assert el is not None and el.has_class("visible")


def test_apply_missing_sources_respects_skip() -> None:
    doc = Document.from_html(HTML)
    hero, team = doc.deferred_images()

    assert apply_missing_sources(doc, skip=lambda img: img is hero) == 1
    assert hero.get("src") is None
    assert team.get("src") == "/team.jpg"
    assert apply_missing_sources(doc) == 1
    assert apply_missing_sources(doc) == 0


def test_ensure_native_lazy_keeps_explicit_loading_mode() -> None:
    doc = Document.from_html(HTML)

    assert ensure_native_lazy(doc) == 2
    assert [img.get("loading") for img in doc.images()] == ["lazy", "lazy", "eager"]
