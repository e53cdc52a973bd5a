from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from aiohttp import web

from raghad_site.config.model import SiteConfig
from raghad_site.observability.logging import install_error_listener
from raghad_site.page.content import load_content
from raghad_site.page.renderer import PageRenderer
from raghad_site.ui.theme import LocalStorage, ThemeStore


logger = logging.getLogger(__name__)

CONTACT_PATH = "/contact"

RENDERER_KEY = web.AppKey("renderer", PageRenderer)
SUBMISSIONS_KEY = web.AppKey("submissions", deque)


def build_renderer(cfg: SiteConfig) -> PageRenderer:
    theme = ThemeStore(LocalStorage(cfg.storage.path))
    return PageRenderer(
        cfg.page,
        load_content(cfg.page.content_path),
        theme=theme.theme,
        theme_color=theme.color,
    )


async def handle_index(request: web.Request) -> web.Response:
    html = request.app[RENDERER_KEY].render()
    return web.Response(text=html, content_type="text/html", charset="utf-8")


async def handle_contact(request: web.Request) -> web.Response:
    if request.content_type == "application/json":
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"ok": False, "error": "malformed json"}, status=400)
        form = body if isinstance(body, dict) else {}
    else:
        form = await request.post()
    fields = {k: str(v) for k, v in form.items() if str(v).strip()}
    if not fields:
        return web.json_response({"ok": False, "error": "empty submission"}, status=400)

    request.app[SUBMISSIONS_KEY].append(fields)
    logger.info("contact_submitted", extra={"fields": sorted(fields)})
    return web.json_response({"ok": True})


async def _on_startup(app: web.Application) -> None:
    install_error_listener()


def create_app(
    cfg: SiteConfig,
    *,
    renderer: PageRenderer | None = None,
    recent_submissions: int = 50,
) -> web.Application:
    """Build the site app. Only the newest ``recent_submissions`` posts are kept in memory."""

    app = web.Application()
    app.on_startup.append(_on_startup)
    app[RENDERER_KEY] = renderer or build_renderer(cfg)
    app[SUBMISSIONS_KEY] = deque(maxlen=recent_submissions)

    app.router.add_get("/", handle_index)
    app.router.add_post(CONTACT_PATH, handle_contact)

    if cfg.server.assets_dir:
        assets = Path(cfg.server.assets_dir)
        if assets.is_dir():
            app.router.add_static("/assets", assets)
        else:
            logger.warning("assets_dir_missing", extra={"path": str(assets)})

    return app


def run_server(cfg: SiteConfig) -> None:
    logger.info("server_starting", extra={"host": cfg.server.host, "port": cfg.server.port})
    web.run_app(create_app(cfg), host=cfg.server.host, port=cfg.server.port, print=None)
