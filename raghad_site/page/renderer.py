"""Server-side render pass for the landing page.

The page body is wrapped by two host collaborators: ``render_header()`` runs
at the start of the body and ``render_footer()`` at the end. A CMS host can
pass its own ``ShellHooks``; ``TemplateShell`` is the built-in one.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Protocol

from jinja2 import Environment, PackageLoader, StrictUndefined
from markupsafe import Markup

from raghad_site.config.model import PageConfig
from raghad_site.page.content import PageContent


logger = logging.getLogger(__name__)


class ShellHooks(Protocol):
    def render_header(self) -> str: ...

    def render_footer(self) -> str: ...


def create_environment() -> Environment:
    return Environment(
        loader=PackageLoader("raghad_site.page", "templates"),
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


class TemplateShell:
    """Document shell and navigation rendered from the bundled templates."""

    def __init__(self, env: Environment, context: dict[str, Any]) -> None:
        self._env = env
        self._context = context

    def render_header(self) -> str:
        return self._env.get_template("header.html").render(**self._context)

    def render_footer(self) -> str:
        return self._env.get_template("footer.html").render(**self._context)


class PageRenderer:
    def __init__(
        self,
        page: PageConfig,
        content: PageContent | None = None,
        *,
        theme: str = "light",
        theme_color: str = "#fff",
        env: Environment | None = None,
    ) -> None:
        self._page = page
        self._content = content or PageContent()
        self._theme = theme
        self._theme_color = theme_color
        self._env = env or create_environment()

    def context(self) -> dict[str, Any]:
        return {
            "page": self._page,
            "content": self._content,
            "asset_base": self._page.template_directory_uri,
            "lazy_images": self._page.lazy_images,
            "theme": self._theme,
            "theme_color": self._theme_color,
            "year": date.today().year,
        }

    def default_shell(self) -> TemplateShell:
        return TemplateShell(self._env, self.context())

    def render(self, shell: ShellHooks | None = None) -> str:
        shell = shell or self.default_shell()
        ctx = self.context()
        # Hook output is trusted markup from the host.
        ctx["header"] = Markup(shell.render_header())
        ctx["footer"] = Markup(shell.render_footer())

        html = self._env.get_template("page.html").render(**ctx)
        logger.debug("page_rendered", extra={"bytes": len(html), "lazy_images": self._page.lazy_images})
        return html
