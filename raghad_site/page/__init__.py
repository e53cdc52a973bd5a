from __future__ import annotations

from raghad_site.page.content import PageContent, load_content
from raghad_site.page.document import Document, Element, Form
from raghad_site.page.renderer import PageRenderer, ShellHooks, TemplateShell

__all__ = [
    "Document",
    "Element",
    "Form",
    "PageContent",
    "PageRenderer",
    "ShellHooks",
    "TemplateShell",
    "load_content",
]
