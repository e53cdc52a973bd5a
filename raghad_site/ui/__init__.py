"""Page-session enhancements: lazy images, toasts, forms and theme."""

from __future__ import annotations

from raghad_site.ui.forms import AiohttpTransport, FormSubmitter, request_json, transport_from_config
from raghad_site.ui.lazyload import FadeInObserver, LazyImageLoader, ViewportObserver
from raghad_site.ui.notifications import Notifier, Toast
from raghad_site.ui.theme import LocalStorage, ThemeStore

__all__ = [
    "AiohttpTransport",
    "FadeInObserver",
    "FormSubmitter",
    "LazyImageLoader",
    "LocalStorage",
    "Notifier",
    "ThemeStore",
    "Toast",
    "ViewportObserver",
    "request_json",
    "transport_from_config",
]
