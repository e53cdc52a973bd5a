"""Raghad Company marketing site: page rendering and page-session runtime."""

from __future__ import annotations

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
