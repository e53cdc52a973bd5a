"""Project core.

Stable, non-domain-specific building blocks: errors and the clock.
"""

from __future__ import annotations

from raghad_site.core.errors import ConfigError, FormSubmissionError, HttpStatusError, SiteError

__all__ = [
    "ConfigError",
    "FormSubmissionError",
    "HttpStatusError",
    "SiteError",
]
