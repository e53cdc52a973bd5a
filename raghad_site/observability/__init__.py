from __future__ import annotations

from raghad_site.observability.logging import JsonFormatter, configure_logging, install_error_listener

__all__ = ["JsonFormatter", "configure_logging", "install_error_listener"]
