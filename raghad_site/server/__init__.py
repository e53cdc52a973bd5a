from __future__ import annotations

from raghad_site.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
