"""Configuration loading and schema.

- YAML-first configuration under configs/*.yaml
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors)
"""

from __future__ import annotations

from raghad_site.config.loader import load_config, resolve_profile_configs
from raghad_site.config.model import SiteConfig, site_config_from_mapping
from raghad_site.core.errors import ConfigError

__all__ = [
    "ConfigError",
    "SiteConfig",
    "load_config",
    "resolve_profile_configs",
    "site_config_from_mapping",
]
