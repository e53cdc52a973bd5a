from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from raghad_site.config.loader import load_config, resolve_profile_configs
from raghad_site.config.model import SiteConfig, site_config_from_mapping
from raghad_site.core.errors import ConfigError
from raghad_site.observability.logging import configure_logging
from raghad_site.server.app import build_renderer, run_server
from raghad_site.ui.theme import LocalStorage, ThemeStore


logger = logging.getLogger(__name__)

_COMMANDS = {"render", "serve", "print-config", "theme"}


def _redact_secrets(obj: Any) -> Any:
    """Mask secret-looking keys in human-facing config dumps."""

    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if isinstance(k, str) and any(p in k.lower() for p in ("api_key", "token", "secret", "password")):
                out[k] = "<redacted>"
            else:
                out[k] = _redact_secrets(v)
        return out
    if isinstance(obj, list):
        return [_redact_secrets(x) for x in obj]
    return obj


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raghad-site",
        description="Raghad Company marketing site",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO, WARNING)")

    group = parser.add_mutually_exclusive_group()
    group.add_argument("--config", type=Path, help="Path to a YAML config file (skips profile resolution)")
    group.add_argument(
        "--profile",
        choices=["app", "dev"],
        default="app",
        help="Config profile under ./configs (app loads app.yaml; dev overlays dev.yaml)",
    )

    sub = parser.add_subparsers(dest="command")

    render_p = sub.add_parser("render", help="Render the landing page to a file or stdout")
    render_p.add_argument("--out", type=Path, default=None, help="Output HTML path (default: stdout)")

    sub.add_parser("serve", help="Serve the landing page and the contact endpoint over HTTP")
    sub.add_parser("print-config", help="Load and print the expanded config")

    theme_p = sub.add_parser("theme", help="Show or set the stored colour theme")
    theme_p.add_argument("value", nargs="?", choices=["light", "dark"], default=None)

    return parser


def _load(ns: argparse.Namespace) -> tuple[dict[str, Any], SiteConfig]:
    if ns.config is not None:
        paths = [ns.config]
    else:
        paths = resolve_profile_configs(profile=ns.profile, configs_dir=Path.cwd() / "configs")

    raw = load_config(paths)
    logger.info("config_loaded", extra={"config_files": [str(p) for p in paths]})
    return raw, site_config_from_mapping(raw)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml.

    Runs ``render`` when no subcommand is given.
    """

    argv_list = list(argv) if argv is not None else sys.argv[1:]
    if not any(token in _COMMANDS for token in argv_list) and not {"-h", "--help"} & set(argv_list):
        # Render-only options must follow the subcommand.
        at = next(
            (i for i, token in enumerate(argv_list) if token == "--out" or token.startswith("--out=")),
            len(argv_list),
        )
        argv_list = [*argv_list[:at], "render", *argv_list[at:]]

    parser = _build_parser()
    try:
        ns = parser.parse_args(argv_list)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else 1

    configure_logging(level=ns.log_level)

    try:
        raw, cfg = _load(ns)

        if ns.command == "print-config":
            sys.stdout.write(json.dumps(_redact_secrets(raw), ensure_ascii=False, indent=2))
            sys.stdout.write("\n")
            return 0

        if ns.command == "theme":
            store = ThemeStore(LocalStorage(cfg.storage.path))
            if ns.value is not None:
                store.set_theme(ns.value)
                logger.info("theme_set", extra={"theme": ns.value})
            sys.stdout.write(f"{store.theme}\n")
            return 0

        if ns.command == "serve":
            run_server(cfg)
            return 0

        html = build_renderer(cfg).render()
        if ns.out is None:
            sys.stdout.write(html)
        else:
            ns.out.parent.mkdir(parents=True, exist_ok=True)
            ns.out.write_text(html, encoding="utf-8")
            logger.info("page_written", extra={"path": str(ns.out), "bytes": len(html)})
        return 0

    except ConfigError as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
