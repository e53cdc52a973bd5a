from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

import yaml
from dotenv import load_dotenv

from raghad_site.core.errors import ConfigError


_ENV_REF_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True, slots=True)
class _MissingEnv:
    name: str
    key_path: str
    reason: str  # "missing" | "empty"


def merge_mappings(base: MutableMapping[str, Any], overlay: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Recursively merge ``overlay`` into ``base``.

    Nested mappings merge key by key; any other value in the overlay replaces
    the base value outright (lists included).
    """

    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            base[key] = merge_mappings(dict(base[key]), value)
        else:
            base[key] = value
    return base


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read file: {e}", path=str(path)) from e

    try:
        data = yaml.safe_load(text) if text.strip() else {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError("top-level YAML must be a mapping", path=str(path))
    return dict(data)


def _expand(obj: Any, *, key_path: str, missing: list[_MissingEnv]) -> Any:
    if isinstance(obj, str):
        def repl(match: re.Match[str]) -> str:
            name = match.group(1)
            value = os.getenv(name)
            if value is None or value == "":
                missing.append(
                    _MissingEnv(name=name, key_path=key_path, reason="missing" if value is None else "empty")
                )
                return match.group(0)
            return value

        return _ENV_REF_RE.sub(repl, obj)

    if isinstance(obj, Mapping):
        return {
            str(k): _expand(v, key_path=f"{key_path}.{k}" if key_path else str(k), missing=missing)
            for k, v in obj.items()
        }

    if isinstance(obj, list):
        return [_expand(v, key_path=f"{key_path}[{i}]", missing=missing) for i, v in enumerate(obj)]

    return obj


def load_config(
    paths: Path | Sequence[Path],
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> dict[str, Any]:
    """Load one or more YAML files, merge them and expand ``${ENV_VAR}``.

    Later files override earlier ones. Every unresolved variable is reported
    in a single ConfigError so a broken deployment shows all of them at once.
    """

    files: list[Path] = [paths] if isinstance(paths, Path) else list(paths)
    if not files:
        raise ConfigError("no config files provided")

    if load_dotenv_file:
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    merged: dict[str, Any] = {}
    for p in files:
        if not p.exists():
            raise ConfigError("config file not found", path=str(p))
        merged = dict(merge_mappings(merged, read_yaml_mapping(p)))

    missing: list[_MissingEnv] = []
    expanded = _expand(merged, key_path="", missing=missing)

    if missing:
        lines = ["unresolved environment variables in config:"]
        for ref in missing:
            lines.append(f"- {ref.name} ({ref.reason}) at {ref.key_path or '<root>'}")
        raise ConfigError("\n".join(lines))

    return expanded


def resolve_profile_configs(*, profile: str, configs_dir: Path) -> list[Path]:
    """Map a profile name to its config file list.

    ``app`` loads app.yaml; ``dev`` overlays dev.yaml on top of it.
    """

    if profile == "app":
        return [configs_dir / "app.yaml"]
    if profile == "dev":
        return [configs_dir / "app.yaml", configs_dir / "dev.yaml"]
    raise ConfigError(f"unknown profile: {profile!r}")
