from __future__ import annotations

import json
import logging
from pathlib import Path


logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DEFAULT_THEME = "light"

_THEME_COLORS = {"dark": "#333", "light": "#fff"}


class LocalStorage:
    """String key-value store persisted as a JSON object on disk.

    A missing file reads as an empty store. A corrupt file is reported and
    treated as empty; the next write replaces it.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            logger.warning("storage_corrupt", extra={"path": str(self._path), "error": str(e)})
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_corrupt", extra={"path": str(self._path), "error": "not an object"})
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


class ThemeStore:
    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage

    @property
    def theme(self) -> str:
        return self._storage.get_item(THEME_KEY) or DEFAULT_THEME

    def set_theme(self, theme: str) -> None:
        self._storage.set_item(THEME_KEY, theme)

    @property
    def color(self) -> str:
        return theme_color(self.theme)


def theme_color(theme: str) -> str:
    return _THEME_COLORS["dark"] if theme == "dark" else _THEME_COLORS["light"]
