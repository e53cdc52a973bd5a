from __future__ import annotations

import json
from pathlib import Path

from raghad_site.ui.theme import THEME_KEY, LocalStorage, ThemeStore, theme_color


def test_default_theme_is_light(tmp_path: Path) -> None:
    store = ThemeStore(LocalStorage(tmp_path / "storage.json"))
    assert store.theme == "light"
    assert store.color == "#fff"


def test_theme_is_persisted_under_single_key(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"
    ThemeStore(LocalStorage(path)).set_theme("dark")

    assert json.loads(path.read_text(encoding="utf-8")) == {THEME_KEY: "dark"}
    reopened = ThemeStore(LocalStorage(path))
    assert reopened.theme == "dark"
    assert reopened.color == "#333"


def test_corrupt_storage_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")

    storage = LocalStorage(path)
    assert storage.get_item(THEME_KEY) is None
    storage.set_item(THEME_KEY, "dark")
    assert storage.get_item(THEME_KEY) == "dark"


def test_remove_item(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "storage.json")
    storage.set_item(THEME_KEY, "dark")
    storage.remove_item(THEME_KEY)
    assert storage.get_item(THEME_KEY) is None


def test_unknown_theme_uses_light_color() -> None:
    assert theme_color("sepia") == "#fff"
