from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)

from remi.errors import SettingsLoadError, SettingsValidationError
from remi.settings.manager import SettingsManager


def test_load_creates_defaults(tmp_path: Path) -> None:
    settings_path = tmp_path / "nested" / "settings.json"
    manager = SettingsManager(path=settings_path)

    manager.load()

    assert settings_path.exists()
    assert manager.get("last_viewed_nook_url") is None
    assert manager.get("hotkeys.enabled") is True
    assert manager.get("hotkeys.modifiers") == ["Ctrl", "Alt"]


def test_set_persists_and_notifies(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append((key, value)))

    manager.set("last_viewed_nook_url", "remi://nook/1")

    assert changes == [("last_viewed_nook_url", "remi://nook/1")]
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["last_viewed_nook_url"] == "remi://nook/1"


def test_nested_updates_preserve_defaults(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    manager.set("hotkeys.modifiers", ["meta", "Shift"])

    assert manager.get("hotkeys.modifiers") == ["Meta", "Shift"]
    assert manager.get("hotkeys.next") == "Ctrl+Alt+Down"


def test_invalid_value_is_rejected_and_not_stored(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    with pytest.raises(SettingsValidationError):
        manager.set("hotkeys.modifiers", ["Hyper"])

    assert manager.get("hotkeys.modifiers") == ["Ctrl", "Alt"]


def test_get_missing_key_returns_default(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    assert manager.get("hotkeys.missing", "fallback") == "fallback"
    assert manager.get("last_viewed_nook_url.deeper") is None


def test_reload_keeps_saved_values(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    first = SettingsManager(path=settings_path)
    first.load()
    first.set("hotkeys.enabled", False)

    second = SettingsManager(path=settings_path)
    second.load()

    assert second.get("hotkeys.enabled") is False


def test_corrupt_file_raises_load_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_schema_violation_raises_validation_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"hotkeys": {"enabled": "yes"}}), encoding="utf-8")

    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_unchanged_value_is_not_rewritten(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append(key))

    manager.set("hotkeys.modifiers", ["ctrl", "alt"])

    assert changes == []


def test_emitted_value_is_normalised(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append(value))

    manager.set("hotkeys.modifiers", ("shift", "SHIFT"))

    assert changes == [["Shift"]]
