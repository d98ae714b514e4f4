import pytest
from jsonschema import ValidationError

from remi.settings.schema import DEFAULT_SETTINGS, merge_with_defaults, validate_settings


def test_defaults_are_valid():
    validate_settings(DEFAULT_SETTINGS)


def test_merge_without_data_returns_copy_of_defaults():
    merged = merge_with_defaults(None)

    assert merged == DEFAULT_SETTINGS
    assert merged is not DEFAULT_SETTINGS
    assert merged["hotkeys"] is not DEFAULT_SETTINGS["hotkeys"]


def test_partial_hotkeys_are_merged():
    merged = merge_with_defaults({"hotkeys": {"next": "Alt+N"}})

    assert merged["hotkeys"]["next"] == "Alt+N"
    assert merged["hotkeys"]["previous"] == DEFAULT_SETTINGS["hotkeys"]["previous"]


def test_modifier_names_are_normalised():
    merged = merge_with_defaults({"hotkeys": {"modifiers": ["ctrl", "CTRL", "shift"]}})

    assert merged["hotkeys"]["modifiers"] == ["Ctrl", "Shift"]


def test_blank_last_viewed_becomes_none():
    assert merge_with_defaults({"last_viewed_nook_url": ""})["last_viewed_nook_url"] is None


def test_unknown_hotkey_key_is_rejected():
    with pytest.raises(ValidationError):
        merge_with_defaults({"hotkeys": {"turbo": True}})


def test_unknown_top_level_keys_are_kept():
    merged = merge_with_defaults({"window": {"width": 640}})

    assert merged["window"] == {"width": 640}
