"""Schema helpers for the application settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_HOTKEY_MODIFIERS,
    DEFAULT_NEXT_HOTKEY,
    DEFAULT_PREVIOUS_HOTKEY,
    MODIFIER_ORDER,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "remi/settings.schema.json",
    "type": "object",
    "required": ["schema", "hotkeys"],
    "properties": {
        "schema": {"const": "remi/settings@1"},
        "last_viewed_nook_url": {"type": ["string", "null"]},
        "hotkeys": {
            "type": "object",
            "required": ["enabled", "modifiers"],
            "properties": {
                "enabled": {"type": "boolean"},
                "modifiers": {
                    "type": "array",
                    "items": {"type": "string", "enum": list(MODIFIER_ORDER)},
                    "uniqueItems": True,
                    "minItems": 1,
                },
                "next": {"type": "string", "minLength": 1},
                "previous": {"type": "string", "minLength": 1},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "remi/settings@1",
    "last_viewed_nook_url": None,
    "hotkeys": {
        "enabled": True,
        "modifiers": list(DEFAULT_HOTKEY_MODIFIERS),
        "next": DEFAULT_NEXT_HOTKEY,
        "previous": DEFAULT_PREVIOUS_HOTKEY,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _normalise_modifiers(entries: list[Any]) -> list[Any]:
    # "ctrl" and "CTRL" are accepted on input; anything else is left for the
    # validator to reject.
    canonical = {name.casefold(): name for name in MODIFIER_ORDER}
    seen: list[Any] = []
    for entry in entries:
        value = canonical.get(entry.casefold(), entry) if isinstance(entry, str) else entry
        if value not in seen:
            seen.append(value)
    return seen


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "hotkeys" and isinstance(value, dict):
                target = merged.setdefault("hotkeys", {})
                for sub_key, sub_value in value.items():
                    if sub_key == "modifiers" and isinstance(sub_value, list):
                        sub_value = _normalise_modifiers(sub_value)
                    target[sub_key] = sub_value
                continue
            if key == "last_viewed_nook_url" and value == "":
                merged[key] = None
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
