"""Default configuration values for remi."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "remi"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
DATABASE_FILE_NAME: Final[str] = "nooks.db"

# URLs handed out by the SQLite store are derived from the nook id so that a
# rename never invalidates the persisted "last viewed" reference.
NOOK_URL_SCHEME: Final[str] = "remi"

# ---------------------------------------------------------------------------
# Hotkeys
# ---------------------------------------------------------------------------

# Index hotkeys map the digits 1..9 onto visible positions 0..8.
INDEX_HOTKEY_COUNT: Final[int] = 9
DEFAULT_HOTKEY_MODIFIERS: Final[list[str]] = ["Ctrl", "Alt"]
DEFAULT_NEXT_HOTKEY: Final[str] = "Ctrl+Alt+Down"
DEFAULT_PREVIOUS_HOTKEY: Final[str] = "Ctrl+Alt+Up"
MODIFIER_ORDER: Final[tuple[str, ...]] = ("Ctrl", "Alt", "Shift", "Meta")

DB_POOL_SIZE: Final[int] = 2
DB_POOL_TIMEOUT_SEC: Final[float] = 5.0


def default_config_dir() -> Path:
    """Return the per-user configuration directory for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def default_settings_path() -> Path:
    """Return the default settings.json location."""

    return default_config_dir() / SETTINGS_FILE_NAME


def default_database_path() -> Path:
    """Return the default location of the nook database."""

    return default_config_dir() / DATABASE_FILE_NAME
