"""Settings file management with validation and change notifications."""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Sequence

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..config import default_settings_path
from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults

_logger = logging.getLogger(__name__)
_MISSING = object()


def _lookup(data: Any, parts: Sequence[str]) -> Any:
    for part in parts:
        if not isinstance(data, dict) or part not in data:
            return _MISSING
        data = data[part]
    return data


def _assign(data: dict[str, Any], parts: Sequence[str], value: Any) -> None:
    for part in parts[:-1]:
        if not isinstance(data.get(part), dict):
            data[part] = {}
        data = data[part]
    data[parts[-1]] = value


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, Path):
        return str(value)
    return value


class SettingsManager(QObject):
    """Owns ``settings.json``: load, dotted-key access, validated writes.

    ``settingsChanged(key, value)`` fires after a successful :meth:`set` that
    actually changed something; *value* is the stored (normalised) value.
    """

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_settings_path()
        return self._path

    def load(self) -> None:
        """Read the file (writing defaults when it does not exist yet)."""
        path = self.path
        payload = None
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"{path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{path}: expected a JSON object")
        self._data = self._validated(payload)
        _logger.debug("Loaded settings from %s", path)
        write_json(path, self._data)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return a copy of the value at dotted *key*, or *default*."""
        value = _lookup(self._data, key.split("."))
        return default if value is _MISSING else deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        """Store *value* at dotted *key*.

        Raises :class:`SettingsValidationError` and keeps the old settings
        when the result would not match the schema.
        """
        parts = key.split(".")
        candidate = deepcopy(self._data)
        _assign(candidate, parts, _jsonable(value))
        candidate = self._validated(candidate)
        if candidate == self._data:
            return
        self._data = candidate
        write_json(self.path, self._data)
        self.settingsChanged.emit(key, self.get(key))

    @staticmethod
    def _validated(payload: dict[str, Any] | None) -> dict[str, Any]:
        try:
            return merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc


__all__ = ["SettingsManager"]
