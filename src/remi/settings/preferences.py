"""Last-viewed nook preference stored in the settings file."""

from __future__ import annotations

from typing import Optional

from ..domain.models import Nook
from ..domain.repositories import IPreferenceSink
from .manager import SettingsManager

LAST_VIEWED_KEY = "last_viewed_nook_url"


class SettingsPreferenceSink(IPreferenceSink):
    def __init__(self, settings: SettingsManager) -> None:
        self._settings = settings

    def read_last_viewed_reference(self) -> Optional[str]:
        value = self._settings.get(LAST_VIEWED_KEY)
        return value or None

    def write_last_viewed(self, nook: Nook) -> None:
        self._settings.set(LAST_VIEWED_KEY, nook.url)
