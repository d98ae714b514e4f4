"""Installs ``HotkeyService`` bindings as ``QShortcut``s.

Each binding becomes one application-wide shortcut on the given widget; the
shortcut's ``activated`` signal is routed back through
``HotkeyService.trigger`` so the service stays the single dispatcher.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QWidget

from remi.gui.services.hotkey_service import HotkeyBinding, HotkeyService


class QtHotkeyBinder:
    def __init__(self, service: HotkeyService, widget: QWidget) -> None:
        self._service = service
        self._widget = widget
        self._shortcuts: Dict[str, QShortcut] = {}
        self._logger = logging.getLogger(__name__)

        self._install(service.bindings)
        service.bindings_changed.connect(self._install)

    @property
    def shortcuts(self) -> Mapping[str, QShortcut]:
        return dict(self._shortcuts)

    def _install(self, bindings: Mapping[str, HotkeyBinding]) -> None:
        self._remove_all()
        for sequence in bindings:
            shortcut = QShortcut(QKeySequence(sequence), self._widget)
            shortcut.setContext(Qt.ShortcutContext.ApplicationShortcut)
            shortcut.activated.connect(lambda seq=sequence: self._service.trigger(seq))
            self._shortcuts[sequence] = shortcut
        self._logger.debug("Installed %d nook shortcuts", len(self._shortcuts))

    def _remove_all(self) -> None:
        for shortcut in self._shortcuts.values():
            shortcut.setEnabled(False)
            shortcut.setParent(None)
            shortcut.deleteLater()
        self._shortcuts.clear()

    def dispose(self) -> None:
        try:
            self._service.bindings_changed.disconnect(self._install)
        except ValueError:
            pass
        self._remove_all()
