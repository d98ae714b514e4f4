"""Routes keyboard triggers to the nook selection.

Index hotkeys (``<modifiers>+1`` … ``<modifiers>+9``) jump to a visible
position, two navigation hotkeys step forwards and backwards. The service only
keeps the mapping and calls the view model directly; installing the shortcuts
in a toolkit is left to adapters such as ``QtHotkeyBinder``.
Pure Python, no Qt dependency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from remi.config import (
    DEFAULT_HOTKEY_MODIFIERS,
    DEFAULT_NEXT_HOTKEY,
    DEFAULT_PREVIOUS_HOTKEY,
    INDEX_HOTKEY_COUNT,
    MODIFIER_ORDER,
)
from remi.gui.viewmodels.signal import Signal

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from remi.gui.viewmodels.nook_list_viewmodel import NookListViewModel
    from remi.settings.manager import SettingsManager

_MODIFIER_ALIASES = {
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "alt": "Alt",
    "option": "Alt",
    "shift": "Shift",
    "meta": "Meta",
    "cmd": "Meta",
    "command": "Meta",
}

ACTION_INDEX = "index"
ACTION_NEXT = "next"
ACTION_PREVIOUS = "previous"


def normalise_sequence(sequence: str) -> str:
    """Return *sequence* in canonical ``Ctrl+Alt+Shift+Meta+Key`` form.

    Raises ``ValueError`` when the sequence has no key or more than one.
    """
    modifiers: set[str] = set()
    keys: list[str] = []
    for raw in sequence.split("+"):
        part = raw.strip()
        if not part:
            continue
        alias = _MODIFIER_ALIASES.get(part.casefold())
        if alias:
            modifiers.add(alias)
        else:
            keys.append(part.upper() if len(part) == 1 else part.capitalize())
    if len(keys) != 1:
        raise ValueError(f"Hotkey sequence must name exactly one key: {sequence!r}")
    ordered = [name for name in MODIFIER_ORDER if name in modifiers]
    return "+".join([*ordered, keys[0]])


@dataclass(frozen=True)
class HotkeyBinding:
    sequence: str
    action: str
    index: Optional[int] = None


class HotkeyService:
    """Keyboard trigger table for a :class:`NookListViewModel`."""

    def __init__(self, controller: NookListViewModel) -> None:
        self._controller = controller
        self._bindings: dict[str, HotkeyBinding] = {}
        self._logger = logging.getLogger(__name__)
        self.bindings_changed = Signal("bindings_changed")

    @classmethod
    def from_settings(cls, controller: NookListViewModel, settings: SettingsManager) -> HotkeyService:
        """Build the bindings from the ``hotkeys`` settings section and keep them in sync."""
        service = cls(controller)
        service.apply_settings(settings.get("hotkeys", {}) or {})

        def _on_settings_changed(key: str, _value: Any) -> None:
            if key.split(".")[0] == "hotkeys":
                service.apply_settings(settings.get("hotkeys", {}) or {})

        settings.settingsChanged.connect(_on_settings_changed)
        return service

    @property
    def bindings(self) -> Mapping[str, HotkeyBinding]:
        return dict(self._bindings)

    def apply_settings(self, hotkeys: Mapping[str, Any]) -> None:
        """Replace every binding according to a ``hotkeys`` settings mapping."""
        self._bindings.clear()
        if hotkeys.get("enabled", True):
            self._add_index_bindings(hotkeys.get("modifiers") or DEFAULT_HOTKEY_MODIFIERS, INDEX_HOTKEY_COUNT)
        self._add_navigation_bindings(
            hotkeys.get("next") or DEFAULT_NEXT_HOTKEY,
            hotkeys.get("previous") or DEFAULT_PREVIOUS_HOTKEY,
        )
        self.bindings_changed.emit(self.bindings)

    def bind_index_hotkeys(self, modifiers: Iterable[str], count: int = INDEX_HOTKEY_COUNT) -> None:
        """Bind ``<modifiers>+1`` … ``<modifiers>+count`` to visible positions 0 … count-1."""
        self._drop(ACTION_INDEX)
        self._add_index_bindings(modifiers, count)
        self.bindings_changed.emit(self.bindings)

    def bind_navigation(self, next_sequence: str, previous_sequence: str) -> None:
        self._drop(ACTION_NEXT, ACTION_PREVIOUS)
        self._add_navigation_bindings(next_sequence, previous_sequence)
        self.bindings_changed.emit(self.bindings)

    def clear(self) -> None:
        if self._bindings:
            self._bindings.clear()
            self.bindings_changed.emit(self.bindings)

    def trigger(self, sequence: str) -> bool:
        """Dispatch *sequence*. Returns ``True`` if a binding handled it."""
        try:
            key = normalise_sequence(sequence)
        except ValueError:
            self._logger.debug("Ignoring malformed hotkey %r", sequence)
            return False
        binding = self._bindings.get(key)
        if binding is None:
            return False
        if binding.action == ACTION_INDEX:
            self._controller.select_by_index(binding.index)
        elif binding.action == ACTION_NEXT:
            self._controller.select_next()
        else:
            self._controller.select_previous()
        return True

    # -- Internals -----------------------------------------------------------

    def _add_index_bindings(self, modifiers: Iterable[str], count: int) -> None:
        if not 0 <= count <= 9:
            raise ValueError(f"Index hotkeys cover the digits 1-9, got count={count}")
        prefix = "+".join(modifiers)
        for index in range(count):
            sequence = normalise_sequence(f"{prefix}+{index + 1}")
            self._put(HotkeyBinding(sequence=sequence, action=ACTION_INDEX, index=index))

    def _add_navigation_bindings(self, next_sequence: str, previous_sequence: str) -> None:
        self._put(HotkeyBinding(sequence=normalise_sequence(next_sequence), action=ACTION_NEXT))
        self._put(HotkeyBinding(sequence=normalise_sequence(previous_sequence), action=ACTION_PREVIOUS))

    def _put(self, binding: HotkeyBinding) -> None:
        replaced = self._bindings.get(binding.sequence)
        if replaced is not None and replaced != binding:
            self._logger.warning(
                "Hotkey %s reassigned from %s to %s", binding.sequence, replaced.action, binding.action
            )
        self._bindings[binding.sequence] = binding

    def _drop(self, *actions: str) -> None:
        self._bindings = {seq: b for seq, b in self._bindings.items() if b.action not in actions}
