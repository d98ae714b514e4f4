"""Qt-free signals for the view-model layer.

Everything here runs on the caller's thread. ``NookListViewModel`` and
``HotkeyService`` are single-threaded, so no locking is done.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

_logger = logging.getLogger(__name__)

_Handler = TypeVar("_Handler", bound=Callable[..., Any])


class Signal:
    """Named list of callbacks, emitted in connection order.

    ``connect`` returns the handler so it can be used as a decorator.
    Exceptions from one handler are logged and the others still run.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def __repr__(self) -> str:
        return f"<Signal {self.name or '?'} handlers={len(self._handlers)}>"

    def connect(self, handler: _Handler) -> _Handler:
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[..., Any]) -> None:
        """Remove *handler*; ``ValueError`` if it was never connected."""
        self._handlers.remove(handler)

    def disconnect_all(self) -> None:
        del self._handlers[:]

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in tuple(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Handler %r of signal %s raised", handler, self.name or "?")

    @property
    def handler_count(self) -> int:
        return len(self._handlers)


class ObservableProperty:
    """Holds a value and emits ``changed(new, old)`` when it is replaced by an unequal one."""

    def __init__(self, initial_value: Any = None, name: str = "") -> None:
        self._value = initial_value
        self.changed = Signal(f"{name}.changed" if name else "changed")

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        old_value = self._value
        if new_value == old_value:
            return
        self._value = new_value
        self.changed.emit(new_value, old_value)
