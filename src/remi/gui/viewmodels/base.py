"""Common plumbing for Qt-free view models."""

from __future__ import annotations

from typing import Any, Callable, Optional, Type

from remi.events.bus import EventBus, Subscription


class BaseViewModel:
    """Holds the optional :class:`EventBus` and the subscriptions made on it.

    Without a bus, subscribing is a no-op and publishing is dropped, so view
    models stay usable in tests and one-shot CLI commands.
    """

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self._event_bus = event_bus
        self._subscriptions: list[Subscription] = []

    @property
    def event_bus(self) -> Optional[EventBus]:
        return self._event_bus

    def subscribe_event(self, event_type: Type, handler: Callable[[Any], None]) -> Optional[Subscription]:
        if self._event_bus is None:
            return None
        sub = self._event_bus.subscribe(event_type, handler)
        self._subscriptions.append(sub)
        return sub

    def publish_event(self, event: object) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    def dispose(self) -> None:
        """Drop every subscription made through :meth:`subscribe_event`."""
        while self._subscriptions:
            self._subscriptions.pop().cancel()
