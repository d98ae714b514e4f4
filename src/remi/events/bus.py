"""In-process publish/subscribe for nook notifications.

Delivery is synchronous: :meth:`EventBus.publish` returns once every handler
has run. A handler registered for a base class also receives its subclasses,
so subscribing to :class:`~remi.events.nook_events.NookEvent` observes every
change to the collection.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type


@dataclass(eq=False)
class Subscription:
    event_type: Type
    handler: Callable[[Any], None]
    active: bool = True
    _bus: Optional[EventBus] = field(default=None, repr=False)

    def cancel(self) -> None:
        """Stop delivery; same as ``bus.unsubscribe(self)``."""
        if self._bus is not None:
            self._bus.unsubscribe(self)
        else:
            self.active = False


class EventBus:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._subscriptions: Dict[Type, List[Subscription]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: Callable[[Any], None]) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler, _bus=self)
        self._subscriptions[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        subs = self._subscriptions.get(subscription.event_type)
        if subs and subscription in subs:
            subs.remove(subscription)

    def publish(self, event: Any) -> int:
        """Deliver *event* and return how many handlers received it."""
        delivered = 0
        for event_type in type(event).__mro__:
            # Snapshot: handlers may unsubscribe while being called.
            for sub in list(self._subscriptions.get(event_type, ())):
                if not sub.active:
                    continue
                delivered += 1
                try:
                    sub.handler(event)
                except Exception:
                    self._logger.exception(
                        "Handler %r failed for %s", sub.handler, type(event).__name__
                    )
        return delivered

    def handler_count(self, event_type: Type) -> int:
        """Handlers registered for exactly *event_type*."""
        return sum(1 for sub in self._subscriptions.get(event_type, ()) if sub.active)
