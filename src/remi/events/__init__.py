from .bus import EventBus, Subscription
from .nook_events import (
    NookCreatedEvent,
    NookDeletedEvent,
    NookEvent,
    NookLibraryChangedEvent,
    NookRenamedEvent,
    NookSelectedEvent,
    NookUpdatedEvent,
)

__all__ = [
    "EventBus",
    "NookCreatedEvent",
    "NookDeletedEvent",
    "NookEvent",
    "NookLibraryChangedEvent",
    "NookRenamedEvent",
    "NookSelectedEvent",
    "NookUpdatedEvent",
    "Subscription",
]
