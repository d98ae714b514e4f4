"""Notifications published on the :class:`~remi.events.bus.EventBus`."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NookEvent:
    """Base class; subscribe to it to hear about every nook change."""

    source: str = ""
    occurred_at: datetime = field(default_factory=datetime.now, compare=False)


@dataclass(frozen=True)
class NookCreatedEvent(NookEvent):
    nook_id: str = ""
    name: str = ""


@dataclass(frozen=True)
class NookRenamedEvent(NookEvent):
    nook_id: str = ""
    old_name: str = ""
    new_name: str = ""


@dataclass(frozen=True)
class NookUpdatedEvent(NookEvent):
    nook_id: str = ""


@dataclass(frozen=True)
class NookDeletedEvent(NookEvent):
    nook_id: str = ""
    name: str = ""


@dataclass(frozen=True)
class NookSelectedEvent(NookEvent):
    # Empty when the selection was cleared.
    nook_id: str = ""
    url: str = ""


@dataclass(frozen=True)
class NookLibraryChangedEvent(NookEvent):
    """Published by whoever owns the backing store after out-of-band edits."""
