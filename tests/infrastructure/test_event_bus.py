from dataclasses import dataclass

from remi.events.bus import EventBus
from remi.events.nook_events import (
    NookCreatedEvent,
    NookDeletedEvent,
    NookEvent,
    NookSelectedEvent,
)


@dataclass(frozen=True)
class PingEvent:
    payload: str = ""


def test_subscribe_publish():
    bus = EventBus()
    received = []

    bus.subscribe(PingEvent, lambda e: received.append(e.payload))
    delivered = bus.publish(PingEvent(payload="hello"))

    assert received == ["hello"]
    assert delivered == 1


def test_sibling_types_are_not_delivered():
    bus = EventBus()
    created, deleted = [], []
    bus.subscribe(NookCreatedEvent, created.append)
    bus.subscribe(NookDeletedEvent, deleted.append)

    bus.publish(NookCreatedEvent(nook_id="1", name="Alpha"))

    assert len(created) == 1
    assert deleted == []


def test_base_class_subscribers_see_subclasses():
    bus = EventBus()
    received = []
    bus.subscribe(NookEvent, received.append)

    bus.publish(NookCreatedEvent(nook_id="1", name="Alpha"))
    bus.publish(NookSelectedEvent())
    bus.publish(PingEvent())

    assert [type(e) for e in received] == [NookCreatedEvent, NookSelectedEvent]


def test_events_compare_by_payload():
    assert NookSelectedEvent(nook_id="1") == NookSelectedEvent(nook_id="1")


def test_unsubscribe():
    bus = EventBus()
    received = []
    sub = bus.subscribe(PingEvent, received.append)

    bus.unsubscribe(sub)
    bus.unsubscribe(sub)
    bus.publish(PingEvent())

    assert received == []
    assert bus.handler_count(PingEvent) == 0


def test_cancel_unsubscribes():
    bus = EventBus()
    received = []
    sub = bus.subscribe(PingEvent, received.append)

    sub.cancel()
    bus.publish(PingEvent())

    assert received == []
    assert not sub.active
    assert bus.handler_count(PingEvent) == 0


def test_handler_may_unsubscribe_while_publishing():
    bus = EventBus()
    received = []

    def once(event):
        received.append(event)
        sub.cancel()

    sub = bus.subscribe(PingEvent, once)
    bus.publish(PingEvent())
    bus.publish(PingEvent())

    assert len(received) == 1


def test_failing_handler_does_not_stop_others(caplog):
    bus = EventBus()
    received = []

    def bad(event):
        raise RuntimeError("nope")

    bus.subscribe(PingEvent, bad)
    bus.subscribe(PingEvent, received.append)
    bus.publish(PingEvent(payload="x"))

    assert len(received) == 1
    assert "PingEvent" in caplog.text
