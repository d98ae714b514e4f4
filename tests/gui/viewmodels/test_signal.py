"""Tests for the pure Python Signal and ObservableProperty classes."""

import pytest

from remi.gui.viewmodels.signal import ObservableProperty, Signal


class TestSignal:
    def test_connect_and_emit(self):
        sig = Signal()
        received = []
        sig.connect(received.append)

        sig.emit(42)

        assert received == [42]

    def test_disconnect(self):
        sig = Signal()
        received = []
        sig.connect(received.append)
        sig.emit(1)
        sig.disconnect(received.append)
        sig.emit(2)

        assert received == [1]

    def test_disconnect_missing_raises(self):
        sig = Signal()
        with pytest.raises(ValueError):
            sig.disconnect(lambda: None)

    def test_duplicate_connect_ignored(self):
        sig = Signal()
        handler = lambda: None
        sig.connect(handler)
        sig.connect(handler)
        assert sig.handler_count == 1

    def test_disconnect_all(self):
        sig = Signal()
        sig.connect(lambda: None)
        sig.connect(lambda: None)

        sig.disconnect_all()

        assert sig.handler_count == 0

    def test_handler_may_disconnect_itself(self):
        sig = Signal()
        received = []

        def once(value):
            received.append(value)
            sig.disconnect(once)

        sig.connect(once)
        sig.emit("a")
        sig.emit("b")

        assert received == ["a"]

    def test_handler_exception_does_not_break_others(self, caplog):
        sig = Signal("boom")
        received = []

        def bad_handler(v):
            raise RuntimeError("boom")

        sig.connect(bad_handler)
        sig.connect(received.append)

        sig.emit(1)

        assert received == [1]
        assert "boom" in caplog.text


class TestObservableProperty:
    def test_default_none(self):
        assert ObservableProperty().value is None

    def test_changed_emits_new_and_old(self):
        prop = ObservableProperty(0)
        changes = []
        prop.changed.connect(lambda new, old: changes.append((new, old)))

        prop.value = 1
        prop.value = 1
        prop.value = 2

        assert changes == [(1, 0), (2, 1)]

    def test_equal_value_is_silent(self):
        prop = ObservableProperty((1, 2))
        changes = []
        prop.changed.connect(lambda new, old: changes.append(new))

        prop.value = (1, 2)

        assert changes == []
