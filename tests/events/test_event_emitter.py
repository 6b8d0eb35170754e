"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

import logging
from unittest.mock import MagicMock

from durak.events import EventEmitter, EventBus, EngineEventType, EventPriority


def test_event_emitter_initialization():
    """Test that the EventEmitter initializes correctly."""
    emitter = EventEmitter()
    assert emitter._listeners is not None
    assert emitter._global_listeners == []


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)

    test_data = {"value": "test"}
    emitter.emit("test_event", test_data)
    callback.assert_called_once_with(test_data)

    # Unsubscribe and emit again
    unsubscribe()
    emitter.emit("test_event", {"value": "test2"})
    assert callback.call_count == 1


def test_on_with_enum_event_type():
    """Enum and name subscriptions see the same events."""
    emitter = EventEmitter()
    by_enum = MagicMock()
    by_name = MagicMock()

    emitter.on(EngineEventType.ATTACK_PLAYED, by_enum)
    emitter.on("ATTACK_PLAYED", by_name)

    test_data = {"card": "7♣"}
    emitter.emit(EngineEventType.ATTACK_PLAYED, test_data)

    by_enum.assert_called_once_with(test_data)
    by_name.assert_called_once_with(test_data)


def test_once_subscription():
    """Test subscribing to an event for a single occurrence."""
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.once(EngineEventType.CARDS_TAKEN, callback)
    emitter.emit(EngineEventType.CARDS_TAKEN, {"player": "B"})
    emitter.emit(EngineEventType.CARDS_TAKEN, {"player": "C"})

    callback.assert_called_once_with({"player": "B"})


def test_on_any_subscription():
    """Global listeners receive (event_type, data) for every event."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on_any(callback)
    emitter.emit(EngineEventType.ROUND_STARTED, {"round_number": 1})
    emitter.emit("custom", {"x": 1})

    assert callback.call_count == 2
    callback.assert_any_call(("ROUND_STARTED", {"round_number": 1}))
    callback.assert_any_call(("custom", {"x": 1}))

    unsubscribe()
    emitter.emit("custom", {"x": 2})
    assert callback.call_count == 2


def test_emitter_priority():
    """Higher priority handlers run first."""
    emitter = EventEmitter()
    order = []

    emitter.on("event", lambda data: order.append("low"), EventPriority.LOW)
    emitter.on("event", lambda data: order.append("critical"), EventPriority.CRITICAL)
    emitter.on("event", lambda data: order.append("normal"))
    emitter.on("event", lambda data: order.append("high"), EventPriority.HIGH)

    emitter.emit("event", {})

    assert order == ["critical", "high", "normal", "low"]


def test_remove_all_listeners():
    emitter = EventEmitter()
    first = MagicMock()
    second = MagicMock()
    global_listener = MagicMock()
    emitter.on("first", first)
    emitter.on("second", second)
    emitter.on_any(global_listener)

    emitter.remove_all_listeners("first")
    emitter.emit("first", {})
    emitter.emit("second", {})
    first.assert_not_called()
    second.assert_called_once()

    emitter.remove_all_listeners()
    emitter.emit("second", {})
    second.assert_called_once()
    assert global_listener.call_count == 2


def test_emit_exceptions_are_logged_not_raised(caplog):
    """A failing handler does not stop the others."""
    emitter = EventEmitter()
    after = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on("event", broken, EventPriority.HIGH)
    emitter.on("event", after)

    with caplog.at_level(logging.ERROR, logger="durak.events"):
        emitter.emit("event", {"n": 1})

    after.assert_called_once_with({"n": 1})
    assert "boom" in caplog.text


def test_event_bus_singleton():
    first = EventBus.get_instance()
    second = EventBus.get_instance()
    assert first is second
    assert isinstance(first, EventEmitter)


def test_handler_may_unsubscribe_while_the_event_is_delivered():
    emitter = EventEmitter()
    later = MagicMock()
    unsubscribe = None

    def first(data):
        unsubscribe()

    unsubscribe = emitter.on("event", first, EventPriority.HIGH)
    emitter.on("event", later)

    emitter.emit("event", {"n": 1})
    emitter.emit("event", {"n": 2})

    assert later.call_count == 2


def test_unsubscribe_removes_only_its_own_subscription():
    emitter = EventEmitter()
    callback = MagicMock()

    first = emitter.on("event", callback)
    emitter.on("event", callback)
    first()
    first()

    emitter.emit("event", {})
    callback.assert_called_once_with({})
