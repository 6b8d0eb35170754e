"""
Event system for the Durak engine.

Every state transition of a match is published here. Listeners subscribe to
one event type or to all of them, with a priority that decides the order in
which handlers run. A failing handler is logged and never interrupts the
match.

The engine runs on a single event loop, so subscriptions and emission happen
on one thread and the emitter keeps no locks.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("durak.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(eq=False)
class Subscription:
    callback: Callable
    priority: int


def _event_name(event_type: Union[str, Enum]) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


def _subscribe(
    subscriptions: List[Subscription], callback: Callable, priority: EventPriority
) -> Callable:
    """Insert after every subscription of equal or higher priority."""
    new = Subscription(callback, priority.value)
    position = next(
        (
            i
            for i, existing in enumerate(subscriptions)
            if existing.priority < new.priority
        ),
        len(subscriptions),
    )
    subscriptions.insert(position, new)

    def unsubscribe():
        if new in subscriptions:
            subscriptions.remove(new)

    return unsubscribe


class EventEmitter:
    """
    Publish/subscribe hub for engine events.

    Handlers for one event type receive the event data. Handlers registered
    with `on_any` receive an ``(event_type, data)`` tuple, where the type is
    the event's name.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Subscription]] = defaultdict(list)
        self._global_listeners: List[Subscription] = []

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Called with the event data
            priority: Higher priorities run first

        Returns:
            A function that removes this subscription
        """
        return _subscribe(self._listeners[_event_name(event_type)], callback, priority)

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """Subscribe for the next occurrence only."""
        unsubscribe = None

        def one_time_handler(event_data):
            unsubscribe()
            callback(event_data)

        unsubscribe = self.on(event_type, one_time_handler, priority)
        return unsubscribe

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """Subscribe to every event. See the class docstring for the call shape."""
        return _subscribe(self._global_listeners, callback, priority)

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Type listeners run before global listeners. The handler lists are
        copied first, so a handler may unsubscribe while the event is
        delivered.
        """
        name = _event_name(event_type)
        calls = [(sub.callback, data) for sub in self._listeners.get(name, [])]
        calls += [(sub.callback, (name, data)) for sub in self._global_listeners]

        for callback, argument in calls:
            try:
                callback(argument)
            except Exception:
                logger.exception("Error in event handler for %s", name)

    def remove_all_listeners(
        self, event_type: Optional[Union[str, Enum]] = None
    ) -> None:
        """Drop the listeners of one event type, or every listener when None."""
        if event_type is None:
            self._listeners.clear()
            self._global_listeners.clear()
        else:
            self._listeners.pop(_event_name(event_type), None)


class EventBus:
    """
    Process-wide event bus.

    Engines and matches publish on the emitter returned by `get_instance`
    unless they are handed one of their own.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types published by the Durak engine.

    Adapters and listeners can hook any of these to follow a match.
    """

    # Core lifecycle events
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"

    # Player events
    PLAYER_JOINED = "player_joined"
    PLAYER_ELIMINATED = "player_eliminated"

    # Card events
    CARD_DEALT = "card_dealt"
    ATTACK_PLAYED = "attack_played"
    ATTACK_PASSED = "attack_passed"
    DEFENSE_PLAYED = "defense_played"
    CARD_THROWN_IN = "card_thrown_in"
    CARDS_TAKEN = "cards_taken"
    CARDS_DISCARDED = "cards_discarded"
    HANDS_REFILLED = "hands_refilled"

    # Error events
    ERROR = "error"
