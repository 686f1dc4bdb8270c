"""Events published by the game engines."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of game events."""

    # Match flow
    MATCH_STARTED = auto()
    MATCH_RESET = auto()
    MATCH_ENDED = auto()
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Cards
    CARD_DEALT = auto()
    HANDS_DEALT = auto()

    # Decisions
    PARTICIPANT_HITS = auto()
    PARTICIPANT_STAYS = auto()

    # Terminal conditions
    PARTICIPANT_BUSTS = auto()
    TARGET_REACHED = auto()

    # Scoring
    SCORE_UPDATED = auto()
    GRAND_CHAMPION = auto()

    # Refused requests
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    The payload holds plain values only (names, card labels, totals), so
    any presentation layer can render it without importing engine types.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous publish/subscribe hub.

    Handlers registered for a specific type run before catch-all handlers,
    each group in subscription order. The most recent ``history_limit``
    events are kept for inspection.
    """

    def __init__(self, history_limit: int | None = 1000) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: deque[GameEvent] = deque(maxlen=history_limit)

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Register a handler for one event type, or for every event when None."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._history.append(event)
        for handler in (*self._handlers.get(event.event_type, ()), *self._handlers.get(None, ())):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Retained events, oldest first."""
        return list(self._history)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        return [e for e in self._history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._history.clear()
