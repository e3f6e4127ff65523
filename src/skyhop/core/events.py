"""
Pub/sub between the SKYHOP session and whatever surrounds it.

The window publishes raw key presses, the active mode turns them into
intents, and the session publishes what happened in the game (passes,
pickups, shield hits, game over) for the HUD, sound or logging to react to.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable
import inspect
import logging
import asyncio
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything that travels over the bus."""
    # Raw input (mapped to intents by the active mode)
    KEY_PRESS = auto()

    # Input intents
    JUMP = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    TOGGLE_PAUSE = auto()
    START_OR_RESTART = auto()

    # Session lifecycle
    SESSION_STARTED = auto()
    PAUSED = auto()
    RESUMED = auto()
    GAME_OVER = auto()
    HIGH_SCORE = auto()

    # Gameplay
    OBSTACLE_PASSED = auto()
    SHIELD_ABSORBED = auto()
    POWER_UP_COLLECTED = auto()
    EFFECT_EXPIRED = auto()

    # Runner
    TICK = auto()
    SHUTDOWN = auto()


INTENT_TYPES = frozenset({
    EventType.JUMP,
    EventType.MOVE_LEFT,
    EventType.MOVE_RIGHT,
    EventType.TOGGLE_PAUSE,
    EventType.START_OR_RESTART,
})


@dataclass
class Event:
    """One message on the bus.

    Attributes:
        type: What happened
        data: Payload, e.g. {"score": 12} for OBSTACLE_PASSED
        source: Who published it ("keyboard", "session", "mode_skyhop", ...)
        timestamp: Wall-clock creation time, for logs only
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Fan-out of events to per-type and catch-all handlers.

    emit() delivers right away to plain handlers; this is how the session
    reports gameplay events in the middle of a tick. queue_event() defers
    delivery until the runner drains the queue with process_queue(), once
    per frame, where coroutine handlers are awaited as well.

    A failing handler is logged and never stops delivery to the others.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._by_type: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._catch_all: list[Handler] = []
        self._pending: asyncio.Queue[Event] = asyncio.Queue()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Returns:
            A callable that removes the handler again
        """
        handlers = self._by_type[event_type]
        handlers.append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)} to {event_type}")
        return lambda: self._discard(handlers, handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register a handler for every event type."""
        self._catch_all.append(handler)
        return lambda: self._discard(self._catch_all, handler)

    @staticmethod
    def _discard(handlers: list[Handler], handler: Handler) -> None:
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Event) -> None:
        """Deliver an event now. Coroutine handlers only see queued events."""
        self._history.append(event)
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next process_queue()."""
        self._pending.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver every queued event in arrival order."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            self._history.append(event)
            for handler in self._targets(event):
                result = self._call(handler, event)
                if inspect.isawaitable(result):
                    try:
                        await result
                    except Exception as e:
                        logger.error(f"Error in async handler for {event.type}: {e}")
            self._pending.task_done()

    def _targets(self, event: Event) -> list[Handler]:
        # Copy, so handlers may unsubscribe while being called
        return [*self._by_type.get(event.type, ()), *self._catch_all]

    def _call(self, handler: Handler, event: Event) -> Any:
        try:
            return handler(event)
        except Exception as e:
            logger.error(f"Error in handler for {event.type}: {e}")
            return None

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def intent_event(intent: EventType, source: str = "input") -> Event:
    """Wrap a logical input intent."""
    if intent not in INTENT_TYPES:
        raise ValueError(f"{intent} is not an input intent")
    return Event(intent, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Per-frame tick published by the window (delta in seconds)."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})


def key_event(key: str, source: str = "keyboard") -> Event:
    """A raw key press, named like "space" or "left"."""
    return Event(EventType.KEY_PRESS, data={"key": key}, source=source)
