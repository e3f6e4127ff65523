"""Core framework components for SKYHOP."""

from .state import SessionMode, StateMachine
from .events import EventBus, Event, EventType
from .clock import Ticker
from .timers import EffectTimer, TimerTable

__all__ = [
    "SessionMode",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "Ticker",
    "EffectTimer",
    "TimerTable",
]
