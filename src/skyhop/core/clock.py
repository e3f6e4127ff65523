"""
Fixed-cadence ticker for SKYHOP.

One simulation clock drives every periodic activity of a session
(physics, obstacle motion, ground scroll, particles, clouds, spawns).
Activities are plain callbacks fired sequentially, so a logical frame
never observes a half-applied update from another activity.
"""

from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)

# Tolerance for float deadlines built from fractional frame deltas
_EPSILON = 1e-9

ActivityCallback = Callable[[float], None]
StepHook = Callable[[float], None]


@dataclass
class Activity:
    """A periodic callback registered on the ticker."""
    name: str
    period_ms: float
    callback: ActivityCallback
    next_due: float

    def is_due(self, now_ms: float) -> bool:
        return self.next_due <= now_ms + _EPSILON


class Ticker:
    """
    Simulation clock with periodic activities.

    The clock only moves inside advance(); while nobody calls it
    (for example while a session is paused) every activity and every
    deadline measured against now_ms is frozen.

    At each due instant the step hook runs once, then the due
    activities fire in registration order.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._activities: list[Activity] = []
        self._step_hook: StepHook | None = None
        self._stopped = False

    @property
    def now_ms(self) -> float:
        """Current simulation time in milliseconds."""
        return self._now

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def activity_names(self) -> list[str]:
        return [activity.name for activity in self._activities]

    def every(self, name: str, period_ms: float, callback: ActivityCallback) -> None:
        """
        Register a periodic activity.

        The first firing happens one full period after registration.
        """
        if period_ms <= 0:
            raise ValueError(f"Activity {name} needs a positive period, got {period_ms}")
        self._activities.append(Activity(
            name=name,
            period_ms=period_ms,
            callback=callback,
            next_due=self._now + period_ms,
        ))
        logger.debug(f"Activity registered: {name} every {period_ms}ms")

    def set_step_hook(self, hook: StepHook | None) -> None:
        """Set the callback run once per due instant, before activities."""
        self._step_hook = hook

    def advance(self, delta_ms: float) -> int:
        """
        Move the clock forward, firing everything that falls due.

        Args:
            delta_ms: Elapsed time in milliseconds

        Returns:
            Number of distinct instants processed
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot advance by a negative delta: {delta_ms}")

        target = self._now + delta_ms
        instants = 0

        while not self._stopped and self._activities:
            due = min(activity.next_due for activity in self._activities)
            if due > target + _EPSILON:
                break

            self._now = due
            instants += 1

            if self._step_hook:
                self._step_hook(due)

            for activity in list(self._activities):
                if self._stopped:
                    break
                if activity.is_due(due):
                    activity.callback(due)
                    activity.next_due += activity.period_ms

        if not self._stopped:
            self._now = max(self._now, target)
        return instants

    def stop(self) -> None:
        """Drop every activity; a stopped ticker never fires again."""
        self._stopped = True
        self._activities.clear()
        self._step_hook = None
        logger.debug(f"Ticker stopped at {self._now:.0f}ms")
