"""
Session mode machine for SKYHOP.

States:
    NOT_STARTED: Title screen, nothing simulated yet
    RUNNING: A session is being simulated
    PAUSED: Simulation frozen, clock halted
    GAME_OVER: Session ended; only cosmetic effects still animate
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class SessionMode(Enum):
    """Top-level session modes."""
    NOT_STARTED = auto()
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


Listener = Callable[[SessionMode, SessionMode], None]


class StateMachine:
    """
    Tracks the session mode and enforces valid transitions.

    Listeners are notified after every successful transition.
    """

    VALID_TRANSITIONS: list[tuple[SessionMode, SessionMode]] = [
        (SessionMode.NOT_STARTED, SessionMode.RUNNING),
        (SessionMode.RUNNING, SessionMode.PAUSED),
        (SessionMode.PAUSED, SessionMode.RUNNING),
        (SessionMode.RUNNING, SessionMode.GAME_OVER),
        (SessionMode.GAME_OVER, SessionMode.RUNNING),  # Restart
    ]

    def __init__(self, initial_state: SessionMode = SessionMode.NOT_STARTED) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SessionMode:
        """Get current mode."""
        return self._state

    def can_transition(self, to_state: SessionMode) -> bool:
        """Check if transition to given mode is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: SessionMode) -> bool:
        """
        Attempt to transition to a new mode.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"Session transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a mode change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a mode change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
