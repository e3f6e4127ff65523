"""Mode lifecycle shared by everything the window can host.

A mode is entered once, receives every bus event while active, is
updated once per frame with the elapsed milliseconds and draws itself
into the window's RGB buffer. Leaving a mode yields a ModeResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional
import logging

from skyhop.config.settings import GameSettings
from skyhop.core.events import Event, EventBus
from skyhop.storage.high_score import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class ModePhase(Enum):
    INTRO = auto()
    ACTIVE = auto()
    OUTRO = auto()


@dataclass
class ModeResult:
    """What a mode reports when it is left."""

    mode_name: str
    success: bool = True
    data: Dict[str, Any] = field(default_factory=dict)
    display_text: str = ""
    error: Optional[str] = None


@dataclass
class ModeContext:
    """Collaborators handed to a mode by the runner."""

    event_bus: EventBus
    settings: GameSettings = field(default_factory=GameSettings)
    high_score_store: HighScoreStore = field(default_factory=MemoryHighScoreStore)


class BaseMode(ABC):
    """Base class for hosted modes.

    Subclasses fill in on_enter, on_update, on_input and on_exit; the
    public enter/update/handle_input/exit wrappers take care of bus
    subscription, the active flag and time bookkeeping.
    """

    name: str = "base"
    display_name: str = "Base Mode"
    description: str = ""

    def __init__(self, context: ModeContext):
        self.context = context
        self.phase = ModePhase.INTRO
        self._active = False
        self._result: Optional[ModeResult] = None
        self._elapsed_ms = 0.0
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def result(self) -> Optional[ModeResult]:
        """Set by complete(), or a failure placeholder after exit()."""
        return self._result

    @property
    def time_in_mode(self) -> float:
        """Milliseconds of frame time since enter()."""
        return self._elapsed_ms

    def enter(self) -> None:
        self._active = True
        self._elapsed_ms = 0.0
        self._result = None
        self.phase = ModePhase.INTRO
        self._unsubscribe = self.context.event_bus.subscribe_all(self.handle_input)

        logger.info(f"Entering mode: {self.name}")
        self.on_enter()

    def exit(self) -> ModeResult:
        logger.info(f"Leaving mode: {self.name}")
        self.on_exit()
        self._active = False

        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

        if self._result is None:
            self._result = ModeResult(self.name, success=False, error="Mode exited without result")
        return self._result

    def update(self, delta_ms: float) -> None:
        if self._active:
            self._elapsed_ms += delta_ms
            self.on_update(delta_ms)

    def handle_input(self, event: Event) -> bool:
        """Bus entry point. Returns True if the event was used."""
        return self._active and self.on_input(event)

    def change_phase(self, new_phase: ModePhase) -> None:
        logger.debug(f"Mode {self.name}: {self.phase.name} -> {new_phase.name}")
        self.phase = new_phase

    def complete(self, result: ModeResult) -> None:
        self._result = result
        self.change_phase(ModePhase.OUTRO)

    @abstractmethod
    def on_enter(self) -> None:
        ...

    @abstractmethod
    def on_update(self, delta_ms: float) -> None:
        ...

    @abstractmethod
    def on_input(self, event: Event) -> bool:
        ...

    @abstractmethod
    def on_exit(self) -> None:
        ...

    def render_main(self, buffer) -> None:
        """Draw the play field into an (height, width, 3) uint8 buffer."""

    def hud_lines(self) -> List[str]:
        """Text the window overlays on the play field, top to bottom."""
        return [self.display_name]
