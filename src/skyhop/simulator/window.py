"""
Desktop window for SKYHOP using pygame.

Turns keyboard input into key events on the bus, advances the active
mode once per frame and draws its numpy buffer plus a text HUD.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

import numpy as np

from ..config.settings import Settings
from ..core.events import EventBus, EventType, Event, key_event, tick_event
from ..modes.base import BaseMode

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 800
    height: int = 500
    title: str = "SKYHOP"
    fullscreen: bool = False
    fps: int = 60
    scale: float = 1.0

    # Colors
    text_color: tuple[int, int, int] = (255, 255, 255)
    shadow_color: tuple[int, int, int] = (20, 20, 30)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.game.field_width,
            height=settings.game.field_height,
            title=settings.display.title,
            fullscreen=settings.display.fullscreen,
            fps=settings.display.fps,
            scale=settings.display.scale,
        )


class SimulatorWindow:
    """
    Window hosting one mode.

    Keyboard Mapping:
        SPACE: Start / jump
        UP ARROW: Jump
        LEFT / RIGHT ARROW: Move
        P: Pause / resume
        ESC / Q: Exit
    """

    # Longest frame simulated in one go (window drags, debugger stops)
    MAX_FRAME_MS = 250

    KEY_NAMES = {
        pygame.K_SPACE: "space",
        pygame.K_UP: "up",
        pygame.K_LEFT: "left",
        pygame.K_RIGHT: "right",
        pygame.K_p: "p",
    }

    def __init__(
        self,
        mode: BaseMode,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.mode = mode
        self.event_bus = event_bus or mode.context.event_bus

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._buffer = np.zeros((self.config.height, self.config.width, 3), dtype=np.uint8)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        size = (int(self.config.width * self.config.scale), int(self.config.height * self.config.scale))
        self._screen = pygame.display.set_mode(size, flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)

        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
            self.event_bus.emit(Event(EventType.SHUTDOWN, source="keyboard"))
            return

        name = self.KEY_NAMES.get(key)
        if name:
            self.event_bus.queue_event(key_event(name))

    def _render(self) -> None:
        """Draw the mode buffer and HUD."""
        if not self._screen:
            return

        self.mode.render_main(self._buffer)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if self.config.scale != 1.0:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud()
        pygame.display.flip()

    def _render_hud(self) -> None:
        if not self._font:
            return

        y = 10
        for line in self.mode.hud_lines():
            shadow = self._font.render(line, True, self.config.shadow_color)
            text = self._font.render(line, True, self.config.text_color)
            self._screen.blit(shadow, (12, y + 2))
            self._screen.blit(text, (10, y))
            y += 28

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        self.mode.enter()

        logger.info("Window loop started")

        while self._running:
            self._handle_events()

            # Input first, then time
            await self.event_bus.process_queue()

            delta_ms = self._clock.get_time() if self._clock else 0
            delta_ms = min(delta_ms, self.MAX_FRAME_MS)
            self.event_bus.emit(tick_event(delta_ms / 1000.0, self._frame_count))
            self.mode.update(delta_ms)

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.mode.exit()
        self._cleanup()

    def _cleanup(self) -> None:
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
