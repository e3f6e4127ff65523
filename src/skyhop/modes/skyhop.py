"""SKYHOP - fly between the pipes, grab power-ups, chain combos."""

from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from skyhop.core.events import Event, EventType, INTENT_TYPES
from skyhop.core.state import SessionMode
from skyhop.game.entities import PowerUpKind
from skyhop.game.session import GameSession
from skyhop.game.state import Snapshot
from skyhop.graphics.primitives import fill, draw_rect, draw_circle, blend_rect
from skyhop.modes.base import BaseMode, ModeContext, ModeResult, ModePhase


SKY = (112, 197, 206)
CLOUD = (245, 250, 255)
PIPE = (84, 180, 60)
PIPE_CAP = (60, 140, 40)
GROUND = (222, 216, 149)
GROUND_STRIPE = (200, 180, 100)
BIRD = (255, 210, 60)
BIRD_EYE = (20, 20, 20)
BEAK = (250, 120, 40)
SHIELD = (80, 170, 255)
SLOWMO = (190, 110, 255)
DEBRIS = (255, 140, 40)
PUFF = (255, 255, 255)

SHAKE_OFFSET = 5


class SkyhopMode(BaseMode):
    name = "skyhop"
    display_name = "SKYHOP"
    description = "Fly between the pipes"

    # Raw keys understood by this mode
    KEY_JUMP = ("space", "up")
    KEY_LEFT = "left"
    KEY_RIGHT = "right"
    KEY_PAUSE = "p"

    def __init__(self, context: ModeContext):
        super().__init__(context)
        self._session: Optional[GameSession] = None
        self._snapshot: Optional[Snapshot] = None

    @property
    def session(self) -> Optional[GameSession]:
        return self._session

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    def on_enter(self) -> None:
        self._session = GameSession(
            settings=self.context.settings,
            store=self.context.high_score_store,
            event_bus=self.context.event_bus,
        )
        self._snapshot = self._session.snapshot()
        self.change_phase(ModePhase.ACTIVE)

    def on_exit(self) -> None:
        if self._session:
            snap = self._session.snapshot()
            self.complete(ModeResult(
                mode_name=self.name,
                success=snap.score > 0,
                data={"score": snap.score, "distance": snap.distance, "high_score": snap.high_score},
                display_text=f"SCORE {snap.score}",
            ))
            self._session.close()

    def on_input(self, event: Event) -> bool:
        if self.phase != ModePhase.ACTIVE or not self._session:
            return False

        if event.type in INTENT_TYPES:
            return self._apply(event.type)

        if event.type == EventType.KEY_PRESS:
            intent = self._intent_for_key(event.data.get("key", ""))
            if intent is None:
                return False
            return self._apply(intent)

        return False

    def _intent_for_key(self, key: str) -> Optional[EventType]:
        if key in self.KEY_JUMP:
            # The big button starts a session when none is running
            if key == "space" and self._session.mode in (SessionMode.NOT_STARTED, SessionMode.GAME_OVER):
                return EventType.START_OR_RESTART
            return EventType.JUMP
        if key == self.KEY_LEFT:
            return EventType.MOVE_LEFT
        if key == self.KEY_RIGHT:
            return EventType.MOVE_RIGHT
        if key == self.KEY_PAUSE:
            return EventType.TOGGLE_PAUSE
        return None

    def _apply(self, intent: EventType) -> bool:
        handled = self._session.handle_intent(intent)
        self._snapshot = self._session.snapshot()
        return handled

    def on_update(self, delta_ms: float) -> None:
        if self.phase != ModePhase.ACTIVE or not self._session:
            return
        self._snapshot = self._session.update(delta_ms)

    def render_main(self, buffer: NDArray[np.uint8]) -> None:
        snap = self._snapshot
        if snap is None:
            return

        cfg = self.context.settings
        ground_top = cfg.field_height - cfg.ground_height

        fill(buffer, SKY)

        for cloud in snap.clouds:
            draw_rect(buffer, cloud.x, cloud.y, cloud.size, cloud.size * 0.6, CLOUD)

        # Pipes
        for obstacle in snap.obstacles:
            draw_rect(buffer, obstacle.x, 0, obstacle.width, obstacle.gap_y, PIPE)
            draw_rect(buffer, obstacle.x - 3, obstacle.gap_y - 20, obstacle.width + 6, 20, PIPE_CAP)
            bottom = obstacle.gap_bottom
            draw_rect(buffer, obstacle.x, bottom, obstacle.width, ground_top - bottom, PIPE)
            draw_rect(buffer, obstacle.x - 3, bottom, obstacle.width + 6, 20, PIPE_CAP)

        # Ground
        draw_rect(buffer, 0, ground_top, cfg.field_width, cfg.ground_height, GROUND)
        tile = int(cfg.ground_tile_width)
        for x in range(int(snap.ground_x), cfg.field_width, tile):
            draw_rect(buffer, x, ground_top, tile // 2, 8, GROUND_STRIPE)

        for power_up in snap.power_ups:
            color = SHIELD if power_up.kind == PowerUpKind.SHIELD else SLOWMO
            draw_circle(buffer, power_up.x, power_up.y, 14, color)
            draw_circle(buffer, power_up.x, power_up.y, 14, PUFF, filled=False)

        if snap.game_started:
            self._render_player(buffer, snap)

        for particle in snap.particles:
            draw_rect(buffer, particle.x - 3, particle.y - 3, 6, 6, DEBRIS)

        if snap.slow_motion:
            blend_rect(buffer, 0, 0, cfg.field_width, cfg.field_height, SLOWMO, 0.12)

        if snap.is_paused or not snap.is_running:
            blend_rect(buffer, 0, 0, cfg.field_width, cfg.field_height, (0, 0, 0), 0.45)

        if snap.screen_shake:
            np.copyto(buffer, np.roll(buffer, SHAKE_OFFSET, axis=1))

    def _render_player(self, buffer: NDArray[np.uint8], snap: Snapshot) -> None:
        player = snap.player
        size = player.size

        # Blink while invincible
        if snap.invincible and int(self.time_in_mode / 100) % 2:
            blend_rect(buffer, player.x, player.y, size, size, BIRD, 0.6)
        else:
            draw_rect(buffer, player.x, player.y, size, size, BIRD)
        draw_rect(buffer, player.x + size * 0.6, player.y + size * 0.2, 6, 6, BIRD_EYE)
        draw_rect(buffer, player.x + size, player.y + size * 0.45, 10, 8, BEAK)

        if snap.has_shield:
            cx, cy = player.center
            draw_circle(buffer, cx, cy, size * 0.8, SHIELD, filled=False)

        if snap.jump_puff:
            draw_circle(buffer, player.x + 20, player.y + 40, 8, PUFF)

    def hud_lines(self) -> List[str]:
        snap = self._snapshot
        if snap is None:
            return [self.display_name]

        lines = [
            f"Score: {snap.score} | Distance: {int(snap.distance)}m",
            f"High Score: {snap.high_score}",
        ]
        if snap.combo > self.context.settings.combo_display_threshold:
            lines.append(f"COMBO x{snap.combo}")
        if snap.slow_motion:
            lines.append("SLOW MOTION")

        if snap.mode == SessionMode.NOT_STARTED:
            lines.append("Ready to Play? SPACE to start")
        elif snap.is_paused:
            lines.append("Paused - press P to resume")
        elif snap.is_game_over:
            lines.append(f"Game Over! Final Score: {snap.score}")
            if snap.new_record:
                lines.append("New High Score!")
            if snap.medal:
                lines.append(f"{snap.medal.value} Medal!")
            lines.append("SPACE to play again")
        return lines
