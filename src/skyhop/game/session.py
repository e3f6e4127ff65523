"""Session controller: composes the simulation into one per-frame update.

Lifecycle:
    NOT_STARTED -> RUNNING <-> PAUSED
    RUNNING -> GAME_OVER -> RUNNING (explicit restart only)

Every session owns a fresh GameState and a fresh Ticker. Ticker
callbacks are bound to the session generation that registered them,
so nothing scheduled for an old session can touch a new one.
Pausing simply stops advancing the ticker: movement, spawns and
effect timers all freeze with their remaining time intact.
"""

import logging
import random
from typing import Callable, Optional

from skyhop.config.settings import GameSettings
from skyhop.core.clock import Ticker
from skyhop.core.events import Event, EventBus, EventType
from skyhop.core.state import SessionMode, StateMachine
from skyhop.game import physics
from skyhop.game.collisions import advance_world
from skyhop.game.effects import (
    absorb_hit,
    arm_invincibility,
    expire_timers,
    scroll_ground,
    step_clouds,
    step_particles,
    trigger_crash,
    trigger_jump_puff,
)
from skyhop.game.entities import BoundaryHit, Medal, medal_for
from skyhop.game.spawner import Spawner
from skyhop.game.state import GameState, Snapshot
from skyhop.storage.high_score import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one GameState at a time and drives it from intents and time.

    Usage:
        session = GameSession(settings, store=JsonHighScoreStore(path))
        session.handle_intent(EventType.START_OR_RESTART)

        # Every frame:
        snapshot = session.update(delta_ms)
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        store: Optional[HighScoreStore] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        self.event_bus = event_bus or EventBus()
        self._store = store or MemoryHighScoreStore()
        self._rng = rng or random.Random(self.settings.seed)
        self._spawner = Spawner(self.settings, self._rng)
        self._machine = StateMachine()

        self._generation = 0
        self._ticker: Optional[Ticker] = None
        self._high_score_committed = False
        self._high_score = self._read_high_score()

        self.state = GameState.fresh(self.settings, self._generation, self._high_score)

    # Properties

    @property
    def mode(self) -> SessionMode:
        return self._machine.state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def now_ms(self) -> float:
        """Simulation time of the current session."""
        return self._ticker.now_ms if self._ticker else 0.0

    @property
    def ticker(self) -> Optional[Ticker]:
        return self._ticker

    @property
    def medal(self) -> Optional[Medal]:
        if self.mode != SessionMode.GAME_OVER:
            return None
        return medal_for(self.state.score, self.settings)

    def snapshot(self) -> Snapshot:
        """Read-only view for the render boundary."""
        return self.state.snapshot(self.mode, self.medal)

    # Input boundary

    def handle_intent(self, intent: EventType) -> bool:
        """Apply a logical input intent.

        Returns:
            True if the intent changed anything
        """
        if intent == EventType.START_OR_RESTART:
            return self.start()
        if intent == EventType.TOGGLE_PAUSE:
            return self.toggle_pause()

        if self.mode != SessionMode.RUNNING:
            return False

        if intent == EventType.JUMP:
            physics.jump(self.state.player, self.settings)
            trigger_jump_puff(self.state, self.now_ms, self.settings)
            return True
        if intent == EventType.MOVE_LEFT:
            physics.move(self.state.player, -1, self.settings)
            return True
        if intent == EventType.MOVE_RIGHT:
            physics.move(self.state.player, 1, self.settings)
            return True

        logger.debug(f"Ignoring non-intent event type: {intent}")
        return False

    # Lifecycle

    def start(self) -> bool:
        """Start a new session from the title screen or after game over.

        Raises:
            ConfigurationError: If the settings cannot produce a playable field
        """
        if not self._machine.can_transition(SessionMode.RUNNING) or self.mode == SessionMode.PAUSED:
            return False

        self.settings.validate_layout()

        if self._ticker:
            self._ticker.stop()

        self._generation += 1
        self.state = GameState.fresh(self.settings, self._generation, self._high_score)
        self._high_score_committed = False
        self._ticker = self._build_ticker()
        arm_invincibility(self.state, self._ticker.now_ms, self.settings)

        self._machine.transition(SessionMode.RUNNING)
        logger.info(f"Session {self._generation} started (high score {self._high_score})")
        self._emit(EventType.SESSION_STARTED, {"generation": self._generation})
        return True

    def toggle_pause(self) -> bool:
        if self.mode == SessionMode.RUNNING:
            self._machine.transition(SessionMode.PAUSED)
            self._emit(EventType.PAUSED)
            return True
        if self.mode == SessionMode.PAUSED:
            self._machine.transition(SessionMode.RUNNING)
            self._emit(EventType.RESUMED)
            return True
        return False

    def update(self, delta_ms: float) -> Snapshot:
        """Advance simulation time by delta_ms and return the new snapshot.

        Nothing moves before the first start or while paused. After game
        over only the crash debris and cosmetic timers keep running.
        """
        if self._ticker and self.mode in (SessionMode.RUNNING, SessionMode.GAME_OVER):
            self._ticker.advance(delta_ms)
        return self.snapshot()

    def close(self) -> None:
        """Halt every scheduled activity."""
        if self._ticker:
            self._ticker.stop()
            self._ticker = None

    # Scheduling

    def _build_ticker(self) -> Ticker:
        cfg = self.settings
        ticker = Ticker()
        ticker.set_step_hook(self._bind(self._on_instant))

        # Registration order is the firing order within one instant
        ticker.every("player", cfg.tick_ms, self._bind(self._tick_player))
        ticker.every("world", cfg.tick_ms, self._bind(self._tick_world))
        ticker.every("ground", cfg.tick_ms, self._bind(self._tick_ground))
        ticker.every("particles", cfg.particle_tick_ms, self._bind(self._tick_particles))
        ticker.every("clouds", cfg.cloud_tick_ms, self._bind(self._tick_clouds))
        ticker.every("obstacle_spawn", cfg.obstacle_spawn_ms, self._bind(self._spawn_obstacle))
        ticker.every("power_up_spawn", cfg.power_up_spawn_ms, self._bind(self._spawn_power_up))
        return ticker

    def _bind(self, callback: Callable[[float], None]) -> Callable[[float], None]:
        """Tie a scheduled callback to the current session generation."""
        generation = self._generation

        def bound(now_ms: float) -> None:
            if generation != self._generation:
                logger.debug(f"Dropping stale callback from session {generation}")
                return
            callback(now_ms)

        return bound

    @property
    def _running(self) -> bool:
        return self.mode == SessionMode.RUNNING

    def _on_instant(self, now_ms: float) -> None:
        cosmetic_only = self.mode != SessionMode.RUNNING
        for key in expire_timers(self.state, now_ms, cosmetic_only=cosmetic_only):
            if not key.is_cosmetic:
                self._emit(EventType.EFFECT_EXPIRED, {"effect": key.name})

    def _tick_player(self, now_ms: float) -> None:
        if not self._running:
            return
        hit = physics.step_player(self.state.player, self.settings)
        if hit is not None:
            self._resolve_boundary(hit, now_ms)

    def _resolve_boundary(self, hit: BoundaryHit, now_ms: float) -> None:
        if self.state.effects.invincible:
            return
        if absorb_hit(self.state):
            physics.rebound(self.state.player, hit, self.settings)
            self._emit(EventType.SHIELD_ABSORBED, {"boundary": hit.name})
            return
        self._end_session(now_ms, reason=hit.name.lower())

    def _tick_world(self, now_ms: float) -> None:
        if not self._running:
            return
        step = advance_world(self.state, self.settings, now_ms)

        for obstacle_id in step.passed:
            self._emit(EventType.OBSTACLE_PASSED, {
                "obstacle": obstacle_id,
                "score": self.state.score,
                "combo": self.state.effects.combo,
            })
        for obstacle_id in step.absorbed:
            self._emit(EventType.SHIELD_ABSORBED, {"obstacle": obstacle_id})
        for power_up in step.collected:
            self._emit(EventType.POWER_UP_COLLECTED, {"kind": power_up.kind.name})

        if step.terminal:
            self._end_session(now_ms, reason="obstacle")

    def _tick_ground(self, now_ms: float) -> None:
        if self._running:
            scroll_ground(self.state, self.settings)

    def _tick_particles(self, now_ms: float) -> None:
        if self.state.particles:
            step_particles(self.state, self.settings)

    def _tick_clouds(self, now_ms: float) -> None:
        if self._running:
            step_clouds(self.state, self.settings)

    def _spawn_obstacle(self, now_ms: float) -> None:
        if self._running:
            self._spawner.spawn_obstacle(self.state)

    def _spawn_power_up(self, now_ms: float) -> None:
        if self._running:
            self._spawner.maybe_spawn_power_up(self.state)

    # Game over and persistence

    def _end_session(self, now_ms: float, reason: str) -> None:
        trigger_crash(self.state, now_ms, self.settings, self._rng)
        self._machine.transition(SessionMode.GAME_OVER)
        logger.info(
            f"Game over ({reason}): score {self.state.score}, "
            f"distance {self.state.distance:.0f}"
        )
        self._commit_high_score()

        medal = self.medal
        self._emit(EventType.GAME_OVER, {
            "reason": reason,
            "score": self.state.score,
            "distance": self.state.distance,
            "medal": medal.value if medal else None,
        })

    def _commit_high_score(self) -> None:
        """Compare once per session; persist only a beaten high score."""
        if self._high_score_committed:
            return
        self._high_score_committed = True

        score = self.state.score
        if score <= self._high_score:
            return

        self._high_score = score
        self.state.high_score = score
        self.state.new_record = True
        try:
            self._store.set_high_score(score)
        except Exception as e:
            logger.error(f"Failed to persist high score: {e}")
        self._emit(EventType.HIGH_SCORE, {"score": score})

    def _read_high_score(self) -> int:
        try:
            return max(0, int(self._store.get_high_score()))
        except Exception as e:
            logger.error(f"Failed to read high score: {e}")
            return 0

    def _emit(self, event_type: EventType, data: Optional[dict] = None) -> None:
        self.event_bus.emit(Event(event_type, data=data or {}, source="session"))
