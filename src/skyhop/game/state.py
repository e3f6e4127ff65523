"""GameState aggregate and the read-only snapshot handed to renderers."""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from skyhop.config.settings import GameSettings
from skyhop.core.state import SessionMode
from skyhop.core.timers import TimerTable
from skyhop.game.entities import (
    Cloud,
    Medal,
    Obstacle,
    Particle,
    Player,
    PowerUp,
    initial_clouds,
)


@dataclass
class EffectState:
    """Status flags of a running session."""
    invincible: bool = False
    has_shield: bool = False
    slow_motion: bool = False
    combo: int = 0
    last_pass_ms: Optional[float] = None

    # Cosmetic flags
    show_combo: bool = False
    screen_shake: bool = False
    jump_puff: bool = False


@dataclass
class GameState:
    """Everything one session mutates.

    A reset is building a new GameState; nothing about a session
    lives outside this object (id counters and timers included).
    """
    player: Player
    generation: int = 0

    score: int = 0
    distance: float = 0.0
    obstacle_speed: float = 2.5
    high_score: int = 0
    new_record: bool = False

    obstacles: List[Obstacle] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=initial_clouds)
    ground_x: float = 0.0

    effects: EffectState = field(default_factory=EffectState)
    timers: TimerTable = field(default_factory=TimerTable)

    next_obstacle_id: int = 0
    next_power_up_id: int = 0
    next_particle_id: int = 0

    @classmethod
    def fresh(
        cls,
        settings: GameSettings,
        generation: int = 0,
        high_score: int = 0,
    ) -> "GameState":
        """Initial state of a session."""
        return cls(
            player=Player(
                x=settings.player_start_x,
                y=settings.player_start_y,
                size=settings.player_size,
            ),
            generation=generation,
            obstacle_speed=settings.base_obstacle_speed,
            high_score=high_score,
        )

    def take_obstacle_id(self) -> int:
        obstacle_id = self.next_obstacle_id
        self.next_obstacle_id += 1
        return obstacle_id

    def take_power_up_id(self) -> int:
        power_up_id = self.next_power_up_id
        self.next_power_up_id += 1
        return power_up_id

    def take_particle_id(self) -> int:
        particle_id = self.next_particle_id
        self.next_particle_id += 1
        return particle_id

    def snapshot(self, mode: SessionMode, medal: Optional[Medal] = None) -> "Snapshot":
        """Copy the renderable part of the state."""
        fx = self.effects
        return Snapshot(
            mode=mode,
            generation=self.generation,
            player=replace(self.player),
            obstacles=tuple(replace(o) for o in self.obstacles),
            power_ups=tuple(replace(p) for p in self.power_ups),
            particles=tuple(replace(p) for p in self.particles),
            clouds=tuple(replace(c) for c in self.clouds),
            ground_x=self.ground_x,
            score=self.score,
            distance=self.distance,
            high_score=self.high_score,
            obstacle_speed=self.obstacle_speed,
            combo=fx.combo,
            show_combo=fx.show_combo,
            invincible=fx.invincible,
            has_shield=fx.has_shield,
            slow_motion=fx.slow_motion,
            screen_shake=fx.screen_shake,
            jump_puff=fx.jump_puff,
            new_record=self.new_record,
            medal=medal,
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session after a tick."""
    mode: SessionMode
    generation: int
    player: Player
    obstacles: Tuple[Obstacle, ...]
    power_ups: Tuple[PowerUp, ...]
    particles: Tuple[Particle, ...]
    clouds: Tuple[Cloud, ...]
    ground_x: float
    score: int
    distance: float
    high_score: int
    obstacle_speed: float
    combo: int
    show_combo: bool
    invincible: bool
    has_shield: bool
    slow_motion: bool
    screen_shake: bool
    jump_puff: bool
    new_record: bool
    medal: Optional[Medal] = None

    @property
    def is_running(self) -> bool:
        return self.mode == SessionMode.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.mode == SessionMode.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.mode == SessionMode.GAME_OVER

    @property
    def game_started(self) -> bool:
        return self.mode != SessionMode.NOT_STARTED
