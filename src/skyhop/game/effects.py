"""Status effects: invincibility, shield, slow motion, combo and difficulty.

Each effect is a flag on EffectState plus an entry in the session's
TimerTable. Expiry is evaluated once per simulation instant by
expire_timers(), never by free-running callbacks.

Also home to the cosmetic effects triggered by gameplay (crash debris,
screen shake, jump puff) and the ambient scenery motion.
"""

import logging
import math
import random
from typing import List

from skyhop.config.settings import GameSettings
from skyhop.core.timers import COSMETIC_TIMERS, EffectTimer
from skyhop.game.entities import Particle, PowerUpKind
from skyhop.game.state import GameState

logger = logging.getLogger(__name__)


def obstacle_speed(score: int, settings: GameSettings) -> float:
    """Difficulty ramp: a pure function of the score."""
    return settings.base_obstacle_speed + (score // settings.difficulty_step) * settings.speed_increment


def effective_speed(state: GameState, settings: GameSettings) -> float:
    """Horizontal scroll speed for this tick, slowed under slow motion."""
    if state.effects.slow_motion:
        return state.obstacle_speed * settings.slow_motion_factor
    return state.obstacle_speed


def arm_invincibility(state: GameState, now_ms: float, settings: GameSettings) -> None:
    state.effects.invincible = True
    state.timers.start(EffectTimer.INVINCIBILITY, now_ms, settings.invincibility_ms)


def apply_power_up(
    state: GameState,
    kind: PowerUpKind,
    now_ms: float,
    settings: GameSettings
) -> None:
    """Grant a collected power-up.

    Picking up a shield while holding one only restarts its timer;
    charges never stack. Slow motion likewise restarts its window.
    """
    fx = state.effects
    if kind == PowerUpKind.SHIELD:
        fx.has_shield = True
        state.timers.start(EffectTimer.SHIELD, now_ms, settings.shield_ms)
    elif kind == PowerUpKind.SLOW_MOTION:
        fx.slow_motion = True
        state.timers.start(EffectTimer.SLOW_MOTION, now_ms, settings.slow_motion_ms)
    logger.info(f"Power-up collected: {kind.name}")


def absorb_hit(state: GameState) -> bool:
    """Spend the shield on a collision.

    Returns:
        True if a shield absorbed the hit, False if the hit is terminal
    """
    fx = state.effects
    if not fx.has_shield:
        return False

    fx.has_shield = False
    fx.combo = 0
    state.timers.cancel(EffectTimer.SHIELD)
    state.timers.cancel(EffectTimer.COMBO_DECAY)
    logger.info("Shield absorbed a hit")
    return True


def register_pass(state: GameState, now_ms: float, settings: GameSettings) -> None:
    """Score one passed obstacle and extend the combo."""
    fx = state.effects
    state.score += 1
    state.obstacle_speed = obstacle_speed(state.score, settings)

    fx.combo += 1
    fx.last_pass_ms = now_ms
    fx.show_combo = True
    state.timers.start(EffectTimer.COMBO_DECAY, now_ms, settings.combo_decay_ms)
    state.timers.start(EffectTimer.COMBO_POPUP, now_ms, settings.combo_popup_ms)


def expire_timers(
    state: GameState,
    now_ms: float,
    cosmetic_only: bool = False
) -> List[EffectTimer]:
    """Clear every effect whose deadline has been reached.

    Args:
        state: Session state
        now_ms: Current simulation time
        cosmetic_only: Only expire visual timers (used after game over)

    Returns:
        Expired timers, earliest first
    """
    keys = COSMETIC_TIMERS if cosmetic_only else None
    expired = state.timers.pop_expired(now_ms, keys)

    fx = state.effects
    for key in expired:
        if key == EffectTimer.INVINCIBILITY:
            fx.invincible = False
        elif key == EffectTimer.SHIELD:
            fx.has_shield = False
        elif key == EffectTimer.SLOW_MOTION:
            fx.slow_motion = False
        elif key == EffectTimer.COMBO_DECAY:
            fx.combo = 0
        elif key == EffectTimer.COMBO_POPUP:
            fx.show_combo = False
        elif key == EffectTimer.SCREEN_SHAKE:
            fx.screen_shake = False
        elif key == EffectTimer.JUMP_PUFF:
            fx.jump_puff = False

    return expired


# Cosmetic effects

def trigger_jump_puff(state: GameState, now_ms: float, settings: GameSettings) -> None:
    state.effects.jump_puff = True
    state.timers.start(EffectTimer.JUMP_PUFF, now_ms, settings.jump_puff_ms)


def trigger_crash(
    state: GameState,
    now_ms: float,
    settings: GameSettings,
    rng: random.Random
) -> None:
    """Burst debris from the player's centre and shake the screen."""
    cx, cy = state.player.center
    spread = settings.particle_speed
    state.particles = [
        Particle(
            id=state.take_particle_id(),
            x=cx,
            y=cy,
            vx=rng.uniform(-spread, spread),
            vy=rng.uniform(-spread, spread),
        )
        for _ in range(settings.particle_count)
    ]
    state.effects.screen_shake = True
    state.timers.start(EffectTimer.SCREEN_SHAKE, now_ms, settings.screen_shake_ms)


def step_particles(state: GameState, settings: GameSettings) -> None:
    """Move debris under its own gravity; drop it once below the field."""
    for p in state.particles:
        p.x += p.vx
        p.y += p.vy
        p.vy += settings.particle_gravity
    state.particles = [p for p in state.particles if p.y < settings.field_height]


def step_clouds(state: GameState, settings: GameSettings) -> None:
    """Drift clouds left, wrapping them back past the right edge."""
    for cloud in state.clouds:
        x = cloud.x - settings.cloud_speed
        cloud.x = x if x > settings.cloud_wrap_x else settings.field_width + 50.0


def scroll_ground(state: GameState, settings: GameSettings) -> None:
    """Scroll the ground texture; slow motion halves the scroll."""
    speed = settings.ground_speed
    if state.effects.slow_motion:
        speed *= settings.slow_motion_factor
    # fmod keeps the offset in (-tile, 0]
    state.ground_x = math.fmod(state.ground_x - speed, settings.ground_tile_width)
