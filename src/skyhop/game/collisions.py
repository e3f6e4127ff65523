"""Collision and scoring engine.

Runs once per physics tick while a session is running: scrolls the
world, scores passed obstacles, resolves pipe hits against the
player's protection and collects power-ups.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from skyhop.config.settings import GameSettings
from skyhop.game.effects import absorb_hit, apply_power_up, effective_speed, register_pass
from skyhop.game.entities import Obstacle, Player, PowerUp
from skyhop.game.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class WorldStep:
    """What happened during one world tick."""
    speed: float = 0.0
    passed: List[int] = field(default_factory=list)
    absorbed: List[int] = field(default_factory=list)
    collected: List[PowerUp] = field(default_factory=list)
    terminal: bool = False
    terminal_obstacle: Optional[int] = None


def overlaps_horizontally(player: Player, obstacle: Obstacle) -> bool:
    return player.right > obstacle.x and player.left < obstacle.right


def hits_obstacle(player: Player, obstacle: Obstacle) -> bool:
    """AABB test of the player against the pipes around the gap."""
    if not overlaps_horizontally(player, obstacle):
        return False
    return player.top < obstacle.gap_y or player.bottom > obstacle.gap_bottom


def collect_power_ups(state: GameState, settings: GameSettings, now_ms: float) -> List[PowerUp]:
    """Collect every power-up within pickup range of the player's centre.

    Collected power-ups leave the field, so a second call in the same
    tick finds nothing new.
    """
    cx, cy = state.player.center
    collected = []
    remaining = []
    for power_up in state.power_ups:
        if math.hypot(power_up.x - cx, power_up.y - cy) < settings.pickup_radius:
            apply_power_up(state, power_up.kind, now_ms, settings)
            collected.append(power_up)
        else:
            remaining.append(power_up)
    state.power_ups = remaining
    return collected


def advance_world(state: GameState, settings: GameSettings, now_ms: float) -> WorldStep:
    """Apply one world tick.

    Order per tick: distance, scroll and cull, then per obstacle the
    scoring check before the collision check, then power-up pickup.
    A terminal hit ends the tick's collision work.
    """
    speed = effective_speed(state, settings)
    step = WorldStep(speed=speed)

    state.distance += speed

    for obstacle in state.obstacles:
        obstacle.x -= speed
    state.obstacles = [o for o in state.obstacles if o.x > -o.width]

    for power_up in state.power_ups:
        power_up.x -= speed
    state.power_ups = [p for p in state.power_ups if p.x > settings.power_up_exit_x]

    player = state.player
    for obstacle in state.obstacles:
        if not obstacle.passed and obstacle.right < player.left:
            obstacle.passed = True
            register_pass(state, now_ms, settings)
            step.passed.append(obstacle.id)

        if state.effects.invincible or obstacle.absorbed:
            continue
        if not hits_obstacle(player, obstacle):
            continue

        if absorb_hit(state):
            # One shield charge covers the whole pass through this pipe
            obstacle.absorbed = True
            step.absorbed.append(obstacle.id)
        else:
            step.terminal = True
            step.terminal_obstacle = obstacle.id
            logger.info(f"Hit obstacle {obstacle.id} at score {state.score}")
            return step

    step.collected = collect_power_ups(state, settings, now_ms)
    return step
