"""Obstacle and power-up spawning."""

import logging
import random
from typing import Optional

from skyhop.config.settings import GameSettings
from skyhop.game.entities import Obstacle, PowerUp, PowerUpKind
from skyhop.game.state import GameState

logger = logging.getLogger(__name__)


class Spawner:
    """Places new obstacles and power-ups at the right edge of the field.

    Randomness comes from the injected generator so a seeded session
    replays identically.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random(settings.seed)

    def spawn_obstacle(self, state: GameState) -> Obstacle:
        """Append one obstacle with a uniformly random gap start."""
        low, high = self.settings.gap_range
        obstacle = Obstacle(
            id=state.take_obstacle_id(),
            x=float(self.settings.field_width),
            gap_y=self.rng.uniform(low, high),
            gap_size=float(self.settings.gap_size),
            width=float(self.settings.obstacle_width),
        )
        state.obstacles.append(obstacle)
        logger.debug(f"Obstacle {obstacle.id} spawned, gap at {obstacle.gap_y:.1f}")
        return obstacle

    def maybe_spawn_power_up(self, state: GameState) -> Optional[PowerUp]:
        """Roll the spawn chance; on success append one power-up."""
        cfg = self.settings
        if self.rng.random() >= cfg.power_up_chance:
            return None

        kind = PowerUpKind.SHIELD if self.rng.random() < cfg.shield_share else PowerUpKind.SLOW_MOTION
        power_up = PowerUp(
            id=state.take_power_up_id(),
            x=float(cfg.field_width),
            y=self.rng.uniform(cfg.power_up_margin_top, cfg.field_height - cfg.power_up_margin_bottom),
            kind=kind,
        )
        state.power_ups.append(power_up)
        logger.debug(f"Power-up {power_up.id} spawned: {kind.name}")
        return power_up
