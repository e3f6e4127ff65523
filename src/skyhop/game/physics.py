"""Physics integrator: gravity, jumps and sideways steps."""

from typing import Optional

from skyhop.config.settings import GameSettings
from skyhop.game.entities import BoundaryHit, Player


def step_player(player: Player, settings: GameSettings) -> Optional[BoundaryHit]:
    """Advance the player by one physics tick.

    Gravity is added to the velocity first, then the candidate position
    is checked against the play field. A player resting exactly on a
    bound is fine; crossing it by any amount is a hit, and on a hit the
    position is left where it was.

    Returns:
        The boundary that would be crossed, or None
    """
    player.velocity += settings.gravity
    candidate = player.y + player.velocity

    if candidate < settings.ceiling_y:
        return BoundaryHit.CEILING
    if candidate > settings.floor_y:
        return BoundaryHit.FLOOR

    player.y = candidate
    return None


def jump(player: Player, settings: GameSettings) -> None:
    """Replace the current velocity with the jump impulse."""
    player.velocity = settings.jump_strength


def move(player: Player, direction: int, settings: GameSettings) -> None:
    """Step sideways; direction is -1 (left) or +1 (right)."""
    x = player.x + direction * settings.horizontal_speed
    player.x = max(0.0, min(settings.max_player_x, x))


def rebound(player: Player, hit: BoundaryHit, settings: GameSettings) -> None:
    """Put the player back inside the field after a shield took a boundary hit.

    The floor bounces the player up with a jump impulse; the ceiling
    just kills the upward velocity.
    """
    if hit == BoundaryHit.FLOOR:
        player.y = settings.floor_y
        player.velocity = settings.jump_strength
    else:
        player.y = settings.ceiling_y
        player.velocity = 0.0
