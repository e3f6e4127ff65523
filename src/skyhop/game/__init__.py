"""SKYHOP simulation core."""

from skyhop.game.entities import (
    BoundaryHit,
    Cloud,
    Medal,
    Obstacle,
    Particle,
    Player,
    PowerUp,
    PowerUpKind,
)
from skyhop.game.state import EffectState, GameState, Snapshot
from skyhop.game.session import GameSession

__all__ = [
    "BoundaryHit",
    "Cloud",
    "Medal",
    "Obstacle",
    "Particle",
    "Player",
    "PowerUp",
    "PowerUpKind",
    "EffectState",
    "GameState",
    "Snapshot",
    "GameSession",
]
