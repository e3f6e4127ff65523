"""Entities of the SKYHOP play field."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from skyhop.config.settings import GameSettings


class PowerUpKind(Enum):
    """Kinds of collectible power-ups."""
    SHIELD = auto()
    SLOW_MOTION = auto()


class BoundaryHit(Enum):
    """Which vertical boundary the player tried to cross."""
    CEILING = auto()
    FLOOR = auto()


class Medal(Enum):
    """End-of-session medal."""
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


@dataclass
class Player:
    """The player's bounding square and vertical motion."""
    x: float
    y: float
    velocity: float = 0.0
    size: int = 45

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.size

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2


@dataclass
class Obstacle:
    """A pipe pair with a passable gap starting at gap_y."""
    id: int
    x: float
    gap_y: float
    gap_size: float
    width: float
    passed: bool = False
    absorbed: bool = False  # A shield already took this pipe's hit

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_bottom(self) -> float:
        return self.gap_y + self.gap_size


@dataclass
class PowerUp:
    """A collectible drifting left at a fixed height."""
    id: int
    x: float
    y: float
    kind: PowerUpKind


@dataclass
class Particle:
    """A crash debris particle."""
    id: int
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class Cloud:
    """A background cloud."""
    id: int
    x: float
    y: float
    size: float


# Cloud layout of a fresh field (x, y, size)
INITIAL_CLOUDS = (
    (100.0, 80.0, 60.0),
    (400.0, 120.0, 80.0),
    (650.0, 60.0, 70.0),
)


def initial_clouds() -> list[Cloud]:
    return [
        Cloud(id=i + 1, x=x, y=y, size=size)
        for i, (x, y, size) in enumerate(INITIAL_CLOUDS)
    ]


def medal_for(score: int, settings: GameSettings) -> Optional[Medal]:
    """Medal earned by a final score, if any."""
    if score >= settings.gold_score:
        return Medal.GOLD
    if score >= settings.silver_score:
        return Medal.SILVER
    if score >= settings.bronze_score:
        return Medal.BRONZE
    return None
