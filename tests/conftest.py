import random

import pytest

from skyhop.config.settings import GameSettings
from skyhop.core.events import EventBus
from skyhop.game.entities import Obstacle
from skyhop.game.session import GameSession
from skyhop.game.state import GameState
from skyhop.storage.high_score import MemoryHighScoreStore


@pytest.fixture
def settings():
    return GameSettings(seed=1234)


@pytest.fixture
def still_settings():
    """No gravity, so the player hovers at its start height."""
    return GameSettings(seed=1234, gravity=0.0)


@pytest.fixture
def state(settings):
    return GameState.fresh(settings, generation=1)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def make_session(bus, store):
    def factory(settings, high_score_store=None):
        return GameSession(
            settings=settings,
            store=high_score_store or store,
            event_bus=bus,
            rng=random.Random(99),
        )
    return factory


def add_obstacle(state, settings, x, gap_y, gap_size=None):
    obstacle = Obstacle(
        id=state.take_obstacle_id(),
        x=float(x),
        gap_y=float(gap_y),
        gap_size=float(gap_size if gap_size is not None else settings.gap_size),
        width=float(settings.obstacle_width),
    )
    state.obstacles.append(obstacle)
    return obstacle
