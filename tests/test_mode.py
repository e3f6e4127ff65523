import numpy as np
import pytest

from skyhop.config.settings import GameSettings
from skyhop.core.events import EventBus, EventType, intent_event, key_event
from skyhop.core.state import SessionMode
from skyhop.modes.base import ModeContext, ModePhase
from skyhop.modes.skyhop import GROUND, SKY, SkyhopMode
from skyhop.storage.high_score import MemoryHighScoreStore


@pytest.fixture
def mode():
    bus = EventBus()
    context = ModeContext(
        event_bus=bus,
        settings=GameSettings(seed=8, gravity=0.0),
        high_score_store=MemoryHighScoreStore(initial=11),
    )
    mode = SkyhopMode(context)
    mode.enter()
    return mode


def test_enter_creates_session(mode):
    assert mode.phase == ModePhase.ACTIVE
    assert mode.session.mode == SessionMode.NOT_STARTED
    assert mode.snapshot.high_score == 11


def test_keys_map_to_intents_through_the_bus(mode):
    bus = mode.context.event_bus

    bus.emit(key_event("space"))
    assert mode.session.mode == SessionMode.RUNNING

    bus.emit(key_event("space"))
    assert mode.session.state.player.velocity == -10.0

    bus.emit(key_event("right"))
    assert mode.session.state.player.x == 58.0
    bus.emit(key_event("left"))
    assert mode.session.state.player.x == 50.0

    bus.emit(key_event("p"))
    assert mode.snapshot.is_paused

    assert not mode.handle_input(key_event("x"))


def test_intent_events_are_forwarded(mode):
    assert mode.handle_input(intent_event(EventType.START_OR_RESTART))
    assert mode.handle_input(intent_event(EventType.TOGGLE_PAUSE))
    assert mode.session.mode == SessionMode.PAUSED


def test_update_advances_the_session(mode):
    mode.handle_input(intent_event(EventType.START_OR_RESTART))

    mode.update(100)

    assert mode.time_in_mode == 100
    assert mode.snapshot.distance == 12.5


def test_render_draws_sky_and_ground(mode):
    mode.handle_input(intent_event(EventType.START_OR_RESTART))
    buffer = np.zeros((500, 800, 3), dtype=np.uint8)

    mode.render_main(buffer)

    assert tuple(buffer[10, 10]) == SKY
    assert tuple(buffer[490, 5]) == GROUND


def test_render_dims_while_paused(mode):
    mode.handle_input(intent_event(EventType.START_OR_RESTART))
    mode.handle_input(intent_event(EventType.TOGGLE_PAUSE))
    buffer = np.zeros((500, 800, 3), dtype=np.uint8)

    mode.render_main(buffer)

    assert tuple(buffer[10, 10]) != SKY


def test_hud_lines(mode):
    assert "SPACE to start" in mode.hud_lines()[-1]

    mode.handle_input(intent_event(EventType.START_OR_RESTART))
    lines = mode.hud_lines()

    assert lines[0] == "Score: 0 | Distance: 0m"
    assert lines[1] == "High Score: 11"


def test_exit_reports_result_and_unsubscribes(mode):
    mode.handle_input(intent_event(EventType.START_OR_RESTART))

    result = mode.exit()

    assert result.mode_name == "skyhop"
    assert result.data["score"] == 0
    assert mode.phase == ModePhase.OUTRO
    assert mode.session.ticker is None
    assert not mode.is_active

    mode.context.event_bus.emit(key_event("p"))
    assert mode.session.mode == SessionMode.RUNNING
