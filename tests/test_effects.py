import math
import random

import pytest

from skyhop.core.timers import EffectTimer
from skyhop.game.effects import (
    absorb_hit,
    apply_power_up,
    effective_speed,
    expire_timers,
    obstacle_speed,
    register_pass,
    scroll_ground,
    step_clouds,
    step_particles,
    trigger_crash,
)
from skyhop.game.entities import Medal, Particle, PowerUpKind, medal_for


@pytest.mark.parametrize("score, expected", [
    (0, 2.5),
    (14, 2.5),
    (15, 2.8),
    (29, 2.8),
    (30, 3.1),
    (45, 3.4),
])
def test_difficulty_ramp(settings, score, expected):
    assert obstacle_speed(score, settings) == pytest.approx(expected)


def test_slow_motion_halves_speed_and_reverts_exactly(state, settings):
    state.obstacle_speed = 3.1
    apply_power_up(state, PowerUpKind.SLOW_MOTION, 0, settings)

    assert effective_speed(state, settings) == pytest.approx(1.55)

    expire_timers(state, 3000)

    assert not state.effects.slow_motion
    assert effective_speed(state, settings) == 3.1


def test_shield_pickup_restarts_instead_of_stacking(state, settings):
    apply_power_up(state, PowerUpKind.SHIELD, 0, settings)
    apply_power_up(state, PowerUpKind.SHIELD, 4000, settings)

    assert state.effects.has_shield
    assert state.timers.deadline(EffectTimer.SHIELD) == 9000

    expire_timers(state, 5000)
    assert state.effects.has_shield

    expire_timers(state, 9000)
    assert not state.effects.has_shield


def test_absorb_hit_consumes_shield_and_resets_combo(state, settings):
    assert not absorb_hit(state)

    apply_power_up(state, PowerUpKind.SHIELD, 0, settings)
    register_pass(state, 100, settings)
    register_pass(state, 200, settings)
    assert state.effects.combo == 2

    assert absorb_hit(state)
    assert not state.effects.has_shield
    assert state.effects.combo == 0
    assert not state.timers.is_active(EffectTimer.SHIELD)
    assert not state.timers.is_active(EffectTimer.COMBO_DECAY)
    # Score is kept
    assert state.score == 2


def test_register_pass_updates_score_speed_and_combo(state, settings):
    state.score = 14

    register_pass(state, 1000, settings)

    assert state.score == 15
    assert state.obstacle_speed == pytest.approx(2.8)
    assert state.effects.combo == 1
    assert state.effects.last_pass_ms == 1000
    assert state.effects.show_combo
    assert state.timers.deadline(EffectTimer.COMBO_DECAY) == 4000
    assert state.timers.deadline(EffectTimer.COMBO_POPUP) == 2000


def test_combo_decays_after_window_and_pass_restarts_it(state, settings):
    register_pass(state, 0, settings)
    register_pass(state, 2000, settings)

    expire_timers(state, 3000)
    assert state.effects.combo == 2
    assert not state.effects.show_combo

    expire_timers(state, 5000)
    assert state.effects.combo == 0


def test_cosmetic_only_expiry_leaves_gameplay_timers(state, settings):
    apply_power_up(state, PowerUpKind.SHIELD, 0, settings)
    trigger_crash(state, 0, settings, random.Random(1))

    expired = expire_timers(state, 10000, cosmetic_only=True)

    assert expired == [EffectTimer.SCREEN_SHAKE]
    assert not state.effects.screen_shake
    assert state.effects.has_shield


def test_crash_bursts_particles_from_player_centre(state, settings):
    trigger_crash(state, 500, settings, random.Random(1))

    assert len(state.particles) == 15
    cx, cy = state.player.center
    assert all(p.x == cx and p.y == cy for p in state.particles)
    assert all(abs(p.vx) <= 6 and abs(p.vy) <= 6 for p in state.particles)
    assert state.effects.screen_shake
    assert state.timers.deadline(EffectTimer.SCREEN_SHAKE) == 700


def test_particles_fall_and_leave_the_field(state, settings):
    state.particles = [
        Particle(id=0, x=100.0, y=100.0, vx=1.0, vy=-2.0),
        Particle(id=1, x=100.0, y=499.0, vx=0.0, vy=2.0),
    ]

    step_particles(state, settings)

    assert len(state.particles) == 1
    p = state.particles[0]
    assert (p.x, p.y, p.vy) == (101.0, 98.0, -1.5)


def test_clouds_wrap_past_right_edge(state, settings):
    state.clouds[0].x = -99.5
    state.clouds[1].x = 300.0

    step_clouds(state, settings)

    assert state.clouds[0].x == 850.0
    assert state.clouds[1].x == 299.5


def test_ground_scroll_wraps_and_slows(state, settings):
    state.ground_x = -99.0
    scroll_ground(state, settings)
    assert state.ground_x == pytest.approx(math.fmod(-101.5, 100.0))

    state.ground_x = 0.0
    state.effects.slow_motion = True
    scroll_ground(state, settings)
    assert state.ground_x == -1.25


@pytest.mark.parametrize("score, medal", [
    (0, None),
    (14, None),
    (15, Medal.BRONZE),
    (30, Medal.SILVER),
    (49, Medal.SILVER),
    (50, Medal.GOLD),
])
def test_medals(settings, score, medal):
    assert medal_for(score, settings) == medal
