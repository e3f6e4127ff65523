import pytest

from skyhop.core.timers import EffectTimer
from skyhop.game.collisions import advance_world, collect_power_ups, hits_obstacle
from skyhop.game.effects import apply_power_up
from skyhop.game.entities import PowerUp, PowerUpKind

from tests.conftest import add_obstacle


# Default player: x 50..95, y 250..295


def test_world_scrolls_and_accumulates_distance(state, settings):
    obstacle = add_obstacle(state, settings, x=400, gap_y=100)

    step = advance_world(state, settings, 20)

    assert step.speed == 2.5
    assert obstacle.x == 397.5
    assert state.distance == 2.5


def test_obstacle_scores_once(state, settings):
    obstacle = add_obstacle(state, settings, x=-8, gap_y=100)

    step = advance_world(state, settings, 20)
    assert step.passed == [obstacle.id]
    assert state.score == 1
    assert obstacle.passed

    step = advance_world(state, settings, 40)
    assert step.passed == []
    assert state.score == 1


def test_right_edge_touching_player_left_does_not_score(state, settings):
    add_obstacle(state, settings, x=-7.5, gap_y=100)

    advance_world(state, settings, 20)

    # right edge == 50.0 == player left
    assert state.score == 0


def test_offscreen_entities_are_culled(state, settings):
    add_obstacle(state, settings, x=-58, gap_y=100)
    state.power_ups.append(PowerUp(id=0, x=-28.0, y=100.0, kind=PowerUpKind.SHIELD))

    advance_world(state, settings, 20)

    assert state.obstacles == []
    assert state.power_ups == []


def test_pipe_hit_is_terminal(state, settings):
    obstacle = add_obstacle(state, settings, x=40, gap_y=0)

    assert hits_obstacle(state.player, obstacle)
    step = advance_world(state, settings, 20)

    assert step.terminal
    assert step.terminal_obstacle == obstacle.id


def test_player_inside_gap_is_safe(state, settings):
    add_obstacle(state, settings, x=40, gap_y=200)

    step = advance_world(state, settings, 20)

    assert not step.terminal


def test_invincibility_ignores_pipes(state, settings):
    state.effects.invincible = True
    add_obstacle(state, settings, x=40, gap_y=0)

    step = advance_world(state, settings, 20)

    assert not step.terminal
    assert step.absorbed == []


def test_shield_absorbs_a_pipe_once(state, settings):
    apply_power_up(state, PowerUpKind.SHIELD, 0, settings)
    state.effects.combo = 4
    obstacle = add_obstacle(state, settings, x=40, gap_y=0)

    step = advance_world(state, settings, 20)

    assert not step.terminal
    assert step.absorbed == [obstacle.id]
    assert obstacle.absorbed
    assert not state.effects.has_shield
    assert state.effects.combo == 0

    # Still overlapping the same pipe: no second hit
    step = advance_world(state, settings, 40)
    assert not step.terminal


def test_scoring_runs_before_collision_and_terminal_hit_ends_the_tick(state, settings):
    first = add_obstacle(state, settings, x=-8, gap_y=100)
    blocker = add_obstacle(state, settings, x=40, gap_y=0)
    late = add_obstacle(state, settings, x=-9, gap_y=100)

    step = advance_world(state, settings, 20)

    assert step.passed == [first.id]
    assert step.terminal_obstacle == blocker.id
    assert state.score == 1
    assert not late.passed


def test_passing_the_difficulty_step_speeds_up(state, settings):
    state.score = 14
    add_obstacle(state, settings, x=-8, gap_y=100)

    advance_world(state, settings, 20)

    assert state.score == 15
    assert state.obstacle_speed == pytest.approx(2.8)


def test_slow_motion_halves_obstacle_motion(state, settings):
    apply_power_up(state, PowerUpKind.SLOW_MOTION, 0, settings)
    obstacle = add_obstacle(state, settings, x=400, gap_y=100)

    advance_world(state, settings, 20)

    assert obstacle.x == 398.75
    assert state.distance == 1.25


def test_power_up_collected_within_pickup_radius(state, settings):
    # Centre of the player is (72.5, 272.5); the power-up scrolls onto it
    state.power_ups.append(PowerUp(id=0, x=75.0, y=272.5, kind=PowerUpKind.SHIELD))
    state.power_ups.append(PowerUp(id=1, x=300.0, y=272.5, kind=PowerUpKind.SLOW_MOTION))

    step = advance_world(state, settings, 100)

    assert [p.id for p in step.collected] == [0]
    assert state.effects.has_shield
    assert not state.effects.slow_motion
    assert [p.id for p in state.power_ups] == [1]
    assert state.timers.deadline(EffectTimer.SHIELD) == 5100


def test_collecting_twice_in_one_tick_is_idempotent(state, settings):
    state.power_ups.append(PowerUp(id=0, x=72.5, y=272.5, kind=PowerUpKind.SHIELD))

    first = collect_power_ups(state, settings, 100)
    second = collect_power_ups(state, settings, 100)

    assert len(first) == 1
    assert second == []
    assert state.timers.deadline(EffectTimer.SHIELD) == 5100
