from skyhop.game.entities import BoundaryHit, Player
from skyhop.game.physics import jump, move, rebound, step_player


def make_player(y, velocity=0.0):
    return Player(x=50.0, y=y, velocity=velocity, size=45)


def test_gravity_is_applied_before_position(settings):
    player = make_player(100.0)

    assert step_player(player, settings) is None
    assert player.velocity == 0.5
    assert player.y == 100.5


def test_resting_exactly_on_floor_is_not_a_hit(settings):
    player = make_player(374.0, velocity=0.5)

    assert step_player(player, settings) is None
    assert player.y == 375.0


def test_crossing_floor_by_one_unit_is_a_hit(settings):
    player = make_player(375.0, velocity=0.5)

    assert step_player(player, settings) == BoundaryHit.FLOOR
    # Position is not committed on a hit
    assert player.y == 375.0


def test_reaching_ceiling_exactly_is_not_a_hit(settings):
    player = make_player(10.0, velocity=-10.5)

    assert step_player(player, settings) is None
    assert player.y == 0.0


def test_crossing_ceiling_is_a_hit(settings):
    player = make_player(0.0, velocity=-1.5)

    assert step_player(player, settings) == BoundaryHit.CEILING
    assert player.y == 0.0


def test_jump_replaces_velocity(settings):
    player = make_player(200.0, velocity=7.5)

    jump(player, settings)

    assert player.velocity == -10.0


def test_move_is_clamped_to_the_field(settings):
    player = make_player(200.0)
    player.x = 4.0

    move(player, -1, settings)
    assert player.x == 0.0

    move(player, 1, settings)
    assert player.x == 8.0

    player.x = 750.0
    move(player, 1, settings)
    assert player.x == 755.0


def test_rebound_puts_player_back_inside(settings):
    player = make_player(375.0, velocity=12.0)
    rebound(player, BoundaryHit.FLOOR, settings)
    assert player.y == 375.0
    assert player.velocity == -10.0

    player = make_player(0.0, velocity=-8.0)
    rebound(player, BoundaryHit.CEILING, settings)
    assert player.y == 0.0
    assert player.velocity == 0.0
