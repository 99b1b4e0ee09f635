import pytest

from voxelkit.game import Game, Key


@pytest.fixture
def game():
    return Game(800, 600)


def test_initial_status(game):
    assert game.status_lines(60.0) == ["XYZ: (0, 1, 0)", "FPS: 60.0"]


def test_initial_flags(game):
    assert game.locked is True
    assert game.wireframe is False
    assert game.speed == 25.5


def test_forward_then_back_returns_to_start(game):
    start = game.status_lines(0.0)[0]
    game.handle_input([Key.W], 0.0, 1.0)
    moved = game.status_lines(0.0)[0]
    assert moved != start
    game.handle_input([Key.S], 0.0, 1.0)
    assert game.status_lines(0.0)[0] == start


def test_strafe_left_right_returns_to_start(game):
    start = game.status_lines(0.0)[0]
    game.handle_input([Key.D], 0.0, 0.5)
    assert game.status_lines(0.0)[0] != start
    game.handle_input([Key.A], 0.0, 0.5)
    assert game.status_lines(0.0)[0] == start


def test_zero_speed_applies_after_update(game):
    start = game.status_lines(0.0)[0]
    game.speed = 0.0
    game.update(0.016)
    game.handle_input([Key.W, Key.D], 0.0, 1.0)
    assert game.status_lines(0.0)[0] == start
    assert game.elapsed == pytest.approx(0.016)


def test_speed_change_waits_for_update(game):
    start = game.status_lines(0.0)[0]
    game.speed = 0.0
    game.handle_input([Key.W], 0.0, 1.0)
    assert game.status_lines(0.0)[0] != start


def test_cursor_lock_toggle_cooldown(game):
    game.handle_input([Key.C], 0.4, 0.0)
    assert game.locked is True
    game.handle_input([Key.C], 1.0, 0.0)
    assert game.locked is False
    game.handle_input([Key.C], 1.2, 0.0)
    assert game.locked is False
    game.handle_input([Key.C], 1.6, 0.0)
    assert game.locked is True


def test_wireframe_toggle_independent(game):
    game.handle_input([Key.B], 1.0, 0.0)
    assert game.wireframe is True
    assert game.locked is True
    game.handle_input([Key.B, Key.C], 1.3, 0.0)
    assert game.wireframe is True
    assert game.locked is False


def test_resize_updates_size(game):
    before = game.projection.copy()
    game.handle_resize(1600, 600)
    assert (game.width, game.height) == (1600, 600)
    assert game.projection[0, 0] == pytest.approx(before[0, 0] * 800 / 1600)


def test_resize_zero_height_raises(game):
    with pytest.raises(ValueError):
        game.handle_resize(800, 0)