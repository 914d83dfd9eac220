import random

import pytest

from brickgame.tetris import (
    TEMPLATES,
    Field,
    Figure,
    Game,
    GameInfo,
    GameState,
    UserAction,
    load_high_score,
    save_high_score,
)


@pytest.fixture
def game(tmp_path):
    return Game(high_score_path=tmp_path / "hs.dat", rng=random.Random(1))


def _cell_count(grid):
    return sum(sum(1 for v in row if v) for row in grid)


def _fill_rows(game, n):
    for r in range(n):
        game.field.blocks[game.field.height - 1 - r] = [1] * game.field.width


def test_every_spawned_figure_shows_four_cells(game):
    for index in range(len(TEMPLATES)):
        game.next = index
        game.drop_new_figure()
        assert _cell_count(game.print_field()) == 4
        assert _cell_count(game.figure.blocks) == 4


def test_four_rotations_return_original():
    for template in TEMPLATES:
        fig = Figure(blocks=[list(r) for r in template], x=2, y=3)
        turned = fig.rotated().rotated().rotated().rotated()
        assert turned.blocks == fig.blocks
        assert (turned.x, turned.y) == (2, 3)
        assert _cell_count(fig.rotated().blocks) == 4


def test_rotating_i_figure_makes_it_horizontal():
    fig = Figure(blocks=[list(r) for r in TEMPLATES[0]])
    rotated = fig.rotated()
    assert sum(rotated.blocks[2]) == 4


def test_line_filled_and_erase(tmp_path):
    field = Field(4, 5)
    field.blocks[4] = [1] * 4
    field.blocks[3] = [1] * 4
    field.blocks[2] = [0, 1, 0, 0]
    assert field.line_filled(4)
    assert not field.line_filled(2)
    assert field.erase_lines() == 2
    assert field.blocks[4] == [0, 1, 0, 0]
    assert _cell_count(field.blocks) == 1


def test_drop_line_zero_clears_top_row():
    field = Field(3, 3)
    field.blocks[0] = [1, 1, 1]
    field.drop_line(0)
    assert field.blocks[0] == [0, 0, 0]


def test_game_starts_in_init(game):
    assert game.state == GameState.INIT
    assert game.pause is True
    assert game.score == 0
    assert game.figure.y == 0
    assert not game.collision()
    assert _cell_count(game.print_field()) == 4


def test_invalid_count_rejected(tmp_path):
    with pytest.raises(ValueError):
        Game(count=len(TEMPLATES) + 1, high_score_path=tmp_path / "hs.dat")


def test_user_input_hold_is_ignored(game):
    game.user_input(UserAction.LEFT, False)
    assert game.action == UserAction.LEFT
    game.user_input(UserAction.RIGHT, True)
    assert game.action == UserAction.LEFT
    game.user_input(42, False)
    assert game.action == UserAction.ACTION


def test_start_and_pause_toggle(game):
    game.user_input(UserAction.START, False)
    game.calculate()
    assert game.state == GameState.MOVING
    assert game.pause is False
    game.user_input(UserAction.PAUSE, False)
    game.calculate()
    assert game.state == GameState.PAUSE
    assert game.pause is True
    x = game.figure.x
    game.user_input(UserAction.RIGHT, False)
    game.calculate()
    assert game.figure.x == x
    game.user_input(UserAction.PAUSE, False)
    game.calculate()
    assert game.state == GameState.MOVING
    assert game.pause is False


def test_moving_left_stops_at_wall(game):
    game.user_input(UserAction.START, False)
    game.calculate()
    game.user_input(UserAction.LEFT, False)
    for _ in range(10):
        game.calculate()
    field = game.print_field()
    assert _cell_count(field) == 4
    assert any(row[0] for row in field)


@pytest.mark.parametrize("lines,points", [(0, 0), (1, 100), (2, 300), (3, 700), (4, 1500)])
def test_count_score(game, lines, points):
    _fill_rows(game, lines)
    game.count_score()
    assert game.score == points
    assert _cell_count(game.field.blocks) == 0


def test_high_score_saved(tmp_path):
    path = tmp_path / "hs.dat"
    game = Game(high_score_path=path, rng=random.Random(2))
    _fill_rows(game, 1)
    game.count_score()
    assert game.high_score == game.score
    assert load_high_score(path) == game.score
    assert Game(high_score_path=path).high_score == game.score


def test_level_rises_with_score(game):
    game.score = 500
    _fill_rows(game, 1)
    game.count_score()
    assert game.level == 2
    assert game.speed == game.level


def test_level_capped(game):
    game.score = 100000
    _fill_rows(game, 1)
    game.count_score()
    assert game.level == 1


def test_high_score_round_trip(tmp_path):
    path = tmp_path / "score.dat"
    save_high_score(1234, path)
    assert load_high_score(path) == 1234


def test_high_score_missing_or_bad(tmp_path):
    assert load_high_score(tmp_path / "missing.dat") == 0
    bad = tmp_path / "bad.dat"
    bad.write_text("abc")
    assert load_high_score(bad) == 0


def test_figure_falls_and_plants(game):
    game.next = 1
    game.drop_new_figure()
    for _ in range(100):
        game.calc_one()
        if game.state == GameState.DROP:
            break
    assert game.state == GameState.DROP
    assert _cell_count(game.field.blocks) == 4
    assert game.field.blocks[-1].count(1) == 2


def test_game_over_when_spawn_blocked(game):
    for r in range(game.field.height):
        row = [1] * game.field.width
        row[0] = 0
        game.field.blocks[r] = row
    game.calc_one()
    assert game.state == GameState.GAMEOVER


def test_terminate_ends_game(game):
    game.user_input(UserAction.TERMINATE, False)
    info = game.update_current_state()
    assert game.state == GameState.GAMEOVER
    assert info == GameInfo()


def test_update_current_state_snapshot(game):
    game.user_input(UserAction.START, False)
    info = game.update_current_state()
    assert len(info.field) == game.field.height
    assert all(len(row) == game.field.width for row in info.field)
    assert info.next == [list(r) for r in TEMPLATES[game.next]]
    assert info.score == game.score
    assert info.level == game.level
    assert info.pause is False


def test_rotation_blocked_keeps_figure(game):
    game.figure = Figure(blocks=[list(r) for r in TEMPLATES[0]], x=-2, y=5)
    before = [list(r) for r in game.figure.blocks]
    game.handle_rotation()
    assert game.figure.blocks == before


def test_rotation_applies_when_free(game):
    game.figure = Figure(blocks=[list(r) for r in TEMPLATES[0]], x=3, y=5)
    expected = game.figure.rotated().blocks
    game.handle_rotation()
    assert game.figure.blocks == expected


def test_collision_detects_planted_block(game):
    game.figure = Figure(blocks=[list(r) for r in TEMPLATES[1]], x=0, y=0)
    assert not game.collision()
    game.field.blocks[1][1] = 1
    assert game.collision()
    assert game.state == GameState.COLLISION