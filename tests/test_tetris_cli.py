import curses
import random

import pytest

from brickgame.tetris import Game, GameInfo, GameState, UserAction
from brickgame.tetris_cli import TetrisScreen, frame_delay, key_to_action, run


class FakeWindow:
    def __init__(self, keys=()):
        self.keys = list(keys)
        self.cells = {}
        self.refreshes = 0
        self.clears = 0
        self.nodelay_set = None
        self.scroll_set = None

    def nodelay(self, flag):
        self.nodelay_set = flag

    def scrollok(self, flag):
        self.scroll_set = flag

    def addstr(self, y, x, text, attr=0):
        self.cells[(y, x)] = (text, attr)

    def clrtoeol(self):
        self.clears += 1

    def refresh(self):
        self.refreshes += 1

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


@pytest.fixture(autouse=True)
def color_pairs(monkeypatch):
    monkeypatch.setattr(curses, "color_pair", lambda n: n << 8)


@pytest.mark.parametrize(
    "key, action",
    [
        (68, UserAction.LEFT),
        (67, UserAction.RIGHT),
        (ord(" "), UserAction.UP),
        (66, UserAction.DOWN),
        (ord("\n"), UserAction.START),
        (ord("p"), UserAction.PAUSE),
        (ord("q"), UserAction.TERMINATE),
        (-1, UserAction.ACTION),
        (ord("x"), UserAction.ACTION),
        ("q", UserAction.TERMINATE),
    ],
)
def test_key_to_action(key, action):
    assert key_to_action(key) == action


def test_frame_delay_first_speed():
    assert frame_delay(0.0, 1) == pytest.approx(0.0185)


def test_frame_delay_never_negative():
    assert frame_delay(1.0, 1) == 0.0
    assert frame_delay(0.5, 10) == 0.0


def test_frame_delay_shorter_at_higher_speed():
    delays = [frame_delay(0.0, speed) for speed in range(1, 11)]
    assert delays == sorted(delays, reverse=True)
    assert all(d > 0 for d in delays)


def test_frame_delay_subtracts_elapsed_time():
    assert frame_delay(0.004, 2) == pytest.approx(frame_delay(0.0, 2) - 0.004)


def test_screen_setup_configures_window():
    window = FakeWindow()
    TetrisScreen(window)
    assert window.nodelay_set is True
    assert window.scroll_set is True


def test_print_field_uses_block_and_empty_pairs():
    window = FakeWindow()
    screen = TetrisScreen(window)
    screen.print_field(GameInfo(field=[[1, 0], [0, 0]]))
    assert window.cells[(3, 2)] == ("  ", 2 << 8)
    assert window.cells[(3, 4)] == ("  ", 1 << 8)
    assert window.cells[(4, 2)] == ("  ", 1 << 8)


def test_print_next_figure_position():
    window = FakeWindow()
    screen = TetrisScreen(window)
    nxt = [[0] * 5 for _ in range(5)]
    nxt[0][0] = 1
    screen.print_next_figure(GameInfo(next=nxt))
    assert window.cells[(5, 28)] == ("  ", 2 << 8)
    assert window.cells[(5, 30)] == ("  ", 0)


def test_print_info_shows_stats():
    window = FakeWindow()
    screen = TetrisScreen(window)
    screen.print_info(GameInfo(score=700, high_score=1500, level=2, speed=2, pause=False))
    assert window.cells[(15, 26)][0] == "Score: 700"
    assert window.cells[(17, 26)][0] == "High score: 1500"
    assert window.cells[(11, 26)][0] == "Lvl: 2"
    assert window.cells[(1, 10)][0] == "TETRIS"
    assert window.clears == 1
    assert (12, 2) not in window.cells


def test_print_info_pause_message():
    window = FakeWindow()
    screen = TetrisScreen(window)
    screen.print_info(GameInfo(pause=True))
    assert window.cells[(12, 2)][0] == "Press ENTER to play."


def test_get_action_reads_key():
    window = FakeWindow(keys=[ord("p")])
    assert TetrisScreen(window).get_action() == UserAction.PAUSE


def test_print_game_refreshes_once():
    window = FakeWindow()
    screen = TetrisScreen(window)
    screen.print_game(GameInfo(field=[[0]], next=[[0]]))
    assert window.refreshes == 1


def test_run_until_quit(tmp_path):
    game = Game(high_score_path=tmp_path / "hs.dat", rng=random.Random(1))
    window = FakeWindow(keys=[ord("\n"), -1, ord("q")])
    result = run(TetrisScreen(window), game)
    assert result is game
    assert game.state == GameState.GAMEOVER
    assert window.refreshes == 2
    assert window.cells[(15, 26)][0] == "Score: 0"