"""Terminal front end for the Tetris game."""

from __future__ import annotations

import argparse
import curses
import time

from .tetris import DEFAULT_HIGH_SCORE_PATH, Game, GameInfo, GameState, UserAction

# Arrow keys arrive as the last byte of their escape sequence because the
# keypad is left off.
_KEY_ACTIONS = {
    68: UserAction.LEFT,
    67: UserAction.RIGHT,
    ord(" "): UserAction.UP,
    66: UserAction.DOWN,
    ord("\n"): UserAction.START,
    ord("p"): UserAction.PAUSE,
    ord("q"): UserAction.TERMINATE,
}

FIELD_TOP = 3
FIELD_LEFT = 2
NEXT_TOP = 5
NEXT_LEFT = 28
INFO_LEFT = 26

PAIR_DEFAULT = 0
PAIR_EMPTY = 1
PAIR_BLOCK = 2
PAIR_TITLE = 3
PAIR_TEXT = 4

_FRAME_NS = 20_000_000
_SPEED_STEP_NS = 1_500_000

_HELP_LINES = (
    (24, 14, "Start: 'Enter'"),
    (25, 14, "Pause: 'p'"),
    (26, 14, "Exit: 'q'"),
    (27, 14, "Arrows to move: '<' '>'"),
    (28, 14, "Space to rotate: '___'"),
    (29, 14, "Arrow down to plant: 'v'"),
)


def key_to_action(ch) -> UserAction:
    """Map a key code (or one-character string) to a player action."""
    if isinstance(ch, str):
        ch = ord(ch) if len(ch) == 1 else -1
    return _KEY_ACTIONS.get(ch, UserAction.ACTION)


def frame_delay(elapsed: float, speed: int) -> float:
    """Seconds to wait so that a frame lasts as long as ``speed`` demands."""
    target = (_FRAME_NS - speed * _SPEED_STEP_NS) / 1e9
    return max(0.0, target - elapsed)


class TetrisScreen:
    """Draws game snapshots on a curses window and reads keys from it."""

    def __init__(self, screen) -> None:
        self.screen = screen
        screen.nodelay(True)
        screen.scrollok(True)

    @staticmethod
    def _attr(pair: int) -> int:
        return curses.color_pair(pair)

    def _put(self, y: int, x: int, text: str, pair: int) -> None:
        try:
            self.screen.addstr(y, x, text, self._attr(pair))
        except curses.error:
            pass

    def print_game(self, info: GameInfo) -> None:
        self.print_field(info)
        self.print_next_figure(info)
        self.print_info(info)
        self.screen.refresh()

    def print_field(self, info: GameInfo) -> None:
        for i, row in enumerate(info.field):
            for j, cell in enumerate(row):
                pair = PAIR_BLOCK if cell else PAIR_EMPTY
                self._put(i + FIELD_TOP, j * 2 + FIELD_LEFT, "  ", pair)

    def print_next_figure(self, info: GameInfo) -> None:
        for i, row in enumerate(info.next):
            for j, cell in enumerate(row):
                pair = PAIR_BLOCK if cell else PAIR_DEFAULT
                self._put(i + NEXT_TOP, j * 2 + NEXT_LEFT, "  ", pair)

    def print_info(self, info: GameInfo) -> None:
        self._put(1, 10, "TETRIS", PAIR_TITLE)
        self._put(3, INFO_LEFT, "Next figure:", PAIR_TEXT)
        self._put(11, INFO_LEFT, f"Lvl: {info.level}", PAIR_TEXT)
        self._put(13, INFO_LEFT, f"Speed: {info.speed}", PAIR_TEXT)
        self._put(15, INFO_LEFT, f"Score: {info.score}", PAIR_TEXT)
        try:
            self.screen.clrtoeol()
        except curses.error:
            pass
        self._put(17, INFO_LEFT, f"High score: {info.high_score}", PAIR_TEXT)
        if info.pause:
            self._put(12, 2, "Press ENTER to play.", PAIR_TEXT)
        self._put(24, 6, "Press:", PAIR_DEFAULT)
        for y, x, text in _HELP_LINES:
            self._put(y, x, text, PAIR_DEFAULT)

    def get_action(self) -> UserAction:
        return key_to_action(self.screen.getch())


def run(screen: TetrisScreen, game: Game | None = None) -> Game:
    """Play until the game is over and return the finished game."""
    if game is None:
        game = Game()
    while game.state != GameState.GAMEOVER:
        start = time.monotonic()
        game.user_input(screen.get_action(), False)
        info = game.update_current_state()
        if game.state == GameState.GAMEOVER:
            break
        screen.print_game(info)
        time.sleep(frame_delay(time.monotonic() - start, info.speed))
    return game


def _init_curses(window) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    try:
        curses.start_color()
    except curses.error:
        pass
    curses.init_pair(PAIR_EMPTY, curses.COLOR_BLACK, curses.COLOR_YELLOW)
    curses.init_pair(PAIR_BLOCK, curses.COLOR_GREEN, curses.COLOR_GREEN)
    curses.init_pair(PAIR_TITLE, curses.COLOR_YELLOW, curses.COLOR_BLACK)
    curses.init_pair(PAIR_TEXT, curses.COLOR_GREEN, curses.COLOR_BLACK)
    curses.cbreak()
    curses.noecho()
    window.keypad(False)


def _session(window, high_score_path) -> None:
    _init_curses(window)
    run(TetrisScreen(window), Game(high_score_path=high_score_path))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="tetris", description="Play Tetris in the terminal.")
    parser.add_argument(
        "--high-score-file",
        default=DEFAULT_HIGH_SCORE_PATH,
        help="file that keeps the high score",
    )
    args = parser.parse_args(argv)
    curses.wrapper(_session, args.high_score_file)
    return 0