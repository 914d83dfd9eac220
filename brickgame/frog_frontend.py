"""Curses drawing for the Frogger game."""

from __future__ import annotations

import curses
import time
from pathlib import Path

from .frog_backend import (
    BANNER_M,
    BANNER_N,
    BOARD_M,
    BOARD_N,
    BOARDS_BEGIN,
    DEFAULT_BANNER_DIR,
    EMPTY,
    FINISH_FILLED,
    HUD_WIDTH,
    INITIAL_TIMEOUT,
    INTRO_MESSAGE,
    MAP_PADDING,
    YOU_LOSE_FILE,
    YOU_WON_FILE,
    Board,
    GameStats,
    PathLike,
    PlayerPos,
)

# Line-drawing characters are only defined once curses is initialised.
_ACS_FALLBACK = {
    "ACS_ULCORNER": "+",
    "ACS_URCORNER": "+",
    "ACS_LLCORNER": "+",
    "ACS_LRCORNER": "+",
    "ACS_HLINE": "-",
    "ACS_VLINE": "|",
    "ACS_BLOCK": "#",
}


def _acs(name: str):
    return getattr(curses, name, _ACS_FALLBACK[name])


class BannerError(ValueError):
    """A banner file holds too few lines."""


def banner_path(stats: GameStats, base_dir: PathLike = DEFAULT_BANNER_DIR) -> Path:
    """The banner to show: a win while lives remain, a loss otherwise."""
    name = YOU_WON_FILE if stats.lives else YOU_LOSE_FILE
    return Path(base_dir) / name


def read_banner(path: PathLike) -> list[str]:
    """Read the banner's rows from a file."""
    wanted = BANNER_N - 1
    with open(path, encoding="utf-8") as handle:
        lines = handle.readlines()
    if len(lines) < wanted:
        raise BannerError(f"{path}: expected {wanted} lines, found {len(lines)}")
    return [line.rstrip("\n")[:BANNER_M] for line in lines[:wanted]]


class CursesView:
    """Draws the board, statistics and banners on a curses window."""

    banner_pause = 2.0

    def __init__(self, screen, banner_dir: PathLike = DEFAULT_BANNER_DIR) -> None:
        self.screen = screen
        self.banner_dir = banner_dir

    def _addch(self, y: int, x: int, ch) -> None:
        try:
            self.screen.addch(BOARDS_BEGIN + y, BOARDS_BEGIN + x, ch)
        except curses.error:
            pass

    def _addstr(self, y: int, x: int, text: str) -> None:
        try:
            self.screen.addstr(BOARDS_BEGIN + y, BOARDS_BEGIN + x, text)
        except curses.error:
            pass

    def print_overlay(self) -> None:
        """Draw the frames, HUD labels and the intro message."""
        hud_left = BOARD_M + 3
        hud_right = BOARD_M + HUD_WIDTH + 2
        self.print_rectangle(0, BOARD_N + 1, 0, BOARD_M + 1)
        self.print_rectangle(0, BOARD_N + 1, BOARD_M + 2, BOARD_M + HUD_WIDTH + 3)
        for top in (1, 4, 7, 10):
            self.print_rectangle(top, top + 2, hud_left, hud_right)
        for row, label in ((2, "LEVEL"), (5, "SCORE"), (8, "SPEED"), (11, "LIVES")):
            self._addstr(row, BOARD_M + 5, label)
        self._addstr(
            BOARD_N // 2, (BOARD_M - len(INTRO_MESSAGE)) // 2 + 1, INTRO_MESSAGE
        )

    def print_rectangle(self, top_y: int, bottom_y: int, left_x: int, right_x: int) -> None:
        hline = _acs("ACS_HLINE")
        vline = _acs("ACS_VLINE")
        self._addch(top_y, left_x, _acs("ACS_ULCORNER"))
        for x in range(left_x + 1, right_x):
            self._addch(top_y, x, hline)
        self._addch(top_y, right_x, _acs("ACS_URCORNER"))
        for y in range(top_y + 1, bottom_y):
            self._addch(y, left_x, vline)
            self._addch(y, right_x, vline)
        self._addch(bottom_y, left_x, _acs("ACS_LLCORNER"))
        for x in range(left_x + 1, right_x):
            self._addch(bottom_y, x, hline)
        self._addch(bottom_y, right_x, _acs("ACS_LRCORNER"))

    def print_stats(self, stats: GameStats) -> None:
        column = BOARD_M + 12
        self._addstr(2, column, str(stats.level))
        self._addstr(5, column, str(stats.score))
        self._addstr(8, column, str(stats.speed))
        self._addstr(11, column, str(stats.lives))

    def print_board(self, board: Board, frog: PlayerPos) -> None:
        self.print_cars(board)
        self._addstr(frog.y, frog.x, "@")

    def print_cars(self, board: Board) -> None:
        block = _acs("ACS_BLOCK")
        for i in range(MAP_PADDING + 1, BOARD_N - MAP_PADDING + 1):
            if i % 2 == (MAP_PADDING + 1) % 2:
                for j in range(1, BOARD_M + 1):
                    self._addch(i, j, block)
            else:
                row = board.ways[i - MAP_PADDING - 1]
                for j in range(1, BOARD_M + 1):
                    self._addch(i, j, " " if row[j - 1] == EMPTY else "]")

    def print_finished(self, board: Board) -> None:
        block = _acs("ACS_BLOCK")
        for i, cell in enumerate(board.finish[:BOARD_M]):
            self._addch(1, i + 1, block if cell == FINISH_FILLED else " ")

    def print_banner(self, stats: GameStats) -> None:
        """Show the win or loss banner for a moment, if it can be read."""
        self.screen.clear()
        try:
            rows = read_banner(banner_path(stats, self.banner_dir))
        except (OSError, ValueError):
            return
        block = _acs("ACS_BLOCK")
        for i in range(BANNER_N):
            row = rows[i] if i < len(rows) else ""
            for j in range(BANNER_M):
                self._addch(i, j, block if j < len(row) and row[j] == "#" else " ")
        self.screen.refresh()
        time.sleep(self.banner_pause)

    def clear_cell(self, y: int, x: int) -> None:
        self._addch(y, x, " ")

    def set_speed(self, speed: int) -> None:
        """Shorten the input timeout as the speed grows."""
        self.screen.timeout(INITIAL_TIMEOUT - speed * 15)