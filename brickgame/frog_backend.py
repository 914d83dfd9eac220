"""Frogger model: board, frog position, statistics and level files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

ROWS_MAP = 21
COLS_MAP = 90
BOARDS_BEGIN = 2
MAP_PADDING = 3
BOARD_M = 30
BOARD_N = ROWS_MAP + MAP_PADDING * 2
HUD_WIDTH = 12

FROGSTART_X = BOARD_M // 2
FROGSTART_Y = BOARD_N
INITIAL_TIMEOUT = 150

BANNER_N = 10
BANNER_M = 100

LEVEL_CNT = 5
MAX_WIN_COUNT = 10

INTRO_MESSAGE = "Press ENTER to start!"
DEFAULT_LEVEL_DIR = "tests/levels"
DEFAULT_BANNER_DIR = "tests/game_progress"
YOU_WON_FILE = "you_won.txt"
YOU_LOSE_FILE = "you_lose.txt"

CAR = "]"
EMPTY = "0"
FINISH_FILLED = "0"


class LevelLoadError(ValueError):
    """A level file does not hold enough rows."""


@dataclass
class PlayerPos:
    """The frog's position on the board."""

    x: int = FROGSTART_X
    y: int = FROGSTART_Y

    def reset(self) -> None:
        """Put the frog back on its starting square."""
        self.x = FROGSTART_X
        self.y = FROGSTART_Y


@dataclass
class GameStats:
    score: int = 0
    level: int = 1
    speed: int = 1
    lives: int = 9
    won: bool = False


def _empty_ways() -> list[list[str]]:
    return [[EMPTY] * COLS_MAP for _ in range(ROWS_MAP)]


@dataclass
class Board:
    """The finish line and the lanes of traffic."""

    finish: list[str] = field(default_factory=lambda: [" "] * BOARD_M)
    ways: list[list[str]] = field(default_factory=_empty_ways)

    def fill_finish(self) -> None:
        """Clear the finish line."""
        self.finish = [" "] * BOARD_M

    def add_progress(self) -> None:
        """Fill the next stretch of the finish line."""
        position = 0
        while position < BOARD_M and self.finish[position] == FINISH_FILLED:
            position += 1
        for index in range(position, min(position + BOARD_M // 5, BOARD_M)):
            self.finish[index] = FINISH_FILLED

    def level_complete(self) -> bool:
        return all(cell == FINISH_FILLED for cell in self.finish)

    def shift(self) -> None:
        """Move every other lane one cell to the right, wrapping around."""
        for i in range(1, ROWS_MAP, 2):
            row = self.ways[i]
            self.ways[i] = [row[-1]] + row[:-1]

    def load_level(self, path: PathLike) -> None:
        """Read the lanes from a level file."""
        with open(path, encoding="utf-8") as handle:
            lines = handle.readlines()
        if len(lines) < ROWS_MAP:
            raise LevelLoadError(
                f"{path}: expected {ROWS_MAP} rows, found {len(lines)}"
            )
        ways = []
        for line in lines[:ROWS_MAP]:
            row = list(line.rstrip("\n")[:COLS_MAP])
            row.extend(EMPTY * (COLS_MAP - len(row)))
            ways.append(row)
        self.ways = ways


def level_path(level_dir: PathLike, level: int) -> Path:
    """The file that holds the given level."""
    return Path(level_dir) / f"level_{level}.txt"


def check_collide(frog: PlayerPos, board: Board) -> bool:
    """Whether the frog stands on a car."""
    return (
        MAP_PADDING < frog.y < ROWS_MAP + MAP_PADDING + 1
        and board.ways[frog.y - MAP_PADDING - 1][frog.x - 1] == CAR
    )


def check_finish_state(frog: PlayerPos) -> bool:
    """Whether the frog has reached the finish row."""
    return frog.y == 1