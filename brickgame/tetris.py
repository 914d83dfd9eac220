"""Tetris game logic: field, falling figures, scoring and levels."""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from dataclasses import field as dc_field
from enum import IntEnum
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_HIGH_SCORE_PATH = "high_score.dat"

_LINE_SCORES = {0: 0, 1: 100, 2: 300, 3: 700}
_FOUR_OR_MORE_LINES = 1500
_POINTS_PER_LEVEL = 600
_MAX_LEVEL = 10


class UserAction(IntEnum):
    """Input actions a player can issue."""

    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7


class GameState(IntEnum):
    """States of the game state machine."""

    INIT = 0
    DROP = 1
    MOVING = 2
    COLLISION = 3
    PAUSE = 4
    GAMEOVER = 5


def _grid(rows: str) -> tuple[tuple[int, ...], ...]:
    return tuple(tuple(int(ch) for ch in row) for row in rows.split())


# Order matters: a figure's index is what ``Game.next`` refers to.
TEMPLATES: tuple[tuple[tuple[int, ...], ...], ...] = (
    _grid("00100 00100 00100 00100 00000"),  # I
    _grid("00000 01100 01100 00000 00000"),  # O
    _grid("00000 00100 01110 00000 00000"),  # T
    _grid("00000 00000 00110 01100 00000"),  # S
    _grid("00000 00000 01100 00110 00000"),  # Z
    _grid("00000 00100 00100 01100 00000"),  # J
    _grid("00000 00100 00100 00110 00000"),  # L
)
TEMPLATE_SIZE = 5


@dataclass
class GameInfo:
    """Snapshot of the game handed to a front end."""

    field: list[list[int]] = dc_field(default_factory=list)
    next: list[list[int]] = dc_field(default_factory=list)
    score: int = 0
    high_score: int = 0
    level: int = 0
    speed: int = 0
    pause: bool = False


@dataclass
class Figure:
    """A square matrix of blocks placed at (x, y) on the field."""

    blocks: list[list[int]]
    x: int = 0
    y: int = 0

    @property
    def size(self) -> int:
        return len(self.blocks)

    def rotated(self) -> Figure:
        """Return a copy turned a quarter counter-clockwise, at the same place."""
        size = self.size
        blocks = [
            [self.blocks[j][size - 1 - i] for j in range(size)] for i in range(size)
        ]
        return Figure(blocks=blocks, x=self.x, y=self.y)


class Field:
    """The playing field: ``height`` rows of ``width`` cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.blocks = [[0] * width for _ in range(height)]

    def line_filled(self, row: int) -> bool:
        return all(self.blocks[row])

    def drop_line(self, row: int) -> None:
        """Remove ``row`` by shifting every row above it down by one."""
        if row == 0:
            self.blocks[0] = [0] * self.width
            return
        for k in range(row, 0, -1):
            self.blocks[k] = list(self.blocks[k - 1])

    def erase_lines(self) -> int:
        """Remove every filled line and return how many were removed."""
        count = 0
        for row in range(self.height - 1, -1, -1):
            while self.line_filled(row):
                self.drop_line(row)
                count += 1
        return count


def load_high_score(path: PathLike = DEFAULT_HIGH_SCORE_PATH) -> int:
    """Read the stored high score, or 0 if there is none."""
    try:
        text = Path(path).read_text()
    except OSError:
        return 0
    parts = text.split()
    if not parts:
        return 0
    try:
        return int(parts[0])
    except ValueError:
        return 0


def save_high_score(high_score: int, path: PathLike = DEFAULT_HIGH_SCORE_PATH) -> None:
    """Store the high score; a file that cannot be written is ignored."""
    try:
        Path(path).write_text(str(high_score))
    except OSError:
        pass


class Game:
    """A running game of Tetris."""

    def __init__(
        self,
        width: int = 10,
        height: int = 20,
        figure_size: int = TEMPLATE_SIZE,
        count: int = len(TEMPLATES),
        high_score_path: PathLike = DEFAULT_HIGH_SCORE_PATH,
        rng: random.Random | None = None,
    ) -> None:
        if figure_size != TEMPLATE_SIZE:
            raise ValueError(f"figure size must be {TEMPLATE_SIZE}")
        if not 1 <= count <= len(TEMPLATES):
            raise ValueError(f"figure count must be between 1 and {len(TEMPLATES)}")
        self.field = Field(width, height)
        self.figure_size = figure_size
        self.count = count
        self.high_score_path = high_score_path
        self.rng = rng if rng is not None else random.Random()

        self.score = 0
        self.high_score = load_high_score(high_score_path)
        self.ticks = 30
        self.ticks_left = 30
        self.speed = 1
        self.level = 1
        self.pause = True
        self.state = GameState.INIT
        self.action = UserAction.START

        self.next = self.rng.randrange(self.count)
        self.figure = Figure(blocks=[[0] * figure_size for _ in range(figure_size)])
        self.drop_new_figure()

    def user_input(self, action, hold: bool = False) -> None:
        """Record the player's action unless the key is being held."""
        if hold:
            return
        try:
            self.action = UserAction(action)
        except ValueError:
            self.action = UserAction.ACTION

    def drop_new_figure(self) -> None:
        """Put the queued figure at the top centre and queue another one."""
        blocks = [list(row) for row in TEMPLATES[self.next]]
        self.figure = Figure(
            blocks=blocks,
            x=self.field.width // 2 - self.figure_size // 2,
            y=0,
        )
        self.next = self.rng.randrange(self.count)

    def update_current_state(self) -> GameInfo:
        """Advance one frame and return what the front end should draw."""
        self.calculate()
        if self.state == GameState.GAMEOVER:
            return GameInfo()
        return GameInfo(
            field=self.print_field(),
            next=self.next_block(),
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            pause=self.pause,
        )

    def calculate(self) -> None:
        """Apply gravity when due, then the player's current action."""
        if self.ticks_left <= 0 and self.state not in (GameState.PAUSE, GameState.INIT):
            self.calc_one()
        if self.state == GameState.GAMEOVER:
            return

        action = self.action
        if action == UserAction.RIGHT:
            if not self.pause:
                self.move_figure_right()
                if self.collision():
                    self.move_figure_left()
        elif action == UserAction.LEFT:
            if not self.pause:
                self.move_figure_left()
                if self.collision():
                    self.move_figure_right()
        elif action == UserAction.DOWN:
            if not self.pause:
                self.move_figure_down()
                if self.collision():
                    self.move_figure_up()
        elif action == UserAction.UP:
            if not self.pause:
                self.handle_rotation()
        elif action == UserAction.PAUSE:
            if self.pause:
                self.pause = False
                self.state = GameState.MOVING
            else:
                self.pause = True
                self.state = GameState.PAUSE
        elif action == UserAction.TERMINATE:
            self.state = GameState.GAMEOVER
        elif action == UserAction.START:
            self.pause = False
            self.state = GameState.MOVING

        self.ticks_left -= 1

    def calc_one(self) -> None:
        """One gravity step: fall, or land and bring in the next figure."""
        self.ticks_left = self.ticks
        self.move_figure_down()
        self.state = GameState.MOVING
        if self.collision():
            self.move_figure_up()
            self.plant_figure()
            self.count_score()
            self.drop_new_figure()
            self.state = GameState.DROP
            if self.collision():
                self.state = GameState.GAMEOVER

    def move_figure_down(self) -> None:
        self.figure.y += 1

    def move_figure_up(self) -> None:
        self.figure.y -= 1

    def move_figure_right(self) -> None:
        self.figure.x += 1

    def move_figure_left(self) -> None:
        self.figure.x -= 1

    def _cells(self, figure: Figure):
        for i, row in enumerate(figure.blocks):
            for j, value in enumerate(row):
                if value:
                    yield figure.x + j, figure.y + i, value

    def collision(self) -> bool:
        """Whether the figure leaves the field or overlaps a planted block."""
        field = self.field
        for fx, fy, _ in self._cells(self.figure):
            if not (0 <= fx < field.width and 0 <= fy < field.height) or field.blocks[fy][fx]:
                self.state = GameState.COLLISION
                return True
        return False

    def handle_rotation(self) -> None:
        """Rotate the figure unless the rotated one would collide."""
        old = self.figure
        self.figure = old.rotated()
        if self.collision():
            self.figure = old

    def plant_figure(self) -> None:
        """Copy the figure's blocks into the field."""
        field = self.field
        for fx, fy, value in self._cells(self.figure):
            if 0 <= fx < field.width and 0 <= fy < field.height:
                field.blocks[fy][fx] = value

    def count_score(self) -> None:
        """Clear filled lines, award points and raise the level."""
        erased = self.field.erase_lines()
        self.score += _LINE_SCORES.get(erased, _FOUR_OR_MORE_LINES)
        if self.score > self.high_score:
            self.high_score = self.score
            save_high_score(self.high_score, self.high_score_path)

        new_level = self.score // _POINTS_PER_LEVEL + 1
        if self.level < new_level <= _MAX_LEVEL:
            self.level = new_level
            self.speed = new_level

    def print_field(self) -> list[list[int]]:
        """The field with the falling figure drawn in, as 0/1 cells."""
        field = self.field
        figure = self.figure
        result = []
        for i, row in enumerate(field.blocks):
            out = []
            for j, value in enumerate(row):
                cell = 1 if value else 0
                if not cell:
                    x = j - figure.x
                    y = i - figure.y
                    if 0 <= x < figure.size and 0 <= y < figure.size and figure.blocks[y][x]:
                        cell = 1
                out.append(cell)
            result.append(out)
        return result

    def next_block(self) -> list[list[int]]:
        """The queued figure's matrix."""
        return [list(row) for row in TEMPLATES[self.next]]