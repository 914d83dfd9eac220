"""Frogger state machine: turns player signals into game state changes."""

from __future__ import annotations

import curses
from enum import IntEnum
from typing import Callable, Optional

from .frog_backend import (
    DEFAULT_LEVEL_DIR,
    LEVEL_CNT,
    BOARD_M,
    BOARD_N,
    Board,
    GameStats,
    LevelLoadError,
    PathLike,
    PlayerPos,
    check_collide,
    check_finish_state,
    level_path,
)

ESCAPE = 27
ENTER_KEY = 10


class FrogState(IntEnum):
    START = 0
    SPAWN = 1
    MOVING = 2
    SHIFTING = 3
    REACH = 4
    COLLIDE = 5
    GAMEOVER = 6
    EXIT_STATE = 7


class Signal(IntEnum):
    MOVE_UP = 0
    MOVE_DOWN = 1
    MOVE_RIGHT = 2
    MOVE_LEFT = 3
    ESCAPE_BTN = 4
    ENTER_BTN = 5
    NOSIG = 6


_KEY_SIGNALS = {
    curses.KEY_UP: Signal.MOVE_UP,
    curses.KEY_DOWN: Signal.MOVE_DOWN,
    curses.KEY_LEFT: Signal.MOVE_LEFT,
    curses.KEY_RIGHT: Signal.MOVE_RIGHT,
    ESCAPE: Signal.ESCAPE_BTN,
    ENTER_KEY: Signal.ENTER_BTN,
}


def get_signal(user_input: int) -> Signal:
    """Map a key code to the signal it stands for."""
    return _KEY_SIGNALS.get(user_input, Signal.NOSIG)


class NullView:
    """A view without a screen; it records what it was asked to draw."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.cleared: list[tuple[int, int]] = []
        self.speed: Optional[int] = None

    def print_finished(self, board: Board) -> None:
        self.calls.append("print_finished")

    def print_board(self, board: Board, frog: PlayerPos) -> None:
        self.calls.append("print_board")

    def print_stats(self, stats: GameStats) -> None:
        self.calls.append("print_stats")

    def print_banner(self, stats: GameStats) -> None:
        self.calls.append("print_banner")

    def clear_cell(self, y: int, x: int) -> None:
        self.cleared.append((y, x))

    def set_speed(self, speed: int) -> None:
        self.speed = speed


class FrogGame:
    """Game data plus the state machine that drives it."""

    def __init__(self, level_dir: PathLike = DEFAULT_LEVEL_DIR, view=None) -> None:
        self.level_dir = level_dir
        self.view = view if view is not None else NullView()
        self.state = FrogState.START
        self.stats = GameStats()
        self.board = Board()
        self.frog = PlayerPos()
        self._moving: dict[Signal, Callable[[], None]] = {
            Signal.MOVE_UP: self.move_up,
            Signal.MOVE_DOWN: self.move_down,
            Signal.MOVE_RIGHT: self.move_right,
            Signal.MOVE_LEFT: self.move_left,
            Signal.ESCAPE_BTN: self.exit_state,
        }
        self._handlers: dict[FrogState, Callable[[], None]] = {
            FrogState.SPAWN: self.spawn,
            FrogState.SHIFTING: self.shifting,
            FrogState.REACH: self.reach,
            FrogState.COLLIDE: self.collide,
            FrogState.GAMEOVER: self.gameover,
            FrogState.EXIT_STATE: self.exit_state,
        }

    def _action(self, sig: Signal) -> Optional[Callable[[], None]]:
        if self.state == FrogState.START:
            if sig == Signal.ENTER_BTN:
                return self._request_spawn
            if sig == Signal.ESCAPE_BTN:
                return self.exit_state
            return None
        if self.state == FrogState.MOVING:
            return self._moving.get(sig, self.check)
        return self._handlers.get(self.state)

    def sigact(self, sig) -> None:
        """Handle one signal in the current state."""
        action = self._action(Signal(sig))
        if action is not None:
            action()

    def _request_spawn(self) -> None:
        self.state = FrogState.SPAWN

    def spawn(self) -> None:
        """Load the current level, or end the game after the last one."""
        if self.stats.level > LEVEL_CNT:
            self.state = FrogState.GAMEOVER
            return
        self.view.set_speed(self.stats.speed)
        try:
            self.board.load_level(level_path(self.level_dir, self.stats.level))
        except (OSError, LevelLoadError):
            self.state = FrogState.EXIT_STATE
            return
        self.board.fill_finish()
        self.view.print_finished(self.board)
        self.frog.reset()
        self.state = FrogState.MOVING

    def _step(self, dx: int, dy: int, allowed: bool) -> None:
        if allowed:
            self.view.clear_cell(self.frog.y, self.frog.x)
            self.frog.x += dx
            self.frog.y += dy
        self.check()

    def move_up(self) -> None:
        self._step(0, -2, self.frog.y != 1)

    def move_down(self) -> None:
        self._step(0, 2, self.frog.y != BOARD_N)

    def move_right(self) -> None:
        self._step(1, 0, self.frog.x != BOARD_M)

    def move_left(self) -> None:
        self._step(-1, 0, self.frog.x != 1)

    def check(self) -> None:
        """Decide where the frog's position leads next."""
        if check_collide(self.frog, self.board):
            self.state = FrogState.COLLIDE
        elif check_finish_state(self.frog):
            self.state = FrogState.REACH
        else:
            self.state = FrogState.SHIFTING

    def shifting(self) -> None:
        """Move the traffic and redraw."""
        self.board.shift()
        if check_collide(self.frog, self.board):
            self.state = FrogState.COLLIDE
        else:
            self.state = FrogState.MOVING
            self.view.print_board(self.board, self.frog)
            self.view.print_stats(self.stats)

    def reach(self) -> None:
        """Score a crossing and advance the level when the line is full."""
        self.stats.score += 1
        self.board.add_progress()
        if self.board.level_complete():
            self.stats.level += 1
            self.stats.speed += 1
            self.state = FrogState.SPAWN
        else:
            self.frog.reset()
            self.view.print_finished(self.board)
            self.state = FrogState.MOVING

    def collide(self) -> None:
        """Lose a life, or end the game when none are left."""
        if self.stats.lives:
            self.stats.lives -= 1
            self.frog.reset()
            self.state = FrogState.MOVING
        else:
            self.state = FrogState.GAMEOVER

    def gameover(self) -> None:
        self.view.print_banner(self.stats)

    def exit_state(self) -> None:
        self.state = FrogState.EXIT_STATE