"""Frogger entry point: the main loop and the command line."""

from __future__ import annotations

import argparse
import curses
import locale

from .frog_backend import DEFAULT_BANNER_DIR, DEFAULT_LEVEL_DIR
from .frog_frontend import CursesView
from .frog_fsm import FrogGame, FrogState, get_signal

_INPUT_TIMEOUT_MS = 50


def game_loop(screen, game: FrogGame | None = None) -> FrogGame:
    """Feed key presses to the game until it ends; return the finished game."""
    if game is None:
        game = FrogGame(DEFAULT_LEVEL_DIR, CursesView(screen, DEFAULT_BANNER_DIR))
    running = True
    key = 0
    while running:
        if game.state in (FrogState.GAMEOVER, FrogState.EXIT_STATE):
            running = False
        game.sigact(get_signal(key))
        if game.state in (FrogState.MOVING, FrogState.START):
            key = screen.getch()
    return game


def _session(window, level_dir, banner_dir) -> None:
    curses.noecho()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    window.keypad(True)
    window.timeout(_INPUT_TIMEOUT_MS)
    view = CursesView(window, banner_dir)
    view.print_overlay()
    game_loop(window, FrogGame(level_dir, view))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="frogger", description="Play Frogger in the terminal.")
    parser.add_argument("--level-dir", default=DEFAULT_LEVEL_DIR, help="directory of level files")
    parser.add_argument("--banner-dir", default=DEFAULT_BANNER_DIR, help="directory of banner files")
    args = parser.parse_args(argv)
    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_session, args.level_dir, args.banner_dir)
    return 0