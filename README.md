# brickgame

Two small arcade games that run in a terminal through `curses`:

- **Tetris**: falling pieces on a 10×20 field, line clears, levels and a
  high score that is kept between games.
- **Frogger**: guide a frog across lanes of moving cars. Levels are read
  from text files.

The games need a terminal that the standard `curses` module supports
(POSIX systems).

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Playing Tetris

```
brickgame-tetris [--high-score-file PATH]
```

| Key         | Action                        |
|-------------|-------------------------------|
| Enter       | start                         |
| `p`         | pause / resume                |
| `q`         | quit                          |
| ← / →       | move the piece                |
| Space       | rotate                        |
| ↓           | move the piece down one row   |

Clearing 1, 2, 3 or 4 (or more) lines at once gives 100, 300, 700 or 1500
points. The level is `score // 600 + 1`, capped at 10, and the speed follows
the level; a higher speed makes each frame shorter. The high score is written
whenever it is beaten, to `high_score.dat` in the current directory unless
`--high-score-file` names another file.

## Playing Frogger

```
brickgame-frogger [--level-dir DIR] [--banner-dir DIR]
```

Press Enter to start and Escape to quit. Move with the arrow keys: up and
down jump two rows, left and right one column. Every other lane of traffic
moves one cell to the right each turn, wrapping around. Reaching the top row
scores a point and fills a sixth of the finish line; when the whole line is
full the next level starts and the game speeds up. Landing on a car costs a
life. The frog starts with 9 lives; a collision with none left, or finishing
level 5, ends the game and shows a banner for two seconds.

### Level and banner files

The package ships no level or banner files; you supply them.

- Levels are read from `<level-dir>/level_<n>.txt` for `n` from 1 to 5
  (`--level-dir` defaults to `tests/levels`). A level file must hold at least
  21 lines; each line gives one lane of up to 90 cells, where `]` is a car.
  Shorter lines are padded with empty cells (`0`). A missing or short level
  file ends the game.
- Banners are `you_won.txt` and `you_lose.txt` in `--banner-dir` (default
  `tests/game_progress`). A banner needs at least 9 lines; each `#` is drawn
  as a solid block. An unreadable banner is simply not shown.

Both defaults are relative to the current directory.

## Using the game logic in code

The game state works without a terminal:

```python
from brickgame.tetris import Game, UserAction

game = Game(10, 20, 5, 7, "high_score.dat", None)
game.user_input(UserAction.START, False)
info = game.update_current_state()
print(info.score, info.level, info.field[0])
```

`Game.update_current_state()` advances one frame and returns a `GameInfo`
with the field (falling piece drawn in as 1s), the next piece, score, high
score, level, speed and pause flag. After the game is over it returns an
empty `GameInfo`.

`brickgame.frog_fsm.FrogGame` runs the frog game's state machine; feed it
signals with `sigact()` (see `get_signal()` and `Signal`). Give it a
`NullView` to drive it without drawing anything; the view records which
drawing calls were made.