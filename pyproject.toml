[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brickgame"
version = "0.1.0"
description = "Terminal brick games: a falling-block puzzle and a frog road-crossing game"
requires-python = ">=3.10"
dependencies = []
keywords = ["tetris", "frogger", "curses", "terminal", "game", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
brickgame-tetris = "brickgame.tetris_cli:main"
brickgame-frogger = "brickgame.frogger:main"

[tool.hatch.build.targets.wheel]
packages = ["brickgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
