"""Terminal brick games: a falling-block puzzle and a frog road-crossing game."""

__version__ = "0.1.0"
__all__ = ["__version__"]