"""chesslogic: a chess rules engine with save/load support."""

__version__ = "0.1.0"
