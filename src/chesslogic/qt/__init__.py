"""PyQt6 adapters for the rules engine."""

from chesslogic.qt.bridge import BoardBridge

__all__ = ["BoardBridge"]
