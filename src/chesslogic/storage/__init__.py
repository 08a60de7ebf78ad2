"""Persistence collaborators for saved games."""

from chesslogic.storage.interfaces import GameStore, StorageError
from chesslogic.storage.json_store import JsonGameStore
from chesslogic.storage.memory import MemoryGameStore

__all__ = [
    "GameStore",
    "JsonGameStore",
    "MemoryGameStore",
    "StorageError",
]
