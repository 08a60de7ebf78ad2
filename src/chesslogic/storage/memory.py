"""In-process game store."""

from __future__ import annotations

import itertools

from chesslogic.core.notation import GameRecord


class MemoryGameStore:
    """Dictionary-backed :class:`~chesslogic.storage.interfaces.GameStore`."""

    __slots__ = ("_games", "_clock")

    def __init__(self) -> None:
        # name -> (revision, record)
        self._games: dict[str, tuple[int, GameRecord]] = {}
        self._clock = itertools.count(1)

    def save(self, name: str, record: GameRecord) -> None:
        if not name:
            raise ValueError("Game name must not be empty")
        self._games[name] = (next(self._clock), record)

    def load(self, name: str) -> GameRecord | None:
        entry = self._games.get(name)
        return entry[1] if entry is not None else None

    def list_games(self) -> list[str]:
        return sorted(self._games, key=lambda n: self._games[n][0], reverse=True)

    def delete(self, name: str) -> bool:
        return self._games.pop(name, None) is not None
