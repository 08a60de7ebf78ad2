"""Persistence collaborator interface.

The engine never performs I/O; sessions depend on this protocol, not on a
concrete store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesslogic.core.notation import GameRecord


class StorageError(RuntimeError):
    """A store could not read or write its backing data."""


class GameStore(Protocol):
    """Save/load/list operations over named games."""

    def save(self, name: str, record: GameRecord) -> None:
        """Store *record* under *name*, overwriting any existing game."""
        ...

    def load(self, name: str) -> GameRecord | None:
        """Return the game saved as *name*, or ``None`` if there is none."""
        ...

    def list_games(self) -> list[str]:
        """Saved game names, most recently updated first."""
        ...

    def delete(self, name: str) -> bool:
        """Remove *name*. Returns True if it existed."""
        ...
