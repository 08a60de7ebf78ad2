"""User-configurable settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


def default_store_path() -> Path:
    return Path.home() / ".chesslogic" / "saved_games.json"


@dataclass
class StorageSettings:
    """Where and how saved games are written."""

    path: Path = field(default_factory=default_store_path)
    indent: int = 2


@dataclass
class SessionSettings:
    """Behaviour of a game session."""

    # Promote to a queen without asking the promotion collaborator
    auto_queen: bool = False


@dataclass
class AppSettings:
    """All user-configurable settings."""

    storage: StorageSettings = field(default_factory=StorageSettings)
    session: SessionSettings = field(default_factory=SessionSettings)
