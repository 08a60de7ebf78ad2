"""JSON-file game store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from chesslogic.core.notation import GameRecord
from chesslogic.storage.interfaces import StorageError

_FORMAT_VERSION = 1


class JsonGameStore:
    """Keeps every saved game in a single JSON document.

    Layout::

        {"version": 1,
         "games": {"<name>": {"board_state": "...", "current_player": "WHITE",
                              "castling_rights": "KQkq",
                              "en_passant_target": null,
                              "last_updated": "...", "revision": 3}}}

    Writes go to a sibling temp file that then replaces the original.
    """

    __slots__ = ("_path", "_indent")

    def __init__(self, path: Path, *, indent: int = 2) -> None:
        self._path = Path(path)
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    # ── GameStore ────────────────────────────────────────────────────────

    def save(self, name: str, record: GameRecord) -> None:
        if not name:
            raise ValueError("Game name must not be empty")
        games = self._read()
        revision = max((g.get("revision", 0) for g in games.values()), default=0) + 1
        games[name] = {
            "board_state": record.placement,
            "current_player": record.side_to_move,
            "castling_rights": record.castling,
            "en_passant_target": record.en_passant,
            "last_updated": datetime.now(timezone.utc).isoformat(),
            "revision": revision,
        }
        self._write(games)

    def load(self, name: str) -> GameRecord | None:
        entry = self._read().get(name)
        if entry is None:
            return None
        try:
            record = GameRecord(
                placement=str(entry["board_state"]),
                side_to_move=str(entry["current_player"]),
                castling=str(entry["castling_rights"]),
                en_passant=entry.get("en_passant_target"),
            )
        except (KeyError, TypeError) as exc:
            raise StorageError(f"Corrupt entry for game {name!r}: {exc}") from exc
        if record.en_passant is not None and not isinstance(record.en_passant, str):
            raise StorageError(
                f"Corrupt en passant target for game {name!r}: {record.en_passant!r}"
            )
        return record

    def list_games(self) -> list[str]:
        games = self._read()
        return sorted(games, key=lambda n: games[n].get("revision", 0), reverse=True)

    def delete(self, name: str) -> bool:
        games = self._read()
        if name not in games:
            return False
        del games[name]
        self._write(games)
        return True

    # ── File I/O ─────────────────────────────────────────────────────────

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc
        games = payload.get("games") if isinstance(payload, dict) else None
        if not isinstance(games, dict):
            raise StorageError(f"Unrecognised store layout in {self._path}")
        for name, entry in games.items():
            if not isinstance(entry, dict):
                raise StorageError(f"Corrupt entry for game {name!r} in {self._path}")
        return games

    def _write(self, games: dict[str, dict[str, Any]]) -> None:
        payload = {"version": _FORMAT_VERSION, "games": games}
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, indent=self._indent, sort_keys=True),
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc
