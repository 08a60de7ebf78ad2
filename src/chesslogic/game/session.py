"""GameSession: one game's board plus save/load through a store.

Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslogic.config import AppSettings, SessionSettings
from chesslogic.core.board import Board, PromotionChooser
from chesslogic.core.enums import GameStatus, MoveResult, PieceKind, Player
from chesslogic.core.notation import board_from_record, record_from_board
from chesslogic.core.types import Coordinate
from chesslogic.storage.interfaces import GameStore
from chesslogic.storage.json_store import JsonGameStore
from chesslogic.storage.memory import MemoryGameStore

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Coordinate, Coordinate], None]  # origin, destination
StatusCallback = Callable[[str], None]
GameOverCallback = Callable[[GameStatus, str], None]
PromotionCallback = Callable[[Player, Coordinate], None]
ResetCallback = Callable[[], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_promotion_request: list[PromotionCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


def _always_queen(_player: Player, _square: Coordinate) -> PieceKind:
    return PieceKind.QUEEN


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Owns the current :class:`Board` and swaps it on new game / load.

    A failed load leaves the current board untouched; a successful one
    replaces it entirely. Single-threaded: guard the whole session with one
    lock if it is shared between threads.
    """

    __slots__ = ("_board", "_store", "_settings", "_pending_origin", "events")

    def __init__(
        self,
        store: GameStore | None = None,
        settings: SessionSettings | None = None,
    ) -> None:
        self._store: GameStore = store if store is not None else MemoryGameStore()
        self._settings = settings if settings is not None else SessionSettings()
        self._pending_origin: Coordinate | None = None
        self._board = Board.initial(self._promotion_chooser())
        self.events = SessionEvents()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> GameSession:
        """Session backed by a :class:`JsonGameStore` at the configured path."""
        store = JsonGameStore(settings.storage.path, indent=settings.storage.indent)
        return cls(store, settings.session)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def store(self) -> GameStore:
        return self._store

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def awaiting_promotion(self) -> bool:
        return self._board.pending_promotion is not None

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(self) -> None:
        self._replace_board(Board.initial(self._promotion_chooser()))

    def select(self, square: Coordinate) -> list[Coordinate]:
        """Legal destinations for the piece on *square* (empty if none)."""
        return self._board.legal_moves(square)

    def submit_move(self, origin: Coordinate, destination: Coordinate) -> MoveResult:
        result = self._board.make_move(origin, destination)
        if result == MoveResult.REJECTED:
            return result
        if result == MoveResult.PENDING_PROMOTION:
            pending = self._board.pending_promotion
            assert pending is not None
            self._pending_origin = origin
            for cb in self.events.on_promotion_request:
                cb(pending.player, pending.square)
            return result

        self._after_move(origin, destination)
        return result

    def resolve_promotion(self, kind: PieceKind) -> MoveResult:
        pending = self._board.pending_promotion
        origin = self._pending_origin
        if pending is None or origin is None:
            return MoveResult.REJECTED
        result = self._board.resolve_promotion(kind)
        self._pending_origin = None
        self._after_move(origin, pending.square)
        return result

    # ── Persistence ──────────────────────────────────────────────────────

    def save(self, name: str) -> None:
        """Save the current board under *name*.

        Raises ``ValueError`` while a promotion is pending and
        :class:`~chesslogic.storage.StorageError` if the store fails.
        """
        if self.awaiting_promotion:
            raise ValueError("Cannot save while a promotion is pending")
        self._store.save(name, record_from_board(self._board))
        _LOGGER.info("Saved game %r", name)

    def load(self, name: str) -> bool:
        """Replace the board with the game saved as *name*.

        Returns False if no such game exists. Storage and decode failures
        propagate; in every failure case the current board is kept.
        """
        record = self._store.load(name)
        if record is None:
            _LOGGER.warning("No saved game named %r", name)
            return False
        board = board_from_record(record, self._promotion_chooser())
        self._replace_board(board)
        _LOGGER.info("Loaded game %r", name)
        return True

    def saved_games(self) -> list[str]:
        return self._store.list_games()

    # ── Internal ─────────────────────────────────────────────────────────

    def _promotion_chooser(self) -> PromotionChooser | None:
        return _always_queen if self._settings.auto_queen else None

    def _replace_board(self, board: Board) -> None:
        self._board = board
        self._pending_origin = None
        for cb in self.events.on_reset:
            cb()
        self._emit_status()

    def _after_move(self, origin: Coordinate, destination: Coordinate) -> None:
        for cb in self.events.on_move:
            cb(origin, destination)
        self._emit_status()

    def _emit_status(self) -> None:
        board = self._board
        message = board.status_message()
        for cb in self.events.on_status:
            cb(message)
        if board.is_game_over():
            for cb in self.events.on_game_over:
                cb(board.status(), message)
