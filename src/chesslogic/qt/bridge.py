"""Qt bridge exposing a :class:`GameSession` to a rendering collaborator."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesslogic.core.enums import GameStatus, MoveResult, PieceKind, Player
from chesslogic.core.notation import NotationError
from chesslogic.core.types import Coordinate
from chesslogic.game.session import GameSession
from chesslogic.storage.interfaces import StorageError

_LOGGER = logging.getLogger(__name__)


class BoardBridge(QObject):
    """Main-thread adapter: slots in, signals out.

    Renderers read squares from ``session.board`` directly and repaint
    when the signals fire.
    """

    move_applied = pyqtSignal(object, object)  # origin, destination
    status_changed = pyqtSignal(str)
    game_over = pyqtSignal(str)
    promotion_requested = pyqtSignal(object, object)  # Player, Coordinate
    board_reset = pyqtSignal()
    storage_error = pyqtSignal(str)

    def __init__(self, session: GameSession, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session
        events = session.events
        events.on_move.append(self._on_move)
        events.on_status.append(self.status_changed.emit)
        events.on_game_over.append(self._on_game_over)
        events.on_promotion_request.append(self._on_promotion_request)
        events.on_reset.append(self.board_reset.emit)

    @property
    def session(self) -> GameSession:
        return self._session

    # ── Slots ────────────────────────────────────────────────────────────

    def legal_destinations(self, square: object) -> list[Coordinate]:
        if not isinstance(square, Coordinate):
            return []
        return self._session.select(square)

    @pyqtSlot(object, object, result=bool)
    def request_move(self, origin: object, destination: object) -> bool:
        """Try a move; returns False if it was refused."""
        if not (isinstance(origin, Coordinate) and isinstance(destination, Coordinate)):
            return False
        result = self._session.submit_move(origin, destination)
        return result != MoveResult.REJECTED

    @pyqtSlot(int, result=bool)
    def choose_promotion(self, kind: int) -> bool:
        try:
            piece_kind = PieceKind(kind)
        except ValueError:
            return False
        try:
            result = self._session.resolve_promotion(piece_kind)
        except ValueError:
            return False
        return result == MoveResult.APPLIED

    @pyqtSlot()
    def new_game(self) -> None:
        self._session.new_game()

    @pyqtSlot(str, result=bool)
    def save_game(self, name: str) -> bool:
        try:
            self._session.save(name)
        except (StorageError, ValueError) as exc:
            _LOGGER.error("Failed to save game %r: %s", name, exc)
            self.storage_error.emit(str(exc))
            return False
        return True

    @pyqtSlot(str, result=bool)
    def load_game(self, name: str) -> bool:
        try:
            loaded = self._session.load(name)
        except (StorageError, NotationError) as exc:
            _LOGGER.error("Failed to load game %r: %s", name, exc)
            self.storage_error.emit(str(exc))
            return False
        if not loaded:
            self.storage_error.emit(f"No saved game named {name!r}")
        return loaded

    # ── Session callbacks ────────────────────────────────────────────────

    def _on_move(self, origin: Coordinate, destination: Coordinate) -> None:
        self.move_applied.emit(origin, destination)

    def _on_game_over(self, _status: GameStatus, message: str) -> None:
        self.game_over.emit(message)

    def _on_promotion_request(self, player: Player, square: Coordinate) -> None:
        self.promotion_requested.emit(player, square)
