"""Board - the mutable game-state aggregate."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from chesslogic.core.enums import (
    PROMOTION_KINDS,
    CastlingRights,
    GameStatus,
    MoveResult,
    PieceKind,
    Player,
)
from chesslogic.core.move_generator import (
    KINGSIDE_ROOK_COL,
    QUEENSIDE_ROOK_COL,
    MoveGenerator,
    home_row,
    promotion_row,
)
from chesslogic.core.piece import Piece
from chesslogic.core.rules import Rules
from chesslogic.core.types import BOARD_SIZE, Coordinate

_LOGGER = logging.getLogger(__name__)

PromotionChooser = Callable[[Player, Coordinate], PieceKind]
"""Synchronous promotion collaborator: (player, square) -> chosen kind."""

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

_ROOK_CORNERS: dict[Coordinate, CastlingRights] = {
    Coordinate(7, QUEENSIDE_ROOK_COL): CastlingRights.WHITE_QUEENSIDE,
    Coordinate(7, KINGSIDE_ROOK_COL): CastlingRights.WHITE_KINGSIDE,
    Coordinate(0, QUEENSIDE_ROOK_COL): CastlingRights.BLACK_QUEENSIDE,
    Coordinate(0, KINGSIDE_ROOK_COL): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class UndoToken:
    """Everything :meth:`Board.apply` touched, consumed by :meth:`Board.revert`."""

    origin: Coordinate
    destination: Coordinate
    moved: Piece
    captured: Piece | None
    capture_square: Coordinate
    kings_before: tuple[Coordinate | None, Coordinate | None]


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn waiting on the promotion collaborator."""

    player: Player
    square: Coordinate


class Board:
    """8x8 grid plus side to move, castling rights, en passant and king cache.

    ``Board()`` is an empty board for position setup; call
    :meth:`refresh_status` once pieces are placed. :meth:`initial` gives the
    standard starting position.
    """

    __slots__ = (
        "_grid",
        "_side_to_move",
        "_castling",
        "_en_passant",
        "_kings",
        "_status",
        "_is_over",
        "_pending",
        "_chooser",
    )

    def __init__(
        self,
        *,
        side_to_move: Player = Player.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Coordinate | None = None,
        promotion_chooser: PromotionChooser | None = None,
    ) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._side_to_move = side_to_move
        self._castling = castling
        self._en_passant = en_passant
        # [player] -> king coordinate (None if king missing).
        self._kings: list[Coordinate | None] = [None, None]
        self._status = GameStatus.ONGOING
        self._is_over = False
        self._pending: PendingPromotion | None = None
        self._chooser = promotion_chooser

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls, promotion_chooser: PromotionChooser | None = None) -> Board:
        """No pieces, White to move, no castling rights."""
        return cls(promotion_chooser=promotion_chooser)

    @classmethod
    def initial(cls, promotion_chooser: PromotionChooser | None = None) -> Board:
        """Standard starting position."""
        board = cls(castling=CastlingRights.ALL, promotion_chooser=promotion_chooser)
        for col in range(BOARD_SIZE):
            board.set_piece(Coordinate(1, col), Piece(Player.BLACK, PieceKind.PAWN))
            board.set_piece(Coordinate(6, col), Piece(Player.WHITE, PieceKind.PAWN))
        for col, kind in enumerate(_BACK_RANK):
            board.set_piece(Coordinate(0, col), Piece(Player.BLACK, kind))
            board.set_piece(Coordinate(7, col), Piece(Player.WHITE, kind))
        board.refresh_status()
        return board

    # -- Element access -----------------------------------------------------

    def piece_at(self, square: Coordinate) -> Piece | None:
        if not square.is_valid:
            return None
        return self._grid[square.row][square.col]

    def set_piece(self, square: Coordinate, piece: Piece | None) -> None:
        """Place (or clear) a square, keeping the king cache in lockstep."""
        if not square.is_valid:
            raise ValueError(f"Square off the board: {square!r}")
        old = self._grid[square.row][square.col]
        if old is not None and old.kind == PieceKind.KING:
            if self._kings[old.owner] == square:
                self._kings[old.owner] = None
        self._grid[square.row][square.col] = piece
        if piece is not None and piece.kind == PieceKind.KING:
            self._kings[piece.owner] = square

    def king_position(self, player: Player) -> Coordinate:
        sq = self._kings[player]
        if sq is None:
            raise ValueError(f"No {player.name} king on board")
        return sq

    def find_king(self, player: Player) -> Coordinate | None:
        return self._kings[player]

    # -- State queries ------------------------------------------------------

    @property
    def side_to_move(self) -> Player:
        return self._side_to_move

    @property
    def castling(self) -> CastlingRights:
        return self._castling

    @property
    def en_passant(self) -> Coordinate | None:
        return self._en_passant

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending

    def has_castling_right(self, player: Player, *, kingside: bool) -> bool:
        right = CastlingRights.for_player(player, kingside=kingside)
        return bool(self._castling & right)

    def status(self) -> GameStatus:
        return self._status

    def is_game_over(self) -> bool:
        return self._is_over

    def status_message(self) -> str:
        return Rules.status_message(self._status, self)

    # -- Rules delegation ---------------------------------------------------

    def legal_moves(self, origin: Coordinate) -> list[Coordinate]:
        """Legal destinations for the side to move's piece on *origin*."""
        if self._pending is not None:
            return []
        return MoveGenerator(self).legal_moves(origin)

    def is_square_attacked_by(self, square: Coordinate, attacker: Player) -> bool:
        return MoveGenerator(self).is_square_attacked_by(square, attacker)

    def is_king_in_check(self, player: Player) -> bool:
        return MoveGenerator(self).is_king_in_check(player)

    def has_any_legal_move(self, player: Player) -> bool:
        return MoveGenerator(self).has_any_legal_move(player)

    def refresh_status(self) -> GameStatus:
        """Re-derive status and the game-over flag for the side to move."""
        self._status = Rules.evaluate(self)
        self._is_over = self._status.is_terminal
        return self._status

    # -- Simulation ---------------------------------------------------------

    def apply(self, origin: Coordinate, destination: Coordinate) -> UndoToken:
        """Relocate a piece (with en passant capture) and return its undo token."""
        moved = self._grid[origin.row][origin.col]
        if moved is None:
            raise ValueError(f"No piece on {origin}")

        capture_square = destination
        if (
            moved.kind == PieceKind.PAWN
            and destination == self._en_passant
            and self.piece_at(destination) is None
        ):
            behind = Coordinate(origin.row, destination.col)
            victim = self.piece_at(behind)
            if (
                victim is not None
                and victim.kind == PieceKind.PAWN
                and victim.owner != moved.owner
            ):
                capture_square = behind

        token = UndoToken(
            origin=origin,
            destination=destination,
            moved=moved,
            captured=self.piece_at(capture_square),
            capture_square=capture_square,
            kings_before=(self._kings[Player.WHITE], self._kings[Player.BLACK]),
        )
        self.set_piece(capture_square, None)
        self.set_piece(origin, None)
        self.set_piece(destination, moved)
        return token

    def revert(self, token: UndoToken) -> None:
        """Undo a single :meth:`apply`."""
        self.set_piece(token.destination, None)
        self.set_piece(token.capture_square, token.captured)
        self.set_piece(token.origin, token.moved)
        self._kings = list(token.kings_before)

    # -- Move execution -----------------------------------------------------

    def make_move(self, origin: Coordinate, destination: Coordinate) -> MoveResult:
        """Play a legal move for the side to move.

        Returns ``REJECTED`` without touching state when the game is over, a
        promotion is pending, or *destination* is not a legal target.
        """
        if self._is_over or self._pending is not None:
            _LOGGER.debug("Move %s%s refused: board is locked", origin, destination)
            return MoveResult.REJECTED
        if destination not in self.legal_moves(origin):
            _LOGGER.debug("Move %s%s refused: illegal destination", origin, destination)
            return MoveResult.REJECTED

        piece = self._grid[origin.row][origin.col]
        assert piece is not None
        mover = piece.owner

        self.apply(origin, destination)

        next_en_passant: Coordinate | None = None
        if piece.kind == PieceKind.PAWN and abs(origin.row - destination.row) == 2:
            skipped_row = (origin.row + destination.row) // 2
            next_en_passant = Coordinate(skipped_row, origin.col)
        self._en_passant = next_en_passant

        if piece.kind == PieceKind.KING and abs(origin.col - destination.col) == 2:
            self._slide_castling_rook(origin.row, destination.col)

        self._update_castling(piece, origin)

        if piece.kind == PieceKind.PAWN and destination.row == promotion_row(mover):
            self._pending = PendingPromotion(mover, destination)
            if self._chooser is None:
                _LOGGER.debug("Promotion pending on %s", destination)
                return MoveResult.PENDING_PROMOTION
            return self.resolve_promotion(self._chooser(mover, destination))

        self._finish_turn()
        return MoveResult.APPLIED

    def resolve_promotion(self, kind: PieceKind) -> MoveResult:
        """Complete a move suspended on promotion with the chosen *kind*."""
        pending = self._pending
        if pending is None:
            return MoveResult.REJECTED
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"Invalid promotion piece: {kind!r}")

        self.set_piece(pending.square, Piece(pending.player, kind))
        self._pending = None
        self._finish_turn()
        return MoveResult.APPLIED

    def _slide_castling_rook(self, row: int, king_col: int) -> None:
        if king_col == 6:
            rook_from = Coordinate(row, KINGSIDE_ROOK_COL)
            rook_to = Coordinate(row, 5)
        else:
            rook_from = Coordinate(row, QUEENSIDE_ROOK_COL)
            rook_to = Coordinate(row, 3)
        self.set_piece(rook_to, self.piece_at(rook_from))
        self.set_piece(rook_from, None)

    def _update_castling(self, piece: Piece, origin: Coordinate) -> None:
        if piece.kind == PieceKind.KING:
            self._castling &= ~CastlingRights.both(piece.owner)
        elif piece.kind == PieceKind.ROOK and origin in _ROOK_CORNERS:
            if origin.row == home_row(piece.owner):
                self._castling &= ~_ROOK_CORNERS[origin]

    def _finish_turn(self) -> None:
        self._side_to_move = self._side_to_move.opposite
        self.refresh_status()
        _LOGGER.debug("%s", self.status_message())

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board(
            side_to_move=self._side_to_move,
            castling=self._castling,
            en_passant=self._en_passant,
            promotion_chooser=self._chooser,
        )
        b._grid = [row.copy() for row in self._grid]
        b._kings = self._kings.copy()
        b._status = self._status
        b._is_over = self._is_over
        b._pending = self._pending
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self._side_to_move == other._side_to_move
            and self._castling == other._castling
            and self._en_passant == other._en_passant
            and self._kings == other._kings
            and self._status == other._status
            and self._is_over == other._is_over
            and self._pending == other._pending
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

