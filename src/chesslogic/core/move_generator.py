"""Raw and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslogic.core.enums import PieceKind, Player
from chesslogic.core.types import Coordinate, all_coordinates

if TYPE_CHECKING:
    from chesslogic.core.board import Board


# (drow, dcol) offsets; row grows toward rank 1.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

KING_HOME_COL = 4
KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0


def home_row(player: Player) -> int:
    """Back-rank row of *player*."""
    return 7 if player == Player.WHITE else 0


def pawn_direction(player: Player) -> int:
    """Row step of a forward pawn move."""
    return -1 if player == Player.WHITE else 1


def pawn_start_row(player: Player) -> int:
    return 6 if player == Player.WHITE else 1


def promotion_row(player: Player) -> int:
    return 0 if player == Player.WHITE else 7


# -- Raw move generation ---------------------------------------------------


def raw_moves(board: Board, origin: Coordinate) -> list[Coordinate]:
    """Destinations reachable by the piece on *origin*, ignoring king safety.

    Castling is never included: it does not attack anything.
    """
    piece = board.piece_at(origin)
    if piece is None:
        return []

    kind = piece.kind
    owner = piece.owner
    if kind == PieceKind.PAWN:
        return _pawn_moves(board, origin, owner)
    if kind == PieceKind.KNIGHT:
        return _step_moves(board, origin, owner, KNIGHT_OFFSETS)
    if kind == PieceKind.BISHOP:
        return _sliding_moves(board, origin, owner, BISHOP_DIRS)
    if kind == PieceKind.ROOK:
        return _sliding_moves(board, origin, owner, ROOK_DIRS)
    if kind == PieceKind.QUEEN:
        return _sliding_moves(board, origin, owner, QUEEN_DIRS)
    if kind == PieceKind.KING:
        return _step_moves(board, origin, owner, KING_OFFSETS)
    raise ValueError(f"Unknown piece kind: {kind!r}")


def _pawn_moves(board: Board, origin: Coordinate, owner: Player) -> list[Coordinate]:
    moves: list[Coordinate] = []
    step = pawn_direction(owner)

    one = origin.offset(step, 0)
    if one.is_valid and board.piece_at(one) is None:
        moves.append(one)
        if origin.row == pawn_start_row(owner):
            two = origin.offset(2 * step, 0)
            if board.piece_at(two) is None:
                moves.append(two)

    en_passant = board.en_passant
    for dcol in (-1, 1):
        target_sq = origin.offset(step, dcol)
        if not target_sq.is_valid:
            continue
        target = board.piece_at(target_sq)
        if target is not None:
            if target.owner != owner:
                moves.append(target_sq)
        elif target_sq == en_passant:
            moves.append(target_sq)
    return moves


def _step_moves(
    board: Board,
    origin: Coordinate,
    owner: Player,
    offsets: tuple[tuple[int, int], ...],
) -> list[Coordinate]:
    moves: list[Coordinate] = []
    for drow, dcol in offsets:
        to_sq = origin.offset(drow, dcol)
        if not to_sq.is_valid:
            continue
        target = board.piece_at(to_sq)
        if target is None or target.owner != owner:
            moves.append(to_sq)
    return moves


def _sliding_moves(
    board: Board,
    origin: Coordinate,
    owner: Player,
    directions: tuple[tuple[int, int], ...],
) -> list[Coordinate]:
    moves: list[Coordinate] = []
    for drow, dcol in directions:
        to_sq = origin.offset(drow, dcol)
        while to_sq.is_valid:
            target = board.piece_at(to_sq)
            if target is None:
                moves.append(to_sq)
                to_sq = to_sq.offset(drow, dcol)
                continue
            if target.owner != owner:
                moves.append(to_sq)
            break
    return moves


class MoveGenerator:
    """Filters raw moves into legal moves for a given :class:`Board`.

    Each candidate is played with ``Board.apply`` and taken back with
    ``Board.revert``; the board is always restored before returning.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def raw_moves(self, origin: Coordinate) -> list[Coordinate]:
        return raw_moves(self._board, origin)

    def legal_moves(self, origin: Coordinate) -> list[Coordinate]:
        """Legal destinations for the side to move's piece on *origin*."""
        piece = self._board.piece_at(origin)
        if piece is None or piece.owner != self._board.side_to_move:
            return []
        return self.piece_moves(origin)

    def piece_moves(self, origin: Coordinate) -> list[Coordinate]:
        """Legal destinations for the piece on *origin*, whoever owns it."""
        board = self._board
        piece = board.piece_at(origin)
        if piece is None:
            return []

        legal: list[Coordinate] = []
        for to_sq in raw_moves(board, origin):
            token = board.apply(origin, to_sq)
            try:
                if not self.is_king_in_check(piece.owner):
                    legal.append(to_sq)
            finally:
                board.revert(token)

        if piece.kind == PieceKind.KING:
            legal.extend(self.castling_moves(origin))
        return legal

    def all_legal_moves(self, player: Player) -> dict[Coordinate, list[Coordinate]]:
        """Map of origin -> legal destinations for every piece of *player*."""
        result: dict[Coordinate, list[Coordinate]] = {}
        for sq in all_coordinates():
            piece = self._board.piece_at(sq)
            if piece is None or piece.owner != player:
                continue
            moves = self.piece_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_any_legal_move(self, player: Player) -> bool:
        for sq in all_coordinates():
            piece = self._board.piece_at(sq)
            if piece is not None and piece.owner == player and self.piece_moves(sq):
                return True
        return False

    # -- Attack detection ---------------------------------------------------

    def is_king_in_check(self, player: Player) -> bool:
        """Is *player*'s king attacked by the opponent?"""
        king_sq = self._board.find_king(player)
        if king_sq is None:
            return False
        return self.is_square_attacked_by(king_sq, player.opposite)

    def is_square_attacked_by(self, square: Coordinate, attacker: Player) -> bool:
        """Does any piece of *attacker* have *square* among its raw moves?"""
        board = self._board
        for sq in all_coordinates():
            piece = board.piece_at(sq)
            if piece is None or piece.owner != attacker:
                continue
            if square in raw_moves(board, sq):
                return True
        return False

    # -- Castling -----------------------------------------------------------

    def castling_moves(self, king_sq: Coordinate) -> list[Coordinate]:
        """King destinations for castling; the rook follows in ``make_move``."""
        board = self._board
        king = board.piece_at(king_sq)
        if king is None or king.kind != PieceKind.KING:
            return []
        player = king.owner
        row = home_row(player)
        if king_sq != Coordinate(row, KING_HOME_COL):
            return []
        if self.is_king_in_check(player):
            return []

        opponent = player.opposite
        moves: list[Coordinate] = []

        if board.has_castling_right(player, kingside=True) and self._rook_ready(
            player, Coordinate(row, KINGSIDE_ROOK_COL)
        ):
            f_sq = Coordinate(row, 5)
            g_sq = Coordinate(row, 6)
            if (
                board.piece_at(f_sq) is None
                and board.piece_at(g_sq) is None
                and not self.is_square_attacked_by(f_sq, opponent)
                and not self.is_square_attacked_by(g_sq, opponent)
            ):
                moves.append(g_sq)

        if board.has_castling_right(player, kingside=False) and self._rook_ready(
            player, Coordinate(row, QUEENSIDE_ROOK_COL)
        ):
            b_sq = Coordinate(row, 1)
            c_sq = Coordinate(row, 2)
            d_sq = Coordinate(row, 3)
            if (
                board.piece_at(b_sq) is None
                and board.piece_at(c_sq) is None
                and board.piece_at(d_sq) is None
                and not self.is_square_attacked_by(c_sq, opponent)
                and not self.is_square_attacked_by(d_sq, opponent)
            ):
                moves.append(c_sq)
        return moves

    def _rook_ready(self, player: Player, corner: Coordinate) -> bool:
        rook = self._board.piece_at(corner)
        return rook is not None and rook.owner == player and rook.kind == PieceKind.ROOK
