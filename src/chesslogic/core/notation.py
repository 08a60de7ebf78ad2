"""Text codec for saved board state.

A saved game is four fields::

    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR WHITE KQkq -

placement (rank 8 first), side to move, castling rights, en passant target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesslogic.core.board import Board, PromotionChooser
from chesslogic.core.enums import CastlingRights, Player
from chesslogic.core.piece import Piece
from chesslogic.core.types import BOARD_SIZE, Coordinate, parse_coordinate

_LOGGER = logging.getLogger(__name__)

NO_SQUARE = "-"
NO_CASTLING = "-"

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_TEXT = f"{STARTING_PLACEMENT} WHITE KQkq -"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


class NotationError(ValueError):
    """Saved state that cannot describe a board."""


@dataclass(frozen=True, slots=True)
class GameRecord:
    """The four persisted fields of a game, already encoded as text."""

    placement: str
    side_to_move: str
    castling: str
    en_passant: str | None


# ── Placement ────────────────────────────────────────────────────────────────


def encode_placement(board: Board) -> str:
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        empty = 0
        text = ""
        for col in range(BOARD_SIZE):
            piece = board.piece_at(Coordinate(row, col))
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def decode_placement(text: str) -> dict[Coordinate, Piece]:
    """Parse a placement field into occupied squares.

    Unknown letters take up one square that stays empty. Raises
    :class:`NotationError` unless there are 8 ranks of exactly 8 squares.
    """
    ranks = text.split("/")
    if len(ranks) != BOARD_SIZE:
        raise NotationError(f"Invalid placement (must contain 8 ranks): {text!r}")

    pieces: dict[Coordinate, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if "0" <= ch <= "9":
                col += int(ch)
            else:
                if col < BOARD_SIZE:
                    try:
                        pieces[Coordinate(row, col)] = Piece.from_char(ch)
                    except ValueError:
                        _LOGGER.warning(
                            "Skipping unknown piece %r on rank %d", ch, BOARD_SIZE - row
                        )
                col += 1
            if col > BOARD_SIZE:
                raise NotationError(f"Invalid placement rank width: {rank_text!r}")
        if col != BOARD_SIZE:
            raise NotationError(f"Invalid placement rank width: {rank_text!r}")
    return pieces


# ── Auxiliary fields ─────────────────────────────────────────────────────────


def encode_side(player: Player) -> str:
    return player.name


def decode_side(text: str) -> Player:
    try:
        return Player[text.strip().upper()]
    except KeyError:
        raise NotationError(f"Invalid side-to-move field: {text!r}") from None


def encode_castling(castling: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_CHARS if castling & right)
    return text or NO_CASTLING


def decode_castling(text: str) -> CastlingRights:
    """Each right is held iff its letter appears; anything else is ignored."""
    castling = CastlingRights.NONE
    for ch, right in _CASTLING_CHARS:
        if ch in text:
            castling |= right
    return castling


def encode_en_passant(square: Coordinate | None) -> str | None:
    return square.name if square is not None else None


def decode_en_passant(text: str | None) -> Coordinate | None:
    if text is None or text == NO_SQUARE:
        return None
    square = parse_coordinate(text)
    if square is None:
        _LOGGER.warning("Ignoring unparseable en passant square %r", text)
    return square


# ── Whole-board helpers ──────────────────────────────────────────────────────


def record_from_board(board: Board) -> GameRecord:
    return GameRecord(
        placement=encode_placement(board),
        side_to_move=encode_side(board.side_to_move),
        castling=encode_castling(board.castling),
        en_passant=encode_en_passant(board.en_passant),
    )


def board_from_record(
    record: GameRecord, promotion_chooser: PromotionChooser | None = None
) -> Board:
    """Build a fresh :class:`Board`; king positions come from the placement."""
    pieces = decode_placement(record.placement)
    board = Board(
        side_to_move=decode_side(record.side_to_move),
        castling=decode_castling(record.castling),
        en_passant=decode_en_passant(record.en_passant),
        promotion_chooser=promotion_chooser,
    )
    for square, piece in pieces.items():
        board.set_piece(square, piece)
    board.refresh_status()
    return board


def board_to_text(board: Board) -> str:
    record = record_from_board(board)
    en_passant = record.en_passant if record.en_passant is not None else NO_SQUARE
    return f"{record.placement} {record.side_to_move} {record.castling} {en_passant}"


def board_from_text(
    text: str, promotion_chooser: PromotionChooser | None = None
) -> Board:
    parts = text.split()
    if len(parts) != 4:
        raise NotationError(f"Invalid board text (need 4 fields): {text!r}")
    placement, side, castling, en_passant = parts
    return board_from_record(
        GameRecord(placement, side, castling, en_passant), promotion_chooser
    )
