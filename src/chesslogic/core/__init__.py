"""Core rules engine: pure chess logic with zero external dependencies.

Quick start::

    from chesslogic.core import Board, parse_coordinate

    board = Board.initial()
    e2 = parse_coordinate("e2")
    for dest in board.legal_moves(e2):
        print(dest)
    board.make_move(e2, parse_coordinate("e4"))
"""

from chesslogic.core.board import Board, PendingPromotion, PromotionChooser, UndoToken
from chesslogic.core.enums import (
    PROMOTION_KINDS,
    CastlingRights,
    GameStatus,
    MoveResult,
    PieceKind,
    Player,
)
from chesslogic.core.move_generator import MoveGenerator, raw_moves
from chesslogic.core.notation import (
    STARTING_TEXT,
    GameRecord,
    NotationError,
    board_from_record,
    board_from_text,
    board_to_text,
    record_from_board,
)
from chesslogic.core.piece import Piece
from chesslogic.core.rules import Rules
from chesslogic.core.types import Coordinate, all_coordinates, parse_coordinate

__all__ = [
    # Enums / flags
    "CastlingRights",
    "GameStatus",
    "MoveResult",
    "PieceKind",
    "Player",
    "PROMOTION_KINDS",
    # Types / helpers
    "Coordinate",
    "all_coordinates",
    "parse_coordinate",
    # Domain objects
    "Board",
    "MoveGenerator",
    "PendingPromotion",
    "Piece",
    "PromotionChooser",
    "Rules",
    "UndoToken",
    "raw_moves",
    # Notation
    "STARTING_TEXT",
    "GameRecord",
    "NotationError",
    "board_from_record",
    "board_from_text",
    "board_to_text",
    "record_from_board",
]
