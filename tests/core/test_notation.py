"""Tests for the saved-state text codec."""

import logging

import pytest

from chesslogic.core.board import Board
from chesslogic.core.enums import (
    CastlingRights,
    GameStatus,
    MoveResult,
    PieceKind,
    Player,
)
from chesslogic.core.notation import (
    NO_CASTLING,
    STARTING_PLACEMENT,
    STARTING_TEXT,
    GameRecord,
    NotationError,
    board_from_record,
    board_from_text,
    board_to_text,
    decode_castling,
    decode_en_passant,
    decode_placement,
    decode_side,
    encode_castling,
    encode_en_passant,
    encode_placement,
    encode_side,
    record_from_board,
)
from chesslogic.core.piece import Piece
from chesslogic.core.types import Coordinate, parse_coordinate


def sq(name: str) -> Coordinate:
    square = parse_coordinate(name)
    assert square is not None
    return square


class TestPlacement:
    def test_encode_initial(self) -> None:
        assert encode_placement(Board.initial()) == STARTING_PLACEMENT

    def test_encode_empty(self) -> None:
        assert encode_placement(Board()) == "8/8/8/8/8/8/8/8"

    def test_decode_initial(self) -> None:
        pieces = decode_placement(STARTING_PLACEMENT)
        assert len(pieces) == 32
        assert pieces[sq("e1")] == Piece(Player.WHITE, PieceKind.KING)
        assert pieces[sq("d8")] == Piece(Player.BLACK, PieceKind.QUEEN)
        assert sq("e4") not in pieces

    def test_unknown_letter_takes_a_square(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="chesslogic.core.notation"):
            pieces = decode_placement("4k3/8/8/8/2X1P3/8/8/4K3")
        assert sq("c4") not in pieces
        assert pieces[sq("e4")] == Piece(Player.WHITE, PieceKind.PAWN)
        assert "Skipping unknown piece" in caplog.text

    @pytest.mark.parametrize(
        "placement",
        [
            "8/8/8/8/8/8/8",
            "8/8/8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "4k2/8/8/8/8/8/8/4K3",
        ],
    )
    def test_malformed_placement(self, placement: str) -> None:
        with pytest.raises(NotationError):
            decode_placement(placement)

    def test_notation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode_placement("8/8")


class TestSide:
    def test_encode(self) -> None:
        assert encode_side(Player.WHITE) == "WHITE"
        assert encode_side(Player.BLACK) == "BLACK"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("WHITE", Player.WHITE), ("black", Player.BLACK), (" White ", Player.WHITE)],
    )
    def test_decode(self, text: str, expected: Player) -> None:
        assert decode_side(text) == expected

    def test_decode_invalid(self) -> None:
        with pytest.raises(NotationError):
            decode_side("GREEN")


class TestCastling:
    def test_encode_all(self) -> None:
        assert encode_castling(CastlingRights.ALL) == "KQkq"

    def test_encode_none(self) -> None:
        assert encode_castling(CastlingRights.NONE) == NO_CASTLING

    def test_encode_partial(self) -> None:
        rights = CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        assert encode_castling(rights) == "Kq"

    def test_decode_partial(self) -> None:
        assert decode_castling("Qk") == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_KINGSIDE
        )

    def test_decode_ignores_other_characters(self) -> None:
        assert decode_castling("-") == CastlingRights.NONE
        assert decode_castling("xKz") == CastlingRights.WHITE_KINGSIDE


class TestEnPassant:
    def test_encode(self) -> None:
        assert encode_en_passant(sq("e3")) == "e3"
        assert encode_en_passant(None) is None

    def test_decode(self) -> None:
        assert decode_en_passant("d6") == sq("d6")
        assert decode_en_passant("-") is None
        assert decode_en_passant(None) is None

    def test_decode_garbage(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chesslogic.core.notation"):
            assert decode_en_passant("z9") is None
        assert "en passant" in caplog.text


class TestWholeBoard:
    def test_starting_text(self) -> None:
        assert board_to_text(Board.initial()) == STARTING_TEXT

    def test_from_starting_text(self) -> None:
        assert board_from_text(STARTING_TEXT) == Board.initial()

    def test_after_double_step(self) -> None:
        board = Board.initial()
        assert board.make_move(sq("e2"), sq("e4")) == MoveResult.APPLIED
        assert board_to_text(board) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR BLACK KQkq e3"
        )

    def test_text_round_trip_preserves_board(self) -> None:
        board = Board.initial()
        for move in ("e2e4", "c7c5", "g1f3", "d7d6", "f1b5"):
            assert board.make_move(sq(move[:2]), sq(move[2:])) == MoveResult.APPLIED
        assert board_from_text(board_to_text(board)) == board

    def test_record_fields(self) -> None:
        record = record_from_board(Board.initial())
        assert record == GameRecord(STARTING_PLACEMENT, "WHITE", "KQkq", None)

    def test_record_rebuilds_kings(self) -> None:
        board = board_from_record(GameRecord("8/8/3k4/8/8/8/8/6K1", "BLACK", "-", None))
        assert board.king_position(Player.WHITE) == sq("g1")
        assert board.king_position(Player.BLACK) == sq("d6")
        assert board.side_to_move == Player.BLACK

    def test_loaded_mate_is_game_over(self) -> None:
        board = board_from_text("R6k/6pp/8/8/8/8/8/6K1 BLACK - -")
        assert board.status() == GameStatus.CHECKMATE
        assert board.is_game_over()

    def test_wrong_field_count(self) -> None:
        with pytest.raises(NotationError):
            board_from_text(STARTING_PLACEMENT + " WHITE KQkq")

    def test_invalid_side_in_text(self) -> None:
        with pytest.raises(NotationError):
            board_from_text(STARTING_PLACEMENT + " RED KQkq -")
