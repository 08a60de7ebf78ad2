"""Tests for Piece and enums."""

import pytest

from chesslogic.core.enums import CastlingRights, GameStatus, PieceKind, Player
from chesslogic.core.piece import Piece


class TestPlayer:
    def test_opposite(self) -> None:
        assert Player.WHITE.opposite == Player.BLACK
        assert Player.BLACK.opposite == Player.WHITE

    def test_names(self) -> None:
        assert str(Player.WHITE) == "WHITE"
        assert Player.BLACK.title == "Black"


class TestPiece:
    def test_letters(self) -> None:
        assert str(Piece(Player.WHITE, PieceKind.KNIGHT)) == "N"
        assert str(Piece(Player.BLACK, PieceKind.QUEEN)) == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("k") == Piece(Player.BLACK, PieceKind.KING)
        assert Piece.from_char("P") == Piece(Player.WHITE, PieceKind.PAWN)

    def test_from_char_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_symbol(self) -> None:
        assert Piece(Player.BLACK, PieceKind.KNIGHT).symbol == "♞"
        assert Piece(Player.WHITE, PieceKind.KING).symbol == "♔"

    @pytest.mark.parametrize("letter", list("PNBRQKpnbrqk"))
    def test_letter_survives_from_char(self, letter: str) -> None:
        assert str(Piece.from_char(letter)) == letter

    @pytest.mark.parametrize("text", ["", "1", "Kk", "-"])
    def test_from_char_rejects_non_letters(self, text: str) -> None:
        with pytest.raises(ValueError):
            Piece.from_char(text)

    def test_immutable(self) -> None:
        piece = Piece(Player.WHITE, PieceKind.PAWN)
        with pytest.raises(AttributeError):
            piece.kind = PieceKind.QUEEN  # type: ignore[misc]


class TestFlags:
    def test_castling_for_player(self) -> None:
        assert (
            CastlingRights.for_player(Player.BLACK, kingside=False)
            == CastlingRights.BLACK_QUEENSIDE
        )
        assert CastlingRights.both(Player.WHITE) == CastlingRights.WHITE_BOTH

    def test_terminal_statuses(self) -> None:
        assert GameStatus.CHECKMATE.is_terminal
        assert GameStatus.STALEMATE.is_terminal
        assert not GameStatus.CHECK.is_terminal
        assert not GameStatus.ONGOING.is_terminal
