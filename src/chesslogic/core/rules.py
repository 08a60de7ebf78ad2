"""High-level rules: check, checkmate, stalemate and the status line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslogic.core.enums import GameStatus
from chesslogic.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesslogic.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return MoveGenerator(board).is_king_in_check(board.side_to_move)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return Rules.evaluate(board) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return Rules.evaluate(board) == GameStatus.STALEMATE

    @staticmethod
    def evaluate(board: Board) -> GameStatus:
        """Status of the side to move."""
        gen = MoveGenerator(board)
        player = board.side_to_move
        in_check = gen.is_king_in_check(player)
        has_move = gen.has_any_legal_move(player)

        if not has_move:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        return GameStatus.CHECK if in_check else GameStatus.ONGOING

    @staticmethod
    def status_message(status: GameStatus, board: Board) -> str:
        player = board.side_to_move
        if status == GameStatus.CHECKMATE:
            return f"Checkmate! {player.opposite.title} wins!"
        if status == GameStatus.STALEMATE:
            return "Stalemate! It's a draw."
        if status == GameStatus.CHECK:
            return f"{player.title} is in check!"
        return f"{player.title}'s turn."
