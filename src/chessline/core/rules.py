"""High-level chess rules: terminal state detection and result messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessline.core.enums import Color, GameResult

if TYPE_CHECKING:
    from chessline.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board` and side to move."""

    # Product policy: only checkmate and stalemate end the game.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return board.is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        return board.is_checkmate(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        return board.is_stalemate(color)

    @staticmethod
    def game_result(board: Board, side_to_move: Color) -> GameResult:
        """Determine the current game result with a single legal-move scan."""
        if board.has_any_legal_move(side_to_move):
            return GameResult.IN_PROGRESS
        if board.is_in_check(side_to_move):
            return (
                GameResult.BLACK_WINS
                if side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate

    @staticmethod
    def result_message(result: GameResult) -> str | None:
        """Human-readable result, e.g. ``'WHITE wins by checkmate!'``."""
        if result == GameResult.WHITE_WINS:
            return f"{Color.WHITE} wins by checkmate!"
        if result == GameResult.BLACK_WINS:
            return f"{Color.BLACK} wins by checkmate!"
        if result == GameResult.DRAW:
            return "Draw by stalemate!"
        return None
