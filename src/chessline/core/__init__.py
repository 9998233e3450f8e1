"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessline.core import Board, Color, parse_square

    board = Board.initial()
    e2, e4 = parse_square("e2"), parse_square("e4")
    if board.is_legal_move(e2, e4, Color.WHITE):
        move = board.apply_move(e2, e4)
        board.undo_move(move)
"""

from chessline.core.board import PROMOTION_TYPES, Board
from chessline.core.enums import Color, GameResult, PieceType
from chessline.core.layout import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from chessline.core.move import Move
from chessline.core.piece import Piece, PieceIdAllocator
from chessline.core.rules import Rules
from chessline.core.types import (
    Position,
    all_positions,
    is_square_name,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Position",
    "all_positions",
    "is_square_name",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "PROMOTION_TYPES",
    "Piece",
    "PieceIdAllocator",
    "Rules",
    # Placement text
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]
