"""Per-game configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chessline.core.board import PROMOTION_TYPES, Board
from chessline.core.enums import Color, PieceType
from chessline.core.layout import STARTING_PLACEMENT, board_from_placement


@dataclass(frozen=True)
class GameSettings:
    """All configurable game options."""

    starting_color: Color = Color.WHITE
    promotion_type: PieceType = PieceType.QUEEN
    # FEN piece placement of the start position
    placement: str = STARTING_PLACEMENT

    def __post_init__(self) -> None:
        if self.promotion_type not in PROMOTION_TYPES:
            raise ValueError(f"Invalid promotion type: {self.promotion_type.name}")
        board = self.new_board()
        for color in Color:
            board.king(color)

    def new_board(self) -> Board:
        """Fresh board (with a fresh identity allocator) for a new game."""
        if self.placement == STARTING_PLACEMENT:
            return Board.initial(promotion_type=self.promotion_type)
        return board_from_placement(self.placement, promotion_type=self.promotion_type)
