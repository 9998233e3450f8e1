"""Position snapshot handed to collaborators after every state change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chessline.core.enums import Color, PieceType
from chessline.core.piece import Piece
from chessline.core.types import parse_square


@dataclass(frozen=True, slots=True)
class PieceView:
    """Read-only description of a piece: what collaborators may rely on."""

    piece_type: PieceType
    color: Color
    symbol: str

    @classmethod
    def of(cls, piece: Piece) -> PieceView:
        return cls(piece.piece_type, piece.color, piece.symbol)

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.piece_type.name,
            "color": self.color.name,
            "symbol": self.symbol,
        }


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Complete view of one game at a point in time.

    ``board`` is row-major with row 0 = rank 1.  ``white_captured`` holds
    the pieces White has captured (most recent first), and likewise for
    ``black_captured``.
    """

    board: tuple[tuple[PieceView | None, ...], ...]
    side_to_move: Color
    is_game_over: bool
    result: str | None
    is_in_check: bool
    is_replaying: bool
    can_undo: bool
    can_redo: bool
    move_count: int
    move_history: str
    white_captured: tuple[PieceView, ...]
    black_captured: tuple[PieceView, ...]

    def piece_at(self, notation: str) -> PieceView | None:
        """Convenience lookup by square name, e.g. ``'e4'``."""
        pos = parse_square(notation)
        return self.board[pos.row][pos.col]

    def captured_by(self, color: Color) -> tuple[PieceView, ...]:
        return self.white_captured if color == Color.WHITE else self.black_captured

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible mapping for an API layer."""
        return {
            "board": [
                [view.to_dict() if view is not None else None for view in row]
                for row in self.board
            ],
            "currentTurn": self.side_to_move.name,
            "isGameOver": self.is_game_over,
            "gameResult": self.result,
            "isInCheck": self.is_in_check,
            "isReplaying": self.is_replaying,
            "canUndo": self.can_undo,
            "canRedo": self.can_redo,
            "moveCount": self.move_count,
            "moveHistory": self.move_history,
            "whiteCaptured": [view.to_dict() for view in self.white_captured],
            "blackCaptured": [view.to_dict() for view in self.black_captured],
        }
