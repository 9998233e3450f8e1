"""Move record produced by :meth:`Board.apply_move`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessline.core.enums import PieceType
from chessline.core.types import Position

if TYPE_CHECKING:
    from chessline.core.piece import Piece


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of one applied ply.

    Holds everything needed to undo or redo the ply without re-deriving
    legality: the moving piece and captured piece entities as they were at
    move time, special-move flags, and the en-passant target that was in
    force before the move.
    """

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured: Piece | None = None
    was_first_move: bool = False
    is_castling: bool = False
    rook_from: Position | None = None
    rook_to: Position | None = None
    is_en_passant: bool = False
    is_promotion: bool = False
    promotion_type: PieceType | None = None
    promoted_piece: Piece | None = None
    previous_en_passant: Position | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_kingside_castle(self) -> bool:
        return self.is_castling and self.to_pos.col > self.from_pos.col

    @property
    def capture_position(self) -> Position | None:
        """Square the captured piece stood on (differs from ``to_pos`` for en passant)."""
        if self.captured is None:
            return None
        if self.is_en_passant:
            return Position(self.from_pos.row, self.to_pos.col)
        return self.to_pos

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def notation(self) -> str:
        """History entry, e.g. ``e2-e4``, ``Ng1xf3``, ``e7-e8=Q``, ``O-O``."""
        if self.is_castling:
            return "O-O" if self.is_kingside_castle else "O-O-O"

        parts: list[str] = []
        if self.piece.piece_type != PieceType.PAWN:
            parts.append(self.piece.letter)
        parts.append(self.from_pos.notation)
        parts.append("x" if self.is_capture else "-")
        parts.append(self.to_pos.notation)
        if self.is_promotion and self.promotion_type is not None:
            parts.append(f"={self.promotion_type.letter}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.notation
