"""Piece-placement text (the board field of FEN) parsing and serialization."""

from __future__ import annotations

from chessline.core.board import Board
from chessline.core.enums import PieceType
from chessline.core.piece import piece_kind_from_char
from chessline.core.types import Position

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def board_from_placement(
    placement: str, promotion_type: PieceType = PieceType.QUEEN
) -> Board:
    """Build a :class:`Board` from FEN piece placement, e.g. ``'4k3/8/8/8/8/8/8/4K3'``.

    Only the placement field is read; every piece starts unmoved and there
    is no en-passant target.  A full FEN string is accepted and its
    remaining fields are ignored.
    """
    fields = placement.split()
    if not fields:
        raise ValueError("Empty piece placement")
    ranks = fields[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

    board = Board(promotion_type=promotion_type)
    for rank_idx, rank_text in enumerate(ranks):
        row = 7 - rank_idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
                color, piece_type = piece_kind_from_char(ch)
                board.place(piece_type, color, Position(row, col))
                col += 1
            if col > 8:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        if col != 8:
            raise ValueError(f"Invalid placement rank width: {placement!r}")
    return board


def board_to_placement(board: Board) -> str:
    """Serialise the pieces on *board* to FEN piece placement."""
    rows: list[str] = []
    for row in range(7, -1, -1):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Position(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += piece.symbol
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)
