"""Captured pieces held by one side, most recent first."""

from __future__ import annotations

from collections.abc import Iterator

from chessline.core.piece import Piece


class CapturedSet:
    """Pieces captured by one color.

    Iteration yields the most recent capture first.  Membership and removal
    compare piece identity, so two captured pawns are never confused.
    """

    __slots__ = ("_pieces",)

    def __init__(self) -> None:
        self._pieces: list[Piece] = []

    def add(self, piece: Piece) -> None:
        self._pieces.insert(0, piece)

    def remove(self, piece: Piece) -> bool:
        """Remove *piece* by identity. Returns False if it was not present."""
        for idx, candidate in enumerate(self._pieces):
            if candidate.identity == piece.identity:
                del self._pieces[idx]
                return True
        return False

    def clear(self) -> None:
        self._pieces.clear()

    def pieces(self) -> tuple[Piece, ...]:
        return tuple(self._pieces)

    def __contains__(self, piece: object) -> bool:
        if not isinstance(piece, Piece):
            return False
        return any(p.identity == piece.identity for p in self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(tuple(self._pieces))

    def __len__(self) -> int:
        return len(self._pieces)
