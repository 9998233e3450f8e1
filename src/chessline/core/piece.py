"""Piece entity and per-game identity allocation."""

from __future__ import annotations

from chessline.core.enums import Color, PieceType
from chessline.core.types import Position

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    (pt.letter if color == Color.WHITE else pt.letter.lower()): (color, pt)
    for color in Color
    for pt in PieceType
}


def piece_kind_from_char(char: str) -> tuple[Color, PieceType]:
    """Decode a FEN character, e.g. 'N' -> (WHITE, KNIGHT)."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


class PieceIdAllocator:
    """Hands out piece identities for one game, starting at 1."""

    __slots__ = ("_next",)

    def __init__(self) -> None:
        self._next = 1

    def allocate(self) -> int:
        identity = self._next
        self._next += 1
        return identity

    @property
    def issued(self) -> int:
        """How many identities have been handed out so far."""
        return self._next - 1


class Piece:
    """A piece on (or formerly on) the board.

    Pieces are mutable: the board updates ``position`` and ``has_moved`` as
    moves are applied and undone.  Two pieces are equal only if they share
    an identity, never because they look alike or stand on the same square.
    """

    __slots__ = ("piece_type", "color", "position", "has_moved", "_identity")

    def __init__(
        self,
        piece_type: PieceType,
        color: Color,
        position: Position,
        identity: int,
        has_moved: bool = False,
    ) -> None:
        self.piece_type = piece_type
        self.color = color
        self.position = position
        self.has_moved = has_moved
        self._identity = identity

    @property
    def identity(self) -> int:
        return self._identity

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def letter(self) -> str:
        """Uppercase type letter, e.g. 'N'."""
        return self.piece_type.letter

    @property
    def symbol(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        if self.color == Color.WHITE:
            return self.letter
        return self.letter.lower()

    @property
    def unicode(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    # ── Identity ─────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self._identity == other._identity

    def __hash__(self) -> int:
        return hash(self._identity)

    def __str__(self) -> str:
        return f"{self.color.name[0]}-{self.letter}@{self.position}"

    def __repr__(self) -> str:
        return (
            f"Piece({self.color.name} {self.piece_type.name} "
            f"#{self._identity} at {self.position})"
        )
