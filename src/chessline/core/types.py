"""Board coordinates and square-name helpers.

Board layout (row = rank index, col = file index):
    a1 = Position(0, 0), h1 = Position(0, 7)
    a8 = Position(7, 0), h8 = Position(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable board coordinate. Equality and hashing by (row, col)."""

    row: int
    col: int

    @classmethod
    def from_notation(cls, name: str) -> Position:
        """Parse a square name, e.g. ``'e4'`` -> ``Position(3, 4)``."""
        return parse_square(name)

    @property
    def notation(self) -> str:
        """Human-readable name, e.g. ``Position(0, 0)`` -> ``'a1'``."""
        return square_name(self.row, self.col)

    @property
    def is_valid(self) -> bool:
        return is_on_board(self.row, self.col)

    def offset(self, d_row: int, d_col: int) -> Position:
        """Position shifted by the given deltas (may fall off the board)."""
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        if not self.is_valid:
            return f"({self.row},{self.col})"
        return self.notation


def is_on_board(row: int, col: int) -> bool:
    """Check whether (row, col) lies on the 8x8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def square_name(row: int, col: int) -> str:
    return FILES[col] + RANKS[row]


def is_square_name(name: object) -> bool:
    """True iff *name* is exactly one file letter a-h and one rank digit 1-8."""
    return (
        isinstance(name, str)
        and len(name) == 2
        and name[0] in FILES
        and name[1] in RANKS
    )


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> Position(3, 4)."""
    if not is_square_name(name):
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(RANKS.index(name[1]), FILES.index(name[0]))


def all_positions() -> tuple[Position, ...]:
    """All 64 squares, a1..h1 then a2..h2 and so on."""
    return _ALL_POSITIONS


_ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(8) for col in range(8)
)
