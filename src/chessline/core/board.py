"""Board - piece placement, move legality and apply/undo/redo on an 8x8 grid."""

from __future__ import annotations

from bisect import insort
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from chessline.core.enums import Color, PieceType
from chessline.core.move import Move
from chessline.core.piece import Piece, PieceIdAllocator
from chessline.core.types import Position, all_positions

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_KING_HOME_COL = 4


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _by_identity(piece: Piece) -> int:
    return piece.identity


class Board:
    """Mutable 8x8 board owning its pieces.

    The grid and the per-color active piece lists always agree: a piece is
    on the grid iff it is in its color's active list.  Active lists are kept
    ordered by piece identity so apply/undo/redo restore them exactly.
    """

    __slots__ = (
        "_grid",
        "_active",
        "_kings",
        "_en_passant",
        "_allocator",
        "_promotion_type",
    )

    def __init__(
        self,
        allocator: PieceIdAllocator | None = None,
        promotion_type: PieceType = PieceType.QUEEN,
    ) -> None:
        if promotion_type not in PROMOTION_TYPES:
            raise ValueError(f"Invalid promotion type: {promotion_type.name}")
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self._active: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        self._kings: dict[Color, Piece | None] = {Color.WHITE: None, Color.BLACK: None}
        self._en_passant: Position | None = None
        self._allocator = allocator if allocator is not None else PieceIdAllocator()
        self._promotion_type = promotion_type

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls, promotion_type: PieceType = PieceType.QUEEN) -> Board:
        """Standard starting position."""
        b = cls(promotion_type=promotion_type)
        for color in (Color.WHITE, Color.BLACK):
            back = color.back_row
            for col, piece_type in enumerate(_BACK_RANK):
                b.place(piece_type, color, Position(back, col))
            for col in range(8):
                b.place(PieceType.PAWN, color, Position(back + color.pawn_direction, col))
        return b

    def place(
        self,
        piece_type: PieceType,
        color: Color,
        position: Position,
        has_moved: bool = False,
    ) -> Piece:
        """Put a freshly allocated piece on an empty square (setup only)."""
        if not position.is_valid:
            raise ValueError(f"Square off the board: {position}")
        if self._grid[position.row][position.col] is not None:
            raise ValueError(f"Square {position} is already occupied")
        if piece_type == PieceType.KING and self._kings[color] is not None:
            raise ValueError(f"{color.name} already has a king")

        piece = Piece(piece_type, color, position, self._allocator.allocate(), has_moved)
        self._grid[position.row][position.col] = piece
        self._activate(piece)
        if piece_type == PieceType.KING:
            self._kings[color] = piece
        return piece

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.piece_at(pos)

    def piece_at(self, pos: Position) -> Piece | None:
        if not pos.is_valid:
            return None
        return self._grid[pos.row][pos.col]

    def is_empty(self, pos: Position) -> bool:
        return self.piece_at(pos) is None

    def active_pieces(self, color: Color) -> tuple[Piece, ...]:
        """Pieces of *color* currently on the board, ordered by identity."""
        return tuple(self._active[color])

    def king(self, color: Color) -> Piece:
        """Return the single king of *color*."""
        king = self._kings[color]
        if king is None:
            raise ValueError(f"No {color.name} king on board")
        return king

    @property
    def en_passant_target(self) -> Position | None:
        """Square a pawn may capture onto en passant on the next ply only."""
        return self._en_passant

    @property
    def promotion_type(self) -> PieceType:
        return self._promotion_type

    @property
    def allocator(self) -> PieceIdAllocator:
        return self._allocator

    def grid(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Row-major copy of the grid; row 0 is rank 1."""
        return tuple(tuple(row) for row in self._grid)

    # -- Legality -----------------------------------------------------------

    def is_legal_move(self, from_pos: Position, to_pos: Position, color: Color) -> bool:
        """Whether *color* may move the piece on *from_pos* to *to_pos*."""
        piece = self.piece_at(from_pos)
        if piece is None or piece.color != color:
            return False
        if from_pos == to_pos or not to_pos.is_valid:
            return False
        target = self.piece_at(to_pos)
        if target is not None and target.color == color:
            return False
        if not self._can_reach(piece, from_pos, to_pos):
            return False
        return not self.would_expose_check(piece, from_pos, to_pos, color)

    def legal_moves_from(self, from_pos: Position) -> list[Position]:
        """All legal destinations for the piece on *from_pos*."""
        piece = self.piece_at(from_pos)
        if piece is None:
            return []
        return [
            to_pos
            for to_pos in all_positions()
            if self.is_legal_move(from_pos, to_pos, piece.color)
        ]

    def has_any_legal_move(self, color: Color) -> bool:
        for piece in self.active_pieces(color):
            from_pos = piece.position
            for to_pos in all_positions():
                if self.is_legal_move(from_pos, to_pos, color):
                    return True
        return False

    def would_expose_check(
        self, piece: Piece, from_pos: Position, to_pos: Position, color: Color
    ) -> bool:
        """Whether moving *piece* to *to_pos* leaves *color*'s king attacked.

        The move is simulated on the live board and fully reverted before
        returning.
        """
        with self._simulated(piece, from_pos, to_pos):
            return self.is_in_check(color)

    # -- Check / terminal detection -----------------------------------------

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        """True iff some active piece of *by_color* attacks *pos*."""
        return any(self._attacks(piece, pos) for piece in self.active_pieces(by_color))

    def is_in_check(self, color: Color) -> bool:
        return self.is_square_attacked(self.king(color).position, color.opposite)

    def is_checkmate(self, color: Color) -> bool:
        return self.is_in_check(color) and not self.has_any_legal_move(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.is_in_check(color) and not self.has_any_legal_move(color)

    # -- Move application ---------------------------------------------------

    def apply_move(self, from_pos: Position, to_pos: Position) -> Move:
        """Execute a validated move and return its record."""
        piece = self.piece_at(from_pos)
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")

        previous_en_passant = self._en_passant
        was_first_move = not piece.has_moved
        captured = self.piece_at(to_pos)

        # En passant: the captured pawn sits beside the origin square
        is_en_passant = (
            piece.piece_type == PieceType.PAWN
            and to_pos == previous_en_passant
            and from_pos.col != to_pos.col
            and captured is None
        )
        if is_en_passant:
            victim_pos = Position(from_pos.row, to_pos.col)
            captured = self.piece_at(victim_pos)
            self._set(victim_pos, None)

        # Castling: slide the rook
        is_castling = (
            piece.piece_type == PieceType.KING and abs(to_pos.col - from_pos.col) == 2
        )
        rook_from: Position | None = None
        rook_to: Position | None = None
        if is_castling:
            kingside = to_pos.col > from_pos.col
            rook_from = Position(from_pos.row, 7 if kingside else 0)
            rook_to = Position(from_pos.row, 5 if kingside else 3)
            rook = self.piece_at(rook_from)
            if rook is None:
                raise ValueError(f"No rook on {rook_from} to castle with")
            self._relocate(rook, rook_to)
            rook.has_moved = True

        if captured is not None:
            self._deactivate(captured)

        self._relocate(piece, to_pos)
        piece.has_moved = True

        promoted: Piece | None = None
        if self._reaches_last_row(piece, to_pos):
            promoted = Piece(
                self._promotion_type,
                piece.color,
                to_pos,
                self._allocator.allocate(),
                has_moved=True,
            )
            self._substitute(piece, promoted)

        self._en_passant = self._next_en_passant(piece, from_pos, to_pos)

        return Move(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=piece,
            captured=captured,
            was_first_move=was_first_move,
            is_castling=is_castling,
            rook_from=rook_from,
            rook_to=rook_to,
            is_en_passant=is_en_passant,
            is_promotion=promoted is not None,
            promotion_type=promoted.piece_type if promoted is not None else None,
            promoted_piece=promoted,
            previous_en_passant=previous_en_passant,
        )

    def undo_move(self, move: Move) -> None:
        """Exact inverse of :meth:`apply_move` for *move*."""
        piece = move.piece

        if move.is_promotion and move.promoted_piece is not None:
            self._substitute(move.promoted_piece, piece)

        self._set(move.to_pos, None)
        self._set(move.from_pos, piece)
        piece.position = move.from_pos
        if move.was_first_move:
            piece.has_moved = False

        captured = move.captured
        capture_pos = move.capture_position
        if captured is not None and capture_pos is not None:
            self._set(capture_pos, captured)
            captured.position = capture_pos
            self._activate(captured)

        if move.is_castling and move.rook_from is not None and move.rook_to is not None:
            rook = self.piece_at(move.rook_to)
            if rook is None:
                raise ValueError(f"No rook on {move.rook_to} to uncastle")
            self._relocate(rook, move.rook_from)
            rook.has_moved = False

        self._en_passant = move.previous_en_passant

    def redo_move(self, move: Move) -> None:
        """Replay the recorded effects of *move* without re-checking legality."""
        piece = move.piece
        captured = move.captured

        if move.is_en_passant and captured is not None:
            self._set(captured.position, None)

        if captured is not None:
            self._deactivate(captured)

        self._relocate(piece, move.to_pos)
        piece.has_moved = True

        if move.is_castling and move.rook_from is not None and move.rook_to is not None:
            rook = self.piece_at(move.rook_from)
            if rook is None:
                raise ValueError(f"No rook on {move.rook_from} to castle with")
            self._relocate(rook, move.rook_to)
            rook.has_moved = True

        if move.is_promotion and move.promoted_piece is not None:
            promoted = move.promoted_piece
            promoted.position = move.to_pos
            promoted.has_moved = True
            self._substitute(piece, promoted)

        self._en_passant = self._next_en_passant(piece, move.from_pos, move.to_pos)

    # -- Movement shapes ----------------------------------------------------

    def _can_reach(self, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        return _REACH[piece.piece_type](self, piece, from_pos, to_pos)

    def _pawn_can_reach(self, pawn: Piece, from_pos: Position, to_pos: Position) -> bool:
        direction = pawn.color.pawn_direction
        d_row = to_pos.row - from_pos.row
        d_col = to_pos.col - from_pos.col
        target = self.piece_at(to_pos)

        if d_col == 0:
            if target is not None:
                return False
            if d_row == direction:
                return True
            start_row = pawn.color.back_row + direction
            if d_row == 2 * direction and from_pos.row == start_row:
                return self.is_empty(from_pos.offset(direction, 0))
            return False

        if abs(d_col) != 1 or d_row != direction:
            return False
        if target is not None:
            return target.color != pawn.color
        if to_pos != self._en_passant:
            return False
        victim = self.piece_at(Position(from_pos.row, to_pos.col))
        return (
            victim is not None
            and victim.piece_type == PieceType.PAWN
            and victim.color != pawn.color
        )

    def _knight_can_reach(self, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        return _is_knight_jump(from_pos, to_pos)

    def _bishop_can_reach(self, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        return _is_diagonal(from_pos, to_pos) and self._is_path_clear(from_pos, to_pos)

    def _rook_can_reach(self, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        return _is_straight(from_pos, to_pos) and self._is_path_clear(from_pos, to_pos)

    def _queen_can_reach(self, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        return (
            _is_straight(from_pos, to_pos) or _is_diagonal(from_pos, to_pos)
        ) and self._is_path_clear(from_pos, to_pos)

    def _king_can_reach(self, king: Piece, from_pos: Position, to_pos: Position) -> bool:
        if _is_adjacent(from_pos, to_pos):
            return True
        if to_pos.row == from_pos.row and abs(to_pos.col - from_pos.col) == 2:
            return self._can_castle(king, from_pos, to_pos)
        return False

    def _can_castle(self, king: Piece, from_pos: Position, to_pos: Position) -> bool:
        color = king.color
        if king.has_moved or from_pos != Position(color.back_row, _KING_HOME_COL):
            return False

        kingside = to_pos.col > from_pos.col
        rook = self.piece_at(Position(from_pos.row, 7 if kingside else 0))
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != color
            or rook.has_moved
        ):
            return False

        low, high = sorted((from_pos.col, rook.position.col))
        for col in range(low + 1, high):
            if self._grid[from_pos.row][col] is not None:
                return False

        # Start, transit and destination squares must all be safe
        step = 1 if kingside else -1
        enemy = color.opposite
        return not any(
            self.is_square_attacked(from_pos.offset(0, step * i), enemy)
            for i in range(3)
        )

    def _attacks(self, piece: Piece, pos: Position) -> bool:
        """Capture-shape test used for attack detection (no castling, no pushes)."""
        origin = piece.position
        if origin == pos:
            return False
        piece_type = piece.piece_type
        if piece_type == PieceType.PAWN:
            return (
                pos.row - origin.row == piece.color.pawn_direction
                and abs(pos.col - origin.col) == 1
            )
        if piece_type == PieceType.KNIGHT:
            return _is_knight_jump(origin, pos)
        if piece_type == PieceType.KING:
            return _is_adjacent(origin, pos)
        if piece_type == PieceType.BISHOP:
            shaped = _is_diagonal(origin, pos)
        elif piece_type == PieceType.ROOK:
            shaped = _is_straight(origin, pos)
        else:
            shaped = _is_straight(origin, pos) or _is_diagonal(origin, pos)
        return shaped and self._is_path_clear(origin, pos)

    def _is_path_clear(self, from_pos: Position, to_pos: Position) -> bool:
        """Every square strictly between the two positions is empty."""
        d_row = _sign(to_pos.row - from_pos.row)
        d_col = _sign(to_pos.col - from_pos.col)
        row, col = from_pos.row + d_row, from_pos.col + d_col
        while (row, col) != (to_pos.row, to_pos.col):
            if self._grid[row][col] is not None:
                return False
            row += d_row
            col += d_col
        return True

    # -- Simulation ---------------------------------------------------------

    @contextmanager
    def _simulated(
        self, piece: Piece, from_pos: Position, to_pos: Position
    ) -> Iterator[None]:
        """Temporarily play *piece* to *to_pos*; always restore on exit."""
        captured = self.piece_at(to_pos)
        capture_pos = to_pos
        if (
            captured is None
            and piece.piece_type == PieceType.PAWN
            and to_pos == self._en_passant
            and from_pos.col != to_pos.col
        ):
            capture_pos = Position(from_pos.row, to_pos.col)
            captured = self.piece_at(capture_pos)

        try:
            if captured is not None:
                self._set(capture_pos, None)
                self._deactivate(captured)
            self._set(from_pos, None)
            self._set(to_pos, piece)
            piece.position = to_pos
            yield
        finally:
            self._set(to_pos, None)
            if captured is not None:
                self._set(capture_pos, captured)
                if captured not in self._active[captured.color]:
                    self._activate(captured)
            self._set(from_pos, piece)
            piece.position = from_pos

    # -- Low-level mutation -------------------------------------------------

    def _set(self, pos: Position, piece: Piece | None) -> None:
        self._grid[pos.row][pos.col] = piece

    def _relocate(self, piece: Piece, to_pos: Position) -> None:
        self._set(piece.position, None)
        self._set(to_pos, piece)
        piece.position = to_pos

    def _activate(self, piece: Piece) -> None:
        insort(self._active[piece.color], piece, key=_by_identity)

    def _deactivate(self, piece: Piece) -> None:
        # Removal is by identity, not by square.
        pieces = self._active[piece.color]
        for idx, candidate in enumerate(pieces):
            if candidate.identity == piece.identity:
                del pieces[idx]
                return
        raise ValueError(f"{piece!r} is not active")

    def _substitute(self, old: Piece, new: Piece) -> None:
        """Swap *old* for *new* on *old*'s square and in the active list."""
        self._set(new.position, new)
        self._deactivate(old)
        self._activate(new)

    @staticmethod
    def _reaches_last_row(piece: Piece, to_pos: Position) -> bool:
        return (
            piece.piece_type == PieceType.PAWN
            and to_pos.row == piece.color.opposite.back_row
        )

    @staticmethod
    def _next_en_passant(
        piece: Piece, from_pos: Position, to_pos: Position
    ) -> Position | None:
        if piece.piece_type == PieceType.PAWN and abs(to_pos.row - from_pos.row) == 2:
            return Position((from_pos.row + to_pos.row) // 2, from_pos.col)
        return None

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for col in range(8):
                p = self._grid[row][col]
                cells.append(p.symbol if p else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def _is_knight_jump(from_pos: Position, to_pos: Position) -> bool:
    return (to_pos.row - from_pos.row, to_pos.col - from_pos.col) in KNIGHT_OFFSETS


def _is_adjacent(from_pos: Position, to_pos: Position) -> bool:
    return (
        max(abs(to_pos.row - from_pos.row), abs(to_pos.col - from_pos.col)) == 1
    )


def _is_straight(from_pos: Position, to_pos: Position) -> bool:
    return from_pos != to_pos and (
        from_pos.row == to_pos.row or from_pos.col == to_pos.col
    )


def _is_diagonal(from_pos: Position, to_pos: Position) -> bool:
    d_row = abs(to_pos.row - from_pos.row)
    return d_row != 0 and d_row == abs(to_pos.col - from_pos.col)


_REACH: dict[PieceType, Callable[[Board, Piece, Position, Position], bool]] = {
    PieceType.PAWN: Board._pawn_can_reach,
    PieceType.KNIGHT: Board._knight_can_reach,
    PieceType.BISHOP: Board._bishop_can_reach,
    PieceType.ROOK: Board._rook_can_reach,
    PieceType.QUEEN: Board._queen_can_reach,
    PieceType.KING: Board._king_can_reach,
}
