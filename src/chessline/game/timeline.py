"""Timeline: linear move history with a cursor for undo/redo/replay."""

from __future__ import annotations

from chessline.core.move import Move


class Timeline:
    """Ordered sequence of applied moves plus a cursor.

    The cursor indexes the most recently applied move; ``-1`` means the
    position before the first move.  Recording a move while the cursor is
    behind the end discards the redo branch first.
    """

    __slots__ = ("_moves", "_cursor")

    def __init__(self) -> None:
        self._moves: list[Move] = []
        self._cursor = -1

    # ── Mutation ─────────────────────────────────────────────────────────

    def record_move(self, move: Move) -> None:
        """Append *move* after the cursor, dropping any redo branch."""
        if self._cursor < len(self._moves) - 1:
            del self._moves[self._cursor + 1 :]
        self._moves.append(move)
        self._cursor = len(self._moves) - 1

    def undo(self) -> Move | None:
        """Return the move at the cursor and step back, or None at the start."""
        if self._cursor == -1:
            return None
        move = self._moves[self._cursor]
        self._cursor -= 1
        return move

    def redo(self) -> Move | None:
        """Step forward and return that move, or None at the end."""
        if self._cursor + 1 >= len(self._moves):
            return None
        self._cursor += 1
        return self._moves[self._cursor]

    def reset_to_start(self) -> None:
        """Rewind the cursor; recorded moves are kept."""
        self._cursor = -1

    def go_to_end(self) -> None:
        self._cursor = len(self._moves) - 1

    def clear(self) -> None:
        self._moves.clear()
        self._cursor = -1

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor >= 0

    @property
    def can_redo(self) -> bool:
        return self._cursor + 1 < len(self._moves)

    def current(self) -> Move | None:
        """Most recently applied move, or None before the first move."""
        if self._cursor == -1:
            return None
        return self._moves[self._cursor]

    def moves(self) -> tuple[Move, ...]:
        return tuple(self._moves)

    def history_text(self) -> str:
        """Numbered move pairs, e.g. ``'1. e2-e4 e7-e5 2. Ng1-f3'``."""
        parts: list[str] = []
        for ply, move in enumerate(self._moves):
            if ply % 2 == 0:
                parts.append(f"{(ply // 2) + 1}.")
            parts.append(move.notation)
        return " ".join(parts)

    def __len__(self) -> int:
        return len(self._moves)

    def __repr__(self) -> str:
        return f"Timeline(len={len(self._moves)}, cursor={self._cursor})"
