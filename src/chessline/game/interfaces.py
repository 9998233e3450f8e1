"""Abstract interfaces for the game layer.

Collaborators (an API layer, a UI) depend on :class:`IGameController`,
not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessline.game.snapshot import GameSnapshot


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game.

    REPLAYING excludes new moves, undo and redo.  GAME_OVER excludes new
    moves but still allows undo.
    """

    ACTIVE = auto()
    GAME_OVER = auto()
    REPLAYING = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def make_move(self, from_notation: str, to_notation: str) -> bool:
        """Play a move given as two square names. Returns True if applied."""

    @abstractmethod
    def undo(self) -> bool:
        """Take back the current ply. Returns True on success."""

    @abstractmethod
    def redo(self) -> bool:
        """Re-apply the next recorded ply. Returns True on success."""

    @abstractmethod
    def start_replay(self) -> None:
        """Rewind to the initial position and enter replay mode."""

    @abstractmethod
    def replay_step(self) -> bool:
        """Apply the next recorded ply. False once the end is reached."""

    @abstractmethod
    def end_replay(self) -> None:
        """Fast-forward to the last recorded ply and leave replay mode."""

    @abstractmethod
    def reset_game(self) -> None:
        """Start a new game, discarding the history."""

    @abstractmethod
    def snapshot(self) -> GameSnapshot:
        """Complete view of the current position for collaborators."""
