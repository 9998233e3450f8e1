"""GameController: the central orchestrator of a chess game.

Coordinates: Board, Timeline, CapturedSets, turn order and replay mode.
Emits events via simple callbacks so an API layer / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from chessline.core.board import Board
from chessline.core.enums import Color, GameResult
from chessline.core.move import Move
from chessline.core.rules import Rules
from chessline.core.types import is_square_name, parse_square
from chessline.game.captured import CapturedSet
from chessline.game.interfaces import GamePhase, IGameController
from chessline.game.settings import GameSettings
from chessline.game.snapshot import GameSnapshot, PieceView
from chessline.game.timeline import Timeline

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str], None]  # move, notation
GameOverCallback = Callable[[GameResult, str], None]  # result, message
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates one chess game: validates and applies moves, records
    them on the timeline, tracks captures, switches turns and detects the
    end of the game.

    Thread-safety: every public operation runs under :attr:`lock`, an
    exclusive re-entrant lock, so one instance may be shared by several
    callers.  Board, timeline and captured sets are only ever observed
    between complete operations.
    """

    __slots__ = (
        "_settings",
        "_board",
        "_timeline",
        "_captured",
        "_side_to_move",
        "_phase",
        "_result",
        "_lock",
        "events",
    )

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._board = self._settings.new_board()
        self._timeline = Timeline()
        self._captured: dict[Color, CapturedSet] = {
            Color.WHITE: CapturedSet(),
            Color.BLACK: CapturedSet(),
        }
        self._side_to_move = self._settings.starting_color
        self._phase = GamePhase.ACTIVE
        self._result = GameResult.IN_PROGRESS
        self._lock = threading.RLock()
        self.events = GameEvents()
        self._refresh_status()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def board(self) -> Board:
        return self._board

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def result_message(self) -> str | None:
        return Rules.result_message(self._result)

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def is_replaying(self) -> bool:
        return self._phase == GamePhase.REPLAYING

    @property
    def is_in_check(self) -> bool:
        return self._board.is_in_check(self._side_to_move)

    @property
    def can_undo(self) -> bool:
        return self._timeline.can_undo and not self.is_replaying

    @property
    def can_redo(self) -> bool:
        return self._timeline.can_redo and not self.is_replaying

    @property
    def move_count(self) -> int:
        return len(self._timeline)

    def captured(self, color: Color) -> CapturedSet:
        """Pieces captured *by* *color*."""
        return self._captured[color]

    def move_history(self) -> str:
        return self._timeline.history_text()

    # ── IGameController impl ─────────────────────────────────────────────

    def make_move(self, from_notation: str, to_notation: str) -> bool:
        with self._lock:
            if self._phase != GamePhase.ACTIVE:
                _LOGGER.debug(
                    "Move %s-%s rejected in phase %s",
                    from_notation,
                    to_notation,
                    self._phase.name,
                )
                return False
            if not (is_square_name(from_notation) and is_square_name(to_notation)):
                _LOGGER.debug(
                    "Malformed move notation: %r -> %r", from_notation, to_notation
                )
                return False

            from_pos = parse_square(from_notation)
            to_pos = parse_square(to_notation)
            if not self._board.is_legal_move(from_pos, to_pos, self._side_to_move):
                _LOGGER.debug(
                    "Illegal move for %s: %s-%s",
                    self._side_to_move.name,
                    from_notation,
                    to_notation,
                )
                return False

            move = self._board.apply_move(from_pos, to_pos)
            self._timeline.record_move(move)
            self._advance(move)
            self._refresh_status()
            return True

    def undo(self) -> bool:
        with self._lock:
            if self.is_replaying or not self._timeline.can_undo:
                return False

            move = self._timeline.undo()
            if move is None:
                return False
            self._board.undo_move(move)
            if move.captured is not None:
                self._captured[move.piece.color].remove(move.captured)
            self._side_to_move = self._side_to_move.opposite

            # Taking back any ply resumes the game, even a finished one.
            self._result = GameResult.IN_PROGRESS
            self._set_phase(GamePhase.ACTIVE)
            _LOGGER.debug("Undid %s", move.notation)
            return True

    def redo(self) -> bool:
        with self._lock:
            if self.is_replaying or not self._timeline.can_redo:
                return False

            move = self._timeline.redo()
            if move is None:
                return False
            self._board.redo_move(move)
            self._advance(move)
            self._refresh_status()
            return True

    def start_replay(self) -> None:
        with self._lock:
            # Walk the live board back so recorded moves keep referring to
            # the pieces actually standing on it.
            applied = self._timeline.moves()[: self._timeline.cursor + 1]
            for move in reversed(applied):
                self._board.undo_move(move)
            self._timeline.reset_to_start()
            for captured in self._captured.values():
                captured.clear()
            self._side_to_move = self._settings.starting_color
            self._result = GameResult.IN_PROGRESS
            self._set_phase(GamePhase.REPLAYING)
            _LOGGER.info("Replay started (%d recorded moves)", len(self._timeline))

    def replay_step(self) -> bool:
        with self._lock:
            if not self.is_replaying:
                return False

            move = self._timeline.redo()
            if move is None:
                self._set_phase(GamePhase.ACTIVE)
                self._refresh_status()
                _LOGGER.info("Replay finished")
                return False

            self._board.redo_move(move)
            self._advance(move)
            return True

    def end_replay(self) -> None:
        with self._lock:
            while self.replay_step():
                pass
            if self.is_replaying:
                self._set_phase(GamePhase.ACTIVE)
            self._refresh_status()

    def reset_game(self) -> None:
        with self._lock:
            self._timeline.clear()
            self._board = self._settings.new_board()
            for captured in self._captured.values():
                captured.clear()
            self._side_to_move = self._settings.starting_color
            self._result = GameResult.IN_PROGRESS
            self._set_phase(GamePhase.ACTIVE)
            self._refresh_status()
            _LOGGER.info("Game reset")

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            board = tuple(
                tuple(PieceView.of(p) if p is not None else None for p in row)
                for row in self._board.grid()
            )
            return GameSnapshot(
                board=board,
                side_to_move=self._side_to_move,
                is_game_over=self.is_game_over,
                result=self.result_message,
                is_in_check=self.is_in_check,
                is_replaying=self.is_replaying,
                can_undo=self.can_undo,
                can_redo=self.can_redo,
                move_count=self.move_count,
                move_history=self.move_history(),
                white_captured=tuple(
                    PieceView.of(p) for p in self._captured[Color.WHITE]
                ),
                black_captured=tuple(
                    PieceView.of(p) for p in self._captured[Color.BLACK]
                ),
            )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _advance(self, move: Move) -> None:
        """Bookkeeping shared by new moves, redo and replay steps."""
        if move.captured is not None:
            self._captured[move.piece.color].add(move.captured)
        self._side_to_move = self._side_to_move.opposite
        _LOGGER.debug("Played %s", move.notation)
        self._emit_move(move)

    def _refresh_status(self) -> None:
        """Recompute checkmate / stalemate for the side to move."""
        if self.is_replaying:
            return
        result = Rules.game_result(self._board, self._side_to_move)
        self._result = result
        if result == GameResult.IN_PROGRESS:
            self._set_phase(GamePhase.ACTIVE)
            return

        message = Rules.result_message(result) or ""
        was_over = self._phase == GamePhase.GAME_OVER
        self._set_phase(GamePhase.GAME_OVER)
        if not was_over:
            _LOGGER.info("Game over: %s", message)
            self._emit_game_over(result, message)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        _LOGGER.debug("Phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase
        self._emit_phase(phase)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, move.notation)

    def _emit_game_over(self, result: GameResult, message: str) -> None:
        for cb in self.events.on_game_over:
            cb(result, message)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
