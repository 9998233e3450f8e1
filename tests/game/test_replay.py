"""Tests for replay mode: rewind, stepping, fast-forward and its guards."""

from __future__ import annotations

from chessline.core.enums import Color, GameResult
from chessline.game.controller import GameController
from chessline.game.interfaces import GamePhase

OPENING = [
    ("e2", "e4"), ("d7", "d5"), ("e4", "d5"), ("g8", "f6"),
    ("f1", "b5"), ("c7", "c6"), ("d5", "c6"), ("b7", "c6"),
]


def _played(moves: list[tuple[str, str]]) -> GameController:
    ctrl = GameController()
    for a, b in moves:
        assert ctrl.make_move(a, b)
    return ctrl


class TestStartReplay:
    def test_rewinds_to_initial_position(self) -> None:
        ctrl = _played(OPENING)
        initial = GameController().snapshot()
        ctrl.start_replay()
        snap = ctrl.snapshot()
        assert ctrl.is_replaying
        assert ctrl.phase == GamePhase.REPLAYING
        assert snap.is_replaying
        assert snap.board == initial.board
        assert snap.white_captured == ()
        assert snap.black_captured == ()
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.move_count == len(OPENING)

    def test_blocks_moves_undo_and_redo(self) -> None:
        ctrl = _played(OPENING)
        ctrl.start_replay()
        assert not ctrl.make_move("e2", "e4")
        assert not ctrl.undo()
        assert not ctrl.redo()
        assert not ctrl.can_undo
        assert not ctrl.can_redo

    def test_empty_history(self, controller: GameController) -> None:
        controller.start_replay()
        assert controller.is_replaying
        assert not controller.replay_step()
        assert not controller.is_replaying
        assert controller.phase == GamePhase.ACTIVE

    def test_replay_step_outside_replay(self, controller: GameController) -> None:
        assert not controller.replay_step()


class TestReplayStep:
    def test_steps_through_each_ply(self) -> None:
        ctrl = _played(OPENING)
        checkpoints = []
        reference = GameController()
        for a, b in OPENING:
            reference.make_move(a, b)
            checkpoints.append(reference.snapshot())

        ctrl.start_replay()
        for expected in checkpoints:
            assert ctrl.replay_step()
            snap = ctrl.snapshot()
            assert snap.board == expected.board
            assert snap.side_to_move == expected.side_to_move
            assert snap.white_captured == expected.white_captured
            assert snap.black_captured == expected.black_captured
        assert not ctrl.replay_step()
        assert ctrl.phase == GamePhase.ACTIVE

    def test_finished_replay_matches_pre_replay_state(self) -> None:
        ctrl = _played(OPENING)
        before = ctrl.snapshot()
        ctrl.start_replay()
        while ctrl.replay_step():
            pass
        assert ctrl.snapshot() == before
        assert ctrl.make_move("d2", "d4")

    def test_events_fire_per_step(self) -> None:
        ctrl = _played(OPENING[:2])
        seen: list[str] = []
        ctrl.events.on_move.append(lambda move, text: seen.append(text))
        ctrl.start_replay()
        ctrl.replay_step()
        ctrl.replay_step()
        assert seen == ["e2-e4", "d7-d5"]

    def test_move_objects_stay_bound_to_board(self) -> None:
        ctrl = _played(OPENING)
        recorded = ctrl.timeline.moves()
        ctrl.start_replay()
        ctrl.replay_step()
        assert ctrl.board[recorded[0].to_pos] is recorded[0].piece


class TestEndReplay:
    def test_fast_forwards(self) -> None:
        ctrl = _played(OPENING)
        before = ctrl.snapshot()
        ctrl.start_replay()
        ctrl.replay_step()
        ctrl.end_replay()
        assert not ctrl.is_replaying
        assert ctrl.snapshot() == before

    def test_replay_of_finished_game_ends_over(self) -> None:
        ctrl = _played([("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")])
        ctrl.start_replay()
        assert not ctrl.is_game_over
        ctrl.end_replay()
        assert ctrl.is_game_over
        assert ctrl.result == GameResult.BLACK_WINS
        assert ctrl.can_undo

    def test_end_replay_when_not_replaying_is_harmless(self, controller: GameController) -> None:
        controller.make_move("e2", "e4")
        controller.end_replay()
        assert controller.move_count == 1
        assert controller.phase == GamePhase.ACTIVE

    def test_replay_after_undo_plays_whole_line(self) -> None:
        ctrl = _played(OPENING)
        full = ctrl.snapshot()
        ctrl.undo()
        ctrl.undo()
        ctrl.start_replay()
        ctrl.end_replay()
        assert ctrl.snapshot() == full
