"""Tests for the Move record: flags, capture square and notation."""

import pytest

from chessline.core.enums import Color, PieceType
from chessline.core.move import Move
from chessline.core.piece import Piece
from chessline.core.types import parse_square

sq = parse_square


def _piece(piece_type: PieceType, color: Color, at: str, identity: int = 1) -> Piece:
    return Piece(piece_type, color, sq(at), identity)


class TestMoveNotation:
    def test_pawn_push(self) -> None:
        move = Move(sq("e2"), sq("e4"), _piece(PieceType.PAWN, Color.WHITE, "e2"))
        assert move.notation == "e2-e4"
        assert str(move) == "e2-e4"

    def test_piece_capture(self) -> None:
        move = Move(
            sq("g1"),
            sq("f3"),
            _piece(PieceType.KNIGHT, Color.WHITE, "g1"),
            captured=_piece(PieceType.PAWN, Color.BLACK, "f3", 2),
        )
        assert move.notation == "Ng1xf3"

    def test_promotion_suffix(self) -> None:
        move = Move(
            sq("e7"),
            sq("e8"),
            _piece(PieceType.PAWN, Color.WHITE, "e7"),
            is_promotion=True,
            promotion_type=PieceType.QUEEN,
        )
        assert move.notation == "e7-e8=Q"

    @pytest.mark.parametrize(("to", "text"), [("g1", "O-O"), ("c1", "O-O-O")])
    def test_castling(self, to: str, text: str) -> None:
        move = Move(
            sq("e1"),
            sq(to),
            _piece(PieceType.KING, Color.WHITE, "e1"),
            is_castling=True,
        )
        assert move.notation == text


class TestMoveFlags:
    def test_quiet_move(self) -> None:
        move = Move(sq("b1"), sq("c3"), _piece(PieceType.KNIGHT, Color.WHITE, "b1"))
        assert not move.is_capture
        assert move.capture_position is None
        assert not move.is_kingside_castle

    def test_en_passant_capture_position(self) -> None:
        move = Move(
            sq("e5"),
            sq("d6"),
            _piece(PieceType.PAWN, Color.WHITE, "e5"),
            captured=_piece(PieceType.PAWN, Color.BLACK, "d5", 2),
            is_en_passant=True,
        )
        assert move.is_capture
        assert move.capture_position == sq("d5")

    def test_regular_capture_position(self) -> None:
        move = Move(
            sq("d1"),
            sq("d7"),
            _piece(PieceType.QUEEN, Color.WHITE, "d1"),
            captured=_piece(PieceType.PAWN, Color.BLACK, "d7", 2),
        )
        assert move.capture_position == sq("d7")

    def test_immutable(self) -> None:
        move = Move(sq("e2"), sq("e4"), _piece(PieceType.PAWN, Color.WHITE, "e2"))
        with pytest.raises(AttributeError):
            move.to_pos = sq("e3")  # type: ignore[misc]
