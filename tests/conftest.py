"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessline.core.board import Board
from chessline.game.controller import GameController


@pytest.fixture
def board() -> Board:
    """Fresh board in the standard starting position."""
    return Board.initial()


@pytest.fixture
def controller() -> GameController:
    """Fresh game with default settings."""
    return GameController()
