"""Game management layer: controller, timeline, captures, settings.

Quick start::

    from chessline.game import GameController

    ctrl = GameController()
    ctrl.make_move("e2", "e4")
    ctrl.undo()
    ctrl.redo()
    print(ctrl.snapshot().move_history)
"""

from chessline.game.captured import CapturedSet
from chessline.game.controller import GameController, GameEvents
from chessline.game.interfaces import GamePhase, IGameController
from chessline.game.settings import GameSettings
from chessline.game.snapshot import GameSnapshot, PieceView
from chessline.game.timeline import Timeline

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "CapturedSet",
    "GameController",
    "GameEvents",
    "GameSettings",
    "GameSnapshot",
    "PieceView",
    "Timeline",
]
