"""chessline: chess rules engine with an undo/redo/replay move timeline."""

__version__ = "0.1.0"
