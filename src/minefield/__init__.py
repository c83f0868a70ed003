"""
Minefield game module.

Provides the minesweeper engine: cells, boards, player actions and a
Gymnasium environment wrapper.
"""
from .cell import Cell, CellKind
from .board import (
    Board,
    BoardConfig,
    BoardSnapshot,
    CellView,
    GamePhase,
    InvalidConfiguration,
    CLASSIC,
    BEGINNER,
    INTERMEDIATE,
)
from .engine import Engine
from .environment import ActionType, MinefieldEnv

__all__ = [
    "Cell",
    "CellKind",
    "Board",
    "BoardConfig",
    "BoardSnapshot",
    "CellView",
    "GamePhase",
    "InvalidConfiguration",
    "CLASSIC",
    "BEGINNER",
    "INTERMEDIATE",
    "Engine",
    "ActionType",
    "MinefieldEnv",
]
