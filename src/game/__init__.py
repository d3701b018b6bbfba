"""
Minesweeper game module.

Provides the board model, the session that owns the committed board,
the turn values exchanged with solvers and a gymnasium environment.
"""
from .cell import Cell, CellState, MINE_SENTINEL
from .board import (
    Board,
    BoardConfig,
    GameState,
    check_win,
    create_empty_board,
    SMALL,
    DEFAULT,
    LARGE,
)
from .turn import Action, ActionKind, SolverContext, Turn
from .session import GameSession
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "MINE_SENTINEL",
    "Board",
    "BoardConfig",
    "GameState",
    "check_win",
    "create_empty_board",
    "SMALL",
    "DEFAULT",
    "LARGE",
    "Action",
    "ActionKind",
    "SolverContext",
    "Turn",
    "GameSession",
    "MinesweeperEnv",
]
