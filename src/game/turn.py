"""
Turn module for Minesweeper game.

Defines the values exchanged between the session that owns the
committed board and the solvers that play on it: a read-only
SolverContext going in, a Turn intent coming back.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .board import Board, GameState, check_win


# ============================================================================
# Actions
# ============================================================================

class ActionKind(Enum):
    """Kinds of board mutation a turn can contain."""

    OPEN = auto()
    FLAG = auto()
    UNFLAG = auto()


@dataclass(frozen=True)
class Action:
    """
    A single mutation performed during a turn.

    Attributes:
        kind: What was done to the cell.
        row: Row index of the cell.
        col: Column index of the cell.
        reason: Name of the rule or fallback that chose the cell.
    """

    kind: ActionKind
    row: int
    col: int
    reason: str = ""

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col


# ============================================================================
# Turn
# ============================================================================

@dataclass
class Turn:
    """
    Outcome of one solver, hint or player invocation.

    A turn with no board is a no-op. Otherwise ``board`` is the working
    clone with every action already applied, ready to be published as
    a whole.
    """

    board: Optional[Board] = None
    actions: List[Action] = field(default_factory=list)
    mines_placed: bool = False
    outcome: Optional[GameState] = None

    @property
    def is_noop(self) -> bool:
        """True when nothing should be published."""
        return self.board is None

    @property
    def opened(self) -> List[Tuple[int, int]]:
        """Cells explicitly opened during the turn."""
        return [a.position for a in self.actions if a.kind == ActionKind.OPEN]

    @property
    def flagged(self) -> List[Tuple[int, int]]:
        """Cells flagged during the turn."""
        return [a.position for a in self.actions if a.kind == ActionKind.FLAG]

    def record(
        self, kind: ActionKind, row: int, col: int, reason: str = ""
    ) -> Action:
        """Append an action to the turn and return it."""
        action = Action(kind, row, col, reason)
        self.actions.append(action)
        return action


# ============================================================================
# Solver Context
# ============================================================================

@dataclass(frozen=True)
class SolverContext:
    """
    Read-only view of the session handed to solvers and the hint service.

    Attributes:
        board: Committed board snapshot. Never mutated by solvers.
        num_mines: Mines configured for the session.
        started: Whether mines have been placed.
        playing: False once the session has been won or lost.
        win_predicate: Pure win check, pluggable for tests.
    """

    board: Board
    num_mines: int
    started: bool
    playing: bool = True
    win_predicate: Callable[[Board], bool] = check_win

    @property
    def grid_size(self) -> int:
        """Side length of the board."""
        return self.board.size

    def check_win(self, board: Board) -> bool:
        """Apply the session's win predicate to a board."""
        return self.win_predicate(board)
