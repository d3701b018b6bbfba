"""
Medium solver for Minesweeper.

Applies the two classic single-cell deduction rules once per turn and
falls back to a random guess when they give nothing to open.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from game import Board, SolverContext, Turn
from game.turn import ActionKind

from .base_solver import BaseSolver, pick
from .events import EventKind

Position = Tuple[int, int]


# ============================================================================
# Deduction Types
# ============================================================================

@dataclass
class CellInfo:
    """Neighborhood of a revealed numbered cell."""

    row: int
    col: int
    adjacent_mines: int
    hidden_neighbors: List[Position]
    flagged_neighbors: int

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among hidden neighbors."""
        return self.adjacent_mines - self.flagged_neighbors


@dataclass
class Deduction:
    """
    Conclusions drawn from one scan of the board.

    Dicts are used as insertion-ordered sets; ``mines`` maps each
    certain mine to the rule that found it.
    """

    zero_safe: Dict[Position, None] = field(default_factory=dict)
    rule_safe: Dict[Position, None] = field(default_factory=dict)
    mines: Dict[Position, str] = field(default_factory=dict)


# ============================================================================
# Medium Solver
# ============================================================================

class MediumSolver(BaseSolver):
    """
    Solver using single-step constraint propagation.

    Strategy:
        1. Hidden neighbors of a revealed zero are safe
        2. Rule A: a number whose hidden neighbors equal its remaining
           mines has only mines around it
        3. Rule B: a number already satisfied by flags has only safe
           hidden neighbors
        4. Flag every Rule A mine, then open exactly one cell: Rule B
           after flagging, the original Rule B set, a zero neighbor,
           a random guess, or finally un-flag and open a flagged cell

    Flags do not consume the turn; opening one cell does.
    """

    name = "medium"

    def _take_turn(self, context: SolverContext) -> Turn:
        turn = self._start_turn(context)
        board = turn.board

        deduction = self._deduce(board)
        self._commit_flags(turn, deduction.mines)

        if self._open_first(context, turn, self._safe_cells(board), "rule_b_after_flags"):
            return turn
        if self._open_first(context, turn, deduction.rule_safe, "rule_b"):
            return turn
        if self._open_first(context, turn, deduction.zero_safe, "zero_neighbor"):
            return turn
        if self._guess(context, turn):
            return turn
        if self._recover_deadlock(context, turn):
            return turn

        if turn.flagged:
            self._check_win(context, turn)
            return turn

        self.emitter.emit(EventKind.DEADLOCK, self.name)
        return Turn()

    # ========================================================================
    # Deduction
    # ========================================================================

    def _deduce(self, board: Board) -> Deduction:
        """Scan the board once for certain safe cells and mines."""
        deduction = Deduction()

        for cell in board.cells():
            if not cell.is_revealed or cell.is_mine or cell.adjacent_mines != 0:
                continue
            for position in board.neighbors(cell.row, cell.col):
                if board.get_cell(*position).is_hidden:
                    deduction.zero_safe[position] = None

        for info in self._numbered_cells(board):
            if not info.hidden_neighbors:
                continue
            # Rule A: every hidden neighbor is a mine
            if len(info.hidden_neighbors) == info.remaining_mines:
                for position in info.hidden_neighbors:
                    deduction.mines.setdefault(position, "rule_a")
            # Rule B: flags already account for the number
            if info.flagged_neighbors == info.adjacent_mines:
                for position in info.hidden_neighbors:
                    deduction.rule_safe[position] = None

        return deduction

    def _safe_cells(self, board: Board) -> Dict[Position, None]:
        """Rule B alone, evaluated on the board as it stands."""
        safe: Dict[Position, None] = {}
        for info in self._numbered_cells(board):
            if info.hidden_neighbors and info.flagged_neighbors == info.adjacent_mines:
                for position in info.hidden_neighbors:
                    safe[position] = None
        return safe

    def _numbered_cells(self, board: Board) -> Iterator[CellInfo]:
        """Yield neighborhood info for every revealed number."""
        for cell in board.cells():
            if not cell.is_revealed or cell.adjacent_mines <= 0:
                continue
            yield self._get_cell_info(board, cell.row, cell.col)

    def _get_cell_info(self, board: Board, row: int, col: int) -> CellInfo:
        """Get analysis info for a revealed cell."""
        hidden: List[Position] = []
        flagged = 0
        for position in board.neighbors(row, col):
            neighbor = board.get_cell(*position)
            if neighbor.is_flagged:
                flagged += 1
            elif neighbor.is_hidden:
                hidden.append(position)
        return CellInfo(
            row=row,
            col=col,
            adjacent_mines=board.get_cell(row, col).adjacent_mines,
            hidden_neighbors=hidden,
            flagged_neighbors=flagged,
        )

    # ========================================================================
    # Turn Resolution
    # ========================================================================

    def _commit_flags(self, turn: Turn, mines: Dict[Position, str]) -> None:
        """Flag every certain mine that is still hidden."""
        for (row, col), reason in mines.items():
            cell = turn.board.get_cell(row, col)
            if not cell.is_hidden:
                continue
            cell.toggle_flag()
            turn.record(ActionKind.FLAG, row, col, reason)
            self.emitter.emit(EventKind.FLAG, self.name, (row, col), reason)

    def _open_first(
        self, context: SolverContext, turn: Turn, cells, reason: str
    ) -> bool:
        """Open the first still-hidden cell of a deduced set."""
        for position in cells:
            if not turn.board.get_cell(*position).is_hidden:
                continue
            self._open(context, turn, position, reason, deduced=True)
            return True
        return False

    def _guess(self, context: SolverContext, turn: Turn) -> bool:
        """Open a random hidden cell, placing mines first if needed."""
        candidates = turn.board.hidden_cells()
        if not candidates:
            return False
        position = pick(self.rng, candidates)
        self._ensure_started(context, turn, position)
        self.emitter.emit(EventKind.GUESS, self.name, position)
        self._open(context, turn, position, "random")
        return True

    def _recover_deadlock(self, context: SolverContext, turn: Turn) -> bool:
        """Only flagged cells remain covered: un-flag one and open it."""
        flagged = turn.board.flagged_cells()
        if not flagged:
            return False
        row, col = pick(self.rng, flagged)
        turn.board.get_cell(row, col).toggle_flag()
        turn.record(ActionKind.UNFLAG, row, col, "deadlock_recovery")
        self.emitter.emit(EventKind.UNFLAG, self.name, (row, col), "deadlock_recovery")
        self._ensure_started(context, turn, (row, col))
        self._open(context, turn, (row, col), "deadlock_recovery")
        return True
