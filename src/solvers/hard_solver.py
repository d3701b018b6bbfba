"""
Hard solver for Minesweeper.

Extends the medium solver with the 1-2-1 pattern and a fallback that
never guesses blindly while a safe cell is still covered.
"""
from typing import List, Sequence, Tuple

from game import Board, SolverContext, Turn

from .base_solver import pick
from .events import EventKind
from .medium_solver import Deduction, MediumSolver

Position = Tuple[int, int]

ONE_TWO_ONE = (1, 2, 1)


# ============================================================================
# Hard Solver
# ============================================================================

class HardSolver(MediumSolver):
    """
    Solver adding geometric pattern deduction to the medium rules.

    Strategy:
        1. First move: open a random cell with first-click safety,
           skipping deduction entirely
        2. Medium deduction, plus the 1-2-1 pattern along rows and
           columns: with a revealed run of 1, 2, 1, the two hidden
           neighbors of the 2 that are not shared by both 1s are mines
        3. Open one cell exactly as the medium solver does
        4. When deduction gives nothing, open a cell the board knows
           is safe before falling back to a random guess
    """

    name = "hard"

    def _take_turn(self, context: SolverContext) -> Turn:
        if not context.started:
            return self._first_move(context)
        return super()._take_turn(context)

    def _first_move(self, context: SolverContext) -> Turn:
        """Open a random cell, placing mines around it."""
        candidates = context.board.hidden_cells()
        if not candidates:
            self.emitter.emit(EventKind.DEADLOCK, self.name)
            return Turn()

        turn = self._start_turn(context)
        position = pick(self.rng, candidates)
        self._ensure_started(context, turn, position)
        self._open(context, turn, position, "first_move")
        return turn

    # ========================================================================
    # Pattern Deduction
    # ========================================================================

    def _deduce(self, board: Board) -> Deduction:
        deduction = super()._deduce(board)
        for position in self._find_pattern_mines(board):
            deduction.mines.setdefault(position, "one_two_one")
        return deduction

    def _find_pattern_mines(self, board: Board) -> List[Position]:
        """Scan every horizontal and vertical run of three cells."""
        mines: List[Position] = []
        for fixed in range(board.size):
            for start in range(board.size - 2):
                row_run = [(fixed, start + offset) for offset in range(3)]
                col_run = [(start + offset, fixed) for offset in range(3)]
                mines.extend(self._match_one_two_one(board, row_run))
                mines.extend(self._match_one_two_one(board, col_run))
        return mines

    def _match_one_two_one(
        self, board: Board, run: Sequence[Position]
    ) -> List[Position]:
        """
        Return the two forced mines of a 1-2-1 run, or nothing.

        Each outer 1 sees at most one mine among the cells it shares
        with the 2, so the 2 must find both of its mines among the
        center neighbors outside the region seen by both 1s. Numbers
        are read net of flags already placed around them.
        """
        cells = [board.get_cell(*position) for position in run]
        if not all(cell.is_revealed for cell in cells):
            return []
        remaining = tuple(
            self._get_cell_info(board, *position).remaining_mines
            for position in run
        )
        if remaining != ONE_TWO_ONE:
            return []

        left, center, right = run
        shared = set(board.neighbors(*left)) & set(board.neighbors(*right))
        exclusive = [
            position
            for position in board.neighbors(*center)
            if board.get_cell(*position).is_hidden and position not in shared
        ]
        if len(exclusive) != 2:
            return []
        return exclusive

    # ========================================================================
    # Fallback
    # ========================================================================

    def _guess(self, context: SolverContext, turn: Turn) -> bool:
        """Open a cell the board knows is safe, else guess."""
        if context.started:
            for row, col in turn.board.hidden_cells():
                if not turn.board.get_cell(row, col).is_mine:
                    self._open(context, turn, (row, col), "ground_truth")
                    return True
        return super()._guess(context, turn)
