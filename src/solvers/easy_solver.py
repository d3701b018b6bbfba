"""
Easy solver for Minesweeper.

Opens one uniformly random covered cell per turn.
"""
from game import SolverContext, Turn

from .base_solver import BaseSolver, pick
from .events import EventKind


# ============================================================================
# Easy Solver
# ============================================================================

class EasySolver(BaseSolver):
    """
    Solver that opens a random hidden, unflagged cell each turn.

    On the first move of a session the mines are placed around the
    chosen cell, so the opening click is always safe. Every later
    click is a blind guess.
    """

    name = "easy"

    def _take_turn(self, context: SolverContext) -> Turn:
        candidates = context.board.hidden_cells()
        if not candidates:
            self.emitter.emit(EventKind.DEADLOCK, self.name)
            return Turn()

        turn = self._start_turn(context)
        position = pick(self.rng, candidates)
        self._ensure_started(context, turn, position)
        self.emitter.emit(EventKind.GUESS, self.name, position)
        self._open(context, turn, position, "random")
        return turn
