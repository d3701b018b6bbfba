"""
Base solver interface for Minesweeper AI.

Defines the turn-taking interface every solver tier implements and the
primitives they share: the first-move mine placement and the opening
of a single cell.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

import numpy as np

from game import Board, GameState, SolverContext, Turn
from game.turn import ActionKind

from .events import EventEmitter, EventKind

Position = Tuple[int, int]


# ============================================================================
# Shared Primitives
# ============================================================================

def ensure_started(
    context: SolverContext,
    working: Board,
    position: Position,
    rng: np.random.Generator,
) -> bool:
    """
    Place mines on a working board if the session has not started.

    Mines avoid ``position`` and its neighbors, then adjacency is
    computed.

    Returns:
        True if mines were placed by this call.
    """
    if context.started:
        return False
    working.place_mines(context.num_mines, position, rng)
    working.compute_adjacency()
    return True


def pick(rng: np.random.Generator, positions: Sequence[Position]) -> Position:
    """Choose one position uniformly at random."""
    row, col = positions[int(rng.integers(len(positions)))]
    return row, col


# ============================================================================
# Base Solver Interface
# ============================================================================

class BaseSolver(ABC):
    """
    Abstract base class for Minesweeper solvers.

    A solver plays exactly one turn per call to ``play_turn``. It works
    on a private clone of the context board and returns the result as
    a Turn for the session to publish; the context is never mutated.
    """

    name = "solver"

    def __init__(
        self,
        seed: Optional[int] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        """
        Initialize the solver.

        Args:
            seed: Random seed for reproducibility.
            emitter: Event emitter receiving the solver's decisions.
        """
        self.rng = np.random.default_rng(seed)
        self.emitter = emitter or EventEmitter()

    def play_turn(self, context: Optional[SolverContext]) -> Turn:
        """
        Take one turn.

        Args:
            context: Snapshot of the session.

        Returns:
            The turn to publish, or a no-op turn.
        """
        if context is None:
            self.emitter.emit(EventKind.GUARD_FAILURE, self.name, detail="no context")
            return Turn()
        if not context.playing:
            self.emitter.emit(EventKind.EXHAUSTED, self.name, detail="game over")
            return Turn()
        if context.check_win(context.board):
            self.emitter.emit(EventKind.EXHAUSTED, self.name, detail="already won")
            return Turn()
        return self._take_turn(context)

    @abstractmethod
    def _take_turn(self, context: SolverContext) -> Turn:
        """Compute one turn against a context whose game is not yet won."""

    def reset(self) -> None:
        """Reset solver state for a new game."""
        pass

    # ========================================================================
    # Turn Helpers
    # ========================================================================

    def _start_turn(self, context: SolverContext) -> Turn:
        """Begin a turn on a fresh clone of the committed board."""
        return Turn(board=context.board.clone())

    def _ensure_started(
        self, context: SolverContext, turn: Turn, position: Position
    ) -> None:
        """Place mines around the first chosen cell if needed."""
        if ensure_started(context, turn.board, position, self.rng):
            turn.mines_placed = True
            self.emitter.emit(EventKind.MINES_PLACED, self.name, position)

    def _open(
        self,
        context: SolverContext,
        turn: Turn,
        position: Position,
        reason: str,
        deduced: bool = False,
    ) -> None:
        """
        Open one cell on the turn's board.

        A mine loses the game. Otherwise the region is flood-revealed
        and the win predicate is checked.

        Args:
            deduced: Whether a deduction rule selected the cell, in
                which case hitting a mine is reported as unexpected.
        """
        row, col = position
        turn.record(ActionKind.OPEN, row, col, reason)
        target = turn.board.get_cell(row, col)

        if target.is_mine:
            target.expose()
            turn.outcome = GameState.LOST
            kind = EventKind.UNEXPECTED_MINE if deduced else EventKind.MINE_HIT
            self.emitter.emit(kind, self.name, position, reason)
            return

        turn.board.flood_fill(row, col)
        self.emitter.emit(EventKind.OPEN, self.name, position, reason)
        self._check_win(context, turn)

    def _check_win(self, context: SolverContext, turn: Turn) -> None:
        if context.check_win(turn.board):
            turn.outcome = GameState.WON
            self.emitter.emit(EventKind.WON, self.name)
