"""
Session module for Minesweeper game.

A GameSession owns the committed board and the session-level state
around it. Every change to the committed board, whether it comes from
the player or from a solver, goes through ``apply`` as one Turn.
"""
import logging
from typing import Callable, Optional

import numpy as np

from .board import Board, BoardConfig, GameState, check_win
from .turn import ActionKind, SolverContext, Turn

logger = logging.getLogger(__name__)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Committed game state for one player session.

    Attributes:
        config: Board size and mine count, constant for the session.
        board: Committed board, replaced wholesale on every publish.
        started: Whether mines have been placed.
        game_state: PLAYING until a turn ends the game.
        flags_left: Mines minus flags currently placed.
        hints_used: Successful hints since the last reset or win.
        turns_played: Turns published since the last reset.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        win_predicate: Callable[[Board], bool] = check_win,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Session configuration (default: 10x10 with 15 mines).
            seed: Seed for first-click mine placement by the player.
            win_predicate: Win check shared with solvers.
        """
        self.config = config or BoardConfig()
        self.rng = np.random.default_rng(seed)
        self.win_predicate = win_predicate
        self.reset()

    def reset(self) -> None:
        """Start a fresh game: empty board, counters back to defaults."""
        self.board = Board(self.config.size)
        self.started = False
        self.game_state = GameState.PLAYING
        self.flags_left = self.config.num_mines
        self.hints_used = 0
        self.turns_played = 0

    # ========================================================================
    # Publishing
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.game_state == GameState.PLAYING

    def context(self) -> SolverContext:
        """Snapshot of the session for a solver or hint invocation."""
        return SolverContext(
            board=self.board,
            num_mines=self.config.num_mines,
            started=self.started,
            playing=self.is_playing,
            win_predicate=self.win_predicate,
        )

    def apply(self, turn: Turn, hints_used: Optional[int] = None) -> bool:
        """
        Publish a turn as the new committed state.

        Args:
            turn: Turn produced against ``context()``.
            hints_used: Hint counter returned by the hint service. Only
                taken over when the turn is published.

        Returns:
            True if the turn was published.
        """
        if turn.is_noop:
            return False
        if not self.is_playing:
            logger.warning("Dropping turn: game already %s", self.game_state.name)
            return False

        if hints_used is not None:
            self.hints_used = hints_used

        self.board = turn.board
        if turn.mines_placed:
            self.started = True
        self.flags_left = self.config.num_mines - self.board.count_flags()
        self.turns_played += 1

        if turn.outcome is not None:
            self.game_state = turn.outcome
            self.board.reveal_mines()
            if turn.outcome == GameState.WON:
                self.hints_used = 0
            logger.info("Game %s after %d turns", turn.outcome.name, self.turns_played)
        return True

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell for the player.

        On the first reveal, places mines avoiding this cell and its
        neighbors. Revealing a mine loses the game.

        Returns:
            True if the reveal was published, False if ignored.
        """
        if not self.is_playing:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None or not cell.is_hidden:
            return False

        working = self.board.clone()
        turn = Turn(board=working)
        if not self.started:
            working.place_mines(self.config.num_mines, (row, col), self.rng)
            working.compute_adjacency()
            turn.mines_placed = True

        turn.record(ActionKind.OPEN, row, col, "player")
        target = working.get_cell(row, col)
        if target.is_mine:
            target.expose()
            turn.outcome = GameState.LOST
        else:
            working.flood_fill(row, col)
            if self.win_predicate(working):
                turn.outcome = GameState.WON
        return self.apply(turn)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle a flag for the player.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if not self.is_playing:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None or cell.is_revealed:
            return False

        working = self.board.clone()
        turn = Turn(board=working)
        kind = ActionKind.UNFLAG if cell.is_flagged else ActionKind.FLAG
        working.get_cell(row, col).toggle_flag()
        turn.record(kind, row, col, "player")
        if self.win_predicate(working):
            turn.outcome = GameState.WON
        return self.apply(turn)

    # ========================================================================
    # Automated Turns
    # ========================================================================

    def play(self, solver) -> Turn:
        """Let a solver take one turn and publish it."""
        turn = solver.play_turn(self.context())
        self.apply(turn)
        return turn

    def hint(self, service):
        """Ask the hint service for a safe reveal and publish it."""
        result = service.request(self.context(), self.hints_used)
        self.apply(result.turn, hints_used=result.hints_used)
        return result
