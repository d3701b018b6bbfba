"""
Hint service for Minesweeper.

Reveals a safe cell on the player's behalf, at most MAX_HINTS times
per session. The usage counter belongs to the caller: it is passed in
with every request and handed back in the result.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from game import GameState, SolverContext, Turn
from game.turn import ActionKind

from .base_solver import ensure_started, pick
from .events import EventEmitter, EventKind

MAX_HINTS = 3


class HintStatus(Enum):
    """Result of a hint request."""

    GOOD = "good"
    DONE = "done"
    NONE = "none"


@dataclass
class HintResult:
    """
    Answer to a hint request.

    Attributes:
        status: GOOD when a cell was revealed, DONE when hints are used
            up or the game is already won, NONE when no safe cell exists.
        turn: Turn to publish (a no-op unless status is GOOD).
        hints_used: Updated usage counter.
    """

    status: HintStatus
    turn: Turn = field(default_factory=Turn)
    hints_used: int = 0


class HintService:
    """Rationed safe-reveal helper built on the board's ground truth."""

    name = "hint"

    def __init__(
        self,
        seed: Optional[int] = None,
        emitter: Optional[EventEmitter] = None,
        max_hints: int = MAX_HINTS,
    ) -> None:
        self.rng = np.random.default_rng(seed)
        self.emitter = emitter or EventEmitter()
        self.max_hints = max_hints

    def remaining(self, hints_used: int) -> int:
        """Hints still available for a given usage count."""
        return max(self.max_hints - hints_used, 0)

    def request(
        self, context: Optional[SolverContext], hints_used: int = 0
    ) -> HintResult:
        """
        Reveal one safe cell if a hint is available.

        Args:
            context: Snapshot of the session.
            hints_used: Hints already consumed this session.

        Returns:
            HintResult carrying the turn and the new counter.
        """
        if context is None:
            self.emitter.emit(EventKind.GUARD_FAILURE, self.name, detail="no context")
            return HintResult(HintStatus.NONE, hints_used=hints_used)
        if not context.playing:
            self.emitter.emit(EventKind.EXHAUSTED, self.name, detail="game over")
            return HintResult(HintStatus.DONE, hints_used=hints_used)
        if hints_used >= self.max_hints:
            self.emitter.emit(EventKind.EXHAUSTED, self.name, detail="no hints left")
            return HintResult(HintStatus.DONE, hints_used=hints_used)
        if context.check_win(context.board):
            self.emitter.emit(EventKind.EXHAUSTED, self.name, detail="already won")
            return HintResult(HintStatus.DONE, hints_used=hints_used)

        candidates = context.board.hidden_cells()
        if not candidates:
            self.emitter.emit(EventKind.DEADLOCK, self.name)
            return HintResult(HintStatus.NONE, hints_used=hints_used)

        turn = Turn(board=context.board.clone())
        if not context.started:
            position = pick(self.rng, candidates)
            turn.mines_placed = ensure_started(context, turn.board, position, self.rng)
            self.emitter.emit(EventKind.MINES_PLACED, self.name, position)
        else:
            safe = [p for p in candidates if not turn.board.get_cell(*p).is_mine]
            if not safe:
                self.emitter.emit(EventKind.DEADLOCK, self.name, detail="no safe cell")
                return HintResult(HintStatus.NONE, hints_used=hints_used)
            position = pick(self.rng, safe)

        row, col = position
        turn.board.flood_fill(row, col)
        turn.record(ActionKind.OPEN, row, col, "hint")
        hints_used += 1
        self.emitter.emit(EventKind.HINT, self.name, position, f"#{hints_used}")

        if context.check_win(turn.board):
            turn.outcome = GameState.WON
            hints_used = 0
            self.emitter.emit(EventKind.WON, self.name)
        return HintResult(HintStatus.GOOD, turn, hints_used)
