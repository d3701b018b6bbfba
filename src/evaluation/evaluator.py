"""
Evaluation module for Minesweeper solvers.

Plays complete games with each solver tier and reports how often it
wins and how it gets there.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from game import BoardConfig, GameState, MinesweeperEnv
from solvers import BaseSolver, EventKind, EventRecorder

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluation Configuration
# ============================================================================

@dataclass
class EvaluationConfig:
    """Configuration for evaluating solvers."""

    board: BoardConfig = field(default_factory=BoardConfig)
    num_games: int = 100
    max_turns: int = 500
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.num_games < 1:
            raise ValueError("Number of games must be positive")
        if self.max_turns < 1:
            raise ValueError("Turn limit must be positive")


# ============================================================================
# Game Statistics
# ============================================================================

@dataclass
class GameStats:
    """Statistics for a single game."""

    turns: int = 0
    won: bool = False
    revealed_cells: int = 0
    flags: int = 0
    guesses: int = 0


@dataclass
class EvaluationStats:
    """Accumulated statistics for one solver."""

    games: List[GameStats] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        if not self.games:
            return 0.0
        return sum(game.won for game in self.games) / len(self.games)

    def to_dict(self) -> Dict[str, float]:
        """Summarize as averages per game."""
        if not self.games:
            return {"win_rate": 0.0}
        return {
            "win_rate": self.win_rate,
            "avg_turns": float(np.mean([g.turns for g in self.games])),
            "avg_revealed": float(np.mean([g.revealed_cells for g in self.games])),
            "avg_flags": float(np.mean([g.flags for g in self.games])),
            "avg_guesses": float(np.mean([g.guesses for g in self.games])),
        }


# ============================================================================
# Solver Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare solver tiers.

    Each game runs in automatic mode: the solver takes turns through
    the environment until the game ends or the turn limit is reached.
    """

    def __init__(self, config: Optional[EvaluationConfig] = None) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Board, number of games and turn limit.
        """
        self.config = config or EvaluationConfig()

    def play_game(self, solver: BaseSolver, env: MinesweeperEnv) -> GameStats:
        """Play one complete game and collect its statistics."""
        recorder = EventRecorder()
        solver.emitter.subscribe(recorder)
        solver.reset()
        env.reset()

        stats = GameStats()
        info: Dict = {}
        try:
            for _ in range(self.config.max_turns):
                _, _, terminated, truncated, info = env.solver_step(solver)
                stats.turns += 1
                if terminated or truncated:
                    break
        finally:
            solver.emitter.unsubscribe(recorder)

        stats.won = info.get("game_state") == GameState.WON.name
        stats.revealed_cells = info.get("revealed", 0)
        stats.flags = env.session.board.count_flags()
        stats.guesses = recorder.count(EventKind.GUESS)
        return stats

    def evaluate(self, solver: BaseSolver) -> Dict[str, float]:
        """
        Evaluate a single solver.

        Args:
            solver: Solver to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.config.board, seed=self.config.seed)
        stats = EvaluationStats()
        for _ in range(self.config.num_games):
            stats.games.append(self.play_game(solver, env))
        return stats.to_dict()

    def compare(
        self, solvers: Dict[str, BaseSolver]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple solvers.

        Args:
            solvers: Dictionary of solver_name -> solver.

        Returns:
            Dictionary of solver_name -> evaluation metrics.
        """
        results = {}
        for name, solver in solvers.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(solver)
        return results
