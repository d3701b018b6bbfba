"""
Evaluation module for Minesweeper solvers.

Provides automatic play, per-game statistics and tier comparison.
"""
from .evaluator import (
    EvaluationConfig,
    GameStats,
    EvaluationStats,
    Evaluator,
)

__all__ = [
    "EvaluationConfig",
    "GameStats",
    "EvaluationStats",
    "Evaluator",
]
