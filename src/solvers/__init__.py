"""
Minesweeper solvers module.

Provides three solver tiers and a hint service:
- EasySolver: Random cell each turn
- MediumSolver: Single-step deduction rules with random fallback
- HardSolver: Medium rules plus the 1-2-1 pattern and a safe fallback
- HintService: Up to three safe reveals per session
"""
from .events import EventEmitter, EventKind, EventRecorder, SolverEvent
from .base_solver import BaseSolver, ensure_started
from .easy_solver import EasySolver
from .medium_solver import MediumSolver
from .hard_solver import HardSolver
from .hint_service import HintResult, HintService, HintStatus, MAX_HINTS

SOLVERS = {
    "easy": EasySolver,
    "medium": MediumSolver,
    "hard": HardSolver,
}

__all__ = [
    "EventEmitter",
    "EventKind",
    "EventRecorder",
    "SolverEvent",
    "BaseSolver",
    "ensure_started",
    "EasySolver",
    "MediumSolver",
    "HardSolver",
    "HintResult",
    "HintService",
    "HintStatus",
    "MAX_HINTS",
    "SOLVERS",
]
