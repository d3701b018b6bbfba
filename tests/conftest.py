"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

# Add src (packages) and the project root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, Cell, GameSession, SolverContext
from solvers import EventEmitter, EventRecorder


Position = Tuple[int, int]


def build_board(
    size: int,
    mines: Iterable[Position] = (),
    revealed: Iterable[Position] = (),
    flagged: Iterable[Position] = (),
) -> Board:
    """Build a board with mines at fixed positions and adjacency computed."""
    board = Board(size)
    for row, col in mines:
        board.get_cell(row, col).is_mine = True
    board.compute_adjacency()
    for row, col in revealed:
        board.get_cell(row, col).reveal()
    for row, col in flagged:
        board.get_cell(row, col).toggle_flag()
    return board


def make_context(board: Board, started: bool = True) -> SolverContext:
    """Context for a board whose mines are all already placed."""
    return SolverContext(board=board, num_mines=board.count_mines(), started=started)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def board_factory() -> Callable[..., Board]:
    """Builder for boards with hand-placed mines."""
    return build_board


@pytest.fixture
def context_factory() -> Callable[..., SolverContext]:
    """Builder for solver contexts over hand-built boards."""
    return make_context


@pytest.fixture
def default_board() -> Board:
    """Create a default empty 10x10 board."""
    return Board()


@pytest.fixture
def small_board() -> Board:
    """Create an empty 3x3 board."""
    return Board(3)


@pytest.fixture
def checker_board() -> Board:
    """
    4x4 board where every safe cell touches a mine.

    No reveal can cascade, so each opening uncovers exactly one cell.
    """
    return build_board(4, mines=[(0, 0), (0, 2), (2, 0), (2, 2)])


@pytest.fixture
def one_two_one_board() -> Board:
    """
    5x5 board with a revealed 1-2-1 run on row 2.

    Mines at (1, 1) and (1, 3); rows 0 and 1 hidden, rows 2-4 revealed.
    Row 2 reads 1 1 2 1 1.
    """
    revealed = [(row, col) for row in range(2, 5) for col in range(5)]
    return build_board(5, mines=[(1, 1), (1, 3)], revealed=revealed)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session() -> GameSession:
    """Create a default seeded session (10x10, 15 mines)."""
    return GameSession(BoardConfig(10, 15), seed=7)


@pytest.fixture
def empty_session() -> GameSession:
    """Create a session with no mines for cascade testing."""
    return GameSession(BoardConfig(5, 0), seed=1)


# ============================================================================
# Event Fixtures
# ============================================================================

@pytest.fixture
def recorder() -> EventRecorder:
    """Collect events emitted during a test."""
    return EventRecorder()


@pytest.fixture
def emitter(recorder: EventRecorder) -> EventEmitter:
    """Emitter forwarding to the test recorder."""
    return EventEmitter(recorder)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(10, 15)
