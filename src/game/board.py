"""
Board module for Minesweeper game.

Implements the square game board with deferred mine placement,
adjacency computation, flood reveal, cloning and the win predicate.
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, MINE_SENTINEL, OBS_FLAGGED, OBS_HIDDEN, OBS_MINE

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# Cells kept mine-free around the first reveal (3x3 block)
SAFE_ZONE_CELLS = 9


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper session.

    Attributes:
        size: Number of rows and columns of the square board.
        num_mines: Total mines to place on the first reveal.
    """

    size: int = 10
    num_mines: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = max(self.size * self.size - SAFE_ZONE_CELLS, 0)
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.size * self.size


# Preset session configurations
SMALL = BoardConfig(6, 5)
DEFAULT = BoardConfig(10, 15)
LARGE = BoardConfig(16, 40)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Square Minesweeper grid.

    Holds cells only: session-level state (started, terminal state,
    flags left) belongs to the session that owns the committed board.
    """

    size: int = 10
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if not self._grid:
            self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row=row, col=col) for col in range(self.size)]
            for row in range(self.size)
        ]

    def place_mines(
        self,
        count: int,
        exclude: Position,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Place mines uniformly at random, keeping a safe zone free.

        No mine lands within the 3x3 block centered on ``exclude`` or on
        a cell that already holds a mine.

        Args:
            count: Number of mines to place.
            exclude: (row, col) of the first revealed cell.
            rng: Random generator (a fresh one if omitted).

        Raises:
            ValueError: If ``count`` is negative or exceeds the number
                of eligible cells.
        """
        if count < 0:
            raise ValueError("Number of mines cannot be negative")
        positions = self._get_valid_mine_positions(exclude)
        if count > len(positions):
            raise ValueError(
                f"Cannot place {count} mines: only {len(positions)} cells "
                f"lie outside the safe zone around {exclude}"
            )
        rng = rng if rng is not None else np.random.default_rng()
        chosen = rng.choice(len(positions), size=count, replace=False)
        for index in chosen:
            row, col = positions[int(index)]
            self._grid[row][col].is_mine = True
        logger.debug("Placed %d mines avoiding %s", count, exclude)

    def _get_valid_mine_positions(self, exclude: Position) -> List[Position]:
        """Get all positions outside the safe zone that hold no mine yet."""
        ex_row, ex_col = exclude
        positions = []
        for cell in self.cells():
            if abs(cell.row - ex_row) <= 1 and abs(cell.col - ex_col) <= 1:
                continue
            if not cell.is_mine:
                positions.append(cell.position)
        return positions

    def compute_adjacency(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self.cells():
            if cell.is_mine:
                cell.adjacent_mines = MINE_SENTINEL
            else:
                cell.adjacent_mines = self._count_adjacent_mines(
                    cell.row, cell.col
                )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up-to-8 neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    # ========================================================================
    # Board Mutations (Mid-level)
    # ========================================================================

    def flood_fill(self, row: int, col: int) -> int:
        """
        Reveal the region reachable from a cell.

        Iterative stack expansion: a popped cell that is revealed or
        flagged is skipped; otherwise it is revealed and, when it has
        no adjacent mines, every hidden non-mine neighbor is pushed.
        Flagged cells and mines are never revealed as a side effect.
        The caller handles a mine at (row, col) before calling this.

        Returns:
            Number of cells newly revealed.
        """
        revealed = 0
        stack = [(row, col)]
        while stack:
            cur_row, cur_col = stack.pop()
            cell = self._grid[cur_row][cur_col]
            if not cell.reveal():
                continue
            revealed += 1
            if cell.adjacent_mines != 0:
                continue
            for neighbor_row, neighbor_col in self.neighbors(cur_row, cur_col):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_hidden and not neighbor.is_mine:
                    stack.append((neighbor_row, neighbor_col))
        return revealed

    def reveal_mines(self) -> None:
        """Mark every mine as revealed (end-of-game display)."""
        for cell in self.cells():
            if cell.is_mine:
                cell.expose()

    def clone(self) -> "Board":
        """Copy the board so that every cell is an independent value."""
        grid = [[replace(cell) for cell in row] for row in self._grid]
        return Board(self.size, grid)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self._grid:
            yield from row

    def hidden_cells(self) -> List[Position]:
        """Positions of cells that are neither revealed nor flagged."""
        return [cell.position for cell in self.cells() if cell.is_hidden]

    def flagged_cells(self) -> List[Position]:
        """Positions of flagged (and therefore still covered) cells."""
        return [cell.position for cell in self.cells() if cell.is_flagged]

    def count_flags(self) -> int:
        """Number of flags currently placed."""
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def count_mines(self) -> int:
        """Number of mines on the board."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    def count_revealed(self) -> int:
        """Number of revealed cells."""
        return sum(1 for cell in self.cells() if cell.is_revealed)

    def is_won(self) -> bool:
        """Check the win predicate on this board."""
        return check_win(self)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def render(self) -> str:
        """Render board as ASCII string."""
        symbols = {OBS_HIDDEN: ".", OBS_FLAGGED: "F", OBS_MINE: "*", 0: " "}
        lines = []
        for row in self.get_observation():
            lines.append(" ".join(symbols.get(int(v), str(int(v))) for v in row))
        return "\n".join(lines)


# ============================================================================
# Module-level helpers
# ============================================================================

def create_empty_board(size: int) -> Board:
    """Create a board with no mines and every cell hidden."""
    return Board(size)


def check_win(board: Board) -> bool:
    """
    Win predicate: every mine is unrevealed and every other cell revealed.

    Flag placement plays no part in the result.
    """
    for cell in board.cells():
        if cell.is_mine == cell.is_revealed:
            return False
    return True
