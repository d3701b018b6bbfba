"""
Cell module for Minesweeper game.

A cell knows where it sits on the grid, whether it holds a mine, how
many mines surround it and whether the player can currently see it.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

# Adjacency value stored on mine cells once counts have been computed
MINE_SENTINEL = -1

# Observation codes for cells whose count is not shown
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


class CellState(Enum):
    """Visibility of a cell to the player."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


_FLAG_TOGGLE = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    One square of the grid.

    Attributes:
        row: Row index on the owning board.
        col: Column index on the owning board.
        is_mine: Mine placed here.
        adjacent_mines: Mines among the up-to-8 neighbors, or
            MINE_SENTINEL on a mine. Zero until the board computes
            adjacency.
        state: Hidden, revealed or flagged.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Covered and not flagged."""
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state is CellState.FLAGGED

    # ========================================================================
    # State Changes
    # ========================================================================

    def reveal(self) -> bool:
        """
        Uncover a hidden cell.

        Flagged and already revealed cells are left alone.

        Returns:
            True if the state changed.
        """
        if not self.is_hidden:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> None:
        """Uncover the cell whatever its state, flag included."""
        self.state = CellState.REVEALED

    def toggle_flag(self) -> bool:
        """
        Flag a hidden cell or un-flag a flagged one.

        Returns:
            False for a revealed cell, True otherwise.
        """
        next_state = _FLAG_TOGGLE.get(self.state)
        if next_state is None:
            return False
        self.state = next_state
        return True

    def to_observation(self) -> int:
        """
        Encode what the player sees.

        Returns:
            OBS_HIDDEN or OBS_FLAGGED for covered cells, OBS_MINE for
            an uncovered mine, otherwise the adjacent mine count.
        """
        if self.is_hidden:
            return OBS_HIDDEN
        if self.is_flagged:
            return OBS_FLAGGED
        return OBS_MINE if self.is_mine else self.adjacent_mines
