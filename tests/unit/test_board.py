"""
Unit tests for Board class.

Tests configuration, mine placement, adjacency, flood reveal,
cloning, the win predicate and observation generation.
"""
import pytest
import numpy as np
from game import (
    Board,
    BoardConfig,
    MINE_SENTINEL,
    check_win,
    create_empty_board,
)


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self, valid_config: BoardConfig) -> None:
        """Valid configuration should be created successfully."""
        assert valid_config.size == 10
        assert valid_config.num_mines == 15
        assert valid_config.total_cells == 100

    def test_zero_size_raises_error(self) -> None:
        """Size of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="size must be positive"):
            BoardConfig(0, 0)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, -1)

    def test_too_many_mines_raises_error(self) -> None:
        """Mines must leave room for the first-click safe zone."""
        with pytest.raises(ValueError, match="Too many mines"):
            BoardConfig(4, 8)

    def test_max_mines_is_valid(self) -> None:
        """Maximum valid mines should be accepted."""
        assert BoardConfig(4, 7).num_mines == 7


# ============================================================================
# Construction Tests
# ============================================================================

class TestCreateEmptyBoard:
    """Test empty board construction."""

    def test_all_cells_default(self) -> None:
        """Every cell starts hidden, unflagged, mine-free with count 0."""
        board = create_empty_board(5)
        cells = list(board.cells())
        assert len(cells) == 25
        for cell in cells:
            assert cell.is_hidden
            assert not cell.is_mine
            assert cell.adjacent_mines == 0

    def test_cells_carry_their_positions(self, small_board: Board) -> None:
        """Cell positions match their grid coordinates."""
        assert small_board.get_cell(2, 1).position == (2, 1)

    def test_get_cell_out_of_bounds_is_none(self, small_board: Board) -> None:
        """Invalid coordinates return None."""
        assert small_board.get_cell(-1, 0) is None
        assert small_board.get_cell(0, 3) is None

    def test_neighbors_of_corner_and_center(self, small_board: Board) -> None:
        """Corners have 3 neighbors, interior cells 8."""
        assert sorted(small_board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]
        assert len(small_board.neighbors(1, 1)) == 8


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestPlaceMines:
    """Test mine placement with first-click safety."""

    @pytest.mark.parametrize("exclude", [(0, 0), (4, 4), (9, 9), (0, 5)])
    def test_exact_count_and_safe_zone(self, exclude) -> None:
        """Exactly M mines, none within distance 1 of the first click."""
        rng = np.random.default_rng(42)
        for _ in range(20):
            board = Board(10)
            board.place_mines(30, exclude, rng)
            assert board.count_mines() == 30
            for cell in board.cells():
                if cell.is_mine:
                    assert max(
                        abs(cell.row - exclude[0]), abs(cell.col - exclude[1])
                    ) > 1

    def test_first_click_corner_of_three_by_three(self, small_board: Board) -> None:
        """On 3x3 with first click (0,0), the corner and its neighbors stay clear."""
        small_board.place_mines(1, (0, 0), np.random.default_rng(3))
        for position in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            assert not small_board.get_cell(*position).is_mine
        assert small_board.count_mines() == 1

    def test_fills_every_eligible_cell(self, small_board: Board) -> None:
        """Requesting exactly the eligible count places a mine on each."""
        small_board.place_mines(5, (0, 0))
        mines = {cell.position for cell in small_board.cells() if cell.is_mine}
        assert mines == {(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)}

    def test_infeasible_count_raises(self, small_board: Board) -> None:
        """More mines than eligible cells is rejected up front."""
        with pytest.raises(ValueError, match="Cannot place"):
            small_board.place_mines(1, (1, 1))

    def test_negative_count_raises(self, small_board: Board) -> None:
        """Negative counts are rejected."""
        with pytest.raises(ValueError):
            small_board.place_mines(-1, (0, 0))


# ============================================================================
# Adjacency Tests
# ============================================================================

class TestComputeAdjacency:
    """Test adjacent mine counting."""

    def test_counts_match_neighbors(self) -> None:
        """Every safe cell counts its mine neighbors; mines hold the sentinel."""
        board = Board(8)
        board.place_mines(20, (0, 0), np.random.default_rng(5))
        board.compute_adjacency()
        for cell in board.cells():
            if cell.is_mine:
                assert cell.adjacent_mines == MINE_SENTINEL
            else:
                expected = sum(
                    board.get_cell(r, c).is_mine
                    for r, c in board.neighbors(cell.row, cell.col)
                )
                assert cell.adjacent_mines == expected

    def test_known_layout(self, board_factory) -> None:
        """Hand-placed mines give the expected numbers."""
        board = board_factory(3, mines=[(0, 0), (2, 2)])
        assert board.get_cell(1, 1).adjacent_mines == 2
        assert board.get_cell(0, 2).adjacent_mines == 0
        assert board.get_cell(0, 1).adjacent_mines == 1
        assert board.get_cell(0, 0).adjacent_mines == -1


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestFloodFill:
    """Test region reveal."""

    def test_empty_board_reveals_everything(self) -> None:
        """With no mines, one reveal uncovers the whole board."""
        board = Board(5)
        assert board.flood_fill(2, 2) == 25
        assert all(cell.is_revealed for cell in board.cells())

    def test_numbered_cell_reveals_only_itself(self, checker_board: Board) -> None:
        """A cell with adjacent mines does not expand."""
        assert checker_board.flood_fill(3, 3) == 1
        assert checker_board.count_revealed() == 1

    def test_never_reveals_flags_or_mines(self) -> None:
        """Expansion skips flagged cells and never uncovers a mine."""
        rng = np.random.default_rng(11)
        for _ in range(25):
            board = Board(8)
            board.place_mines(8, (4, 4), rng)
            board.compute_adjacency()
            flagged = [(0, 0), (7, 7), (4, 0)]
            for row, col in flagged:
                board.get_cell(row, col).toggle_flag()
            board.flood_fill(4, 4)
            for cell in board.cells():
                if cell.is_mine:
                    assert not cell.is_revealed
            for row, col in flagged:
                assert board.get_cell(row, col).is_flagged

    def test_skips_already_revealed_start(self, board_factory) -> None:
        """Starting on a revealed cell reveals nothing new."""
        board = board_factory(3, revealed=[(1, 1)])
        assert board.flood_fill(1, 1) == 0

    def test_stops_at_numbers(self, board_factory) -> None:
        """The cascade reveals the numbered border but stops there."""
        board = board_factory(4, mines=[(0, 3)])
        board.flood_fill(3, 0)
        assert not board.get_cell(0, 3).is_revealed
        assert board.get_cell(0, 2).is_revealed
        assert board.count_revealed() == 15


# ============================================================================
# Clone Tests
# ============================================================================

class TestClone:
    """Test board copies."""

    def test_mutating_clone_leaves_source(self, board_factory) -> None:
        """Changes to the clone never reach the original."""
        board = board_factory(4, mines=[(0, 0)])
        clone = board.clone()
        clone.get_cell(3, 3).reveal()
        clone.get_cell(0, 0).toggle_flag()
        clone.get_cell(1, 1).is_mine = True
        clone.flood_fill(3, 0)

        assert board.count_revealed() == 0
        assert board.count_flags() == 0
        assert board.count_mines() == 1

    def test_clone_copies_state(self, board_factory) -> None:
        """The clone starts identical to the source."""
        board = board_factory(4, mines=[(0, 0)], revealed=[(3, 3)], flagged=[(0, 0)])
        clone = board.clone()
        assert np.array_equal(clone.get_observation(), board.get_observation())
        assert clone.get_cell(0, 0).is_mine


# ============================================================================
# Win Predicate Tests
# ============================================================================

class TestCheckWin:
    """Test the win predicate."""

    def test_all_safe_revealed_without_flags_wins(self, checker_board: Board) -> None:
        """Zero flags are needed to win."""
        for cell in checker_board.cells():
            if not cell.is_mine:
                cell.reveal()
        assert check_win(checker_board) is True
        assert checker_board.is_won() is True

    def test_flags_do_not_matter(self, checker_board: Board) -> None:
        """Flags on mines (or not) leave the result unchanged."""
        for cell in checker_board.cells():
            if cell.is_mine:
                cell.toggle_flag()
            else:
                cell.reveal()
        assert check_win(checker_board) is True

    def test_hidden_safe_cell_blocks_win(self, checker_board: Board) -> None:
        """A single covered safe cell means no win."""
        for cell in checker_board.cells():
            if not cell.is_mine and cell.position != (3, 3):
                cell.reveal()
        assert check_win(checker_board) is False

    def test_revealed_mine_blocks_win(self, checker_board: Board) -> None:
        """A revealed mine means no win."""
        for cell in checker_board.cells():
            cell.reveal()
        assert check_win(checker_board) is False

    def test_new_board_is_not_won(self, default_board: Board) -> None:
        """An untouched board has covered safe cells."""
        assert check_win(default_board) is False


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array and helpers."""

    def test_observation_shape_and_dtype(self, default_board: Board) -> None:
        """Observation matches board size and is int8."""
        obs = default_board.get_observation()
        assert obs.shape == (10, 10)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)

    def test_flagged_cell_in_observation(self, default_board: Board) -> None:
        """Flagged cell should show -2 in observation."""
        default_board.get_cell(0, 0).toggle_flag()
        assert default_board.get_observation()[0, 0] == -2
        assert default_board.flagged_cells() == [(0, 0)]
        assert (0, 0) not in default_board.hidden_cells()

    def test_reveal_mines(self, board_factory) -> None:
        """Only mines get revealed, flagged or not."""
        board = board_factory(3, mines=[(0, 0), (2, 2)], flagged=[(0, 0)])
        board.reveal_mines()
        assert board.get_cell(0, 0).is_revealed
        assert board.get_cell(2, 2).is_revealed
        assert board.count_revealed() == 2

    def test_render(self, board_factory) -> None:
        """ASCII rendering uses one symbol per cell."""
        board = board_factory(2, revealed=[(0, 0)], flagged=[(1, 1)])
        assert board.render() == "  .\n. F"
