"""
Unit tests for the Cell overlay.

Tests reveal/cover/flag transitions and the observation and text encodings.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Defaults
# ============================================================================

class TestCellDefaults:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden_and_safe(self, hidden_cell: Cell) -> None:
        """New cell is hidden, not a mine, with no neighbors counted."""
        assert hidden_cell.state == CellState.HIDDEN
        assert hidden_cell.is_mine is False
        assert hidden_cell.adjacent_mines == 0


# ============================================================================
# State Transitions
# ============================================================================

class TestCellTransitions:
    """Test the hidden/revealed/flagged state machine."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell succeeds once."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_fails(self, hidden_cell: Cell) -> None:
        """A flagged cell cannot be revealed."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_cover_revealed_cell(self, numbered_cell: Cell) -> None:
        """Covering a revealed cell hides it again."""
        assert numbered_cell.cover() is True
        assert numbered_cell.is_hidden is True

    @pytest.mark.parametrize("flagged", [False, True])
    def test_cover_unrevealed_cell_fails(self, flagged: bool) -> None:
        """Only revealed cells can be covered."""
        cell = Cell()
        if flagged:
            cell.toggle_flag()
        assert cell.cover() is False

    def test_toggle_flag_round_trip(self, hidden_cell: Cell) -> None:
        """Two toggles return the cell to hidden."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_flagged is True
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_fails(self, numbered_cell: Cell) -> None:
        """A revealed cell cannot carry a flag."""
        assert numbered_cell.toggle_flag() is False
        assert numbered_cell.is_revealed is True
        assert numbered_cell.is_flagged is False


# ============================================================================
# Encodings
# ============================================================================

class TestCellEncoding:
    """Test observation values and text characters."""

    def test_hidden_and_flagged_observations(self, hidden_cell: Cell) -> None:
        """Hidden is -1 and flagged is -2."""
        assert hidden_cell.to_observation() == -1
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    def test_revealed_number_observation(self, numbered_cell: Cell) -> None:
        """Revealed safe cells report their count."""
        assert numbered_cell.to_observation() == 3

    def test_revealed_mine_observation(self, mine_cell: Cell) -> None:
        """Revealed mine is 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    @pytest.mark.parametrize(
        "cell, flag, reveal, expected",
        [
            (Cell(), False, False, "."),
            (Cell(), True, False, "F"),
            (Cell(), False, True, " "),
            (Cell(adjacent_mines=4), False, True, "4"),
            (Cell(is_mine=True), False, True, "*"),
        ],
    )
    def test_to_char(self, cell: Cell, flag: bool, reveal: bool, expected: str) -> None:
        """Each state maps to one display character."""
        if flag:
            cell.toggle_flag()
        if reveal:
            cell.reveal()
        assert cell.to_char() == expected
