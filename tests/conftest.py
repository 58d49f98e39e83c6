"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src and the repo root (for main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Field


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_field() -> Field:
    """3x3 field with a single mine at (2, 2)."""
    return Field.from_rows([
        "...",
        "...",
        "..*",
    ])


@pytest.fixture
def split_field() -> Field:
    """
    5x5 field whose mine column splits the board in two.

    Revealing either side cascades but never crosses the mines.
    """
    return Field.from_rows([
        "..*..",
        "..*..",
        "..*..",
        "..*..",
        "..*..",
    ])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_board(corner_mine_field: Field) -> Board:
    """3x3 board with one mine at (2, 2), no safe start."""
    return Board(corner_mine_field)


@pytest.fixture
def split_board(split_field: Field) -> Board:
    """5x5 board with a wall of five mines."""
    return Board(split_field)


@pytest.fixture
def chord_board() -> Board:
    """
    4x4 board for chording.

    (1, 1) touches only the mine at (0, 0); the other mine sits at (3, 3).
    """
    return Board(Field.from_rows([
        "*...",
        "....",
        "....",
        "...*",
    ]))


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


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
