"""
Field module for Minesweeper game.

A Field is the static mine layout of a game: a rows x columns grid of
booleans that is written once during generation and frozen afterwards.
"""
import logging
from typing import Iterable, Iterator, List, Sequence, Set, Tuple, Union

import numpy as np

from .errors import FrozenFieldError, InvalidDimensions, OutOfBounds

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

MINE_CHARS = frozenset("*xX#")


# ============================================================================
# Neighbor Utilities
# ============================================================================

def neighbors(row: int, col: int, rows: int, columns: int) -> List[Position]:
    """
    Get valid neighboring cell positions.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        rows: Number of rows in the grid.
        columns: Number of columns in the grid.

    Returns:
        List of (row, col) tuples for the in-bounds cells among the 8
        surrounding ones.
    """
    result = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < rows and 0 <= new_col < columns:
                result.append((new_row, new_col))
    return result


# ============================================================================
# Field Class
# ============================================================================

class Field:
    """
    Mine locations for one game.

    Cells are set while a generator builds the field; once ``freeze`` is
    called the layout can no longer change.
    """

    def __init__(self, rows: int, columns: int) -> None:
        if rows < 0 or columns < 0:
            raise InvalidDimensions(rows, columns, "dimensions cannot be negative")
        self._mines = np.zeros((rows, columns), dtype=np.bool_)
        self._frozen = False

    @classmethod
    def from_rows(cls, layout: Sequence[Union[str, Sequence[bool]]]) -> "Field":
        """
        Build a frozen field from a textual or boolean layout.

        Strings use ``*`` (or ``x``/``#``) for mines and anything else for
        empty cells, e.g. ``["..*", "...", "..."]``.
        """
        grid = [
            [ch in MINE_CHARS for ch in line] if isinstance(line, str)
            else [bool(value) for value in line]
            for line in layout
        ]
        rows = len(grid)
        columns = len(grid[0]) if rows else 0
        if any(len(line) != columns for line in grid):
            raise InvalidDimensions(rows, columns, "layout rows differ in length")

        result = cls(rows, columns)
        if rows and columns:
            result._mines[:, :] = np.array(grid, dtype=np.bool_)
        return result.freeze()

    # ========================================================================
    # Shape
    # ========================================================================

    @property
    def rows(self) -> int:
        return self._mines.shape[0]

    @property
    def columns(self) -> int:
        return self._mines.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.columns

    @property
    def size(self) -> int:
        return self.rows * self.columns

    def contains(self, row: int, col: int) -> bool:
        """Check if position is within field bounds."""
        return 0 <= row < self.rows and 0 <= col < self.columns

    def check_position(self, row: int, col: int) -> None:
        """Raise OutOfBounds unless the position is on the field."""
        if not self.contains(row, col):
            raise OutOfBounds(row, col, self.rows, self.columns)

    # ========================================================================
    # Mine Access
    # ========================================================================

    def __getitem__(self, position: Position) -> bool:
        row, col = position
        self.check_position(row, col)
        return bool(self._mines[row, col])

    def __setitem__(self, position: Position, value: bool) -> None:
        if self._frozen:
            raise FrozenFieldError("Field cannot be changed after generation")
        row, col = position
        self.check_position(row, col)
        self._mines[row, col] = bool(value)

    def mine(self, row: int, col: int) -> bool:
        """Check if the given cell holds a mine."""
        return self[row, col]

    @property
    def mine_count(self) -> int:
        return int(np.count_nonzero(self._mines))

    def mines(self) -> Iterator[Position]:
        """Iterate over mined positions in row-major order."""
        for row, col in np.argwhere(self._mines):
            yield int(row), int(col)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Field":
        """Make the field read-only and return it."""
        self._frozen = True
        self._mines.flags.writeable = False
        return self

    def copy(self) -> "Field":
        """Return an unfrozen copy with the same layout."""
        clone = Field(self.rows, self.columns)
        clone._mines[:, :] = self._mines
        return clone

    def to_array(self) -> np.ndarray:
        """Read-only boolean view of the layout."""
        view = self._mines.view()
        view.flags.writeable = False
        return view

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._mines, other._mines)
        )

    def __repr__(self) -> str:
        return (
            f"Field(rows={self.rows}, columns={self.columns}, "
            f"mines={self.mine_count})"
        )


# ============================================================================
# Safe Zone Relocation
# ============================================================================

def make_safe(
    field: Field,
    safe_zone: Iterable[Position],
    rng: np.random.Generator,
) -> Field:
    """
    Return a new frozen field with every mine moved out of ``safe_zone``.

    Each mine inside the zone is moved to a uniformly chosen empty cell
    outside it, so the mine count is preserved. When there are fewer empty
    cells than mines to move, the surplus mines are dropped.

    Args:
        field: Original layout; left untouched.
        safe_zone: Positions that must end up mine-free.
        rng: Random source for choosing destinations.

    Returns:
        The relocated field.
    """
    zone: Set[Position] = set(safe_zone)
    for row, col in zone:
        field.check_position(row, col)

    result = field.copy()
    displaced = [position for position in zone if field[position]]
    if not displaced:
        return result.freeze()

    free = [
        (row, col)
        for row in range(field.rows)
        for col in range(field.columns)
        if (row, col) not in zone and not field[row, col]
    ]
    for position in displaced:
        result[position] = False

    moved = min(len(displaced), len(free))
    if moved < len(displaced):
        logger.warning(
            "Only %d free cells for %d displaced mines; dropping %d",
            len(free), len(displaced), len(displaced) - moved,
        )
    if moved:
        chosen = rng.choice(len(free), size=moved, replace=False)
        for index in chosen:
            result[free[int(index)]] = True

    logger.debug("Relocated %d mines out of a %d-cell safe zone", moved, len(zone))
    return result.freeze()
