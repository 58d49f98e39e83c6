"""
Cell module for Minesweeper game.

A Cell is one square of the board overlay. Its visual state is a single
enum, so a cell can never be revealed and flagged at the same time.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
MINE_OBSERVATION = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Overlay state of a single square.

    Attributes:
        is_mine: Copied from the Field whenever the board syncs with it.
        adjacent_mines: Mines among the 8 neighbors; 0 for mined cells.
        state: Hidden, revealed or flagged.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    # ========================================================================
    # Transitions
    # ========================================================================

    def reveal(self) -> bool:
        """Hidden -> revealed. Returns False for flagged or revealed cells."""
        return self._transition(CellState.HIDDEN, CellState.REVEALED)

    def cover(self) -> bool:
        """Revealed -> hidden. Only undo should need this."""
        return self._transition(CellState.REVEALED, CellState.HIDDEN)

    def toggle_flag(self) -> bool:
        """
        Flag a hidden cell or unflag a flagged one.

        Returns:
            False if the cell is revealed, True otherwise.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = (
            CellState.HIDDEN if self.state == CellState.FLAGGED
            else CellState.FLAGGED
        )
        return True

    def _transition(self, source: CellState, target: CellState) -> bool:
        if self.state != source:
            return False
        self.state = target
        return True

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def is_hidden(self) -> bool:
        """Hidden and not flagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the cell as a single integer.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_OBSERVATION
        if self.state == CellState.FLAGGED:
            return FLAGGED_OBSERVATION
        return MINE_OBSERVATION if self.is_mine else self.adjacent_mines

    def to_char(self) -> str:
        """Single character used by text renderings."""
        if self.state == CellState.HIDDEN:
            return "."
        if self.state == CellState.FLAGGED:
            return "F"
        if self.is_mine:
            return "*"
        return str(self.adjacent_mines) if self.adjacent_mines else " "
