"""
Board module for Minesweeper game.

The Board owns a Field, the overlay of Cells on top of it, and the stack of
applied moves. Moves are pushed and popped through it; after each change it
recomputes whether the game is won, lost, or still going.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import TerminalStateViolation
from .field import Field, Position, make_safe, neighbors
from .generators import FieldGenerationArguments, FieldGenerator, RandomFieldGenerator
from .moves import FloodRevealMove, Move

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NEUTRAL = auto()
    WIN = auto()
    LOSE = auto()


class SafeStart(Enum):
    """How much of the first reveal is guaranteed mine-free."""

    OFF = auto()
    CELL = auto()
    NEIGHBORHOOD = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        safe_start: Safe-start policy for the first reveal.
        seed: Seed for field generation and safe-start relocation.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    safe_start: SafeStart = SafeStart.NEIGHBORHOOD
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Args:
        field: Mine layout for this game.
        safe_start: Safe-start policy applied to the first reveal.
        seed: Seed for the random source used by safe-start relocation.
    """

    def __init__(
        self,
        field: Field,
        safe_start: SafeStart = SafeStart.OFF,
        seed: Optional[int] = None,
    ) -> None:
        self._field = field if field.frozen else field.copy().freeze()
        self.safe_start = safe_start
        self._rng = np.random.default_rng(seed)
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(field.columns)] for _ in range(field.rows)
        ]
        self._moves: List[Move] = []
        self._started = False
        self._state = GameState.NEUTRAL
        self._revealed_safe = 0
        self._revealed_mines = 0
        self._flags = 0
        self._calculate_adjacent_mines()

    @classmethod
    def create(
        cls,
        config: Optional[BoardConfig] = None,
        generator: Optional[FieldGenerator] = None,
    ) -> "Board":
        """Generate a field from ``config`` and build a board around it."""
        config = config or BoardConfig()
        generator = generator or RandomFieldGenerator()
        args = FieldGenerationArguments(mines=config.num_mines, seed=config.seed)
        field = generator.generate(config.height, config.width, args)
        return cls(field, safe_start=config.safe_start, seed=config.seed)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _calculate_adjacent_mines(self) -> None:
        """Sync every cell's mine flag and neighbor count with the field."""
        mines = self._field.to_array()
        padded = np.pad(mines.astype(np.int8), 1)
        counts = np.zeros(mines.shape, dtype=np.int8)
        for delta_row in (0, 1, 2):
            for delta_col in (0, 1, 2):
                if delta_row == 1 and delta_col == 1:
                    continue
                counts += padded[
                    delta_row:delta_row + self.rows,
                    delta_col:delta_col + self.columns,
                ]

        for row in range(self.rows):
            for col in range(self.columns):
                cell = self._grid[row][col]
                cell.is_mine = bool(mines[row, col])
                cell.adjacent_mines = 0 if cell.is_mine else int(counts[row, col])

    # ========================================================================
    # Safe Start
    # ========================================================================

    def safe_zone(self, row: int, col: int) -> Set[Position]:
        """Positions the safe-start policy keeps clear around a cell."""
        self._field.check_position(row, col)
        if self.safe_start == SafeStart.OFF:
            return set()
        zone = {(row, col)}
        if self.safe_start == SafeStart.NEIGHBORHOOD:
            zone.update(self.neighbors(row, col))
        return zone

    def ensure_safe(self, row: int, col: int) -> bool:
        """
        Relocate mines out of the safe zone around the first reveal.

        Does nothing once the game has started or when the zone is already
        clear. When the board is too dense to clear the neighborhood, only
        the cell itself is cleared.

        Returns:
            True if the field was regenerated.
        """
        if self._started:
            return False
        zone = self.safe_zone(row, col)
        if not any(self._field[position] for position in zone):
            return False

        free = self._field.size - len(zone) - self._field.mine_count
        if free < 0 and len(zone) > 1:
            logger.debug("Board too dense to clear the neighborhood of (%d, %d)", row, col)
            zone = {(row, col)}
            if not self._field[row, col]:
                return False

        self._field = make_safe(self._field, zone, self._rng)
        self._calculate_adjacent_mines()
        logger.debug("Regenerated field for a safe start at (%d, %d)", row, col)
        return True

    # ========================================================================
    # Move Stack (Mid-level)
    # ========================================================================

    def push(self, move: Move) -> None:
        """
        Apply a move and put it on the move stack.

        The first reveal may regenerate the field per the safe-start policy.
        Moves without effect are stacked with an empty delta.

        Raises:
            TerminalStateViolation: If the game is already won or lost.
            OutOfBounds: If the move targets a position off the board.
        """
        if self._state != GameState.NEUTRAL:
            raise TerminalStateViolation(
                f"Cannot push {move!r}: game is already {self._state.name}"
            )
        self._field.check_position(move.row, move.col)

        if not self._started and isinstance(move, FloodRevealMove):
            self.ensure_safe(move.row, move.col)
        self._started = True

        move.apply(self)
        self._moves.append(move)
        self._update_state()
        logger.debug("Pushed %r, delta=%s, state=%s", move, move.delta, self._state.name)

    def pop(self) -> bool:
        """
        Undo the most recent move.

        Returns:
            True if a move was undone, False if the stack was empty.
        """
        if not self._moves:
            return False
        move = self._moves.pop()
        move.undo(self)
        self._update_state()
        logger.debug("Popped %r, state=%s", move, self._state.name)
        return True

    def _update_state(self) -> None:
        """Recompute win/lose from the overlay counters; only reveals end a game."""
        if self._revealed_mines > 0:
            self._state = GameState.LOSE
        elif self._revealed_safe > 0 and self._revealed_safe == self.safe_cells:
            self._state = GameState.WIN
        else:
            self._state = GameState.NEUTRAL

    # ========================================================================
    # Overlay Mutation (used by moves)
    # ========================================================================

    def _reveal_cell(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if not cell.reveal():
            return False
        if cell.is_mine:
            self._revealed_mines += 1
        else:
            self._revealed_safe += 1
        return True

    def _cover_cell(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if not cell.cover():
            return False
        if cell.is_mine:
            self._revealed_mines -= 1
        else:
            self._revealed_safe -= 1
        return True

    def _toggle_flag(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if not cell.toggle_flag():
            return False
        self._flags += 1 if cell.is_flagged else -1
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def field(self) -> Field:
        return self._field

    @property
    def rows(self) -> int:
        return self._field.rows

    @property
    def columns(self) -> int:
        return self._field.columns

    @property
    def mine_count(self) -> int:
        return self._field.mine_count

    @property
    def safe_cells(self) -> int:
        return self._field.size - self._field.mine_count

    @property
    def flag_count(self) -> int:
        return self._flags

    @property
    def remaining_mines(self) -> int:
        """Mines left to flag, as shown on a mine counter."""
        return self.mine_count - self._flags

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def started(self) -> bool:
        return self._started

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.NEUTRAL

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WIN

    @property
    def is_lost(self) -> bool:
        return self._state == GameState.LOSE

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position; raises OutOfBounds if off the board."""
        self._field.check_position(row, col)
        return self._grid[row][col]

    def is_revealed(self, row: int, col: int) -> bool:
        return self.get_cell(row, col).is_revealed

    def is_flagged(self, row: int, col: int) -> bool:
        return self.get_cell(row, col).is_flagged

    def is_mine(self, row: int, col: int) -> bool:
        return self.get_cell(row, col).is_mine

    def get_adjacent_mines(self, row: int, col: int) -> int:
        return self.get_cell(row, col).adjacent_mines

    def neighbors(self, row: int, col: int) -> List[Position]:
        """In-bounds positions among the 8 cells around (row, col)."""
        self._field.check_position(row, col)
        return neighbors(row, col, self.rows, self.columns)

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(1 for r, c in self.neighbors(row, col) if self._grid[r][c].is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.columns), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.columns):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """Positions of hidden cells that could still be revealed."""
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.columns)
            if self._grid[row][col].state == CellState.HIDDEN
        ]

    def render(self, show_mines: bool = False) -> str:
        """
        Render the board as text, one line per row.

        Args:
            show_mines: Also mark hidden mines with ``*`` (e.g. after a loss).
        """
        lines = []
        for row in self._grid:
            chars = []
            for cell in row:
                if show_mines and cell.is_mine and not cell.is_revealed:
                    chars.append("*")
                else:
                    chars.append(cell.to_char())
            lines.append(" ".join(chars))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Board(rows={self.rows}, columns={self.columns}, "
            f"mines={self.mine_count}, state={self._state.name})"
        )
