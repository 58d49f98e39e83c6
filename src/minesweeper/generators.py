"""
Field generators for Minesweeper game.

Each generator turns (rows, columns, arguments) into a frozen Field.
Negative dimensions raise InvalidDimensions; zero dimensions give an
empty field.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Sequence, Union

import numpy as np

from .errors import InvalidDimensions
from .field import Field, Position

logger = logging.getLogger(__name__)


# ============================================================================
# Generation Arguments
# ============================================================================

@dataclass(frozen=True)
class FieldGenerationArguments:
    """
    Generator-specific configuration.

    Attributes:
        mines: Exact number of mines to place.
        density: Fraction of available cells to mine, used when ``mines``
            is not given.
        safe_zone: Positions that must stay mine-free.
        seed: Seed for the random source; None draws fresh entropy.
    """

    mines: Optional[int] = None
    density: Optional[float] = None
    safe_zone: FrozenSet[Position] = field(default_factory=frozenset)
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate arguments after initialization."""
        if self.mines is not None and self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.density is not None and not 0.0 <= self.density <= 1.0:
            raise ValueError("Mine density must be between 0 and 1")
        object.__setattr__(self, "safe_zone", frozenset(self.safe_zone))


# ============================================================================
# Generator Interface
# ============================================================================

class FieldGenerator(ABC):
    """Strategy producing a Field of the requested shape."""

    def generate(
        self,
        rows: int,
        columns: int,
        args: Optional[FieldGenerationArguments] = None,
    ) -> Field:
        """
        Generate a frozen field.

        Args:
            rows: Number of rows.
            columns: Number of columns.
            args: Generator-specific arguments.

        Returns:
            A Field of exactly ``rows`` x ``columns``.

        Raises:
            InvalidDimensions: If either dimension is negative.
        """
        if rows < 0 or columns < 0:
            raise InvalidDimensions(rows, columns, "dimensions cannot be negative")
        result = Field(rows, columns)
        self._populate(result, args or FieldGenerationArguments())
        return result.freeze()

    @abstractmethod
    def _populate(self, result: Field, args: FieldGenerationArguments) -> None:
        """Set mines on a fresh, writable field."""


# ============================================================================
# Generator Variants
# ============================================================================

class FullFieldGenerator(FieldGenerator):
    """Mines every cell."""

    def _populate(self, result: Field, args: FieldGenerationArguments) -> None:
        for row in range(result.rows):
            for col in range(result.columns):
                result[row, col] = True


class EmptyFieldGenerator(FieldGenerator):
    """Places no mines at all."""

    def _populate(self, result: Field, args: FieldGenerationArguments) -> None:
        pass


class RandomFieldGenerator(FieldGenerator):
    """
    Places mines uniformly at random outside the safe zone.

    The mine count is ``args.mines`` when given, otherwise the density
    applied to the cells outside the safe zone, otherwise zero.
    """

    def _populate(self, result: Field, args: FieldGenerationArguments) -> None:
        positions = [
            (row, col)
            for row in range(result.rows)
            for col in range(result.columns)
            if (row, col) not in args.safe_zone
        ]
        count = self._mine_count(args, len(positions))
        if count > len(positions):
            raise ValueError(
                f"Too many mines ({count}) for {len(positions)} available cells"
            )

        rng = np.random.default_rng(args.seed)
        chosen = rng.choice(len(positions), size=count, replace=False)
        for index in chosen:
            result[positions[int(index)]] = True
        logger.debug(
            "Generated %dx%d field with %d mines", result.rows, result.columns, count
        )

    @staticmethod
    def _mine_count(args: FieldGenerationArguments, available: int) -> int:
        if args.mines is not None:
            return args.mines
        if args.density is not None:
            return int(round(args.density * available))
        return 0


class PresetFieldGenerator(FieldGenerator):
    """Returns a fixed layout, e.g. ``["..*", "...", "..."]``."""

    def __init__(self, layout: Union[Field, Sequence]) -> None:
        self._layout = layout if isinstance(layout, Field) else Field.from_rows(layout)

    def _populate(self, result: Field, args: FieldGenerationArguments) -> None:
        if result.shape != self._layout.shape:
            raise InvalidDimensions(
                result.rows, result.columns,
                f"preset layout is {self._layout.rows}x{self._layout.columns}",
            )
        for position in self._layout.mines():
            result[position] = True
