"""
Exception types raised by the Minesweeper engine.

Structural mistakes (bad dimensions, bad coordinates, moving after the game
ended) are reported immediately. Moves that simply have no effect are not
errors; they record an empty delta instead.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidDimensions(MinesweeperError, ValueError):
    """A field was requested with negative or mismatched dimensions."""

    def __init__(self, rows: int, columns: int, reason: str = "") -> None:
        self.rows = rows
        self.columns = columns
        message = f"Invalid field dimensions {rows}x{columns}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, rows: int, columns: int) -> None:
        self.row = row
        self.col = col
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{columns} grid"
        )


class TerminalStateViolation(MinesweeperError, RuntimeError):
    """A move was pushed after the game was already won or lost."""


class FrozenFieldError(MinesweeperError, TypeError):
    """A field was written to after generation finished."""


class MoveAlreadyApplied(MinesweeperError, RuntimeError):
    """The same Move instance was applied twice."""
