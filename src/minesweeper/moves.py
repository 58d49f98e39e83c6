"""
Player moves for Minesweeper game.

A Move is a single reversible action against a Board. Applying it records
a Delta of exactly the overlay cells it changed; undoing it replays that
delta backwards without recomputing any cascade.
"""
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from .errors import MoveAlreadyApplied
from .field import Position

if TYPE_CHECKING:
    from .board import Board


# ============================================================================
# Delta
# ============================================================================

@dataclass(frozen=True)
class Delta:
    """
    Overlay changes caused by one move.

    Attributes:
        revealed: Cells that went from hidden to revealed, in reveal order.
        flagged: Cells whose flag bit was toggled.
    """

    revealed: Tuple[Position, ...] = ()
    flagged: Tuple[Position, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.revealed and not self.flagged

    @property
    def cells(self) -> Set[Position]:
        return set(self.revealed) | set(self.flagged)


EMPTY_DELTA = Delta()


# ============================================================================
# Move Base Class
# ============================================================================

class Move(ABC):
    """
    Base class for player moves.

    Subclasses implement ``_apply``; undo is shared since it only needs
    the recorded delta.
    """

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        self._delta: Optional[Delta] = None

    @property
    def position(self) -> Position:
        return self.row, self.col

    @property
    def applied(self) -> bool:
        return self._delta is not None

    @property
    def delta(self) -> Optional[Delta]:
        """Recorded delta, or None while the move is not applied."""
        return self._delta

    def apply(self, board: "Board") -> Delta:
        """
        Apply this move to the board and record its delta.

        Raises:
            MoveAlreadyApplied: If this instance is already applied.
        """
        if self._delta is not None:
            raise MoveAlreadyApplied(f"{self!r} has already been applied")
        self._delta = self._apply(board)
        return self._delta

    def undo(self, board: "Board") -> None:
        """Revert exactly the recorded delta."""
        if self._delta is None:
            return
        for row, col in reversed(self._delta.revealed):
            board._cover_cell(row, col)
        for row, col in self._delta.flagged:
            board._toggle_flag(row, col)
        self._delta = None

    @abstractmethod
    def _apply(self, board: "Board") -> Delta:
        """Mutate the board and return what changed."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.row}, {self.col})"


# ============================================================================
# Cascade Helper
# ============================================================================

def _flood(board: "Board", start: Position, scheduled: Set[Position]) -> List[Position]:
    """
    Reveal ``start`` and cascade through zero-count cells breadth-first.

    ``scheduled`` marks every position ever queued, so each cell is visited
    at most once even when several cascades share it.
    """
    revealed = []
    queue = deque([start])
    scheduled.add(start)

    while queue:
        row, col = queue.popleft()
        if not board._reveal_cell(row, col):
            continue
        revealed.append((row, col))

        cell = board.get_cell(row, col)
        if cell.is_mine or cell.adjacent_mines > 0:
            continue

        for neighbor in board.neighbors(row, col):
            if neighbor not in scheduled and board.get_cell(*neighbor).is_hidden:
                scheduled.add(neighbor)
                queue.append(neighbor)

    return revealed


# ============================================================================
# Move Variants
# ============================================================================

class FloodRevealMove(Move):
    """Reveal a cell, cascading through empty regions."""

    def _apply(self, board: "Board") -> Delta:
        if not board.get_cell(self.row, self.col).is_hidden:
            return EMPTY_DELTA
        return Delta(revealed=tuple(_flood(board, self.position, set())))


class ChordMove(Move):
    """
    Reveal every unflagged neighbor of a satisfied number.

    Only acts when the target is a revealed safe cell whose flagged
    neighbor count equals its adjacent mine count.
    """

    def _apply(self, board: "Board") -> Delta:
        cell = board.get_cell(self.row, self.col)
        if not cell.is_revealed or cell.is_mine:
            return EMPTY_DELTA

        around = board.neighbors(self.row, self.col)
        flags = sum(1 for row, col in around if board.is_flagged(row, col))
        if flags != cell.adjacent_mines:
            return EMPTY_DELTA

        revealed: List[Position] = []
        scheduled: Set[Position] = set()
        for neighbor in around:
            if neighbor in scheduled or not board.get_cell(*neighbor).is_hidden:
                continue
            revealed.extend(_flood(board, neighbor, scheduled))
        return Delta(revealed=tuple(revealed))


class ToggleFlagMove(Move):
    """Flag or unflag a hidden cell."""

    def _apply(self, board: "Board") -> Delta:
        if not board._toggle_flag(self.row, self.col):
            return EMPTY_DELTA
        return Delta(flagged=(self.position,))
