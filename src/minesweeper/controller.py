"""
Input controller for Minesweeper game.

Maps the gestures of a front end (tap, long press, double tap, undo) onto
Board moves. Front ends resolve screen coordinates to (row, col) first and
re-render from the board after each call or from the ``on_move`` callback.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .board import Board, BoardConfig, GameState
from .moves import ChordMove, FloodRevealMove, ToggleFlagMove

logger = logging.getLogger(__name__)

MoveListener = Callable[[Board, GameState], None]


@dataclass
class GameSettings:
    """
    Player input preferences.

    Attributes:
        chord_enabled: Double tap chords; single taps wait for confirmation.
        invert_controls: Tap flags and long press reveals.
    """

    chord_enabled: bool = False
    invert_controls: bool = False


class GameController:
    """Dispatches player gestures to a single owned Board."""

    def __init__(
        self,
        board: Board,
        settings: Optional[GameSettings] = None,
        on_move: Optional[MoveListener] = None,
    ) -> None:
        self.board = board
        self.settings = settings or GameSettings()
        self.on_move = on_move

    def new_game(self, config: Optional[BoardConfig] = None) -> Board:
        """Replace the board with a freshly generated one."""
        self.board = Board.create(config)
        return self.board

    # ========================================================================
    # Gestures
    # ========================================================================

    def primary(self, row: int, col: int) -> bool:
        """Tap: reveal (or flag with inverted controls)."""
        if not self._accepts(row, col):
            return False
        if self.settings.invert_controls:
            moved = self._flag(row, col)
        else:
            moved = self._reveal(row, col)
        self._notify()
        return moved

    def secondary(self, row: int, col: int) -> bool:
        """Long press: flag (or reveal with inverted controls)."""
        if not self._accepts(row, col):
            return False
        if self.settings.invert_controls:
            moved = self._reveal(row, col)
        else:
            moved = self._flag(row, col)
        self._notify()
        return moved

    def chord(self, row: int, col: int) -> bool:
        """Double tap: chord a revealed number when chording is enabled."""
        if not self.settings.chord_enabled or not self._accepts(row, col):
            return False
        if not self.board.is_revealed(row, col):
            return False
        self.board.push(ChordMove(row, col))
        self._notify()
        return True

    def undo(self) -> bool:
        """Undo the last move; False if there is nothing to undo."""
        if not self.board.pop():
            return False
        self._notify()
        return True

    # ========================================================================
    # Helpers
    # ========================================================================

    def _accepts(self, row: int, col: int) -> bool:
        if self.board.state != GameState.NEUTRAL:
            return False
        if not self.board.field.contains(row, col):
            logger.debug("Ignoring gesture outside the board at (%d, %d)", row, col)
            return False
        return True

    def _reveal(self, row: int, col: int) -> bool:
        board = self.board
        if board.is_flagged(row, col):
            return False
        if board.is_revealed(row, col):
            # Chord only once every mine around the number is flagged
            if board.count_adjacent_flags(row, col) != board.get_adjacent_mines(row, col):
                return False
            board.push(ChordMove(row, col))
        else:
            board.push(FloodRevealMove(row, col))
        return True

    def _flag(self, row: int, col: int) -> bool:
        if self.board.is_revealed(row, col):
            return False
        self.board.push(ToggleFlagMove(row, col))
        return True

    def _notify(self) -> None:
        if self.on_move is not None:
            self.on_move(self.board, self.board.state)
