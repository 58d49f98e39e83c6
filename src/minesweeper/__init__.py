"""
Minesweeper game engine.

Provides field generation, the board overlay with reversible moves, and
adapters for interactive front ends and gymnasium agents.
"""
from .errors import (
    MinesweeperError,
    InvalidDimensions,
    OutOfBounds,
    TerminalStateViolation,
    FrozenFieldError,
    MoveAlreadyApplied,
)
from .field import Field, neighbors, make_safe
from .generators import (
    FieldGenerationArguments,
    FieldGenerator,
    FullFieldGenerator,
    EmptyFieldGenerator,
    RandomFieldGenerator,
    PresetFieldGenerator,
)
from .cell import Cell, CellState
from .moves import Delta, Move, FloodRevealMove, ChordMove, ToggleFlagMove
from .board import (
    Board,
    BoardConfig,
    GameState,
    SafeStart,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .controller import GameController, GameSettings
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "MinesweeperError",
    "InvalidDimensions",
    "OutOfBounds",
    "TerminalStateViolation",
    "FrozenFieldError",
    "MoveAlreadyApplied",
    "Field",
    "neighbors",
    "make_safe",
    "FieldGenerationArguments",
    "FieldGenerator",
    "FullFieldGenerator",
    "EmptyFieldGenerator",
    "RandomFieldGenerator",
    "PresetFieldGenerator",
    "Cell",
    "CellState",
    "Delta",
    "Move",
    "FloodRevealMove",
    "ChordMove",
    "ToggleFlagMove",
    "Board",
    "BoardConfig",
    "GameState",
    "SafeStart",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "GameController",
    "GameSettings",
    "MinesweeperEnv",
    "make_vec_env",
]
