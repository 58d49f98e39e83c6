"""
Gymnasium environment wrapper for Minesweeper.

Exposes reveal, flag and chord moves on a Board through the standard
gymnasium interface so agents and scripted players can drive the engine.
"""
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .field import Position
from .moves import ChordMove, FloodRevealMove, Move, ToggleFlagMove

# Order matches ``action // cells``
MOVE_TYPES = (FloodRevealMove, ToggleFlagMove, ChordMove)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete space of size 3 * width * height. ``action // cells``
        picks the move (0 reveal, 1 flag, 2 chord) and ``action % cells``
        the cell at (index // width, index % width).

    Rewards:
        - +1 for a move that reveals safe cells
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a move with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board.create(self.config)
        self.render_mode = render_mode
        self._cells = self.config.height * self.config.width

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(MOVE_TYPES) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a freshly generated field.

        Args:
            seed: Seeds field generation; None keeps the config's seed.
            options: Additional options (unused).
        """
        super().reset(seed=seed)
        config = self.config if seed is None else replace(self.config, seed=seed)
        self.board = Board.create(config)
        self._steps = 0
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """Apply the move encoded by ``action``."""
        move = self.action_to_move(action)
        self._steps += 1

        self.board.push(move)
        reward = self._calculate_reward(move)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        return observation, reward, terminated, False, self._get_info()

    def undo(self) -> bool:
        """Take back the last move."""
        return self.board.pop()

    def action_to_move(self, action: int) -> Move:
        """Decode a flat action index into a move."""
        kind, index = divmod(int(action), self._cells)
        row, col = self._index_to_position(index)
        return MOVE_TYPES[kind](row, col)

    def _index_to_position(self, index: int) -> Position:
        return index // self.config.width, index % self.config.width

    def _calculate_reward(self, move: Move) -> float:
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        if move.delta is None or move.delta.is_empty:
            return -0.1
        if move.delta.flagged:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for r in range(self.board.rows)
            for c in range(self.board.columns)
            if self.board.is_revealed(r, c)
        )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self.board.safe_cells,
            "flags": self.board.flag_count,
            "game_state": self.board.state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = self.board.render(show_mines=self.board.is_lost)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Reveal and flag are valid on hidden cells; flag also on flagged
        cells; chord on revealed numbers whose flags are satisfied.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_playing:
            return mask
        for row in range(self.board.rows):
            for col in range(self.board.columns):
                index = row * self.config.width + col
                cell = self.board.get_cell(row, col)
                if cell.is_hidden:
                    mask[index] = True
                if not cell.is_revealed:
                    mask[self._cells + index] = True
                elif (
                    not cell.is_mine
                    and cell.adjacent_mines > 0
                    and self.board.count_adjacent_flags(row, col) == cell.adjacent_mines
                    and any(
                        self.board.get_cell(r, c).is_hidden
                        for r, c in self.board.neighbors(row, col)
                    )
                ):
                    mask[2 * self._cells + index] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel play.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
