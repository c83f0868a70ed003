"""
Gymnasium environment wrapper for the minefield engine.

Lets agents and frontends drive the engine through the standard
Gymnasium API with reveal, flag and chord actions.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, BEGINNER
from .cell import OBS_EXPLODED, OBS_FLAGGED
from .engine import Engine
from .render import render_board, render_status


# ============================================================================
# Actions
# ============================================================================

class ActionType(IntEnum):
    """Player actions, in the order they appear in the action space."""

    REVEAL = 0
    FLAG = 1
    CHORD = 2


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield engine.

    Observation:
        2D int8 array indexed [y, x] where:
        - -2 = flagged cell
        - -1 = hidden cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        - 10 = exploded mine

    Actions:
        Discrete action space of size 3 * width * height.
        Action i maps to (ActionType(i // cells), x, y) where
        x = (i % cells) % width and y = (i % cells) // width.

    Rewards:
        - +1 for an action that changed the board
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the minefield environment.

        Args:
            config: Board configuration (default: BEGINNER).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BEGINNER
        self.engine = Engine(self.config)
        self.render_mode = render_mode
        self._cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_EXPLODED,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.reseed(seed)
        self.engine.new_game_from_config(self.config)
        self._steps = 0

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action_type, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(action_type, x, y)

        observation = self.engine.board.get_observation()
        terminated = not self.engine.board.is_playing
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, False, info

    def decode_action(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert flat action index to (action type, x, y)."""
        action_type, index = divmod(int(action), self._cells)
        y, x = divmod(index, self.config.width)
        return ActionType(action_type), x, y

    def encode_action(self, action_type: ActionType, x: int, y: int) -> int:
        """Convert (action type, x, y) to a flat action index."""
        return int(action_type) * self._cells + y * self.config.width + x

    def _apply(self, action_type: ActionType, x: int, y: int) -> float:
        """Apply an action and compute its reward."""
        if action_type == ActionType.REVEAL:
            changed = self.engine.reveal(x, y)
        elif action_type == ActionType.FLAG:
            changed = self.engine.toggle_flag(x, y)
        else:
            changed = self.engine.chord_reveal(x, y)

        if not changed:
            return -0.1
        if self.engine.board.is_won:
            return 10.0
        if self.engine.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "revealed": sum(1 for cell in board if cell.revealed),
            "remaining_mines": board.remaining_mines,
            "game_state": board.phase.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_board(self.engine.board) + "\n" + render_status(self.engine.board)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions the engine accepts in the current state.

        Chords are marked on revealed numbers whose adjacent flag count
        matches, even when every neighbor is already open.

        Returns:
            int8 array where 1 = valid action, usable as a sample mask.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        board = self.engine.board
        if not board.is_playing:
            return mask

        for cell in board:
            x, y = cell.position
            if not cell.revealed:
                mask[self.encode_action(ActionType.FLAG, x, y)] = 1
                if not cell.flagged:
                    mask[self.encode_action(ActionType.REVEAL, x, y)] = 1
            elif cell.is_number:
                flags = sum(1 for n in board.adjacent_cells(x, y) if n.flagged)
                if flags == cell.adjacent_mines:
                    mask[self.encode_action(ActionType.CHORD, x, y)] = 1
        return mask
