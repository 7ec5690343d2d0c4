"""
env.py - Gymnasium environment for Connect Four

This module wraps a GameController in the Gymnasium ``Env`` interface so
an external harness can drive both seats through ``reset``/``step``.
"""

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connect4_engine.debug import debug
from connect4_engine.errors import ColumnFull, InvalidColumn
from connect4_engine.game.rules import GameController
from connect4_engine.utils import ROWS, COLS, Outcome, Player


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both seats are driven through ``step``; rewards are given from seat
    ONE's point of view.
    """

    metadata = {'render_modes': ['ansi'], 'render_fps': 4}

    def __init__(self, width: int = COLS, height: int = ROWS,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            width: Number of columns
            height: Number of rows
            render_mode: None or "ansi"
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.width = width
        self.height = height
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(height, width), dtype=np.int8
        )

        self.game = GameController(width, height)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.game = GameController(self.width, self.height)
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play ``action`` for whichever seat is to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)

        Raises:
            GameAlreadyOver: If called after a terminal step
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            result = self.game.drop_piece(action)
        except (InvalidColumn, ColumnFull) as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if result.outcome is Outcome.WIN:
            won_by_one = self.game.current_seat is Player.ONE
            reward = self.reward_win if won_by_one else self.reward_lose
        elif result.outcome is Outcome.TIE:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        terminated = result.outcome.is_terminal()
        if terminated:
            debug.info(f"Episode finished: {result.outcome.name}", "env")

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current game.

        Returns:
            The text board in "ansi" mode, otherwise None
        """
        if self.render_mode == "ansi":
            return self.game.board.render()
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.game.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_seat.value,
            'game_result': self.game.outcome.name,
            'moves_made': self.game.moves_made,
            'winning_line': list(self.game.winning_line()),
            'last_move': self.game.last_move,
        }
