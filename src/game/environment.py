"""
Gymnasium environment wrapper for Minesweeper.

Exposes a GameSession through the standard step/reset interface so a
player (human, script or agent) can reveal cells while one of the
solver tiers either answers every move or plays on its own.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, GameState
from .session import GameSession
from .turn import Turn


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size size * size.
        Action i reveals the cell at (i // size, i % size).

    Modes:
        - Interactive: pass an ``opponent`` solver; after every player
          reveal the opponent takes one turn on the same board.
        - Automatic: call ``solver_step`` to let a solver play alone.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        opponent=None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
            opponent: Solver answering each player move, if any.
            seed: Seed for the session's mine placement.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.session = GameSession(self.config, seed=seed)
        self.render_mode = render_mode
        self.opponent = opponent

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.size, self.config.size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0
        self._total_safe_cells = self.config.total_cells - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng = np.random.default_rng(seed)
        self.session.reset()
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal a cell for the player.

        Args:
            action: Cell index to reveal (row * size + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._player_reward(row, col)
        if self.opponent is not None and self.session.is_playing:
            self.session.play(self.opponent)

        return self._transition(reward)

    def solver_step(
        self, solver
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Let a solver take one turn on its own.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
            The info dict also carries the published ``turn``.
        """
        self._steps += 1
        before = self.session.board.count_revealed()
        turn = self.session.play(solver) if self.session.is_playing else Turn()
        reward = self._turn_reward(turn, before)

        observation, reward, terminated, truncated, info = self._transition(reward)
        info["turn"] = turn
        # A turn that changes nothing can never make progress
        truncated = turn.is_noop and not terminated
        return observation, reward, terminated, truncated, info

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        row = int(action) // self.config.size
        col = int(action) % self.config.size
        return row, col

    def _player_reward(self, row: int, col: int) -> float:
        """Perform a player reveal and score it."""
        if not self.session.reveal(row, col):
            return -0.1
        if self.session.game_state == GameState.WON:
            return 10.0
        if self.session.game_state == GameState.LOST:
            return -10.0
        return 1.0

    def _turn_reward(self, turn: Turn, revealed_before: int) -> float:
        """Score a solver turn with the same scale as a player reveal."""
        if turn.outcome == GameState.WON:
            return 10.0
        if turn.outcome == GameState.LOST:
            return -10.0
        if self.session.board.count_revealed() > revealed_before:
            return 1.0
        return 0.0

    def _transition(
        self, reward: float
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        observation = self.session.board.get_observation()
        terminated = not self.session.is_playing
        return observation, reward, terminated, False, self._get_info()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        return {
            "steps": self._steps,
            "revealed": board.count_revealed(),
            "total_safe": self._total_safe_cells,
            "game_state": self.session.game_state.name,
            "flags_left": self.session.flags_left,
            "hints_used": self.session.hints_used,
            "valid_actions": len(board.hidden_cells()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.session.board.render()
        if self.render_mode == "human":
            print(self.session.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.board.hidden_cells():
            mask[row * self.config.size + col] = True
        return mask
