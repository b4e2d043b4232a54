from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import (
    Action,
    BlockFallGame,
    ClearPhase,
    Difficulty,
    GameConfig,
    GameState,
    PieceKind,
    get_difficulty_settings,
)
from blockfall.visualization.palette import color_for_value


class BlockFallEnv(gym.Env):
    """One engine session driven by discrete actions at a fixed frame rate.

    Each step applies an action (LEFT .. NONE) and then advances the clock by
    `frame_ms`, so gravity and lock delay run the way they would for a player.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        frame_ms: float = 100.0,
        max_episode_steps: int = 5000,
        game_over_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = BlockFallGame(config)
        self.render_mode = render_mode
        self.difficulty = Difficulty(difficulty)
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.game_over_penalty = float(game_over_penalty)

        rows, cols = self.game.config.rows, self.game.config.cols
        preview = self.difficulty_preview()
        kinds = len(PieceKind)

        # Grid carries locked color codes and the falling piece as negatives
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-kinds, high=kinds, shape=(rows, cols), dtype=np.int8),
                "next": spaces.Box(low=0, high=kinds, shape=(preview,), dtype=np.int8),
                "level": spaces.Discrete(100),
            }
        )
        # Action.PAUSE is left out; pausing is a driver concern
        self.action_space = spaces.Discrete(int(Action.NONE) + 1)

        self.state: Optional[GameState] = None
        self._steps = 0

    def difficulty_preview(self) -> int:
        return get_difficulty_settings(self.difficulty).preview_count

    def _get_obs(self) -> Dict[str, Any]:
        assert self.state is not None
        preview = np.zeros((self.difficulty_preview(),), dtype=np.int8)
        for i, kind in enumerate(self.state.preview):
            preview[i] = int(kind)
        return {
            "grid": self.state.board(),
            "next": preview,
            "level": min(self.state.level, 99),
        }

    def _get_info(self) -> Dict[str, Any]:
        assert self.state is not None
        return {
            "score": self.state.score,
            "lines": self.state.lines,
            "level": self.state.level,
            "combo": self.state.combo,
            "outcome": self.state.outcome.name,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # Bag seed comes from np_random so unseeded resets continue the stream
        self.game.bag.reset(int(self.np_random.integers(2**31)))
        best = self.state.best_score if self.state is not None else 0
        self.state = self.game.new_game(best, self.difficulty)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        assert self.state is not None, "call reset() before step()"
        before = self.state.score
        state = self.game.step(self.state, Action(int(action)))
        state = self.game.tick(state, self.frame_ms)
        if state.clear_phase == ClearPhase.FLASHING:
            # No animation to wait for here
            state = self.game.complete_line_clear(state)
        self.state = state
        self._steps += 1

        reward = float(state.score - before)
        terminated = bool(state.is_over)
        if terminated:
            reward -= self.game_over_penalty
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array" and self.state is not None:
            board = self.state.board()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(board[y, x])
            return img
        # human rendering delegated to blockfall.visualization; noop
        return None

    def close(self) -> None:
        pass
