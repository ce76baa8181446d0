from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop_rl.game import BlockDropGame, Command, GameConfig, Snapshot

# Agent action index -> game command; the last action only lets gravity act
ACTION_TO_COMMAND: Tuple[Optional[Command], ...] = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.MOVE_DOWN,
    Command.HARD_DROP,
    Command.ROTATE,
    None,
)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (30, 30, 36),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (160, 0, 240),  # T
        5: (240, 240, 0),  # O
        6: (0, 240, 0),    # S
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(int(v)), (200, 200, 200))


class BlockDropEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 gravity_every: int = 1,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = BlockDropGame(self.config)
        self.render_mode = render_mode
        self.gravity_every = max(1, int(gravity_every))
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # per point of engine score
            "lines": 1.0,            # per row cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        n_rows, n_cols = self.config.n_rows, self.config.n_cols
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=7, shape=(n_rows, n_cols), dtype=np.int8),
                "piece": spaces.Discrete(8),
                # top-left corner of the piece box; may sit left of or above the grid
                "position": spaces.Box(low=-4, high=max(n_rows, n_cols) + 4, shape=(2,), dtype=np.int64),
            }
        )
        self.action_space = spaces.Discrete(len(ACTION_TO_COMMAND))

        self._last_snapshot: Optional[Snapshot] = None
        self._steps = 0

    def _get_obs(self, snapshot: Snapshot) -> Dict[str, Any]:
        x, y = snapshot.position
        return {
            "board": snapshot.board().astype(np.int8),
            "piece": int(snapshot.piece_type),
            "position": np.array([x, y], dtype=np.int64),
        }

    def _get_info(self, snapshot: Snapshot) -> Dict[str, Any]:
        return {
            "score": snapshot.score,
            "rows_cleared": snapshot.rows_cleared,
            "level": snapshot.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self._steps = 0
        snapshot = self.game.snapshot()
        self._last_snapshot = snapshot
        return self._get_obs(snapshot), self._get_info(snapshot)

    def step(self, action: int):
        command = ACTION_TO_COMMAND[int(action)]

        before = self.game.snapshot()
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        if command is not None:
            self.game.apply(command)
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            self.game.apply(Command.TICK)

        snapshot = self.game.snapshot()
        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(snapshot.score - before.score),
            "lines": self.reward_weights["lines"] * float(snapshot.rows_cleared - before.rows_cleared),
            "holes": -self.reward_weights["holes"] * float(
                max(0, self.game.grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, self.game.grid.get_max_height() - height_before)),
        }
        terminated = bool(snapshot.game_over)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info(snapshot)
        info["reward_components"] = reward_components
        self._last_snapshot = snapshot
        return self._get_obs(snapshot), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            snapshot = self._last_snapshot or self.game.snapshot()
            board = snapshot.board()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(board[y, x])
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
