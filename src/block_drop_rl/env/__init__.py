"""Gymnasium environments for Block Drop RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default falling-block environment (6 discrete actions)
register(
    id="BlockDrop-21x10-v0",
    entry_point="block_drop_rl.env.block_drop_env:BlockDropEnv",
)

__all__ = ["BlockDrop-21x10-v0"]
