"""Gymnasium environments for BlockFall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 10x16 falling-block environment
register(
    id="BlockFall-10x16-v0",
    entry_point="blockfall.env.blockfall_env:BlockFallEnv",
)

__all__ = ["BlockFall-10x16-v0"]
