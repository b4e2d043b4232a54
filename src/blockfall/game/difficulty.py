from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class Difficulty(str, Enum):
    """Difficulty levels, easiest first."""

    SUPER_EASY = "super-easy"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    SUPER_HARD = "super-hard"


@dataclass(frozen=True)
class DifficultySettings:
    name: str
    gravity_ms: int  # ms per row at level 0
    lock_delay_ms: int
    preview_count: int
    ghost_piece: bool
    hard_drop_enabled: bool
    # Kept for tuning; soft-drop scoring does not apply it
    soft_drop_multiplier: int


DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.SUPER_EASY: DifficultySettings(
        name="Super Easy",
        gravity_ms=1200,
        lock_delay_ms=2000,
        preview_count=5,
        ghost_piece=True,
        hard_drop_enabled=True,
        soft_drop_multiplier=2,
    ),
    Difficulty.EASY: DifficultySettings(
        name="Easy",
        gravity_ms=800,
        lock_delay_ms=1500,
        preview_count=4,
        ghost_piece=True,
        hard_drop_enabled=True,
        soft_drop_multiplier=2,
    ),
    Difficulty.MEDIUM: DifficultySettings(
        name="Medium",
        gravity_ms=500,
        lock_delay_ms=1000,
        preview_count=3,
        ghost_piece=True,
        hard_drop_enabled=True,
        soft_drop_multiplier=1,
    ),
    Difficulty.HARD: DifficultySettings(
        name="Hard",
        gravity_ms=300,
        lock_delay_ms=500,
        preview_count=2,
        ghost_piece=False,
        hard_drop_enabled=True,
        soft_drop_multiplier=1,
    ),
    Difficulty.SUPER_HARD: DifficultySettings(
        name="Super Hard",
        gravity_ms=150,
        lock_delay_ms=200,
        preview_count=1,
        ghost_piece=False,
        hard_drop_enabled=False,
        soft_drop_multiplier=1,
    ),
}

DIFFICULTY_COLORS: Dict[Difficulty, str] = {
    Difficulty.SUPER_EASY: "#4ade80",
    Difficulty.EASY: "#22c55e",
    Difficulty.MEDIUM: "#f59e0b",
    Difficulty.HARD: "#f97316",
    Difficulty.SUPER_HARD: "#ef4444",
}


def get_difficulty_settings(level: Union[Difficulty, str]) -> DifficultySettings:
    # Difficulty() raises ValueError for unknown names
    return DIFFICULTY_SETTINGS[Difficulty(level)]


def display_color(level: Union[Difficulty, str]) -> str:
    return DIFFICULTY_COLORS[Difficulty(level)]
