from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Tuple

import numpy as np
import pytest

from blockfall.game import BlockFallGame, GameConfig, GameState, PieceKind, spawn_piece


def make_grid(filled: Iterable[Tuple[int, int]] = (), rows: int = 16, cols: int = 10, value: int = 1) -> np.ndarray:
    """Grid with `value` written at every (x, y) in `filled`."""
    grid = np.zeros((rows, cols), dtype=np.int8)
    for x, y in filled:
        grid[y, x] = value
    return grid


def row_cells(y: int, cols: Iterable[int]) -> list:
    return [(x, y) for x in cols]


def with_piece(
    state: GameState,
    kind: PieceKind,
    x: int = 3,
    y: int = -1,
    shape: Optional[np.ndarray] = None,
    grid: Optional[np.ndarray] = None,
    **changes,
) -> GameState:
    piece = spawn_piece(kind, x, y)
    if shape is not None:
        piece = replace(piece, shape=shape)
    if grid is not None:
        changes["grid"] = grid
    return replace(state, falling=piece, **changes)


@pytest.fixture
def game() -> BlockFallGame:
    return BlockFallGame(GameConfig(random_seed=1234))


@pytest.fixture
def state(game: BlockFallGame) -> GameState:
    return game.new_game()
