from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    from .pieces import FallingPiece


Coordinate = Tuple[int, int]

DEFAULT_ROWS = 16
DEFAULT_COLS = 10


@dataclass(frozen=True, eq=False)
class ClearResult:
    grid: np.ndarray
    cleared: int
    cleared_rows: Tuple[int, ...]


def _frozen(grid: np.ndarray) -> np.ndarray:
    grid.flags.writeable = False
    return grid


def empty_grid(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> np.ndarray:
    """Board of `rows` x `cols` empty cells.

    The grid uses 0 for empty cells and 1..7 for locked cells, the value being
    the color code of the piece kind that left it. Row 0 is the top row.
    Grids are handed out read-only; every mutation below returns a new array.
    """
    return _frozen(np.zeros((int(rows), int(cols)), dtype=np.int8))


def collides(grid: np.ndarray, piece: "FallingPiece") -> bool:
    # Sub-cells above the top edge never collide
    rows, cols = grid.shape
    for x, y in piece.cells():
        if x < 0 or x >= cols or y >= rows:
            return True
        if y >= 0 and grid[y, x] != 0:
            return True
    return False


def merge(grid: np.ndarray, piece: "FallingPiece") -> np.ndarray:
    rows, cols = grid.shape
    out = np.array(grid, dtype=np.int8)
    value = int(piece.kind)
    for x, y in piece.cells():
        if 0 <= y < rows and 0 <= x < cols:
            out[y, x] = value
    return _frozen(out)


def clear_full_rows(grid: np.ndarray) -> ClearResult:
    """Remove every full row in one pass and pad the top with empty rows."""
    rows, cols = grid.shape
    full_rows = np.flatnonzero(np.all(grid != 0, axis=1))
    if full_rows.size == 0:
        return ClearResult(grid=_frozen(np.array(grid, dtype=np.int8)), cleared=0, cleared_rows=())
    num = int(full_rows.size)
    kept = np.delete(grid, full_rows, axis=0)
    new_rows = np.zeros((num, cols), dtype=np.int8)
    out = np.vstack((new_rows, kept)).astype(np.int8)
    return ClearResult(
        grid=_frozen(out),
        cleared=num,
        cleared_rows=tuple(int(r) for r in full_rows),
    )


def try_move(grid: np.ndarray, piece: "FallingPiece", dx: int, dy: int) -> Tuple["FallingPiece", bool]:
    moved = piece.shifted(dx, dy)
    if collides(grid, moved):
        return piece, False
    return moved, True


def is_resting(grid: np.ndarray, piece: "FallingPiece") -> bool:
    return collides(grid, piece.shifted(0, 1))


def drop_distance(grid: np.ndarray, piece: "FallingPiece") -> int:
    distance = 0
    while not collides(grid, piece.shifted(0, distance + 1)):
        distance += 1
    return distance


def ghost_row(grid: np.ndarray, piece: "FallingPiece") -> int:
    """Lowest origin row the piece can reach by falling straight down."""
    return piece.y + drop_distance(grid, piece)
