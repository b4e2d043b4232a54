from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, List, Tuple

import numpy as np

from .grid import collides


class PieceKind(IntEnum):
    """Tetromino kinds; the value doubles as the locked-cell color code."""

    I = 1
    O = 2
    T = 3
    J = 4
    L = 5
    S = 6
    Z = 7


Shape = np.ndarray

SHAPE_SIZE = 4


def _frozen(shape: np.ndarray) -> Shape:
    out = np.array(shape, dtype=np.int8)
    out.flags.writeable = False
    return out


def shape_from_rows(rows: Iterable[str]) -> Shape:
    return _frozen([[1 if ch == "X" else 0 for ch in row] for row in rows])


BASE_SHAPES = {
    PieceKind.I: shape_from_rows(["....", "XXXX", "....", "...."]),
    PieceKind.O: shape_from_rows([".XX.", ".XX.", "....", "...."]),
    PieceKind.T: shape_from_rows([".X..", "XXX.", "....", "...."]),
    PieceKind.J: shape_from_rows(["X...", "XXX.", "....", "...."]),
    PieceKind.L: shape_from_rows(["..X.", "XXX.", "....", "...."]),
    PieceKind.S: shape_from_rows([".XX.", "XX..", "....", "...."]),
    PieceKind.Z: shape_from_rows(["XX..", ".XX.", "....", "...."]),
}

# (dx, dy) offsets tried in order after a rotation
KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (-1, 0), (2, 0), (-2, 0), (0, -1))


def rotate_cw(shape: Shape) -> Shape:
    return _frozen(np.rot90(shape, 1, axes=(1, 0)))


def rotate_ccw(shape: Shape) -> Shape:
    return _frozen(np.rot90(shape, 1, axes=(0, 1)))


@dataclass(frozen=True, eq=False)
class FallingPiece:
    kind: PieceKind
    shape: Shape
    x: int
    y: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FallingPiece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )

    def shifted(self, dx: int, dy: int) -> "FallingPiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def cells(self) -> List[Tuple[int, int]]:
        """Grid coordinates (x, y) of every occupied sub-cell."""
        cells: List[Tuple[int, int]] = []
        for dy in range(SHAPE_SIZE):
            for dx in range(SHAPE_SIZE):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name,
            "shape": self.shape.tolist(),
            "x": self.x,
            "y": self.y,
        }


def spawn_piece(kind: PieceKind, x: int = 3, y: int = -1) -> FallingPiece:
    return FallingPiece(kind=PieceKind(kind), shape=BASE_SHAPES[PieceKind(kind)], x=x, y=y)


def try_rotate(grid: np.ndarray, piece: FallingPiece, direction: int) -> Tuple[FallingPiece, bool]:
    """Rotate `piece` by `direction` (+1 clockwise, -1 counter-clockwise).

    Each offset in KICKS is tried against the grid and the first free position
    wins. When every offset collides the original piece comes back unchanged
    together with a False flag.
    """
    if direction == 1:
        shape = rotate_cw(piece.shape)
    elif direction == -1:
        shape = rotate_ccw(piece.shape)
    else:
        raise ValueError(f"rotation direction must be +1 or -1, got {direction!r}")
    for kx, ky in KICKS:
        candidate = replace(piece, shape=shape, x=piece.x + kx, y=piece.y + ky)
        if not collides(grid, candidate):
            return candidate, True
    return piece, False
