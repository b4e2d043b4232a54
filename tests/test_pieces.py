from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from blockfall.game import BASE_SHAPES, KICKS, PieceKind, empty_grid, rotate_ccw, rotate_cw, spawn_piece, try_rotate

from conftest import make_grid


@pytest.mark.parametrize("kind", list(PieceKind))
def test_base_shapes_are_4x4_tetrominoes(kind):
    shape = BASE_SHAPES[kind]
    assert shape.shape == (4, 4)
    assert int(shape.sum()) == 4


def test_color_codes():
    assert [int(k) for k in (PieceKind.I, PieceKind.O, PieceKind.T, PieceKind.J, PieceKind.L, PieceKind.S, PieceKind.Z)] == [
        1, 2, 3, 4, 5, 6, 7,
    ]


def test_rotations_are_inverse_and_cyclic():
    matrices = list(BASE_SHAPES.values()) + [np.random.default_rng(0).integers(0, 2, size=(4, 4))]
    for m in matrices:
        spun = m
        for _ in range(4):
            spun = rotate_cw(spun)
        assert np.array_equal(spun, m)
        assert np.array_equal(rotate_ccw(rotate_cw(m)), m)
        assert spun.shape == (4, 4)


def test_rotate_cw_turns_clockwise():
    # Horizontal I on row 1 becomes vertical on column 2
    vertical = rotate_cw(BASE_SHAPES[PieceKind.I])
    assert vertical[:, 2].tolist() == [1, 1, 1, 1]
    assert int(vertical.sum()) == 4


def test_kick_order():
    assert KICKS == ((0, 0), (1, 0), (-1, 0), (2, 0), (-2, 0), (0, -1))


def test_rotation_in_open_space_keeps_origin():
    piece = spawn_piece(PieceKind.T, 3, 5)
    rotated, ok = try_rotate(empty_grid(), piece, 1)
    assert ok
    assert (rotated.x, rotated.y) == (3, 5)
    assert np.array_equal(rotated.shape, rotate_cw(piece.shape))


def test_wall_kick_picks_first_free_offset():
    vertical = rotate_cw(BASE_SHAPES[PieceKind.I])
    # Column 2 of the matrix sits on grid column 0
    piece = replace(spawn_piece(PieceKind.I), shape=vertical, x=-2, y=5)
    rotated, ok = try_rotate(empty_grid(), piece, 1)
    assert ok
    # (0,0), (+1,0) and (-1,0) all poke through the left wall
    assert (rotated.x, rotated.y) == (0, 5)
    assert np.array_equal(rotated.shape, rotate_cw(vertical))


def test_rotation_rejected_when_every_kick_collides():
    vertical = rotate_cw(BASE_SHAPES[PieceKind.I])
    grid = make_grid([(x, y) for y in range(16) for x in range(10)])
    grid[5:9, 2] = 0
    piece = replace(spawn_piece(PieceKind.I), shape=vertical, x=0, y=5)
    result, ok = try_rotate(grid, piece, -1)
    assert not ok
    assert result == piece


def test_try_rotate_rejects_bad_direction():
    with pytest.raises(ValueError):
        try_rotate(empty_grid(), spawn_piece(PieceKind.T), 2)


def test_piece_equality_is_by_content():
    a = spawn_piece(PieceKind.S, 2, 4)
    b = replace(spawn_piece(PieceKind.S), x=2, y=4, shape=np.array(BASE_SHAPES[PieceKind.S]))
    assert a == b
    assert a != a.shifted(1, 0)
