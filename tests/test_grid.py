from __future__ import annotations

import numpy as np
import pytest

from blockfall.game import PieceKind, clear_full_rows, collides, empty_grid, merge, spawn_piece
from blockfall.game.grid import drop_distance, ghost_row, is_resting, try_move

from conftest import make_grid, row_cells


@pytest.mark.parametrize("kind", list(PieceKind))
def test_spawn_position_is_free_on_empty_grid(kind):
    assert not collides(empty_grid(), spawn_piece(kind))


def test_empty_grid_defaults_and_read_only():
    grid = empty_grid()
    assert grid.shape == (16, 10)
    assert not grid.any()
    with pytest.raises(ValueError):
        grid[0, 0] = 1


def test_collides_with_walls_floor_and_cells():
    grid = make_grid([(5, 10)])
    t = spawn_piece(PieceKind.T)
    assert collides(grid, t.shifted(-4, 0))  # left wall
    assert collides(grid, t.shifted(5, 0))  # right wall
    assert collides(grid, t.shifted(0, 16))  # below the floor
    # T cells at (4, y) and (3..5, y+1); land the bottom row on (5, 10)
    assert collides(grid, t.shifted(0, 10))
    assert not collides(grid, t.shifted(0, 9))


def test_cells_above_the_grid_are_exempt():
    grid = make_grid(row_cells(0, range(10)))
    piece = spawn_piece(PieceKind.O, 3, -2)  # occupies rows -2 and -1
    assert not collides(grid, piece)
    assert collides(grid, piece.shifted(0, 1))


def test_merge_writes_color_code_without_mutating_input():
    grid = empty_grid()
    piece = spawn_piece(PieceKind.L, 3, -1)
    out = merge(grid, piece)
    assert not grid.any()
    # Row -1 sub-cell is dropped, row 0 cells are written
    assert out[0].tolist() == [0, 0, 0, 5, 5, 5, 0, 0, 0, 0]
    assert int(out.sum()) == 3 * int(PieceKind.L)


def test_clear_full_rows_removes_and_compacts():
    grid = make_grid(row_cells(2, range(4)) + row_cells(3, range(4)), rows=5, cols=4)
    grid[1, 0] = 3
    grid[4, 1] = 6
    result = clear_full_rows(grid)
    assert result.cleared == 2
    assert result.cleared_rows == (2, 3)
    assert result.grid.tolist() == [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [3, 0, 0, 0],
        [0, 6, 0, 0],
    ]


def test_clear_full_rows_handles_non_adjacent_rows():
    rng = np.random.default_rng(3)
    grid = rng.integers(0, 8, size=(16, 10)).astype(np.int8)
    for y in (0, 5, 15):
        grid[y, :] = 2
    kept = [grid[y].tolist() for y in range(16) if not np.all(grid[y] != 0)]
    result = clear_full_rows(grid)
    assert result.cleared == 16 - len(kept)
    assert set((0, 5, 15)) <= set(result.cleared_rows)
    assert list(result.cleared_rows) == sorted(result.cleared_rows)
    assert result.grid.shape == (16, 10)
    assert not np.any(np.all(result.grid != 0, axis=1))
    assert not result.grid[: result.cleared].any()
    assert result.grid[result.cleared :].tolist() == kept


def test_clear_full_rows_without_full_rows():
    grid = make_grid([(0, 15)])
    result = clear_full_rows(grid)
    assert result.cleared == 0
    assert result.cleared_rows == ()
    assert np.array_equal(result.grid, grid)


def test_try_move_reports_outcome():
    grid = empty_grid()
    piece = spawn_piece(PieceKind.I, 0, 5)
    blocked, moved = try_move(grid, piece, -1, 0)
    assert not moved and blocked == piece
    shifted, moved = try_move(grid, piece, 1, 0)
    assert moved and shifted.x == 1


def test_drop_distance_and_ghost_row():
    grid = make_grid(row_cells(12, range(10)))
    piece = spawn_piece(PieceKind.T)  # bottom cells on shape row 1
    assert drop_distance(grid, piece) == 11
    assert ghost_row(grid, piece) == 10
    landed = piece.shifted(0, 11)
    assert is_resting(grid, landed)
    assert not is_resting(grid, piece)
