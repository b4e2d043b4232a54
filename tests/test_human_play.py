from __future__ import annotations

import pytest

from blockfall.game import BlockFallGame, ClearPhase, GameConfig, PieceKind, Status

from conftest import make_grid, row_cells, with_piece

pytest.importorskip("pygame")

from blockfall.visualization.human_play import CLEAR_FLASH_MS, advance_frame  # noqa: E402


@pytest.fixture
def flash_game() -> BlockFallGame:
    return BlockFallGame(GameConfig(random_seed=8, animate_line_clears=True))


def _flashing(game: BlockFallGame):
    grid = make_grid(row_cells(15, [0, 1, 2, 7, 8, 9]), value=2)
    state = game.hard_drop(with_piece(game.new_game(), PieceKind.I, grid=grid))
    assert state.clear_phase == ClearPhase.FLASHING
    return state


def test_flash_runs_for_the_full_time_then_completes(flash_game):
    state, elapsed = advance_frame(flash_game, _flashing(flash_game), 100, 0)
    assert elapsed == 100
    assert state.clear_phase == ClearPhase.FLASHING

    state, elapsed = advance_frame(flash_game, state, CLEAR_FLASH_MS - 100, elapsed)
    assert elapsed == 0
    assert state.clear_phase == ClearPhase.NONE
    assert state.lines == 1


def test_paused_flash_does_not_advance(flash_game):
    paused = flash_game.pause_toggle(_flashing(flash_game))
    state, elapsed = advance_frame(flash_game, paused, 500, 120)
    assert elapsed == 120
    assert state.clear_phase == ClearPhase.FLASHING


def test_restart_mid_flash_gives_the_next_clear_a_full_flash(flash_game):
    state, elapsed = advance_frame(flash_game, _flashing(flash_game), 250, 0)
    assert elapsed == 250

    restarted = flash_game.restart(state)
    state, elapsed = advance_frame(flash_game, restarted, 16, elapsed)
    assert elapsed == 0
    assert state.status == Status.PLAYING

    state, elapsed = advance_frame(flash_game, _flashing(flash_game), 100, elapsed)
    assert elapsed == 100
    assert state.clear_phase == ClearPhase.FLASHING
