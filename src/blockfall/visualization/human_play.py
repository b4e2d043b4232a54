from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Tuple

import pygame

from blockfall.game import Action, BlockFallGame, ClearPhase, Difficulty, GameConfig, GameState, Status
from .renderer import Renderer
from .storage import BestScoreStore


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}

KEY_TO_DIFFICULTY: Dict[int, Difficulty] = {
    key: level for key, level in zip((pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5), Difficulty)
}

# How long cleared rows flash before the engine finishes the clear
CLEAR_FLASH_MS = 300


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play BlockFall with the keyboard")
    p.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell", type=int, default=28)
    p.add_argument("--no-flash", action="store_true", help="clear rows without the flash animation")
    p.add_argument("--verbose", action="store_true")
    return p


def _persist(store: BestScoreStore, state: GameState) -> None:
    if state.new_best is not None:
        store.set(state.new_best)


def advance_frame(game: BlockFallGame, state: GameState, delta_ms: int, flash_elapsed: int) -> Tuple[GameState, int]:
    """Advance one rendered frame: run the flash timer during a clear, else tick the engine.

    Returns the new state and the flash time elapsed so far. The flash timer
    starts from zero for every clear, including the first one after a restart.
    """
    if state.clear_phase != ClearPhase.FLASHING:
        return game.tick(state, delta_ms), 0
    if state.status == Status.PLAYING:
        flash_elapsed += delta_ms
    if flash_elapsed >= CLEAR_FLASH_MS:
        return game.complete_line_clear(state), 0
    return state, flash_elapsed


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    store = BestScoreStore()
    game = BlockFallGame(GameConfig(random_seed=args.seed, animate_line_clears=not args.no_flash))
    state = game.new_game(store.get(), Difficulty(args.difficulty))
    renderer = Renderer(cell_size=args.cell)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        rows, cols = state.grid.shape
        screen = pygame.display.set_mode(renderer.window_size(rows, cols))
        pygame.display.set_caption("BlockFall")

        flash_elapsed = 0
        running = True
        while running:
            # Measured frame time, not the nominal 60 Hz
            delta_ms = clock.tick(60)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        state = game.restart(state)
                    elif event.key in KEY_TO_DIFFICULTY:
                        level = KEY_TO_DIFFICULTY[event.key]
                        if state.status == Status.GAME_OVER:
                            state = game.new_game(state.best_score, level)
                        else:
                            state = game.set_difficulty(state, level)
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            state = game.step(state, action)
                            _persist(store, state)

            state, flash_elapsed = advance_frame(game, state, delta_ms, flash_elapsed)
            _persist(store, state)

            renderer.draw(screen, state, flash_on=(flash_elapsed // 75) % 2 == 0)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
