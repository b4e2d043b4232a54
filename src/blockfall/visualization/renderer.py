from __future__ import annotations

from typing import Optional, Tuple

import pygame

from blockfall.game import BASE_SHAPES, ClearPhase, GameState, Status
from blockfall.game.difficulty import display_color
from .palette import BACKGROUND, color_for_value, hex_to_rgb

TEXT = (230, 235, 245)
MUTED = (154, 162, 177)
ALERT = (255, 179, 71)
FLASH = (245, 245, 245)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + (cols + self.panel_cells) * self.cell_size
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _cell_rect(self, x: int, y: int, origin: Tuple[int, int]) -> pygame.Rect:
        return pygame.Rect(
            origin[0] + x * self.cell_size,
            origin[1] + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_grid(self, screen: pygame.Surface, state: GameState, flash_on: bool) -> None:
        origin = (self.margin, self.margin)
        rows, cols = state.grid.shape
        for y in range(rows):
            flashing = state.clear_phase == ClearPhase.FLASHING and y in state.clearing_rows
            for x in range(cols):
                color = FLASH if flashing and flash_on else color_for_value(state.grid[y, x])
                pygame.draw.rect(screen, color, self._cell_rect(x, y, origin))

        if state.falling is None:
            return
        if state.settings.ghost_piece:
            ghost = state.ghost()
            if ghost is not None:
                for x, y in ghost.cells():
                    if y >= 0:
                        pygame.draw.rect(screen, color_for_value(ghost.kind), self._cell_rect(x, y, origin), 2)
        for x, y in state.falling.cells():
            if y >= 0:
                pygame.draw.rect(screen, color_for_value(state.falling.kind), self._cell_rect(x, y, origin))

    def _draw_panel(self, screen: pygame.Surface, state: GameState) -> None:
        font = self._font or pygame.font.SysFont(None, 24)
        self._font = font
        cols = state.grid.shape[1]
        x0 = self.margin * 2 + cols * self.cell_size
        y = self.margin

        lines = [
            ("Score", str(state.score)),
            ("Best", str(state.best_score)),
            ("Level", str(state.level)),
            ("Lines", str(state.lines)),
        ]
        for label, value in lines:
            screen.blit(font.render(f"{label}: {value}", True, TEXT), (x0, y))
            y += 24
        screen.blit(font.render(state.settings.name, True, hex_to_rgb(display_color(state.difficulty))), (x0, y))
        y += 24
        status_color = MUTED if state.status == Status.PLAYING else ALERT
        screen.blit(font.render(state.status.name.replace("_", " "), True, status_color), (x0, y))
        y += 36

        # Preview queue at half scale
        small = max(4, self.cell_size // 2)
        for kind in state.preview:
            shape = BASE_SHAPES[kind]
            for py in range(shape.shape[0]):
                for px in range(shape.shape[1]):
                    if shape[py, px]:
                        rect = pygame.Rect(x0 + px * small, y + py * small, small - 1, small - 1)
                        pygame.draw.rect(screen, color_for_value(kind), rect)
            y += small * 3

    def draw(self, screen: pygame.Surface, state: GameState, flash_on: bool = True) -> None:
        screen.fill(BACKGROUND)
        self._draw_grid(screen, state, flash_on)
        self._draw_panel(screen, state)
        pygame.display.flip()
