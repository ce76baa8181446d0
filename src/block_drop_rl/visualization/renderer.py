from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from block_drop_rl.game import Snapshot


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (160, 0, 240),  # T
        5: (240, 240, 0),  # O
        6: (0, 240, 0),    # S
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font = None

    def window_size(self, n_rows: int, n_cols: int) -> Tuple[int, int]:
        return (
            n_cols * self.cell_size + self.margin * 3 + self.panel_width,
            n_rows * self.cell_size + self.margin * 2,
        )

    def _grid_surface(self, board: np.ndarray) -> pygame.Surface:
        h, w = board.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = _color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _status_lines(self, snapshot: Snapshot) -> list[str]:
        lines = [
            f"Level: {snapshot.level}",
            f"Rows cleared: {snapshot.rows_cleared}",
            f"Score: {snapshot.score}",
        ]
        if snapshot.game_over:
            lines += ["", "Game Over", "Press Enter to start over"]
        elif snapshot.paused:
            lines += ["", "Paused", "Press Enter to resume"]
        elif not snapshot.running:
            lines += ["", "Press Enter to start"]
        return lines

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        board = snapshot.board()
        grid_surf = self._grid_surface(board)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        x_text = self.margin * 2 + board.shape[1] * self.cell_size
        for i, txt in enumerate(self._status_lines(snapshot)):
            color = (255, 100, 100) if txt == "Game Over" else (230, 230, 230)
            img = self._font.render(txt, True, color)
            screen.blit(img, (x_text, self.margin + i * 22))
        pygame.display.flip()
