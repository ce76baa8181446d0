from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .pieces import Cell


class OutOfBounds(IndexError):
    """A grid cell was addressed outside the grid's dimensions."""


class GameGrid:
    """Fixed-size board of placed cells.

    Row 0 is the top row. Cells hold ``Cell`` ordinals, 0 being empty.
    """

    def __init__(self, n_rows: int = 21, n_cols: int = 10) -> None:
        self.n_rows = int(n_rows)
        self.n_cols = int(n_cols)
        self.cells = np.zeros((self.n_rows, self.n_cols), dtype=np.int8)

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_rows, self.n_cols

    def reset(self) -> None:
        self.cells.fill(Cell.EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def _check(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise OutOfBounds(f"cell ({row}, {col}) outside {self.n_rows}x{self.n_cols} grid")

    def get(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return Cell(int(self.cells[row, col]))

    def set(self, row: int, col: int, cell: Cell) -> None:
        self._check(row, col)
        self.cells[row, col] = Cell(cell)

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.cells != Cell.EMPTY, axis=1))]

    def compact_after_clearing(self, rows: Iterable[int]) -> None:
        """Remove ``rows`` and drop everything above them into the gap."""
        cleared = sorted(set(int(r) for r in rows))
        if not cleared:
            return
        for row in cleared:
            self._check(row, 0)
        kept = np.delete(self.cells, cleared, axis=0)
        new_rows = np.zeros((len(cleared), self.n_cols), dtype=np.int8)
        self.cells = np.vstack((new_rows, kept))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.flatnonzero(np.any(self.cells != Cell.EMPTY, axis=1))
        if non_empty_rows.size == 0:
            return 0
        return self.n_rows - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for col in range(self.n_cols):
            seen_block = False
            for cell in self.cells[:, col]:
                if cell != Cell.EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.n_rows, self.n_cols)
        new_grid.cells = self.cells.copy()
        return new_grid
