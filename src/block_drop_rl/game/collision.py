"""Legality predicates for a candidate shape at a candidate position.

Positions are the shape's top-left corner in grid coordinates, ``x`` being
the column and ``y`` the row. Both may be negative.
"""

from __future__ import annotations

from .grid import GameGrid
from .pieces import Cell, Shape, occupied_cells


def fits_within_bounds(grid: GameGrid, x: int, y: int, shape: Shape) -> bool:
    """False if an occupied cell lands left, right or below the grid.

    Cells above row 0 are allowed so pieces can spawn over the visible grid.
    """
    for dy, dx in occupied_cells(shape):
        col = x + dx
        row = y + dy
        if col < 0 or col >= grid.n_cols or row >= grid.n_rows:
            return False
    return True


def is_unobstructed(grid: GameGrid, x: int, y: int, shape: Shape) -> bool:
    """False if an occupied cell overlaps an occupied grid cell.

    Positions outside the grid never block here.
    """
    for dy, dx in occupied_cells(shape):
        row, col = y + dy, x + dx
        if grid.is_inside(row, col) and grid.cells[row, col] != Cell.EMPTY:
            return False
    return True


def is_legal(grid: GameGrid, x: int, y: int, shape: Shape) -> bool:
    return fits_within_bounds(grid, x, y, shape) and is_unobstructed(grid, x, y, shape)


def merge(grid: GameGrid, x: int, y: int, shape: Shape) -> int:
    """Write the occupied cells of ``shape`` into ``grid``.

    Cells falling outside the grid are skipped. Returns the number of cells
    written.
    """
    written = 0
    for dy, dx in occupied_cells(shape):
        row, col = y + dy, x + dx
        if not grid.is_inside(row, col):
            continue
        grid.set(row, col, Cell(int(shape[dy, dx])))
        written += 1
    return written
