from __future__ import annotations

import pytest

from block_drop_rl.game import (
    PIECE_TYPES,
    Cell,
    GameGrid,
    fits_within_bounds,
    is_legal,
    is_unobstructed,
    merge,
    rotate,
    shape_for,
)
from block_drop_rl.game.pieces import occupied_cells


def _all_rotations(piece_type):
    shape = shape_for(piece_type)
    for _ in range(4):
        yield shape
        shape = rotate(shape)


@pytest.mark.parametrize("piece_type", PIECE_TYPES)
def test_bounds_matches_cell_by_cell_check(piece_type):
    grid = GameGrid()
    for shape in _all_rotations(piece_type):
        cells = occupied_cells(shape)
        for x in range(-4, 14):
            for y in range(-4, 25):
                expected = all(0 <= x + dx < grid.n_cols and y + dy < grid.n_rows for dy, dx in cells)
                assert fits_within_bounds(grid, x, y, shape) == expected, (piece_type, x, y)


def test_rows_above_grid_are_in_bounds():
    grid = GameGrid()
    assert fits_within_bounds(grid, 4, -1, shape_for(Cell.T))
    assert fits_within_bounds(grid, 4, -3, shape_for(Cell.I))


def test_empty_columns_of_a_shape_may_leave_the_grid():
    grid = GameGrid()
    # vertical I occupies only column 1 of its box
    assert fits_within_bounds(grid, -1, 0, shape_for(Cell.I))
    assert not fits_within_bounds(grid, -2, 0, shape_for(Cell.I))
    assert fits_within_bounds(grid, 8, 0, shape_for(Cell.I))
    assert not fits_within_bounds(grid, 9, 0, shape_for(Cell.I))


def test_overlap_blocks():
    grid = GameGrid()
    o = shape_for(Cell.O)
    assert is_unobstructed(grid, 4, 4, o)
    grid.set(5, 4, Cell.I)
    assert not is_unobstructed(grid, 4, 4, o)
    assert not is_legal(grid, 4, 4, o)
    # empty shape cells never collide
    grid.set(0, 0, Cell.I)
    assert is_unobstructed(grid, 0, 0, shape_for(Cell.I))


def test_outside_positions_do_not_block():
    grid = GameGrid()
    o = shape_for(Cell.O)
    assert is_unobstructed(grid, 9, 0, o)
    assert not fits_within_bounds(grid, 9, 0, o)
    grid.set(0, 4, Cell.J)
    assert not is_unobstructed(grid, 4, -1, o)


def test_merge_skips_cells_above_the_grid():
    grid = GameGrid()
    written = merge(grid, 4, -1, shape_for(Cell.O))
    assert written == 2
    assert grid.get(0, 4) == Cell.O
    assert grid.get(0, 5) == Cell.O
    assert int((grid.cells != 0).sum()) == 2
