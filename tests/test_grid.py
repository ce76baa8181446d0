from __future__ import annotations

import pytest

from block_drop_rl.game import Cell, GameGrid, OutOfBounds


def test_get_set_and_bounds():
    grid = GameGrid()
    assert grid.shape == (21, 10)
    assert grid.get(20, 9) == Cell.EMPTY
    grid.set(20, 9, Cell.Z)
    assert grid.get(20, 9) == Cell.Z
    for row, col in [(21, 0), (0, 10), (-1, 0), (0, -1)]:
        with pytest.raises(OutOfBounds):
            grid.get(row, col)
        with pytest.raises(IndexError):
            grid.set(row, col, Cell.I)


def test_full_rows_ascending():
    grid = GameGrid()
    for row in (7, 3):
        for col in range(grid.n_cols):
            grid.set(row, col, Cell.S)
    grid.set(10, 0, Cell.S)
    assert grid.full_rows() == [3, 7]


def test_compact_removes_rows_and_keeps_order():
    grid = GameGrid()
    for row in (2, 5):
        for col in range(grid.n_cols):
            grid.set(row, col, Cell.I)
    grid.set(0, 3, Cell.Z)
    grid.set(4, 0, Cell.T)
    grid.set(6, 9, Cell.S)
    grid.set(20, 5, Cell.O)

    grid.compact_after_clearing({5, 2})

    assert not grid.cells[:2].any()
    assert grid.get(2, 3) == Cell.Z
    assert grid.get(5, 0) == Cell.T
    assert grid.get(6, 9) == Cell.S
    assert grid.get(20, 5) == Cell.O
    assert int((grid.cells != 0).sum()) == 4
    assert grid.shape == (21, 10)


def test_compact_without_rows_is_noop():
    grid = GameGrid()
    grid.set(3, 3, Cell.J)
    before = grid.clone_state()
    grid.compact_after_clearing([])
    assert (grid.cells == before).all()


def test_height_and_holes():
    grid = GameGrid(5, 3)
    assert grid.get_max_height() == 0
    grid.set(2, 1, Cell.T)
    grid.set(4, 0, Cell.T)
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 2
