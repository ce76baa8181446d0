from __future__ import annotations

import numpy as np
import pytest

from block_drop_rl.game import PIECE_CATALOG, ActivePiece, Cell, GameGrid, rotate, shape_for, try_rotate


@pytest.mark.parametrize("piece_type", list(PIECE_CATALOG))
def test_four_rotations_return_the_original(piece_type):
    original = shape_for(piece_type)
    shape = original
    for _ in range(4):
        shape = rotate(shape)
        assert shape.shape == original.shape
    assert np.array_equal(shape, original)


def test_rotation_is_clockwise():
    t = int(Cell.T)
    expected = np.array([[0, t, 0], [0, t, t], [0, t, 0]], dtype=np.int8)
    assert np.array_equal(rotate(shape_for(Cell.T)), expected)


def test_rotate_returns_new_array():
    original = shape_for(Cell.S)
    rotated = rotate(original)
    rotated[:] = 0
    assert original.any()
    # works on read-only templates as well
    assert rotate(PIECE_CATALOG[Cell.S]).flags.writeable


def test_try_rotate_in_open_space():
    grid = GameGrid()
    piece = ActivePiece.spawn(Cell.T, 4, 5)
    assert try_rotate(grid, piece)
    assert np.array_equal(piece.shape, rotate(shape_for(Cell.T)))
    assert piece.position == (4, 5)


def test_try_rotate_kicks_one_row_up():
    grid = GameGrid()
    piece = ActivePiece.spawn(Cell.I, 0, 17)
    # the horizontal I would land on row 18, columns 0-3
    grid.set(18, 0, Cell.Z)
    assert try_rotate(grid, piece)
    assert piece.position == (0, 16)
    assert np.array_equal(piece.shape, rotate(shape_for(Cell.I)))


def test_try_rotate_rejected_leaves_piece_alone():
    grid = GameGrid()
    piece = ActivePiece.spawn(Cell.I, 0, 17)
    grid.set(18, 0, Cell.Z)
    grid.set(17, 0, Cell.Z)
    assert not try_rotate(grid, piece)
    assert piece.position == (0, 17)
    assert np.array_equal(piece.shape, shape_for(Cell.I))
