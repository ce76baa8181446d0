from __future__ import annotations

import numpy as np

from .collision import is_legal
from .grid import GameGrid
from .pieces import ActivePiece, Shape


def rotate(shape: Shape) -> Shape:
    """Return ``shape`` turned 90 degrees clockwise as a new array."""
    return np.rot90(shape, 1, axes=(1, 0)).copy()


def try_rotate(grid: GameGrid, piece: ActivePiece) -> bool:
    """Rotate ``piece`` in place if legal, else one row up, else not at all."""
    rotated = rotate(piece.shape)
    if is_legal(grid, piece.x, piece.y, rotated):
        piece.shape = rotated
        return True
    # single upward kick
    if is_legal(grid, piece.x, piece.y - 1, rotated):
        piece.shape = rotated
        piece.y -= 1
        return True
    return False
