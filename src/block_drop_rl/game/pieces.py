from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping, Tuple

import numpy as np


class Cell(IntEnum):
    """Contents of a grid or shape cell. EMPTY plus the seven tetrominoes."""

    EMPTY = 0
    I = 1
    J = 2
    L = 3
    T = 4
    O = 5
    S = 6
    Z = 7


Shape = np.ndarray

# Spawnable piece types, in draw order.
PIECE_TYPES: Tuple[Cell, ...] = (Cell.I, Cell.J, Cell.L, Cell.T, Cell.O, Cell.S, Cell.Z)


def _template(cell: Cell, rows: List[str]) -> Shape:
    # "#" marks an occupied cell of the given piece
    data = np.array([[int(cell) if ch == "#" else 0 for ch in row] for row in rows], dtype=np.int8)
    data.flags.writeable = False
    return data


def _build_catalog() -> Mapping[Cell, Shape]:
    shapes = {
        Cell.EMPTY: _template(Cell.EMPTY, ["."]),
        Cell.I: _template(Cell.I, [".#..", ".#..", ".#..", ".#.."]),
        Cell.J: _template(Cell.J, [".#.", ".#.", "##."]),
        Cell.L: _template(Cell.L, [".#.", ".#.", ".##"]),
        Cell.T: _template(Cell.T, [".#.", "###", "..."]),
        Cell.O: _template(Cell.O, ["##", "##"]),
        Cell.S: _template(Cell.S, ["...", ".##", "##."]),
        Cell.Z: _template(Cell.Z, ["...", "##.", ".##"]),
    }
    return MappingProxyType(shapes)


PIECE_CATALOG: Mapping[Cell, Shape] = _build_catalog()


def shape_for(piece_type: Cell) -> Shape:
    """Return a writable copy of the canonical shape for ``piece_type``."""
    return PIECE_CATALOG[Cell(piece_type)].copy()


def occupied_cells(shape: Shape) -> List[Tuple[int, int]]:
    """(row, col) offsets of the non-empty cells of ``shape``."""
    rows, cols = np.nonzero(shape)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


@dataclass
class ActivePiece:
    """The falling piece: its type, owned shape copy and top-left position."""

    piece_type: Cell
    shape: Shape
    x: int
    y: int
    collided: bool = False

    @classmethod
    def spawn(cls, piece_type: Cell, x: int, y: int) -> "ActivePiece":
        if Cell(piece_type) == Cell.EMPTY:
            raise ValueError("the EMPTY sentinel cannot be spawned")
        return cls(piece_type=Cell(piece_type), shape=shape_for(piece_type), x=x, y=y)

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dy, dx in occupied_cells(self.shape)]
