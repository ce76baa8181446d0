"""Game module for Block Drop RL.

Exports the board simulation and supporting classes:
- GameGrid: Grid representation and row compaction
- Cell / ActivePiece: Cell tags, piece catalog and the falling piece
- fits_within_bounds / is_unobstructed: Move legality predicates
- rotate / try_rotate: Clockwise rotation with a single upward kick
- ScoringRules / GameStatus: Line-clear scoring and leveling
- BlockDropGame: Command-driven state machine
- AutoDropTimer: Host-side periodic tick source
"""

from .grid import GameGrid, OutOfBounds
from .pieces import PIECE_CATALOG, PIECE_TYPES, ActivePiece, Cell, shape_for
from .collision import fits_within_bounds, is_legal, is_unobstructed, merge
from .rotation import rotate, try_rotate
from .rules import GameStatus, ScoringRules, drop_duration_ms, evaluate_and_clear
from .core import BeginAutoDrop, BlockDropGame, Command, EndAutoDrop, GameConfig, Snapshot
from .timer import AutoDropTimer

__all__ = [
    "GameGrid",
    "OutOfBounds",
    "PIECE_CATALOG",
    "PIECE_TYPES",
    "ActivePiece",
    "Cell",
    "shape_for",
    "fits_within_bounds",
    "is_legal",
    "is_unobstructed",
    "merge",
    "rotate",
    "try_rotate",
    "GameStatus",
    "ScoringRules",
    "drop_duration_ms",
    "evaluate_and_clear",
    "BeginAutoDrop",
    "BlockDropGame",
    "Command",
    "EndAutoDrop",
    "GameConfig",
    "Snapshot",
    "AutoDropTimer",
]
