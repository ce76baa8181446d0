from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import List, Optional, Tuple, Union

import numpy as np

from .collision import is_legal, merge
from .grid import GameGrid
from .pieces import PIECE_TYPES, ActivePiece, Cell
from .rotation import try_rotate
from .rules import GameStatus, ScoringRules, drop_duration_ms, evaluate_and_clear

logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    MOVE_DOWN = 2
    HARD_DROP = 3
    ROTATE = 4
    START_PAUSE = 5
    PAUSE = 6
    TICK = 7


MOVEMENT_COMMANDS = frozenset(
    {Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.MOVE_DOWN, Command.HARD_DROP, Command.ROTATE, Command.TICK}
)


@dataclass(frozen=True)
class BeginAutoDrop:
    """Ask the host to start issuing TICK every ``duration_ms``."""

    duration_ms: int


@dataclass(frozen=True)
class EndAutoDrop:
    """Ask the host to stop issuing TICK."""


Effect = Union[BeginAutoDrop, EndAutoDrop]


@dataclass
class GameConfig:
    n_rows: int = 21
    n_cols: int = 10
    spawn_x: int = 4
    spawn_y: int = -1  # first piece of a game starts above the grid
    respawn_y: int = 0
    random_seed: Optional[int] = None


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Everything a renderer needs to draw the board after a command."""

    grid: np.ndarray
    piece_type: Cell
    piece_shape: np.ndarray
    position: Tuple[int, int]
    level: int
    rows_cleared: int
    score: int
    game_over: bool
    running: bool
    paused: bool
    effects: Tuple[Effect, ...] = field(default_factory=tuple)

    def board(self) -> np.ndarray:
        """Grid contents with the active piece drawn over them."""
        board = self.grid.copy()
        n_rows, n_cols = board.shape
        x, y = self.position
        rows, cols = np.nonzero(self.piece_shape)
        for dy, dx in zip(rows, cols):
            row, col = y + int(dy), x + int(dx)
            if 0 <= row < n_rows and 0 <= col < n_cols:
                board[row, col] = self.piece_shape[dy, dx]
        return board


class BlockDropGame:
    """Single-owner state machine driving one board.

    Commands are applied one at a time through :meth:`apply`. Timer handling
    is left to the host, which receives ``BeginAutoDrop``/``EndAutoDrop``
    effects and answers with ``Command.TICK``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.n_rows, self.config.n_cols)
        self.status = GameStatus()
        self.piece: ActivePiece = self._spawn(self.config.spawn_y)
        self.running = False
        self.paused = False

    # ---------- Lifecycle ----------
    def reset(self) -> None:
        self.grid.reset()
        self.status = GameStatus()
        self.piece = self._spawn(self.config.spawn_y)
        self.paused = False

    def _draw_piece_type(self, exclude: Optional[Cell] = None) -> Cell:
        piece_type = self.rng.choice(PIECE_TYPES)
        while piece_type == exclude:
            piece_type = self.rng.choice(PIECE_TYPES)
        return Cell(piece_type)

    def _spawn(self, y: int, exclude: Optional[Cell] = None) -> ActivePiece:
        piece_type = self._draw_piece_type(exclude)
        logger.debug("Spawning %s at (%d, %d)", piece_type.name, self.config.spawn_x, y)
        return ActivePiece.spawn(piece_type, self.config.spawn_x, y)

    @property
    def drop_duration_ms(self) -> int:
        return drop_duration_ms(self.status.level)

    # ---------- Commands ----------
    def apply(self, command: Command) -> Snapshot:
        command = Command(command)
        effects: List[Effect] = []
        if command == Command.START_PAUSE:
            self._start_pause(effects)
        elif command == Command.PAUSE:
            self._pause(effects)
        elif self.status.game_over or self.paused:
            logger.debug("Ignoring %s (game_over=%s, paused=%s)", command.name, self.status.game_over, self.paused)
        elif command == Command.MOVE_LEFT:
            self._shift(-1)
        elif command == Command.MOVE_RIGHT:
            self._shift(1)
        elif command in (Command.MOVE_DOWN, Command.TICK):
            self._step_down(effects)
        elif command == Command.HARD_DROP:
            while self._step_down(effects):
                pass
        elif command == Command.ROTATE:
            try_rotate(self.grid, self.piece)
        return self.snapshot(effects)

    def _start_pause(self, effects: List[Effect]) -> None:
        if self.running:
            logger.info("Pausing game")
            self.running = False
            effects.append(EndAutoDrop())
            return
        if self.status.game_over:
            self.reset()
        logger.info("Starting game! Duration: %d ms", self.drop_duration_ms)
        self.paused = False
        self.running = True
        effects.append(BeginAutoDrop(self.drop_duration_ms))

    def _pause(self, effects: List[Effect]) -> None:
        if not self.running:
            return
        logger.info("Pausing game until the next start")
        self.running = False
        self.paused = True
        effects.append(EndAutoDrop())

    def is_move_allowed(self, x: int, y: int, shape: Optional[np.ndarray] = None) -> bool:
        """Whether the active piece, or ``shape`` if given, may sit at (x, y)."""
        return is_legal(self.grid, x, y, self.piece.shape if shape is None else shape)

    def _shift(self, dx: int) -> bool:
        piece = self.piece
        if self.is_move_allowed(piece.x + dx, piece.y):
            piece.x += dx
            return True
        return False

    def _step_down(self, effects: List[Effect]) -> bool:
        """Move the piece down one row. False once it locked or topped out."""
        piece = self.piece
        if self.is_move_allowed(piece.x, piece.y + 1):
            piece.y += 1
            return True
        if piece.y <= 0:
            self._top_out(effects)
        else:
            self._lock_in(effects)
        return False

    def _top_out(self, effects: List[Effect]) -> None:
        logger.info("Game over at score %d", self.status.score)
        self.piece.collided = True
        self.status = replace(self.status, game_over=True)
        if self.running:
            self.running = False
            effects.append(EndAutoDrop())

    def _lock_in(self, effects: List[Effect]) -> None:
        piece = self.piece
        piece.collided = True
        merge(self.grid, piece.x, piece.y, piece.shape)
        previous_level = self.status.level
        cleared, self.status = evaluate_and_clear(self.grid, self.status, self.rules)
        if cleared:
            logger.info("Cleared %d rows, score %d, level %d", cleared, self.status.score, self.status.level)
        if self.running and self.status.level != previous_level:
            # re-arm the drop job at the new level's cadence
            effects.append(EndAutoDrop())
            effects.append(BeginAutoDrop(self.drop_duration_ms))
        self.piece = self._spawn(self.config.respawn_y, exclude=piece.piece_type)

    # ---------- Views ----------
    def snapshot(self, effects: Optional[List[Effect]] = None) -> Snapshot:
        return Snapshot(
            grid=self.grid.clone_state(),
            piece_type=self.piece.piece_type,
            piece_shape=self.piece.shape.copy(),
            position=self.piece.position,
            level=self.status.level,
            rows_cleared=self.status.rows_cleared,
            score=self.status.score,
            game_over=self.status.game_over,
            running=self.running,
            paused=self.paused,
            effects=tuple(effects or ()),
        )

    def get_state(self) -> np.ndarray:
        return self.snapshot().board()
