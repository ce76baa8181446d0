"""Save/restore of a game as a flat record (grid, active piece, status)."""

from __future__ import annotations

import json
import os
import random
from typing import Any, Dict, List, Optional

import numpy as np

from .core import BlockDropGame, GameConfig
from .grid import GameGrid
from .pieces import ActivePiece, Cell
from .rules import GameStatus, ScoringRules


def _cells_to_names(data: np.ndarray) -> Dict[str, Any]:
    n_rows, n_cols = data.shape
    return {
        "n_rows": int(n_rows),
        "n_cols": int(n_cols),
        "data": [Cell(int(v)).name for v in data.reshape(-1)],
    }


def _names_to_cells(record: Dict[str, Any]) -> np.ndarray:
    n_rows = int(record["n_rows"])
    n_cols = int(record["n_cols"])
    names: List[str] = list(record["data"])
    if len(names) != n_rows * n_cols:
        raise ValueError(f"expected {n_rows * n_cols} cells, got {len(names)}")
    try:
        values = [int(Cell[name]) for name in names]
    except KeyError as exc:
        raise ValueError(f"unknown cell {exc.args[0]!r}") from exc
    return np.array(values, dtype=np.int8).reshape(n_rows, n_cols)


def game_to_record(game: BlockDropGame) -> Dict[str, Any]:
    piece = game.piece
    status = game.status
    return {
        "grid": _cells_to_names(game.grid.cells),
        "piece": {
            "piece_type": piece.piece_type.name,
            "shape": _cells_to_names(piece.shape),
            "position": {"x": int(piece.x), "y": int(piece.y)},
            "collided": bool(piece.collided),
        },
        "status": {
            "level": int(status.level),
            "rows_cleared": int(status.rows_cleared),
            "score": int(status.score),
            "game_over": bool(status.game_over),
        },
    }


def _check_piece(piece: ActivePiece) -> None:
    if piece.piece_type == Cell.EMPTY:
        raise ValueError("the active piece cannot be EMPTY")
    values = piece.shape[piece.shape != Cell.EMPTY]
    if values.size != 4 or np.any(values != int(piece.piece_type)):
        raise ValueError(f"shape is not a {piece.piece_type.name} tetromino")


def _check_status(status: GameStatus, rules: ScoringRules) -> None:
    if status.rows_cleared < 0 or status.score < 0:
        raise ValueError("rows_cleared and score must be non-negative")
    expected = rules.level_for_rows(status.rows_cleared)
    if status.level != expected:
        raise ValueError(f"level {status.level} does not match {status.rows_cleared} rows cleared (expected {expected})")


def record_to_game(
    record: Dict[str, Any],
    rules: Optional[ScoringRules] = None,
    rng: Optional[random.Random] = None,
) -> BlockDropGame:
    """Rebuild a game from :func:`game_to_record` output. The game starts idle."""
    try:
        cells = _names_to_cells(record["grid"])
        piece_record = record["piece"]
        status_record = record["status"]
        piece = ActivePiece(
            piece_type=Cell[piece_record["piece_type"]],
            shape=_names_to_cells(piece_record["shape"]),
            x=int(piece_record["position"]["x"]),
            y=int(piece_record["position"]["y"]),
            collided=bool(piece_record["collided"]),
        )
        status = GameStatus(
            level=int(status_record["level"]),
            rows_cleared=int(status_record["rows_cleared"]),
            score=int(status_record["score"]),
            game_over=bool(status_record["game_over"]),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"malformed game record: {exc}") from exc

    rules = rules or ScoringRules()
    _check_piece(piece)
    _check_status(status, rules)

    n_rows, n_cols = cells.shape
    game = BlockDropGame(GameConfig(n_rows=n_rows, n_cols=n_cols), rules=rules, rng=rng)
    game.grid = GameGrid(n_rows, n_cols)
    game.grid.cells = cells
    game.piece = piece
    game.status = status
    return game


def dumps(game: BlockDropGame) -> str:
    return json.dumps(game_to_record(game))


def loads(text: str, **kwargs: Any) -> BlockDropGame:
    return record_to_game(json.loads(text), **kwargs)


def save(game: BlockDropGame, path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(dumps(game))


def load(path: str, **kwargs: Any) -> BlockDropGame:
    with open(path, "r", encoding="utf-8") as fh:
        return loads(fh.read(), **kwargs)
