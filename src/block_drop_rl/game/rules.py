from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .grid import GameGrid


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    rows_per_level: int = 10

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        # four or more rows all score as a four-row clear
        return self.line_clear_scores[min(lines, 4) - 1] * level

    def level_for_rows(self, rows_cleared: int) -> int:
        return rows_cleared // self.rows_per_level + 1


@dataclass(frozen=True)
class GameStatus:
    level: int = 1
    rows_cleared: int = 0
    score: int = 0
    game_over: bool = False


def evaluate_and_clear(grid: GameGrid, status: GameStatus, rules: ScoringRules) -> Tuple[int, GameStatus]:
    """Clear the full rows of ``grid`` and return (rows cleared, new status)."""
    rows = grid.full_rows()
    if not rows:
        return 0, status
    grid.compact_after_clearing(rows)
    count = len(rows)
    rows_cleared = status.rows_cleared + count
    new_status = replace(
        status,
        level=rules.level_for_rows(rows_cleared),
        rows_cleared=rows_cleared,
        score=status.score + rules.score_for_lines(count, status.level),
    )
    return count, new_status


def _drop_curve(n: int) -> float:
    # Fibonacci-like series s(k) = s(k-2) + s(k-1) / 2, grows by ~1.28 per step
    last, curr = 0.0, 1.0
    total = 0.0
    for _ in range(n + 3):
        total = last + curr / 2.0
        last, curr = curr, total
    return total


def drop_duration_ms(level: int) -> int:
    """Milliseconds between automatic drops at ``level``.

    Non-increasing in level, levelling off a little above 200 ms.
    """
    duration = 1000.0
    for i in range(6, 7 + level):
        duration -= 1000.0 / _drop_curve(i)
    return int(duration)
