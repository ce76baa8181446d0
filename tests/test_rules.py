from __future__ import annotations

import pytest

from block_drop_rl.game import Cell, GameGrid, GameStatus, ScoringRules, drop_duration_ms, evaluate_and_clear


@pytest.mark.parametrize("lines,expected", [(0, 0), (1, 40), (2, 100), (3, 300), (4, 1200), (5, 1200)])
def test_score_table_at_level_one(lines, expected):
    assert ScoringRules().score_for_lines(lines, 1) == expected


def test_score_scales_with_level():
    rules = ScoringRules()
    assert [rules.score_for_lines(n, 3) for n in (1, 2, 3, 4)] == [120, 300, 900, 3600]


@pytest.mark.parametrize("rows,level", [(0, 1), (9, 1), (10, 2), (19, 2), (20, 3)])
def test_level_formula(rows, level):
    assert ScoringRules().level_for_rows(rows) == level


def _grid_with_full_rows(rows):
    grid = GameGrid()
    for row in range(grid.n_rows):
        for col in range(grid.n_cols):
            if row in rows or col != row % grid.n_cols:
                grid.set(row, col, Cell.L)
    return grid


def test_clear_two_rows():
    grid = _grid_with_full_rows({2, 5})
    before = grid.clone_state()
    count, status = evaluate_and_clear(grid, GameStatus(), ScoringRules())

    assert count == 2
    assert status == GameStatus(level=1, rows_cleared=2, score=100, game_over=False)
    assert not grid.cells[:2].any()
    kept = [r for r in range(21) if r not in (2, 5)]
    for new_row, old_row in enumerate(kept, start=2):
        assert (grid.cells[new_row] == before[old_row]).all()


def test_no_full_rows_is_noop():
    grid = _grid_with_full_rows(set())
    before = grid.clone_state()
    status = GameStatus(level=2, rows_cleared=12, score=500)
    count, new_status = evaluate_and_clear(grid, status, ScoringRules())
    assert count == 0
    assert new_status is status
    assert (grid.cells == before).all()


def test_score_uses_level_before_update_and_keeps_game_over():
    grid = GameGrid()
    for col in range(grid.n_cols):
        grid.set(20, col, Cell.T)
    status = GameStatus(level=1, rows_cleared=9, score=10, game_over=True)
    count, new_status = evaluate_and_clear(grid, status, ScoringRules())
    assert count == 1
    assert new_status == GameStatus(level=2, rows_cleared=10, score=50, game_over=True)


def test_drop_duration_decreases_towards_a_floor():
    durations = [drop_duration_ms(level) for level in range(1, 60)]
    assert durations[0] == 690
    assert all(a >= b for a, b in zip(durations, durations[1:]))
    assert durations[-1] > 150
