from __future__ import annotations

import pytest

from block_drop_rl.game import ActivePiece, BlockDropGame, Cell


class ScriptedRng:
    """Stands in for random.Random; hands out a fixed sequence of piece types."""

    def __init__(self, picks):
        self.picks = list(picks)
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        if self.picks:
            return self.picks.pop(0)
        return seq[0]


class FakeClock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def _fill_row(game: BlockDropGame, row: int, except_cols=(), cell: Cell = Cell.I) -> None:
    for col in range(game.grid.n_cols):
        if col not in except_cols:
            game.grid.set(row, col, cell)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scripted_rng():
    """Factory: ``scripted_rng([Cell.O, Cell.T])`` yields those types in order."""
    return ScriptedRng


@pytest.fixture
def fill_row():
    """``fill_row(game, row, except_cols=(), cell=Cell.I)`` fills a grid row."""
    return _fill_row


@pytest.fixture
def o_game() -> BlockDropGame:
    """Fresh game whose active piece is an O at (4, 0)."""
    game = BlockDropGame(rng=ScriptedRng([Cell.O]))
    game.piece = ActivePiece.spawn(Cell.O, 4, 0)
    return game
