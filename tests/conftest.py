"""
Pytest configuration and shared fixtures.
"""

import random

import pytest

from minesweeper.core.game import MineSweeper
from minesweeper.core.grid import Grid
from minesweeper.core.layout import MineLayout
from minesweeper.core.model import GameSpec


class FixedLayout(MineLayout):
    """Places mines exactly where the test says, ignoring the random source."""

    def __init__(self, mines):
        super().__init__()
        self.mines = set(mines)

    def _pick_positions(self, grid, mine_count, exclude):
        assert len(self.mines) == mine_count
        assert exclude not in self.mines
        return set(self.mines)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_grid(rows, cols, mines=(), safe=None):
    """Grid with the given mines and adjacency counts already filled in."""
    grid = Grid(rows, cols)
    if safe is None:
        safe = next(
            (r, c) for r in range(rows) for c in range(cols) if (r, c) not in set(mines)
        )
    FixedLayout(mines).place(grid, len(mines), *safe)
    return grid


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def events():
    return []


@pytest.fixture
def make_game(clock, events):
    """Factory: game with fixed mines whose events are collected in ``events``."""

    def _make(rows, cols, mines=()):
        game = MineSweeper(
            GameSpec(rows, cols, len(mines)),
            layout=FixedLayout(mines),
            clock=clock,
        )
        game.add_listener(events.append)
        return game

    return _make


@pytest.fixture
def beginner_game() -> MineSweeper:
    """Create a 9x9 game with 10 randomly placed mines."""
    return MineSweeper(GameSpec(9, 9, 10), layout=MineLayout(random.Random(1)))
