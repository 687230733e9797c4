import itertools

import pytest

from tetris import Game
from tetris_config import COLS, CONFIG
from tetris_piece import PieceType
from tetris_scores import HighScoreStore


class ManualClock:
    """Milliseconds that only move when a test says so."""
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


class FixedBag:
    """Deals a scripted sequence, cycling forever."""
    def __init__(self, seq):
        self._it = itertools.cycle([PieceType(t) for t in seq])
        self._next = next(self._it)

    def next_piece(self):
        t, self._next = self._next, next(self._it)
        return t

    def peek_next(self):
        return self._next


def fill_rows(board, rows, except_cols=(), t=PieceType.J):
    for y in rows:
        for x in range(COLS):
            if x not in except_cols:
                board.grid[y][x] = t


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def config():
    cfg = dict(CONFIG)
    cfg.update(SPAWN_PROTECTION_MS=0, HIGH_SCORE_PATH=None, BAG_SEED=None,
               STARTING_LEVEL=1, GHOST_PIECE=True)
    return cfg


@pytest.fixture
def make_game(clock, config):
    def make(seq="TIOSZJL", **overrides):
        cfg = dict(config, **overrides)
        return Game(clock=clock, rng=FixedBag(seq), store=HighScoreStore(None), config=cfg)
    return make


@pytest.fixture
def game(make_game):
    g = make_game()
    g.start_game(1)
    return g
