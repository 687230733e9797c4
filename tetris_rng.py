"""7-bag randomizer module"""
import random
from typing import List, Optional

from tetris_piece import PIECE_TYPES, PieceType


class BagRandom:
    """
    Modern 7-bag piece randomizer.

    Every cycle deals each of the seven tetrominoes exactly once in a shuffled
    order, so droughts are bounded: the same piece can never be more than 12
    draws apart.

      • The bag is refilled and shuffled (Fisher–Yates) only when it is empty.
      • Pieces are popped from the end of the list.
      • peek_next() refills if needed but never consumes.
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.bag: List[PieceType] = []

    def _refill(self):
        bag = list(PIECE_TYPES)
        for i in range(len(bag) - 1, 0, -1):
            j = self.rng.randint(0, i)
            bag[i], bag[j] = bag[j], bag[i]
        self.bag = bag

    def next_piece(self) -> PieceType:
        if not self.bag:
            self._refill()
        return self.bag.pop()

    def peek_next(self) -> PieceType:
        if not self.bag:
            self._refill()
        return self.bag[-1]
