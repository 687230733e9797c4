"""Piece model, shapes, rotation transforms and wall kick tables"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from tetris_config import COLS

Shape = List[List[int]]


class PieceType(str, Enum):
    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"

    def __str__(self):
        return self.value


PIECE_TYPES = list(PieceType)

# Base shapes; never mutated, rotations are derived from these
SHAPES: Dict[PieceType, Tuple[Tuple[int, ...], ...]] = {
    PieceType.I: ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    PieceType.J: ((1,0,0),(1,1,1),(0,0,0)),
    PieceType.L: ((0,0,1),(1,1,1),(0,0,0)),
    PieceType.O: ((1,1),(1,1)),
    PieceType.S: ((0,1,1),(1,1,0),(0,0,0)),
    PieceType.T: ((0,1,0),(1,1,1),(0,0,0)),
    PieceType.Z: ((1,1,0),(0,1,1),(0,0,0)),
}

COLORS: Dict[PieceType, Tuple[int,int,int]] = {
    PieceType.I: (0, 255, 255),
    PieceType.J: (0, 0, 255),
    PieceType.L: (255, 127, 0),
    PieceType.O: (255, 255, 0),
    PieceType.S: (0, 255, 0),
    PieceType.T: (128, 0, 128),
    PieceType.Z: (255, 0, 0),
}

# Row = rotation state the piece is leaving; dy is y-up and gets inverted on the board
JLSTZ_KICKS = [
    [(0,0),(-1,0),(-1,-1),(0, 2),(-1, 2)],
    [(0,0),( 1,0),( 1, 1),(0,-2),( 1,-2)],
    [(0,0),( 1,0),( 1,-1),(0, 2),( 1, 2)],
    [(0,0),(-1,0),(-1, 1),(0,-2),(-1,-2)],
]
I_KICKS = [
    [(0,0),(-2,0),( 1,0),(-2, 1),( 1,-2)],
    [(0,0),(-1,0),( 2,0),(-1,-2),( 2, 1)],
    [(0,0),( 2,0),(-1,0),( 2,-1),(-1, 2)],
    [(0,0),( 1,0),(-2,0),( 1, 2),(-2,-1)],
]
O_KICKS = [[(0,0)], [(0,0)], [(0,0)], [(0,0)]]

KICKS: Dict[PieceType, List[List[Tuple[int,int]]]] = {
    PieceType.I: I_KICKS,
    PieceType.O: O_KICKS,
    PieceType.J: JLSTZ_KICKS,
    PieceType.L: JLSTZ_KICKS,
    PieceType.S: JLSTZ_KICKS,
    PieceType.T: JLSTZ_KICKS,
    PieceType.Z: JLSTZ_KICKS,
}


def transpose(m) -> Shape: return [list(r) for r in zip(*m)]
def rotate_cw(m) -> Shape: return [row[::-1] for row in transpose(m)]
def rotate_180(m) -> Shape: return [list(row[::-1]) for row in m[::-1]]
def rotate_ccw(m) -> Shape: return transpose(m)[::-1]


def rotated_shape(base, rotation: int) -> Shape:
    """Shape for a rotation index, always computed from the base matrix."""
    rotation %= 4
    if rotation == 1:
        return rotate_cw(base)
    if rotation == 2:
        return rotate_180(base)
    if rotation == 3:
        return rotate_ccw(base)
    return [list(r) for r in base]


@dataclass
class Piece:
    t: PieceType
    rotation: int  # 0=spawn, 1=R, 2=2, 3=L
    x: int
    y: int

    @staticmethod
    def spawn(t) -> "Piece":
        t = PieceType(t)
        w = len(SHAPES[t][0])
        return Piece(t, 0, COLS // 2 - w // 2, 0)

    @property
    def shape(self) -> Shape:
        return rotated_shape(SHAPES[self.t], self.rotation)

    def cells(self) -> List[Tuple[int,int]]:
        """Board (x, y) of every filled cell, including any above the field."""
        return [(self.x + c, self.y + r)
                for r, row in enumerate(self.shape)
                for c, v in enumerate(row) if v]

    # Movement primitives; validation is the caller's job
    def move_left(self): self.x -= 1
    def move_right(self): self.x += 1
    def move_down(self): self.y += 1
    def rotate(self): self.rotation = (self.rotation + 1) % 4
    def rotate_counter_clockwise(self): self.rotation = (self.rotation + 3) % 4
