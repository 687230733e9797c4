"""Board: collision, placement, line sweep, ghost and wall kicks"""
import logging
from typing import List, Optional

from tetris_config import COLS, ROWS
from tetris_piece import KICKS, Piece, PieceType

log = logging.getLogger(__name__)

Grid = List[List[Optional[PieceType]]]


def empty_grid() -> Grid:
    return [[None] * COLS for _ in range(ROWS)]


class Board:
    """Sole authority on occupancy and placement legality."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.grid: Grid = empty_grid()
        self.lines_cleared = 0

    def is_valid_position(self, x: int, y: int, shape) -> bool:
        """False if any filled cell is off the sides, below the floor or on a block.

        Rows above the field (y < 0) are allowed so pieces can spawn partly hidden.
        """
        for r, row in enumerate(shape):
            for c, v in enumerate(row):
                if not v:
                    continue
                bx, by = x + c, y + r
                if bx < 0 or bx >= COLS or by >= ROWS:
                    return False
                if by >= 0 and self.grid[by][bx] is not None:
                    return False
        return True

    def fits(self, piece: Piece) -> bool:
        return self.is_valid_position(piece.x, piece.y, piece.shape)

    def place_tetromino(self, piece: Piece):
        """Write the piece into the grid (no collision check). Cells above the field are dropped."""
        for bx, by in piece.cells():
            if 0 <= by < ROWS and 0 <= bx < COLS:
                self.grid[by][bx] = piece.t

    def ghost_y(self, piece: Piece) -> int:
        """Return the y position where the piece would land if hard-dropped."""
        shape = piece.shape
        y = piece.y
        while self.is_valid_position(piece.x, y + 1, shape):
            y += 1
        return y

    def find_completed_lines(self) -> List[int]:
        return [y for y in range(ROWS) if all(cell is not None for cell in self.grid[y])]

    def clear_lines(self) -> int:
        """Clear full lines and return the number of cleared rows."""
        cleared = 0
        y = ROWS - 1
        while y >= 0:
            if all(cell is not None for cell in self.grid[y]):
                del self.grid[y]
                self.grid.insert(0, [None] * COLS)
                cleared += 1
            else:
                y -= 1
        self.lines_cleared += cleared
        if cleared:
            log.debug("cleared %d line(s), %d total", cleared, self.lines_cleared)
        return cleared

    def is_game_over(self) -> bool:
        return any(cell is not None for cell in self.grid[0])

    def apply_wall_kicks(self, piece: Piece, prev_rotation: int) -> bool:
        """Try the kick offsets for the transition out of prev_rotation.

        Moves the piece to the first offset that fits and returns True; leaves it
        untouched and returns False when none do.
        """
        shape = piece.shape
        for dx, dy in KICKS[piece.t][prev_rotation % 4]:
            tx, ty = piece.x + dx, piece.y - dy
            if self.is_valid_position(tx, ty, shape):
                piece.x, piece.y = tx, ty
                return True
        return False

    def rows_as_text(self) -> List[str]:
        """Grid rendered as strings, '.' for empty cells. Handy for logs and tests."""
        return ["".join("." if c is None else c.value for c in row) for row in self.grid]
