# tetris_layout.py
from dataclasses import dataclass
from tetris_config import CONFIG, COLS, ROWS

@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    hold_x: int

def compute_dims() -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    panel_w = 220

    board_w = COLS * cell
    board_h = ROWS * cell

    # hold box | board | side panel
    hold_x = margin
    board_x = hold_x + panel_w // 2 + margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    total_w = panel_x + panel_w + margin
    total_h = margin + board_h + margin

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y,
        hold_x=hold_x,
    )
