"""Board size, rules tables and tunable settings"""
import os

COLS, ROWS = 10, 20

# Game states
MENU = "menu"
PLAYING = "playing"
PAUSED = "paused"
GAME_OVER = "gameOver"

LINES_PER_LEVEL = 10
MAX_STARTING_LEVEL = 20

# Line clear points (multiplied by level)
SCORE_VALUES = {
    "SINGLE": 100,
    "DOUBLE": 300,
    "TRIPLE": 500,
    "TETRIS": 800,
    "BACK_TO_BACK_TETRIS": 1200,
    "SOFT_DROP": 1,   # per cell
    "HARD_DROP": 2,   # per cell
}

# Milliseconds between gravity drops
LEVEL_SPEEDS = {
    1: 800, 2: 720, 3: 630, 4: 550, 5: 470,
    6: 380, 7: 300, 8: 220, 9: 130, 10: 100,
    11: 95, 12: 90, 13: 85, 14: 80, 15: 75,
    16: 70, 17: 65, 18: 63, 19: 62, 20: 60,
    21: 58, 22: 56, 23: 54, 24: 52, 25: 50,
    26: 45, 27: 40, 28: 35, 29: 30,
    30: 30,  # level 30+ all share this speed
}


def level_speed(level: int) -> int:
    """Gravity interval for a level; undefined levels reuse the nearest lower entry."""
    if level <= 1:
        return LEVEL_SPEEDS[1]
    if level >= 30:
        return LEVEL_SPEEDS[30]
    while level not in LEVEL_SPEEDS:
        level -= 1
    return LEVEL_SPEEDS[level]


CONFIG = {
    "CELL_SIZE": 32,
    "KEY_REPEAT_DELAY_MS": 150,
    "KEY_REPEAT_RATE_MS": 50,
    "LOCK_DELAY_MS": 500,
    "LOCK_RESET_MAX": 15,
    "SPAWN_PROTECTION_MS": 100,
    "GHOST_PIECE": True,
    "STARTING_LEVEL": 1,
    "BAG_SEED": None,
    "HIGH_SCORE_PATH": os.path.join(os.path.expanduser("~"), ".tetris", "highscore.json"),
}
