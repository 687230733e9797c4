"""Key bindings and delayed auto repeat"""
from typing import Dict, Hashable, List, Optional

import pygame

from tetris_config import CONFIG, GAME_OVER, PAUSED, PLAYING

# state -> key -> Game method name
BINDINGS: Dict[str, Dict[int, str]] = {
    PLAYING: {
        pygame.K_LEFT: "move_left",
        pygame.K_RIGHT: "move_right",
        pygame.K_DOWN: "soft_drop",
        pygame.K_UP: "rotate_clockwise",
        pygame.K_z: "rotate_counter_clockwise",
        pygame.K_SPACE: "hard_drop",
        pygame.K_c: "hold",
        pygame.K_p: "pause",
        pygame.K_ESCAPE: "pause",
        pygame.K_r: "restart_game",
    },
    PAUSED: {
        pygame.K_p: "resume",
        pygame.K_r: "restart_game",
        pygame.K_ESCAPE: "exit_to_menu",
    },
    GAME_OVER: {
        pygame.K_r: "restart_game",
        pygame.K_ESCAPE: "exit_to_menu",
    },
}

REPEATABLE = (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_DOWN)


def action_for(state: str, key: int) -> Optional[str]:
    return BINDINGS.get(state, {}).get(key)


def dispatch(game, key: int) -> bool:
    """Run the intent bound to key in the game's current state."""
    name = action_for(game.state, key)
    if name is None:
        return False
    return bool(getattr(game, name)())


class KeyRepeat:
    """
    Auto repeat for held keys.

    • press() fires nothing by itself; the caller handles the initial KEYDOWN.
    • After KEY_REPEAT_DELAY_MS of holding, update() reports the key once
      every KEY_REPEAT_RATE_MS.
    • Releasing a key stops its repeat.
    """
    def __init__(self, delay_ms: Optional[float] = None, rate_ms: Optional[float] = None):
        self.delay = CONFIG["KEY_REPEAT_DELAY_MS"] if delay_ms is None else delay_ms
        self.rate = CONFIG["KEY_REPEAT_RATE_MS"] if rate_ms is None else rate_ms
        self.held: Dict[Hashable, float] = {}
        self.since_last: Dict[Hashable, float] = {}

    def press(self, key: Hashable):
        self.held[key] = 0.0
        self.since_last[key] = 0.0

    def release(self, key: Hashable):
        self.held.pop(key, None)
        self.since_last.pop(key, None)

    def clear(self):
        self.held.clear(); self.since_last.clear()

    def update(self, dt: float) -> List[Hashable]:
        fired = []
        for key in list(self.held):
            before = self.held[key]
            self.held[key] = before + dt
            if self.held[key] < self.delay:
                continue
            if before < self.delay:
                # crossed the delay this frame: first repeat
                fired.append(key)
                self.since_last[key] = self.held[key] - self.delay
            else:
                self.since_last[key] += dt
            while self.rate > 0 and self.since_last[key] >= self.rate:
                self.since_last[key] -= self.rate
                fired.append(key)
        return fired
