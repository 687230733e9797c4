"""
Classic Tetris — Game Rules Core
================================

The Game class below is the single session object for one player. It owns
the board, the 7-bag randomizer and every rule that decides what happens
when the player acts or time passes:

  • Spawn, gravity tick, lock delay (500 ms, up to 15 resets), spawn protection
  • Hard drop / soft drop scoring, line clear scoring with back-to-back tetris
  • Leveling and the gravity speed table
  • Hold (one swap per piece), pause/resume, game over, restart, exit to menu

-------------------------------------------------------------
TIME
-------------------------------------------------------------

The core never sleeps and never owns a timer. It is constructed with a
clock (any callable returning milliseconds) and only stores *deadlines*:

  • gravity_deadline   next gravity tick
  • lock_deadline      when a grounded piece locks
  • spawn_deadline     when hard drop becomes available again

The driver (main.py, or a test) calls update() whenever it likes; every
deadline that has passed fires in chronological order. tick(),
on_lock_deadline() and on_spawn_protection_expired() are the individual
entry points and may be called directly.

Pausing freezes the remaining time of lock delay and spawn protection;
resuming restores it and restarts gravity one full interval later.

-------------------------------------------------------------
INTENTS
-------------------------------------------------------------

move_left, move_right, soft_drop, rotate_clockwise, rotate_counter_clockwise,
hard_drop, hold, pause, resume, toggle_pause, start_game, restart_game,
exit_to_menu. Each returns True when it changed something, so the caller
knows whether to redraw.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from tetris_board import Board
from tetris_config import (CONFIG, GAME_OVER, LINES_PER_LEVEL, MENU, PAUSED,
                           PLAYING, SCORE_VALUES, level_speed)
from tetris_piece import PIECE_TYPES, Piece, PieceType
from tetris_rng import BagRandom
from tetris_scores import HighScoreStore

log = logging.getLogger(__name__)

LINE_SCORES = {1: "SINGLE", 2: "DOUBLE", 3: "TRIPLE", 4: "TETRIS"}


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class ActivePiece:
    t: PieceType
    rotation: int
    x: int
    y: int
    shape: Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the renderer needs for one frame."""
    state: str
    grid: Tuple[Tuple[Optional[PieceType], ...], ...]
    active: Optional[ActivePiece]
    ghost_y: Optional[int]
    next_type: Optional[PieceType]
    held: Optional[PieceType]
    can_hold: bool
    score: int
    level: int
    lines: int
    statistics: Dict[PieceType, int]
    high_score: int


class Game:
    def __init__(self, clock: Optional[Callable[[], float]] = None,
                 rng: Optional[BagRandom] = None,
                 store: Optional[HighScoreStore] = None,
                 config: Optional[dict] = None):
        cfg = CONFIG if config is None else config
        self.clock = clock or monotonic_ms
        self.board = Board()
        self.rng = rng or BagRandom(cfg.get("BAG_SEED"))
        self.store = store or HighScoreStore(cfg.get("HIGH_SCORE_PATH"))

        self.lock_delay_ms = cfg["LOCK_DELAY_MS"]
        self.lock_reset_max = cfg["LOCK_RESET_MAX"]
        self.spawn_protection_ms = cfg["SPAWN_PROTECTION_MS"]
        self.ghost_piece = cfg["GHOST_PIECE"]
        self.selected_level = max(1, int(cfg.get("STARTING_LEVEL", 1)))

        self.state = MENU
        self.current: Optional[Piece] = None
        self.next_type: Optional[PieceType] = None
        self.held: Optional[PieceType] = None
        self.can_hold = True
        self.score = 0
        self.level = self.selected_level
        self.lines = 0
        self.last_tetris = False
        self.statistics: Dict[PieceType, int] = {t: 0 for t in PIECE_TYPES}
        self.high_score = self.store.load()

        self.gravity_deadline: Optional[float] = None
        self.lock_active = False
        self.lock_resets = 0
        self.lock_deadline: Optional[float] = None
        self.spawn_protected = False
        self.spawn_deadline: Optional[float] = None
        # Remaining ms of lock delay / spawn protection while paused
        self._lock_remaining: Optional[float] = None
        self._spawn_remaining: Optional[float] = None
        # Time of the deadline being fired by update(); None outside update()
        self._event_time: Optional[float] = None

    # -------------------------------------------------------------
    # SESSION LIFECYCLE
    # -------------------------------------------------------------
    def start_game(self, starting_level: Optional[int] = None) -> bool:
        if starting_level is not None:
            starting_level = int(starting_level)
            if starting_level < 1:
                raise ValueError(f"starting level must be >= 1, got {starting_level}")
            self.selected_level = starting_level

        self.board.reset()
        self.score = 0
        self.level = self.selected_level
        self.lines = 0
        self.last_tetris = False
        self.statistics = {t: 0 for t in PIECE_TYPES}
        self.held = None
        self.can_hold = True
        self._cancel_timers()
        self.high_score = self.store.load()

        self.state = PLAYING
        log.info("game started at level %d", self.level)
        self._spawn()
        if self.state == PLAYING:
            self._schedule_gravity()
        return True

    def restart_game(self) -> bool:
        return self.start_game(self.selected_level)

    def exit_to_menu(self) -> bool:
        if self.state == PLAYING:
            return False
        self._cancel_timers()
        self.current = None
        self.next_type = None
        self.held = None
        self.can_hold = True
        self.state = MENU
        log.info("back to menu")
        return True

    def pause(self) -> bool:
        if self.state != PLAYING:
            return False
        now = self.clock()
        if self.lock_deadline is not None:
            self._lock_remaining = max(0.0, self.lock_deadline - now)
        if self.spawn_deadline is not None:
            self._spawn_remaining = max(0.0, self.spawn_deadline - now)
        self.lock_deadline = self.spawn_deadline = self.gravity_deadline = None
        self.state = PAUSED
        log.info("paused")
        return True

    def resume(self) -> bool:
        if self.state != PAUSED:
            return False
        now = self.clock()
        if self.lock_active and self._lock_remaining is not None:
            self.lock_deadline = now + self._lock_remaining
        if self.spawn_protected and self._spawn_remaining is not None:
            self.spawn_deadline = now + self._spawn_remaining
        self._lock_remaining = self._spawn_remaining = None
        self.state = PLAYING
        self._schedule_gravity()
        log.info("resumed")
        return True

    def toggle_pause(self) -> bool:
        if self.state == PLAYING:
            return self.pause()
        return self.resume()

    # -------------------------------------------------------------
    # TIME
    # -------------------------------------------------------------
    def update(self, now: Optional[float] = None) -> bool:
        """Fire every deadline that has passed, oldest first. Returns True if any fired."""
        if now is None:
            now = self.clock()
        fired = False
        try:
            while self.state == PLAYING:
                due: List[Tuple[float, int]] = []
                if self.spawn_deadline is not None and self.spawn_deadline <= now:
                    due.append((self.spawn_deadline, 0))
                if self.lock_deadline is not None and self.lock_deadline <= now:
                    due.append((self.lock_deadline, 1))
                if self.gravity_deadline is not None and self.gravity_deadline <= now:
                    due.append((self.gravity_deadline, 2))
                if not due:
                    break
                at, which = min(due)
                # New deadlines are measured from the event that created them
                self._event_time = at
                if which == 0:
                    self.on_spawn_protection_expired()
                elif which == 1:
                    self.on_lock_deadline()
                else:
                    interval = level_speed(self.level)
                    if at + interval <= now:
                        # Stalled driver: one late tick, no catch-up burst
                        self._event_time = now
                        self.gravity_deadline = now + interval
                    else:
                        self.gravity_deadline = at + interval
                    self.tick()
                fired = True
        finally:
            self._event_time = None
        return fired

    def _now(self) -> float:
        return self.clock() if self._event_time is None else self._event_time

    def tick(self) -> bool:
        """One gravity step. A grounded piece starts lock delay instead of locking."""
        if not self._active():
            return False
        if self._move_down():
            return True
        if not self.lock_active:
            self._start_lock_delay()
        return False

    def on_lock_deadline(self) -> bool:
        if not self.lock_active or not self._active():
            return False
        if self._can_move_down():
            # Slid over a gap during lock delay: let gravity take it
            self._cancel_lock_delay()
            return False
        self._lock_piece()
        return True

    def on_spawn_protection_expired(self):
        self.spawn_protected = False
        self.spawn_deadline = None

    @property
    def gravity_interval(self) -> int:
        return level_speed(self.level)

    def _schedule_gravity(self):
        self.gravity_deadline = self._now() + level_speed(self.level)

    def _start_lock_delay(self):
        self.lock_active = True
        self.lock_resets = 0
        self.lock_deadline = self._now() + self.lock_delay_ms

    def _reset_lock_delay(self):
        if self.lock_active and self.lock_resets < self.lock_reset_max:
            self.lock_resets += 1
            self.lock_deadline = self._now() + self.lock_delay_ms

    def _cancel_lock_delay(self):
        self.lock_active = False
        self.lock_resets = 0
        self.lock_deadline = None
        self._lock_remaining = None

    def _cancel_timers(self):
        self._cancel_lock_delay()
        self.spawn_protected = False
        self.spawn_deadline = None
        self._spawn_remaining = None
        self.gravity_deadline = None

    # -------------------------------------------------------------
    # INTENTS
    # -------------------------------------------------------------
    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def soft_drop(self) -> bool:
        if not self._move_down():
            return False
        self.score += SCORE_VALUES["SOFT_DROP"]
        self._record_score()
        return True

    def hard_drop(self) -> bool:
        if not self._active() or self.spawn_protected:
            return False
        self._cancel_lock_delay()
        gy = self.board.ghost_y(self.current)
        distance = gy - self.current.y
        self.current.y = gy
        self.score += distance * SCORE_VALUES["HARD_DROP"]
        self._lock_piece()
        return True

    def rotate_clockwise(self) -> bool:
        return self._rotate(True)

    def rotate_counter_clockwise(self) -> bool:
        return self._rotate(False)

    def hold(self) -> bool:
        if not self._active() or not self.can_hold:
            return False
        current_type = self.current.t
        if self.held is None:
            self.held = current_type
            self._spawn()
        else:
            swap, self.held = self.held, current_type
            self._spawn(swap)
        self.can_hold = False
        return True

    # -------------------------------------------------------------
    # RULES
    # -------------------------------------------------------------
    def _active(self) -> bool:
        return self.state == PLAYING and self.current is not None

    def _can_move_down(self) -> bool:
        p = self.current
        return self.board.is_valid_position(p.x, p.y + 1, p.shape)

    def _move_down(self) -> bool:
        if not self._active():
            return False
        self.current.move_down()
        if not self.board.fits(self.current):
            self.current.y -= 1
            return False
        return True

    def _shift(self, dx: int) -> bool:
        if not self._active():
            return False
        p = self.current
        if dx < 0:
            p.move_left()
        else:
            p.move_right()
        if not self.board.fits(p):
            p.x -= dx
            return False
        self._after_ground_move()
        return True

    def _rotate(self, cw: bool) -> bool:
        if not self._active():
            return False
        p = self.current
        prev = p.rotation
        if cw:
            p.rotate()
            kick_row = prev
        else:
            p.rotate_counter_clockwise()
            kick_row = (prev + 3) % 4
        if not self.board.fits(p) and not self.board.apply_wall_kicks(p, kick_row):
            p.rotation = prev
            return False
        self._after_ground_move()
        return True

    def _after_ground_move(self):
        """Lock delay bookkeeping after a successful shift or rotation."""
        if not self.lock_active:
            return
        if self._can_move_down():
            self._cancel_lock_delay()
        else:
            self._reset_lock_delay()

    def _spawn(self, t: Optional[PieceType] = None):
        if t is None:
            t = self.rng.next_piece()
            self.statistics[t] += 1
        self.current = Piece.spawn(t)
        self.next_type = self.rng.peek_next()
        self._cancel_lock_delay()
        self.spawn_protected = self.spawn_protection_ms > 0
        self.spawn_deadline = self._now() + self.spawn_protection_ms if self.spawn_protected else None
        self._spawn_remaining = None
        if not self.board.fits(self.current):
            log.info("spawned %s overlaps the stack", t)
            self._end_game()

    def _lock_piece(self):
        self.board.place_tetromino(self.current)
        log.debug("locked %s at (%d, %d) r%d", self.current.t, self.current.x,
                  self.current.y, self.current.rotation)
        self.can_hold = True
        self._cancel_lock_delay()
        cleared = self.board.clear_lines()
        self._update_score(cleared)
        self._record_score()
        # Game over is judged on the board after the clear
        if self.board.is_game_over():
            self._end_game()
            return
        self._spawn()

    def _update_score(self, cleared: int):
        if cleared == 0:
            return
        self.lines += cleared
        if cleared == 4:
            key = "BACK_TO_BACK_TETRIS" if self.last_tetris else "TETRIS"
            self.last_tetris = True
        else:
            key = LINE_SCORES[cleared]
            self.last_tetris = False
        self.score += SCORE_VALUES[key] * self.level

        new_level = max(self.selected_level, self.lines // LINES_PER_LEVEL + 1)
        if new_level > self.level:
            self.level = new_level
            self._schedule_gravity()
            log.info("level %d (%d ms)", self.level, level_speed(self.level))

    def _record_score(self):
        if self.store.submit(self.score):
            self.high_score = self.store.value

    def _end_game(self):
        self.state = GAME_OVER
        self._cancel_timers()
        self._record_score()
        log.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)

    # -------------------------------------------------------------
    # SNAPSHOT
    # -------------------------------------------------------------
    def snapshot(self) -> GameSnapshot:
        active = None
        ghost = None
        p = self.current
        if p is not None:
            active = ActivePiece(p.t, p.rotation, p.x, p.y, tuple(tuple(r) for r in p.shape))
            if self.ghost_piece and self.state != MENU:
                ghost = self.board.ghost_y(p)
        return GameSnapshot(
            state=self.state,
            grid=tuple(tuple(row) for row in self.board.grid),
            active=active,
            ghost_y=ghost,
            next_type=self.next_type,
            held=self.held,
            can_hold=self.can_hold,
            score=self.score,
            level=self.level,
            lines=self.lines,
            statistics=dict(self.statistics),
            high_score=self.high_score,
        )
