"""
Rendering helpers for the Tetris front-end.

Draws a GameSnapshot; never reads or changes game state directly.
- Pre-render block cell Surfaces per type (normal + ghost outline) and blit them.
- Pre-render static background (grid + panel frames) once per Dims.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only when the grid changes.
- Cache HUD text surfaces; re-render only when values change.
"""
from __future__ import annotations
import pygame
from typing import Dict, Optional, Tuple
from tetris_config import COLS, ROWS, GAME_OVER, MENU, PAUSED
from tetris_layout import Dims
from tetris_piece import COLORS, PIECE_TYPES, SHAPES, PieceType

TEXT = (200,210,240)
DIM_TEXT = (165,175,215)
DISABLED = (90,90,90)


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: Optional[pygame.font.Font] = None):
        self.dims = dims
        self.font = font
        self.big_font = big_font or font
        self._make_static()
        self._make_cells()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_grid = None
        self._text_cache: Dict[Tuple[str, Tuple[int,int,int]], pygame.Surface] = {}
        self._preview_cache: Dict[Tuple[PieceType, bool], pygame.Surface] = {}

    # ---------- Static background (grid + panels) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((0,0,0))
        grid_col = (26,26,26)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        for rect in (pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h),
                     pygame.Rect(d.hold_x, d.panel_y, d.panel_w // 2, d.board_h)):
            pygame.draw.rect(self.bg, (21,25,53), rect)
            pygame.draw.rect(self.bg, (50,60,100), rect, 1)
        self.pv_cell = max(12, int(d.cell*0.6))

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[PieceType, pygame.Surface] = {}
        self.ghost_surf: Dict[PieceType, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, (128,128,128), (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g

    def text(self, s: str, color=TEXT) -> pygame.Surface:
        key = (s, color)
        if key not in self._text_cache:
            self._text_cache[key] = self.font.render(s, True, color)
        return self._text_cache[key]

    def preview(self, t: PieceType, enabled: bool = True) -> pygame.Surface:
        key = (t, enabled)
        if key not in self._preview_cache:
            pc = self.pv_cell
            s = pygame.Surface((pc*4, pc*4), pygame.SRCALPHA)
            shape = SHAPES[t]
            offx = (4 - len(shape[0])) // 2
            offy = max(0, (4 - len(shape)) // 2)
            for y, row in enumerate(shape):
                for x, v in enumerate(row):
                    if v:
                        block = pygame.Surface((pc-2, pc-2))
                        block.fill(COLORS[t] if enabled else DISABLED)
                        s.blit(block, ((x + offx)*pc + 1, (y + offy)*pc + 1))
            self._preview_cache[key] = s
        return self._preview_cache[key]

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, grid):
        """Rebuilds the "locked blocks" surface from grid contents."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y in range(ROWS):
            for x in range(COLS):
                t = grid[y][x]
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))
        self._board_grid = grid

    def draw_cell(self, screen: pygame.Surface, t: PieceType, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 1
        ry = self.dims.board_y + by*self.dims.cell + 1
        screen.blit(self.cell_surf[t], (rx, ry))

    def draw_ghost_cell(self, screen: pygame.Surface, t: PieceType, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 4
        ry = self.dims.board_y + by*self.dims.cell + 4
        screen.blit(self.ghost_surf[t], (rx, ry))

    # ---------- Frame ----------
    def draw(self, screen: pygame.Surface, snap):
        d = self.dims
        screen.blit(self.bg, (0,0))
        if snap.grid != self._board_grid:
            self.rebuild_board_surface(snap.grid)
        screen.blit(self.board_surface, (d.board_x, d.board_y))

        a = snap.active
        if a is not None and snap.state != MENU:
            cells = [(c, r) for r, row in enumerate(a.shape) for c, v in enumerate(row) if v]
            if snap.ghost_y is not None and snap.ghost_y != a.y:
                for c, r in cells:
                    if snap.ghost_y + r >= 0:
                        self.draw_ghost_cell(screen, a.t, a.x + c, snap.ghost_y + r)
            for c, r in cells:
                if a.y + r >= 0:
                    self.draw_cell(screen, a.t, a.x + c, a.y + r)

        self.draw_panel_hud(screen, snap)
        banner = {PAUSED: "PAUSED  (P to Resume)",
                  GAME_OVER: "GAME OVER  (R to Restart)"}.get(snap.state)
        if banner:
            msg = self.big_font.render(banner, True, (255,220,220))
            screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2)))

    # ---------- HUD / Panels ----------
    def draw_panel_hud(self, screen: pygame.Surface, snap):
        d = self.dims
        x = d.panel_x + 12
        screen.blit(self.text("Classic Tetris", (197,202,233)), (x, d.panel_y + 12))
        screen.blit(self.text(f"Score: {snap.score}"), (x, d.panel_y + 44))
        screen.blit(self.text(f"Top: {snap.high_score}"), (x, d.panel_y + 68))
        screen.blit(self.text(f"Level: {snap.level}"), (x, d.panel_y + 92))
        screen.blit(self.text(f"Lines: {snap.lines}"), (x, d.panel_y + 116))
        screen.blit(self.text("Next:"), (x, d.panel_y + 146))
        if snap.next_type is not None and snap.state != MENU:
            screen.blit(self.preview(snap.next_type), (x, d.panel_y + 170))

        y = d.panel_y + 180 + self.pv_cell*4
        for t in PIECE_TYPES:
            screen.blit(self.text(f"{t.value}: {snap.statistics.get(t, 0)}", DIM_TEXT), (x, y))
            y += 20

        hx = d.hold_x + 8
        screen.blit(self.text("Hold:"), (hx, d.panel_y + 12))
        if snap.held is not None and snap.state != MENU:
            screen.blit(self.preview(snap.held, snap.can_hold), (hx, d.panel_y + 36))
