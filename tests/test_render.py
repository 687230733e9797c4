import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from tetris_layout import compute_dims
from tetris_render import RenderAssets


@pytest.fixture(scope="module")
def assets():
    pygame.init()
    dims = compute_dims()
    yield dims, RenderAssets(dims, pygame.font.SysFont(None, 22))
    pygame.quit()


def test_draws_every_state(assets, game):
    dims, render = assets
    screen = pygame.Surface((dims.total_w, dims.total_h))
    render.draw(screen, game.snapshot())
    game.hold()
    game.hard_drop()
    render.draw(screen, game.snapshot())
    assert render._board_grid == game.snapshot().grid
    game.pause()
    render.draw(screen, game.snapshot())
    game.exit_to_menu()
    render.draw(screen, game.snapshot())


def test_locked_cells_are_painted(assets, game):
    dims, render = assets
    screen = pygame.Surface((dims.total_w, dims.total_h))
    game.hard_drop()
    render.draw(screen, game.snapshot())
    # T lands with its flat side on the floor, columns 4-6
    x = dims.board_x + 4 * dims.cell + dims.cell // 2
    y = dims.board_y + 19 * dims.cell + dims.cell // 2
    assert screen.get_at((x, y))[:3] == (128, 0, 128)
