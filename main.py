import logging
import sys

import pygame

from tetris import Game
from tetris_config import CONFIG, MENU
from tetris_input import REPEATABLE, KeyRepeat, dispatch
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import RenderAssets
from tetris_rng import BagRandom
from tetris_scores import HighScoreStore

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP, pygame.WINDOWFOCUSLOST])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Classic Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    game = Game(clock=pygame.time.get_ticks,
                rng=BagRandom(CONFIG["BAG_SEED"]),
                store=HighScoreStore(CONFIG["HIGH_SCORE_PATH"]))
    overlay = Overlay()
    repeat = KeyRepeat()
    log.info("initialized, high score %d", game.high_score)

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.WINDOWFOCUSLOST:
                game.pause()
            if e.type == pygame.KEYDOWN:
                if game.state == MENU:
                    if overlay.handle(e) == "start":
                        game.ghost_piece = CONFIG["GHOST_PIECE"]
                        game.start_game(CONFIG["STARTING_LEVEL"])
                        repeat.clear()
                    continue
                dispatch(game, e.key)
                if e.key in REPEATABLE:
                    repeat.press(e.key)
            if e.type == pygame.KEYUP:
                repeat.release(e.key)

        for key in repeat.update(dt):
            dispatch(game, key)

        game.update()
        overlay.active = game.state == MENU

        render.draw(screen, game.snapshot())
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
