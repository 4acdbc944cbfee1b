"""
Live simulation: cells forage by shooting food, earn energy, and evolve in real time.
"""

from __future__ import annotations
import argparse
import logging

import pygame

import config
from render import colors
from render.renderer import View, draw_cells, draw_food, draw_hud, draw_projectiles
from sim.simulation import Simulation

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evolving foraging cells")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--seconds", type=float, default=60.0, help="simulated seconds to run when headless")
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def run_headless(seconds: float) -> Simulation:
    sim = Simulation()
    sim.setup()
    sim.run(seconds)
    logger.info(
        "finished after %.1fs: population=%d births=%d deaths=%d reseeds=%d",
        sim.now,
        sim.stats.population,
        sim.stats.births,
        sim.stats.deaths,
        sim.stats.reseeds,
    )
    return sim


def run_window() -> None:
    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_W, config.SCREEN_H))
    pygame.display.set_caption("cell_sim (Live Evolution)")
    clock = pygame.time.Clock()

    sim = Simulation()
    sim.setup()
    view = View(config.SCREEN_W, config.SCREEN_H, config.W, config.H)

    debug = False
    running = True

    while running:
        clock.tick(config.FPS)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    running = False
                elif e.key == pygame.K_TAB:
                    debug = not debug
                elif e.key == pygame.K_f:
                    sim.focus.focus(None if sim.focus.cell_id is not None else sim.stats.best_cell_id)

        sim.tick(config.SIM_DT)

        # Render
        screen.fill(colors.BG)
        draw_food(screen, sim, view)
        draw_projectiles(screen, sim, view)
        draw_cells(screen, sim, view, debug=debug)
        draw_hud(screen, sim)

        pygame.display.flip()

    pygame.quit()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.headless:
        run_headless(args.seconds)
    else:
        run_window()


if __name__ == "__main__":
    main()
