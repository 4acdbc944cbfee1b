"""
cell_sim module: render/renderer.py

Pygame rendering of the world (top-down, world scaled to fit the window).
"""

from __future__ import annotations
import math
from typing import List, Tuple

import numpy as np
import pygame

import config
from cell.cell import Cell
from evolution.stats import PopulationStats
from cell.focus import FocusTracker
from render import colors
from sim.simulation import Simulation
from world.physics import BodyKind


class View:
    """World -> screen mapping; world y points up, screen y points down."""

    def __init__(self, screen_w: int, screen_h: int, world_w: float, world_h: float):
        self.cx = screen_w / 2.0
        self.cy = screen_h / 2.0
        self.scale = min(screen_w / world_w, screen_h / world_h)

    def to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return (int(self.cx + x * self.scale), int(self.cy - y * self.scale))

    def length(self, r: float, minimum: int = 1) -> int:
        return max(minimum, int(r * self.scale))


def _draw_dir_indicator(screen: pygame.Surface, pos: Tuple[int, int], angle: float, r: int) -> None:
    dx = math.cos(angle) * r
    dy = -math.sin(angle) * r
    pygame.draw.line(screen, colors.DIR, pos, (pos[0] + dx, pos[1] + dy), 2)


def draw_food(screen: pygame.Surface, sim: Simulation, view: View) -> None:
    for b in sim.world.physics.of_kind(BodyKind.FOOD):
        pygame.draw.circle(screen, colors.FOOD, view.to_screen(b.x, b.y), view.length(b.radius))


def draw_projectiles(screen: pygame.Surface, sim: Simulation, view: View) -> None:
    for b in sim.world.physics.of_kind(BodyKind.PROJECTILE):
        pygame.draw.circle(screen, colors.BULLET, view.to_screen(b.x, b.y), view.length(b.radius))


def _cell_color(cell: Cell, stats: PopulationStats, focus: FocusTracker):
    if cell.user_controlled:
        return colors.CELL_USER
    if focus.is_focused(cell.id):
        return colors.CELL_FOCUSED
    if cell.id == stats.best_cell_id:
        return colors.CELL_BEST
    return colors.CELL


def draw_cells(screen: pygame.Surface, sim: Simulation, view: View, debug: bool = False) -> None:
    debug_font = pygame.font.Font(None, 16) if debug else None
    physics = sim.world.physics

    for cell in sim.cells:
        body = physics.bodies.get(cell.body)
        if body is None:
            continue
        pos = view.to_screen(body.x, body.y)
        r = view.length(body.radius, minimum=2)
        pygame.draw.circle(screen, _cell_color(cell, sim.stats, sim.focus), pos, r)
        _draw_dir_indicator(screen, pos, body.angle, r + 3)

        if debug and debug_font is not None:
            txt = debug_font.render(f"{cell.id} E:{sim.ledger.get(cell.id):.0f}", True, colors.TEXT)
            screen.blit(txt, (pos[0] + r + 2, pos[1] - r - 2))


def draw_net(screen: pygame.Surface, activations: List[np.ndarray], origin: Tuple[int, int], size: Tuple[int, int]) -> None:
    """Per-layer activations of the focused cell; brighter = more active."""
    if not activations:
        return
    ox, oy = origin
    w, h = size
    col_step = w / max(1, len(activations) - 1)
    points: List[List[Tuple[int, int]]] = []
    for li, layer in enumerate(activations):
        row_step = h / (len(layer) + 1)
        points.append([(int(ox + li * col_step), int(oy + (ni + 1) * row_step)) for ni in range(len(layer))])

    for a, b in zip(points, points[1:]):
        for p in a:
            for q in b:
                pygame.draw.line(screen, (150, 170, 160), p, q, 1)

    for layer, pts in zip(activations, points):
        for v, p in zip(layer, pts):
            level = int(255 * max(0.0, min(1.0, float(v))))
            pygame.draw.circle(screen, (level, level, 80), p, 6)


def draw_hud(screen: pygame.Surface, sim: Simulation) -> None:
    font = pygame.font.Font(None, 22)
    stats = sim.stats

    lines = [
        f"Population: {stats.population}",
        f"Births: {stats.births}  Deaths: {stats.deaths}  Food: {stats.food_eaten}",
        f"Max energy: {stats.max_score:.1f}",
        f"Max lifespan: {stats.max_age:.1f}s",
        f"Avg fitness: {stats.avg_fitness:.2f}",
        f"Sim time: {sim.now:.1f}s",
    ]
    if sim.focus.cell_id is not None:
        fs = sim.focus.stats
        lines += [
            f"Focused: #{fs.id}  E:{fs.energy:.1f}  age:{fs.age:.1f}s",
            f"  children:{fs.num_cells_spawned}  fitness:{fs.fitness_score:.2f}",
        ]

    y = 10
    for line in lines:
        txt = font.render(line, True, colors.TEXT)
        screen.blit(txt, (12, y))
        y += 20

    draw_net(screen, sim.focus.activations, (config.SCREEN_W - 170, 10), (150, 140))
