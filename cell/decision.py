"""
cell_sim module: cell/decision.py

Per-cell sense -> decide -> act cycle.

Planning is a pure function of read-only state (forage snapshot, heartbeat,
the cell's own fields and transform) and returns a CellUpdate. Updates are
applied after the whole pass has been planned, so no cell observes another
cell's in-progress update.
"""

from __future__ import annotations
from concurrent.futures import Executor
from dataclasses import dataclass
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

import config
from cell.cell import Cell
from world.clock import elapsed_within
from world.forage import ForageIndex


@dataclass(frozen=True)
class CellAction:
    thrust: bool
    spin_left: bool
    spin_right: bool
    shoot: bool


@dataclass(frozen=True)
class ProjectileRequest:
    owner: int
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class CellUpdate:
    cell_id: int
    inputs: Tuple[float, float, float]
    layers: List[np.ndarray]
    action: CellAction
    fitness: float
    force: Tuple[float, float]
    rotation: float
    projectile: Optional[ProjectileRequest] = None


# ---- sensing ----

def angle_between(ax: float, ay: float, bx: float, by: float) -> float:
    """Angle of the vector a -> b in degrees, mapped to [0, 360)."""
    deg = math.degrees(math.atan2(by - ay, bx - ax))
    if deg < 0.0:
        deg += 360.0
    return deg % 360.0


def heading_degrees(angle: float) -> float:
    return math.degrees(angle) % 360.0


def sense(
    pos: Tuple[float, float],
    heading: float,
    forage: ForageIndex,
    vision_radius: float = config.VISION_RADIUS,
) -> Tuple[float, float, float]:
    """
    Network inputs: (normalized distance, normalized bearing, normalized heading).
    With no food known the target is the origin.
    """
    x, y = pos
    target_x, target_y = 0.0, 0.0
    hit = forage.nearest(x, y)
    if hit is not None:
        target_x, target_y = hit.x, hit.y

    dist = math.hypot(target_x - x, target_y - y) / vision_radius
    dist = min(1.0, dist)
    bearing = angle_between(x, y, target_x, target_y) / 360.0
    cell_angle = heading_degrees(heading) / 360.0
    return (dist, bearing, cell_angle)


# ---- deciding ----

def decide(output: Sequence[float], can_fire: bool = True) -> CellAction:
    spin_left = output[0] > output[1]
    spin_right = output[1] > output[0]
    thrust = output[2] >= config.THRUST_THRESHOLD
    shoot = output[3] >= config.SHOOT_THRESHOLD and can_fire
    return CellAction(thrust=thrust, spin_left=spin_left, spin_right=spin_right, shoot=shoot)


def calc_fitness(inputs: Sequence[float], output: Sequence[float]) -> float:
    """
    Heuristic penalty in [0, MAX_FITNESS]; lower is better.

    One point off for each of:
      - thrusting while the target is farther than THRUST_MIN_DIST
      - spinning toward the target (left when heading < bearing, right when >)
      - shooting while the target is closer than SHOOT_MAX_DIST
    The shoot rule looks at the raw output, regardless of fire cooldown.
    """
    dist, target_angle, cell_angle = inputs
    action = decide(output)

    score = 0.0
    if dist > config.THRUST_MIN_DIST and action.thrust:
        score += 1.0
    if cell_angle < target_angle and action.spin_left:
        score += 1.0
    elif cell_angle > target_angle and action.spin_right:
        score += 1.0
    if dist < config.SHOOT_MAX_DIST and action.shoot:
        score += 1.0

    return config.MAX_FITNESS - score


def is_due(cell: Cell, now: float, heartbeat: float, update_interval: float = config.UPDATE_INTERVAL) -> bool:
    """Global update floor plus the cell's phase offset against the shared heartbeat."""
    if elapsed_within(cell.last_updated, now, update_interval):
        return False
    if elapsed_within(heartbeat, now, cell.update_phase):
        return False
    return True


def plan_cell_update(
    cell: Cell,
    pos: Tuple[float, float],
    heading: float,
    forage: ForageIndex,
    now: float,
) -> CellUpdate:
    inputs = sense(pos, heading, forage)
    layers = cell.brain.predict(inputs)
    output = layers[-1]

    can_fire = not elapsed_within(cell.last_bullet_fired, now, config.BULLET_FIRE_RATE)
    action = decide(output, can_fire=can_fire)
    fitness = calc_fitness(inputs, output)

    dir_x = math.cos(heading)
    dir_y = math.sin(heading)
    force = (dir_x * config.CELL_SPEED, dir_y * config.CELL_SPEED) if action.thrust else (0.0, 0.0)

    rotation = 0.0
    if action.spin_left:
        rotation = config.SPIN_STRENGTH
    elif action.spin_right:
        rotation = -config.SPIN_STRENGTH

    projectile = None
    if action.shoot:
        # fired along the heading at decision time, before this update's spin
        projectile = ProjectileRequest(
            owner=cell.id,
            x=pos[0] + dir_x * config.BULLET_OFFSET,
            y=pos[1] + dir_y * config.BULLET_OFFSET,
            vx=dir_x * config.BULLET_SPEED,
            vy=dir_y * config.BULLET_SPEED,
        )

    return CellUpdate(
        cell_id=cell.id,
        inputs=inputs,
        layers=layers,
        action=action,
        fitness=fitness,
        force=force,
        rotation=rotation,
        projectile=projectile,
    )


def plan_updates(
    cells: Sequence[Cell],
    transforms: Sequence[Tuple[Tuple[float, float], float]],
    forage: ForageIndex,
    now: float,
    executor: Optional[Executor] = None,
) -> List[CellUpdate]:
    """
    Plan every due cell. ``transforms`` holds (position, heading) per cell.
    With an executor the plans are computed concurrently; results keep input order.
    """
    if executor is None:
        return [plan_cell_update(c, p, a, forage, now) for c, (p, a) in zip(cells, transforms)]
    return list(
        executor.map(
            lambda job: plan_cell_update(job[0], job[1][0], job[1][1], forage, now),
            zip(cells, transforms),
        )
    )
