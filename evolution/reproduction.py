"""
Live reproduction: energy-weighted asexual cloning with mutation, the
population cap, and reseeding after extinction.
"""

from __future__ import annotations
import logging
import random
from typing import List

import config
from cell.cell import Cell, CellRegistry
from cell.energy import EnergyLedger
from neural.net import Net
from world.physics import BodyKind
from world.world import World

logger = logging.getLogger(__name__)


def spawn_cell(world: World, cells: CellRegistry, brain: Net, x: float, y: float, now: float, user_controlled: bool = False) -> Cell:
    body = world.physics.spawn(
        BodyKind.CELL,
        x,
        y,
        angle=random.uniform(0.0, 6.0),
        radius=config.CELL_RADIUS,
        damping=config.CELL_DAMPING,
    )
    return cells.create(body, brain, x, y, now, user_controlled=user_controlled)


def cell_replication(
    world: World,
    cells: CellRegistry,
    ledger: EnergyLedger,
    max_score: float,
    now: float,
    cap: int = config.NUM_CELLS,
    mutation_rate: float = config.BRAIN_MUTATION_RATE,
    mutation_variation: float = config.BRAIN_MUTATION_VARIATION,
) -> List[Cell]:
    """
    One reproduction pass.

    A cell reproduces with probability energy / max_score, where max_score is
    the highest energy in the population. Children get a mutated clone of the
    parent's brain and a uniformly random position. The population count is
    taken once and bumped per birth so a burst within one pass respects ``cap``.
    """
    children: List[Cell] = []
    if max_score <= 0.0:
        return children

    num_cells = len(cells)
    for parent in cells:
        if num_cells >= cap:
            continue

        entry = ledger.entry(parent.id)
        if entry is None:
            continue
        if random.random() >= entry.value / max_score:
            continue

        x, y = world.random_position()
        child_net = parent.brain.clone()
        child_net.mutate(mutation_rate, mutation_variation)

        num_cells += 1
        parent.num_cells_spawned += 1
        child = spawn_cell(world, cells, child_net, x, y, now)
        children.append(child)
        logger.debug("cell %d spawned child %d", parent.id, child.id)

    return children


def spawn_cells(world: World, cells: CellRegistry, now: float, count: int = config.NUM_CELLS) -> List[Cell]:
    """Seed a fresh generation when no evolving cell is left."""
    if cells.evolving():
        return []

    spawned = [spawn_cell(world, cells, Net.default(), *world.random_position(), now) for _ in range(count)]
    logger.info("population empty, seeded %d fresh cells", len(spawned))
    return spawned
