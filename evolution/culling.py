"""
cell_sim module: evolution/culling.py

Removal of cells that ran out of energy or whose movement looks degenerate.

Rules are checked in order; the first match wins:

  rule             age window (s)   condition on displacement from birthplace
  LOW_ENERGY       any              ledger energy <= 0 (cells without an entry are skipped)
  UNMOVING         [10, 20)         dx^2 + dy^2 < 50
  REVOLVING        [15, 18)         dx^2 + dy^2 < 25000
  ONE_DIMENSIONAL  [20, 30)         |dx| >= 3|dy| or |dy| >= 3|dx|
"""

from __future__ import annotations
from enum import Enum
import logging
from typing import List, Optional, Tuple

import config
from cell.cell import Cell, CellRegistry
from cell.energy import EnergyLedger
from world.physics import PhysicsWorld

logger = logging.getLogger(__name__)


class CullReason(Enum):
    LOW_ENERGY = "low energy"
    UNMOVING = "unmoving"
    REVOLVING = "revolving"
    ONE_DIMENSIONAL = "one-dimensional travel"


def _in_window(age: float, window: Tuple[float, float]) -> bool:
    lo, hi = window
    return lo <= age < hi


def cull_reason(
    energy: Optional[float],
    age: float,
    pos: Tuple[float, float],
    birth_place: Tuple[float, float],
) -> Optional[CullReason]:
    if energy is not None and energy <= 0.0:
        return CullReason.LOW_ENERGY

    dx = pos[0] - birth_place[0]
    dy = pos[1] - birth_place[1]
    dist_sq = dx * dx + dy * dy

    if _in_window(age, config.UNMOVING_AGE) and dist_sq < config.UNMOVING_DIST_SQ:
        return CullReason.UNMOVING

    if _in_window(age, config.REVOLVING_AGE) and dist_sq < config.REVOLVING_DIST_SQ:
        return CullReason.REVOLVING

    if _in_window(age, config.ONE_DIM_AGE):
        x_disp = abs(dx)
        y_disp = abs(dy)
        if x_disp >= config.ONE_DIM_RATIO * y_disp or y_disp >= config.ONE_DIM_RATIO * x_disp:
            return CullReason.ONE_DIMENSIONAL

    return None


def remove_cell(cell: Cell, cells: CellRegistry, ledger: EnergyLedger, physics: PhysicsWorld) -> None:
    cells.remove(cell.id)
    ledger.remove(cell.id)
    physics.despawn(cell.body)


def kill_bad_cells(
    cells: CellRegistry,
    ledger: EnergyLedger,
    physics: PhysicsWorld,
    now: float,
) -> List[Tuple[int, CullReason]]:
    """
    One culling pass over every evolving cell.
    Returns (cell id, reason) for each removed cell.
    """
    removed: List[Tuple[int, CullReason]] = []
    for cell in cells.evolving():
        entry = ledger.entry(cell.id)
        reason = cull_reason(
            entry.value if entry is not None else None,
            cell.age(now),
            physics.position(cell.body),
            cell.birth_place,
        )
        if reason is None:
            continue
        remove_cell(cell, cells, ledger, physics)
        removed.append((cell.id, reason))
        logger.debug("culled cell %d (%s) at age %.1fs", cell.id, reason.value, cell.age(now))
    return removed
