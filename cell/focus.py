"""
cell_sim module: cell/focus.py

Diagnostics for one selected cell: latest stats and per-layer activations.
Kept apart from the cell records; nothing in the simulation depends on it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from cell.cell import CellRegistry
from cell.energy import EnergyLedger
from world.physics import PhysicsWorld


@dataclass
class FocusedCellStats:
    id: int = 0
    energy: float = 0.0
    age: float = 0.0
    pos: Tuple[float, float] = (0.0, 0.0)
    num_cells_spawned: int = 0
    fitness_score: float = 0.0


@dataclass
class FocusTracker:
    cell_id: Optional[int] = None
    stats: FocusedCellStats = field(default_factory=FocusedCellStats)
    activations: List[np.ndarray] = field(default_factory=list)

    def focus(self, cell_id: Optional[int]) -> None:
        if cell_id != self.cell_id:
            self.activations = []
        self.cell_id = cell_id

    def is_focused(self, cell_id: int) -> bool:
        return self.cell_id is not None and self.cell_id == cell_id

    def record_activations(self, cell_id: int, layers: List[np.ndarray]) -> None:
        if self.is_focused(cell_id):
            self.activations = [a.copy() for a in layers]

    def refresh(self, cells: CellRegistry, ledger: EnergyLedger, physics: PhysicsWorld, now: float) -> None:
        if self.cell_id is None:
            return
        cell = cells.get(self.cell_id)
        if cell is None or not physics.exists(cell.body):
            self.focus(None)
            return
        self.stats = FocusedCellStats(
            id=cell.id,
            energy=ledger.get(cell.id),
            age=cell.age(now),
            pos=physics.position(cell.body),
            num_cells_spawned=cell.num_cells_spawned,
            fitness_score=cell.fitness.get_fitness(),
        )
