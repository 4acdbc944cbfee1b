"""
cell_sim module: cell/cell.py

Cell record + registry.

A cell owns its controller and bookkeeping timestamps. Its transform lives
in the physics world and is looked up through ``body``.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
import itertools
import random
import threading
from typing import Deque, Dict, Iterator, List, Optional, Tuple

import config
from neural.net import Net


class FitnessScores:
    """
    Rolling window of per-decision fitness samples; oldest evicted first.
    Lower is better. An empty window reads as 0.0.
    """

    def __init__(self, size: int = config.FITNESS_WINDOW):
        self._scores: Deque[float] = deque(maxlen=size)

    def __len__(self) -> int:
        return len(self._scores)

    def push(self, value: float) -> None:
        self._scores.append(float(value))

    def values(self) -> List[float]:
        return list(self._scores)

    def get_fitness(self) -> float:
        if not self._scores:
            return 0.0
        return sum(self._scores) / len(self._scores)


@dataclass
class Cell:
    id: int
    body: int
    brain: Net
    birth_place: Tuple[float, float]
    birth_ts: float
    last_updated: float
    last_bullet_fired: float
    update_phase: float  # fraction of the heartbeat this cell waits before deciding
    fitness: FitnessScores = field(default_factory=FitnessScores)
    num_cells_spawned: int = 0
    user_controlled: bool = False

    def age(self, now: float) -> float:
        return now - self.birth_ts


class CellRegistry:
    """
    Index-stable store of living cells keyed by id.
    Ids are allocated from a single counter and never reused.
    """

    def __init__(self) -> None:
        self._cells: Dict[int, Cell] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._cells.values()))

    def __contains__(self, cell_id: int) -> bool:
        return cell_id in self._cells

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def get(self, cell_id: int) -> Optional[Cell]:
        return self._cells.get(cell_id)

    def add(self, cell: Cell) -> Cell:
        assert cell.id not in self._cells, f"duplicate cell id {cell.id}"
        self._cells[cell.id] = cell
        return cell

    def remove(self, cell_id: int) -> Optional[Cell]:
        return self._cells.pop(cell_id, None)

    def evolving(self) -> List[Cell]:
        return [c for c in self._cells.values() if not c.user_controlled]

    def create(
        self,
        body: int,
        brain: Net,
        x: float,
        y: float,
        now: float,
        user_controlled: bool = False,
    ) -> Cell:
        return self.add(
            Cell(
                id=self.next_id(),
                body=body,
                brain=brain,
                birth_place=(x, y),
                birth_ts=now,
                last_updated=now,
                last_bullet_fired=now,
                update_phase=random.random(),
                user_controlled=user_controlled,
            )
        )
