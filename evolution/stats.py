"""
cell_sim module: evolution/stats.py

Population-wide statistics. ``max_score`` doubles as the reference energy
for reproduction chances.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

import config
from cell.cell import CellRegistry
from cell.energy import EnergyLedger


def _history() -> Deque[float]:
    return deque(maxlen=config.MAX_GRAPH_POINTS)


@dataclass
class PopulationStats:
    population: int = 0
    max_score: float = 0.0
    max_age: float = 0.0
    avg_fitness: float = 0.0
    best_cell_id: Optional[int] = None
    oldest_cell_id: Optional[int] = None

    births: int = 0
    deaths: int = 0
    food_eaten: int = 0
    reseeds: int = 0

    score_history: Deque[float] = field(default_factory=_history)
    age_history: Deque[float] = field(default_factory=_history)
    population_history: Deque[float] = field(default_factory=_history)

    def update(self, cells: CellRegistry, ledger: EnergyLedger, now: float) -> None:
        max_score = 0.0
        max_age = 0.0
        best: Optional[int] = None
        oldest: Optional[int] = None
        fitness_sum = 0.0

        evolving = cells.evolving()
        for cell in evolving:
            entry = ledger.entry(cell.id)
            if entry is not None and entry.value > max_score:
                max_score = entry.value
                best = cell.id
            age = cell.age(now)
            if age > max_age:
                max_age = age
                oldest = cell.id
            fitness_sum += cell.fitness.get_fitness()

        self.population = len(evolving)
        self.max_score = max_score
        self.max_age = max_age
        self.best_cell_id = best
        self.oldest_cell_id = oldest
        self.avg_fitness = fitness_sum / len(evolving) if evolving else 0.0

    def record_history(self) -> None:
        self.score_history.append(self.max_score)
        self.age_history.append(self.max_age)
        self.population_history.append(float(self.population))
