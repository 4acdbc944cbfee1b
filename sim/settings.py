"""
cell_sim module: sim/settings.py

Values that may be changed while the simulation runs. Defaults come from config.
"""

from __future__ import annotations
from dataclasses import dataclass

import config


@dataclass
class DynamicSettings:
    bullet_miss_penalty: float = config.BULLET_MISS_PENALTY
    energy_per_food: float = config.ENERGY_PER_FOOD
    energy_decay_rate: float = config.ENERGY_DECAY_RATE
    num_food: int = config.NUM_FOOD
    num_cells: int = config.NUM_CELLS
