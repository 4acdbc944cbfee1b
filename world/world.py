"""
cell_sim module: world/world.py

World state container (bounds, bodies, food, forage index).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random
from typing import Tuple

from world.food import FoodField
from world.forage import ForageIndex
from world.physics import PhysicsWorld


@dataclass
class World:
    w: float
    h: float
    physics: PhysicsWorld
    food: FoodField
    forage: ForageIndex = field(default_factory=ForageIndex.empty)

    @staticmethod
    def create(w: float, h: float) -> "World":
        physics = PhysicsWorld()
        return World(w=w, h=h, physics=physics, food=FoodField(physics, w, h))

    def random_position(self) -> Tuple[float, float]:
        return (
            random.uniform(-self.w / 2.0, self.w / 2.0),
            random.uniform(-self.h / 2.0, self.h / 2.0),
        )

    def rebuild_forage_index(self) -> None:
        self.forage = ForageIndex(self.food.positions())
