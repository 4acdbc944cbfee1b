"""
cell_sim module: world/food.py

Food system:
- Seeds the world with a full stock of food bodies
- Refills in batches once enough has been eaten
- Side regions get sparser food: a batch lands within W/2 or W/2.5 of the centre
"""

from __future__ import annotations
import random
from typing import List, Tuple

import config
from world.physics import BodyKind, PhysicsWorld


def spawn_batch(physics: PhysicsWorld, n: int, w: float, h: float, range_factor: float) -> List[int]:
    handles: List[int] = []
    for _ in range(n):
        x = random.uniform(-w / range_factor, w / range_factor)
        y = random.uniform(-h / range_factor, h / range_factor)
        handles.append(
            physics.spawn(
                BodyKind.FOOD,
                x,
                y,
                radius=config.FOOD_RADIUS,
                damping=config.FOOD_DAMPING,
            )
        )
    return handles


class FoodField:
    def __init__(self, physics: PhysicsWorld, w: float, h: float, refill_batch: int = config.FOOD_REFILL_BATCH):
        self.physics = physics
        self.w = w
        self.h = h
        self.refill_batch = refill_batch

    def count(self) -> int:
        return self.physics.count(BodyKind.FOOD)

    def positions(self) -> List[Tuple[float, float]]:
        return [b.pos for b in self.physics.of_kind(BodyKind.FOOD)]

    def refill(self, target: int) -> int:
        """
        Top the field back up toward ``target``.
        Returns the number of food bodies spawned.
        """
        have = self.count()
        if have == 0:
            n = target
        elif have > target - self.refill_batch:
            return 0
        else:
            n = self.refill_batch
        if n <= 0:
            return 0

        range_factor = 2.0 if random.randint(0, 99) <= 45 else 2.5
        spawn_batch(self.physics, n, self.w, self.h, range_factor)
        return n
