"""
cell_sim module: cell/projectile.py

Projectile tags: which cell fired which projectile body.

Used to route food credit back to the shooter on a projectile/food collision
and to charge the shooter when a projectile expires without hitting anything.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Dict, Iterable, Optional, Tuple

import config
from cell.decision import ProjectileRequest
from cell.energy import EnergyLedger
from world.clock import elapsed_within
from world.physics import BodyKind, PhysicsWorld

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Projectile:
    owner: int
    fired_at: float


class ProjectileBook:
    def __init__(self) -> None:
        self.tags: Dict[int, Projectile] = {}

    def __len__(self) -> int:
        return len(self.tags)

    def owner(self, handle: int) -> Optional[int]:
        p = self.tags.get(handle)
        return p.owner if p is not None else None

    def fire(self, physics: PhysicsWorld, req: ProjectileRequest, now: float) -> int:
        handle = physics.spawn(
            BodyKind.PROJECTILE,
            req.x,
            req.y,
            radius=config.BULLET_RADIUS,
            vx=req.vx,
            vy=req.vy,
        )
        self.tags[handle] = Projectile(owner=req.owner, fired_at=now)
        return handle

    def expire(
        self,
        physics: PhysicsWorld,
        ledger: EnergyLedger,
        now: float,
        miss_penalty: float,
        lifespan: float = config.BULLET_LIFESPAN,
    ) -> int:
        """Despawn projectiles past their lifespan and charge each owner the miss penalty."""
        expired = [h for h, p in self.tags.items() if not elapsed_within(p.fired_at, now, lifespan)]
        for handle in expired:
            p = self.tags.pop(handle)
            physics.despawn(handle)
            ledger.penalize(p.owner, miss_penalty, now)
        return len(expired)

    def _split_pair(self, physics: PhysicsWorld, a: int, b: int) -> Optional[Tuple[int, int]]:
        """(projectile, food) for a pair in either order, else None."""
        for shot, other in ((a, b), (b, a)):
            if shot not in self.tags:
                continue
            body = physics.bodies.get(other)
            if body is not None and body.kind == BodyKind.FOOD:
                return shot, other
        return None

    def handle_collisions(
        self,
        physics: PhysicsWorld,
        ledger: EnergyLedger,
        pairs: Iterable[Tuple[int, int]],
        energy_per_food: float,
        now: float,
    ) -> int:
        """
        Route food credit for projectile/food collision starts.
        Pairs with no tagged projectile, or whose partner is not food, are ignored.
        Returns the number of food items eaten.
        """
        eaten = 0
        for a, b in pairs:
            split = self._split_pair(physics, a, b)
            if split is None:
                continue
            shot, food = split
            p = self.tags.pop(shot)
            physics.despawn(food)
            physics.despawn(shot)
            energy = ledger.credit(p.owner, energy_per_food, now)
            eaten += 1
            logger.debug("cell %d ate food (energy %.1f)", p.owner, energy)
        return eaten
