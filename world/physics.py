"""
cell_sim module: world/physics.py

Top-down 2D body store standing in for a rigid-body engine:
- bodies carry position, heading, velocity and a persistent external force
- damping is applied per second, gravity is zero
- projectile/food overlaps are reported once, as collision-start pairs
- spawning and despawning go through handles
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import itertools
import math
from typing import Dict, Iterator, List, Set, Tuple

import numpy as np


class BodyKind(Enum):
    CELL = 0
    FOOD = 1
    PROJECTILE = 2


@dataclass
class Body:
    handle: int
    kind: BodyKind
    x: float
    y: float
    angle: float = 0.0  # heading in radians, direction of travel (cos, sin)
    radius: float = 4.0
    damping: float = 0.0

    # dynamics
    vx: float = 0.0
    vy: float = 0.0
    fx: float = 0.0
    fy: float = 0.0

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def move(self, dt: float) -> None:
        self.vx += self.fx * dt
        self.vy += self.fy * dt

        drag = max(0.0, 1.0 - self.damping * dt)
        self.vx *= drag
        self.vy *= drag

        self.x += self.vx * dt
        self.y += self.vy * dt


CollisionPair = Tuple[int, int]


class PhysicsWorld:
    def __init__(self) -> None:
        self.bodies: Dict[int, Body] = {}
        self._handles = itertools.count(1)
        self._touching: Set[CollisionPair] = set()

    # ---- spawn / despawn ----

    def spawn(
        self,
        kind: BodyKind,
        x: float,
        y: float,
        angle: float = 0.0,
        radius: float = 4.0,
        damping: float = 0.0,
        vx: float = 0.0,
        vy: float = 0.0,
    ) -> int:
        handle = next(self._handles)
        self.bodies[handle] = Body(
            handle=handle,
            kind=kind,
            x=x,
            y=y,
            angle=angle,
            radius=radius,
            damping=damping,
            vx=vx,
            vy=vy,
        )
        return handle

    def despawn(self, handle: int) -> None:
        # despawning twice in one frame is tolerated (both pair members may be
        # removed by different events)
        self.bodies.pop(handle, None)

    def exists(self, handle: int) -> bool:
        return handle in self.bodies

    def body(self, handle: int) -> Body:
        b = self.bodies.get(handle)
        if b is None:
            raise KeyError(f"Body {handle} not found")
        return b

    def of_kind(self, kind: BodyKind) -> Iterator[Body]:
        return (b for b in self.bodies.values() if b.kind == kind)

    def count(self, kind: BodyKind) -> int:
        return sum(1 for _ in self.of_kind(kind))

    # ---- transform read / force write ----

    def position(self, handle: int) -> Tuple[float, float]:
        return self.body(handle).pos

    def heading(self, handle: int) -> float:
        return self.body(handle).angle

    def set_force(self, handle: int, fx: float, fy: float) -> None:
        b = self.body(handle)
        b.fx = fx
        b.fy = fy

    def rotate(self, handle: int, delta: float) -> None:
        b = self.body(handle)
        b.angle = math.remainder(b.angle + delta, 2 * math.pi)

    # ---- integration ----

    def step(self, dt: float) -> List[CollisionPair]:
        for b in self.bodies.values():
            b.move(dt)
        return self._collisions_started()

    def _collisions_started(self) -> List[CollisionPair]:
        """
        Projectile vs food overlaps that were not overlapping last step.
        Pair order is not meaningful.
        """
        food = [b for b in self.bodies.values() if b.kind == BodyKind.FOOD]
        shots = [b for b in self.bodies.values() if b.kind == BodyKind.PROJECTILE]
        if not food or not shots:
            self._touching = set()
            return []

        fxy = np.array([(f.x, f.y) for f in food])
        fr = np.array([f.radius for f in food])

        touching: Set[CollisionPair] = set()
        started: List[CollisionPair] = []
        for s in shots:
            d2 = (fxy[:, 0] - s.x) ** 2 + (fxy[:, 1] - s.y) ** 2
            hit = np.nonzero(d2 <= (fr + s.radius) ** 2)[0]
            for i in hit:
                key = (s.handle, food[i].handle)
                touching.add(key)
                if key in self._touching:
                    continue
                # alternate order so consumers cannot rely on it
                started.append(key if (s.handle + food[i].handle) % 2 else (key[1], key[0]))

        self._touching = touching
        return started
