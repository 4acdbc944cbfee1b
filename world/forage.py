"""
cell_sim module: world/forage.py

Forage index: an immutable nearest-neighbour snapshot over food positions.
Rebuilt wholesale on its own cadence, never updated incrementally.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree


@dataclass(frozen=True)
class ForageHit:
    x: float
    y: float
    dist_sq: float


class ForageIndex:
    def __init__(self, points: Iterable[Tuple[float, float]] = ()):
        pts = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
        self._points = pts
        self._tree: Optional[cKDTree] = cKDTree(pts) if len(pts) else None

    def __len__(self) -> int:
        return len(self._points)

    @staticmethod
    def empty() -> "ForageIndex":
        return ForageIndex()

    def nearest(self, x: float, y: float) -> Optional[ForageHit]:
        """
        Returns the nearest food point and its squared distance, or None if the
        index holds no points.
        """
        if self._tree is None:
            return None
        _, idx = self._tree.query((x, y))
        px, py = (float(v) for v in self._points[idx])
        dx = px - x
        dy = py - y
        return ForageHit(x=px, y=py, dist_sq=dx * dx + dy * dy)
