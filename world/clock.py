"""
cell_sim module: world/clock.py

Simulated monotonic clock plus fixed-rate cadence gates.
All timestamps in the simulation are float seconds read from a SimClock.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class SimClock:
    now: float = 0.0

    def advance(self, dt: float) -> float:
        if dt < 0.0:
            raise ValueError(f"clock cannot run backwards (dt={dt})")
        self.now += dt
        return self.now

    def elapsed(self, ts: float) -> float:
        return self.now - ts


def elapsed_past(ts: float, now: float, interval: float) -> bool:
    return now - ts >= interval


def elapsed_within(ts: float, now: float, interval: float) -> bool:
    return now - ts < interval


@dataclass
class Cadence:
    """
    Accumulates frame time and fires once per elapsed period.
    At most one firing per tick; the remainder carries over.
    """
    period: float
    accum: float = 0.0

    def ready(self, dt: float) -> bool:
        self.accum += dt
        if self.accum < self.period:
            return False
        self.accum -= self.period
        # a long stall must not turn into a burst of catch-up firings
        if self.accum >= self.period:
            self.accum %= self.period
        return True
