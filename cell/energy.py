"""
cell_sim module: cell/energy.py

Energy ledger: cell id -> (energy, last touched).

- entries are created lazily at BASE_ENERGY on first decay or food credit
- energy is clamped above by MAX_ENERGY; it may go negative until the cell is culled
- entries untouched for ENERGY_TTL_SECS are purged on each decay pass
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import threading
from typing import Dict, Iterable, Optional

import config
from cell.cell import Cell
from world.clock import elapsed_past

logger = logging.getLogger(__name__)


@dataclass
class EnergyEntry:
    value: float
    touched: float


class EnergyLedger:
    def __init__(
        self,
        base_energy: float = config.BASE_ENERGY,
        max_energy: float = config.MAX_ENERGY,
        ttl: float = config.ENERGY_TTL_SECS,
    ):
        self.base_energy = base_energy
        self.max_energy = max_energy
        self.ttl = ttl
        self._entries: Dict[int, EnergyEntry] = {}
        # decay and collision credit both write here
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cell_id: int) -> bool:
        return cell_id in self._entries

    def entry(self, cell_id: int) -> Optional[EnergyEntry]:
        return self._entries.get(cell_id)

    def get(self, cell_id: int) -> float:
        """Energy for reads; a missing entry reads as zero."""
        e = self._entries.get(cell_id)
        return e.value if e is not None else 0.0

    def set(self, cell_id: int, value: float, now: float) -> None:
        with self._lock:
            self._entries[cell_id] = EnergyEntry(min(self.max_energy, value), now)

    def remove(self, cell_id: int) -> None:
        with self._lock:
            self._entries.pop(cell_id, None)

    def credit(self, cell_id: int, amount: float, now: float) -> float:
        with self._lock:
            e = self._entries.get(cell_id)
            if e is None:
                e = self._entries[cell_id] = EnergyEntry(self.base_energy, now)
            e.value = min(self.max_energy, e.value + amount)
            e.touched = now
            return e.value

    def penalize(self, cell_id: int, amount: float, now: float) -> bool:
        """
        Subtract ``amount`` from an existing entry. Cells without an entry are
        left alone. Returns True if an entry was charged.
        """
        with self._lock:
            e = self._entries.get(cell_id)
            if e is None:
                return False
            e.value -= amount
            e.touched = now
            return True

    def decay(self, cells: Iterable[Cell], decay_rate: float, now: float) -> None:
        """
        One decay pass: living cells lose decay_rate * average fitness (or get
        a fresh entry), then stale entries are purged.
        """
        with self._lock:
            for cell in cells:
                if cell.user_controlled:
                    continue
                e = self._entries.get(cell.id)
                if e is None:
                    self._entries[cell.id] = EnergyEntry(self.base_energy, now)
                    continue
                e.value -= decay_rate * cell.fitness.get_fitness()
                e.touched = now
            self.purge(now)

    def purge(self, now: float) -> int:
        with self._lock:
            stale = [cid for cid, e in self._entries.items() if elapsed_past(e.touched, now, self.ttl)]
            for cid in stale:
                del self._entries[cid]
        if stale:
            logger.debug("purged %d stale energy entries", len(stale))
        return len(stale)


def apply_inactivity_penalties(
    ledger: EnergyLedger,
    cells: Iterable[Cell],
    now: float,
    idle_secs: float = config.NO_BULLET_SECS,
    penalty: float = config.NO_BULLET_PENALTY,
) -> int:
    """
    Charge cells that have not fired for ``idle_secs``. The fire timestamp is
    left as is, so the charge repeats every pass until the cell shoots.
    """
    charged = 0
    for cell in cells:
        if cell.user_controlled:
            continue
        if elapsed_past(cell.last_bullet_fired, now, idle_secs) and ledger.penalize(cell.id, penalty, now):
            charged += 1
    return charged
