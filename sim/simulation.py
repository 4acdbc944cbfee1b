"""
cell_sim module: sim/simulation.py

Fixed-step simulation loop. Within one tick the passes run in this order:

  physics step -> collision credit -> projectile expiry -> food refill
  -> forage index refresh -> decision cycle -> energy decay
  -> culling + inactivity penalty -> stats -> reproduction -> reseed

Every pass except the decision cycle and physics runs on its own cadence.
"""

from __future__ import annotations
from concurrent.futures import Executor
import logging
from typing import List, Optional

import config
from cell.cell import CellRegistry
from cell.decision import CellUpdate, is_due, plan_updates
from cell.energy import EnergyLedger, apply_inactivity_penalties
from cell.focus import FocusTracker
from cell.projectile import ProjectileBook
from evolution.culling import kill_bad_cells
from evolution.reproduction import cell_replication, spawn_cell, spawn_cells
from evolution.stats import PopulationStats
from neural.net import Net
from sim.settings import DynamicSettings
from world.clock import Cadence, SimClock
from world.world import World

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(
        self,
        world: Optional[World] = None,
        settings: Optional[DynamicSettings] = None,
        executor: Optional[Executor] = None,
    ):
        self.world = world if world is not None else World.create(config.W, config.H)
        self.settings = settings if settings is not None else DynamicSettings()
        self.executor = executor

        self.clock = SimClock()
        self.cells = CellRegistry()
        self.ledger = EnergyLedger()
        self.projectiles = ProjectileBook()
        self.focus = FocusTracker()
        self.stats = PopulationStats()
        self.heartbeat = 0.0

        self.heartbeat_timer = Cadence(config.HEARTBEAT_SECS)
        self.forage_timer = Cadence(config.FOOD_TREE_REFRESH_RATE_SECS)
        self.food_timer = Cadence(config.FOOD_REFRESH_INTERVAL_SECS)
        self.energy_timer = Cadence(config.ENERGY_UPDATE_INTERVAL_SECS)
        self.cull_timer = Cadence(config.CULL_INTERVAL_SECS)
        self.replication_timer = Cadence(config.REPLICATION_INTERVAL_SECS)
        self.repopulate_timer = Cadence(config.REPOPULATE_INTERVAL_SECS)
        self.stats_timer = Cadence(config.STATS_INTERVAL_SECS)

    @property
    def now(self) -> float:
        return self.clock.now

    def setup(self, user_cell: bool = config.IS_USER_ENABLED) -> None:
        self.world.food.refill(self.settings.num_food)
        self.world.rebuild_forage_index()
        spawned = spawn_cells(self.world, self.cells, self.now, count=self.settings.num_cells)
        self.stats.reseeds += 1 if spawned else 0
        if user_cell:
            spawn_cell(self.world, self.cells, Net.default(), 0.0, 0.0, self.now, user_controlled=True)

    # ---- passes ----

    def update_cells(self) -> List[CellUpdate]:
        """Plan every due cell against the current snapshot, then apply all plans."""
        now = self.now
        physics = self.world.physics

        due = [c for c in self.cells.evolving() if is_due(c, now, self.heartbeat)]
        transforms = [(physics.position(c.body), physics.heading(c.body)) for c in due]
        updates = plan_updates(due, transforms, self.world.forage, now, executor=self.executor)

        for cell, update in zip(due, updates):
            cell.last_updated = now
            cell.fitness.push(update.fitness)
            self.focus.record_activations(cell.id, update.layers)

            physics.set_force(cell.body, *update.force)
            if update.rotation:
                physics.rotate(cell.body, update.rotation)
            if update.projectile is not None:
                cell.last_bullet_fired = now
                self.projectiles.fire(physics, update.projectile, now)
        return updates

    def tick(self, dt: float = config.SIM_DT) -> None:
        now = self.clock.advance(dt)
        world = self.world
        physics = world.physics

        pairs = physics.step(dt)
        self.stats.food_eaten += self.projectiles.handle_collisions(
            physics, self.ledger, pairs, self.settings.energy_per_food, now
        )
        self.projectiles.expire(physics, self.ledger, now, self.settings.bullet_miss_penalty)

        if self.heartbeat_timer.ready(dt):
            self.heartbeat = now

        if self.food_timer.ready(dt):
            world.food.refill(self.settings.num_food)

        if self.forage_timer.ready(dt):
            world.rebuild_forage_index()

        self.update_cells()

        if self.energy_timer.ready(dt):
            self.ledger.decay(self.cells.evolving(), self.settings.energy_decay_rate, now)

        if self.cull_timer.ready(dt):
            removed = kill_bad_cells(self.cells, self.ledger, physics, now)
            self.stats.deaths += len(removed)
            apply_inactivity_penalties(self.ledger, self.cells.evolving(), now)

        self.stats.update(self.cells, self.ledger, now)

        if self.replication_timer.ready(dt):
            children = cell_replication(
                world,
                self.cells,
                self.ledger,
                self.stats.max_score,
                now,
                cap=self.settings.num_cells,
            )
            self.stats.births += len(children)

        if self.repopulate_timer.ready(dt):
            if spawn_cells(world, self.cells, now, count=self.settings.num_cells):
                self.stats.reseeds += 1

        self.focus.refresh(self.cells, self.ledger, physics, now)

        if self.stats_timer.ready(dt):
            self.stats.record_history()
            logger.info(
                "t=%.1fs population=%d max_energy=%.1f max_age=%.1fs avg_fitness=%.2f births=%d deaths=%d",
                now,
                self.stats.population,
                self.stats.max_score,
                self.stats.max_age,
                self.stats.avg_fitness,
                self.stats.births,
                self.stats.deaths,
            )

    def run(self, seconds: float, dt: float = config.SIM_DT) -> None:
        end = self.now + seconds
        while self.now < end:
            self.tick(dt)
