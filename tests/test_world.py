import math

import pytest

from world.clock import Cadence, SimClock, elapsed_past, elapsed_within
from world.food import FoodField
from world.forage import ForageIndex
from world.physics import BodyKind, PhysicsWorld


# ---------------------------------------------------------------------------
# Forage index
# ---------------------------------------------------------------------------

def test_empty_index_returns_none():
    assert ForageIndex.empty().nearest(1.0, 2.0) is None
    assert len(ForageIndex([])) == 0


def test_nearest_point_and_squared_distance():
    index = ForageIndex([(0.0, 0.0), (10.0, 0.0), (3.0, 4.0)])
    hit = index.nearest(2.0, 3.0)
    assert (hit.x, hit.y) == (3.0, 4.0)
    assert hit.dist_sq == 2.0


def test_index_is_a_snapshot(world):
    world.food.refill(10)
    world.rebuild_forage_index()
    snapshot = world.forage
    for b in list(world.physics.of_kind(BodyKind.FOOD)):
        world.physics.despawn(b.handle)
    assert len(snapshot) == 10
    world.rebuild_forage_index()
    assert world.forage.nearest(0.0, 0.0) is None


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

def test_clock_advances_and_refuses_to_go_back():
    clock = SimClock()
    assert clock.advance(0.5) == 0.5
    assert clock.elapsed(0.2) == pytest.approx(0.3)
    with pytest.raises(ValueError):
        clock.advance(-1.0)


def test_elapsed_helpers_split_at_the_interval():
    assert elapsed_past(0.0, 8.0, 8.0)
    assert not elapsed_within(0.0, 8.0, 8.0)
    assert elapsed_within(0.0, 7.9, 8.0)


def test_cadence_fires_once_per_period():
    cadence = Cadence(0.5)
    fired = [cadence.ready(0.25) for _ in range(8)]
    assert fired == [False, True] * 4


def test_cadence_does_not_burst_after_a_stall():
    cadence = Cadence(0.5)
    assert cadence.ready(3.0)
    assert not cadence.ready(0.1)


# ---------------------------------------------------------------------------
# Physics collaborator
# ---------------------------------------------------------------------------

def test_force_moves_body_and_damping_slows_it():
    physics = PhysicsWorld()
    h = physics.spawn(BodyKind.CELL, 0.0, 0.0, damping=2.0)
    physics.set_force(h, 100.0, 0.0)
    physics.step(0.1)
    assert physics.position(h)[0] > 0.0

    physics.set_force(h, 0.0, 0.0)
    v1 = physics.body(h).vx
    physics.step(0.1)
    assert physics.body(h).vx < v1


def test_rotate_keeps_heading_wrapped():
    physics = PhysicsWorld()
    h = physics.spawn(BodyKind.CELL, 0.0, 0.0, angle=3.0)
    physics.rotate(h, 0.5)
    assert -math.pi <= physics.heading(h) <= math.pi
    assert physics.heading(h) == pytest.approx(3.5 - 2 * math.pi)


def test_unknown_handle_raises_key_error():
    with pytest.raises(KeyError):
        PhysicsWorld().position(99)


def test_collision_start_is_reported_once():
    physics = PhysicsWorld()
    food = physics.spawn(BodyKind.FOOD, 10.0, 0.0, radius=4.0)
    shot = physics.spawn(BodyKind.PROJECTILE, 0.0, 0.0, radius=4.0, vx=100.0)

    first = physics.step(0.05)   # x = 5, overlapping
    second = physics.step(0.01)  # still overlapping

    assert [set(p) for p in first] == [{shot, food}]
    assert second == []


def test_food_field_seeds_and_refills(world):
    field = FoodField(world.physics, world.w, world.h, refill_batch=5)
    assert field.refill(20) == 20
    assert field.refill(20) == 0

    for b in list(world.physics.of_kind(BodyKind.FOOD))[:5]:
        world.physics.despawn(b.handle)
    assert field.refill(20) == 5
    assert field.count() == 20

    for x, y in field.positions():
        assert -world.w / 2 <= x <= world.w / 2
        assert -world.h / 2 <= y <= world.h / 2
