from cell.cell import CellRegistry
from cell.energy import EnergyLedger
from conftest import fixed_output_net
from evolution.culling import CullReason, cull_reason, kill_bad_cells
from world.physics import BodyKind, PhysicsWorld

ORIGIN = (0.0, 0.0)


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

def test_zero_energy_is_culled_first():
    assert cull_reason(0.0, 1.0, (500.0, 400.0), ORIGIN) is CullReason.LOW_ENERGY
    assert cull_reason(-3.0, 12.0, ORIGIN, ORIGIN) is CullReason.LOW_ENERGY


def test_missing_energy_entry_is_not_culled():
    assert cull_reason(None, 1.0, ORIGIN, ORIGIN) is None


def test_unmoving_window_edges():
    near = (5.0, 4.99)  # squared displacement just under 50
    assert cull_reason(10.0, 9.999, near, ORIGIN) is None
    assert cull_reason(10.0, 10.0, near, ORIGIN) is CullReason.UNMOVING
    assert cull_reason(10.0, 14.0, near, ORIGIN) is CullReason.UNMOVING


def test_unmoving_distance_threshold_is_exclusive():
    at_threshold = (5.0, 5.0)  # exactly 50
    assert cull_reason(10.0, 10.0, at_threshold, ORIGIN) is None


def test_unmoving_ends_at_twenty_seconds():
    # (4, 4) stays clear of the one-dimensional rule
    assert cull_reason(10.0, 19.999, (4.0, 4.0), ORIGIN) is CullReason.UNMOVING
    assert cull_reason(10.0, 20.0, (4.0, 4.0), ORIGIN) is None


def test_revolving_window_edges():
    pos = (100.0, 100.0)  # squared displacement 20000
    assert cull_reason(10.0, 14.999, pos, ORIGIN) is None
    assert cull_reason(10.0, 15.0, pos, ORIGIN) is CullReason.REVOLVING
    assert cull_reason(10.0, 17.999, pos, ORIGIN) is CullReason.REVOLVING
    assert cull_reason(10.0, 18.0, pos, ORIGIN) is None


def test_revolving_distance_threshold_is_exclusive():
    assert cull_reason(10.0, 16.0, (150.0, 50.0), ORIGIN) is None       # exactly 25000
    assert cull_reason(10.0, 16.0, (149.99, 50.0), ORIGIN) is CullReason.REVOLVING


def test_unmoving_wins_over_revolving():
    assert cull_reason(10.0, 16.0, (1.0, 1.0), ORIGIN) is CullReason.UNMOVING


def test_one_dimensional_ratio_boundary():
    assert cull_reason(10.0, 20.0, (300.0, 100.0), ORIGIN) is CullReason.ONE_DIMENSIONAL
    assert cull_reason(10.0, 20.0, (100.0, -300.0), ORIGIN) is CullReason.ONE_DIMENSIONAL
    assert cull_reason(10.0, 20.0, (299.0, 100.0), ORIGIN) is None


def test_one_dimensional_window_edges():
    pos = (400.0, 10.0)
    assert cull_reason(10.0, 19.999, pos, ORIGIN) is None
    assert cull_reason(10.0, 29.999, pos, ORIGIN) is CullReason.ONE_DIMENSIONAL
    assert cull_reason(10.0, 30.0, pos, ORIGIN) is None


def test_displacement_is_measured_from_birthplace():
    birth = (1000.0, -1000.0)
    assert cull_reason(10.0, 12.0, (1001.0, -1001.0), birth) is CullReason.UNMOVING
    assert cull_reason(10.0, 12.0, (1001.0, -1001.0), ORIGIN) is None


# ---------------------------------------------------------------------------
# Pass
# ---------------------------------------------------------------------------

def _spawn(physics, cells, x, y, now=0.0, user=False):
    body = physics.spawn(BodyKind.CELL, x, y)
    return cells.create(body, fixed_output_net([0, 0, 0, 0]), x, y, now, user_controlled=user)


def test_kill_bad_cells_removes_entity_and_ledger_entry():
    physics = PhysicsWorld()
    cells = CellRegistry()
    ledger = EnergyLedger()

    starving = _spawn(physics, cells, 0.0, 0.0)
    healthy = _spawn(physics, cells, 50.0, 50.0)
    ledger.set(starving.id, 0.0, now=0.0)
    ledger.set(healthy.id, 80.0, now=0.0)

    removed = kill_bad_cells(cells, ledger, physics, now=1.0)

    assert removed == [(starving.id, CullReason.LOW_ENERGY)]
    assert starving.id not in cells and starving.id not in ledger
    assert not physics.exists(starving.body)
    assert healthy.id in cells and physics.exists(healthy.body)


def test_kill_bad_cells_uses_current_position():
    physics = PhysicsWorld()
    cells = CellRegistry()
    ledger = EnergyLedger()

    stuck = _spawn(physics, cells, 10.0, 10.0)
    mover = _spawn(physics, cells, 10.0, 10.0)
    physics.body(mover.body).x += 30.0
    physics.body(mover.body).y += 30.0

    removed = kill_bad_cells(cells, ledger, physics, now=12.0)
    assert removed == [(stuck.id, CullReason.UNMOVING)]
    assert mover.id in cells


def test_user_controlled_cell_is_never_culled():
    physics = PhysicsWorld()
    cells = CellRegistry()
    ledger = EnergyLedger()

    user = _spawn(physics, cells, 0.0, 0.0, user=True)
    ledger.set(user.id, -10.0, now=0.0)

    assert kill_bad_cells(cells, ledger, physics, now=12.0) == []
    assert user.id in cells
