import pytest

from cell.cell import Cell, FitnessScores
from conftest import fixed_output_net


def test_fitness_window_keeps_last_ten():
    scores = FitnessScores()
    for v in range(12):
        scores.push(float(v))

    assert len(scores) == 10
    assert scores.values() == [float(v) for v in range(2, 12)]
    assert scores.get_fitness() == pytest.approx(sum(range(2, 12)) / 10)


def test_fitness_window_average_before_full():
    scores = FitnessScores()
    scores.push(4.0)
    scores.push(2.0)
    assert scores.get_fitness() == 3.0


def test_empty_fitness_window_is_neutral():
    assert FitnessScores().get_fitness() == 0.0


def test_registry_ids_are_unique_and_never_reused(cells):
    a = cells.create(body=1, brain=fixed_output_net([0, 0, 0, 0]), x=0.0, y=0.0, now=0.0)
    b = cells.create(body=2, brain=fixed_output_net([0, 0, 0, 0]), x=1.0, y=1.0, now=0.0)
    cells.remove(b.id)
    c = cells.create(body=3, brain=fixed_output_net([0, 0, 0, 0]), x=2.0, y=2.0, now=0.0)

    assert len({a.id, b.id, c.id}) == 3
    assert c.id > b.id
    assert len(cells) == 2


def test_registry_rejects_duplicate_id(cells):
    cell = cells.create(body=1, brain=fixed_output_net([0, 0, 0, 0]), x=0.0, y=0.0, now=0.0)
    dup = Cell(
        id=cell.id,
        body=2,
        brain=cell.brain,
        birth_place=(0.0, 0.0),
        birth_ts=0.0,
        last_updated=0.0,
        last_bullet_fired=0.0,
        update_phase=0.0,
    )
    with pytest.raises(AssertionError):
        cells.add(dup)


def test_new_cell_bookkeeping(cells):
    cell = cells.create(body=5, brain=fixed_output_net([0, 0, 0, 0]), x=3.0, y=4.0, now=2.5)
    assert cell.birth_place == (3.0, 4.0)
    assert cell.birth_ts == cell.last_updated == cell.last_bullet_fired == 2.5
    assert 0.0 <= cell.update_phase < 1.0
    assert cell.num_cells_spawned == 0
    assert cell.age(4.0) == 1.5


def test_evolving_excludes_user_cell(cells):
    cells.create(body=1, brain=fixed_output_net([0, 0, 0, 0]), x=0.0, y=0.0, now=0.0, user_controlled=True)
    other = cells.create(body=2, brain=fixed_output_net([0, 0, 0, 0]), x=0.0, y=0.0, now=0.0)
    assert [c.id for c in cells.evolving()] == [other.id]
