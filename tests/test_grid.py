import pytest

from staffgrid.errors import ConflictError, ValidationError
from staffgrid.models import DAYS, TIME_SLOTS, Assignment, Grid


def test_default_shape_is_five_days_of_eight_slots() -> None:
    grid = Grid()
    assert grid.days == list(DAYS)
    assert grid.slots == list(TIME_SLOTS)
    assert len(grid.cells) == 40
    assert len(grid) == 0


def test_add_keeps_insertion_order_and_rejects_clash() -> None:
    grid = Grid()
    grid.add("Mon", "8-9", Assignment("A", "Maths", "101"))
    grid.add("Mon", "8-9", Assignment("B", "Art", "102"))
    assert [a.teacher for a in grid["Mon"]["8-9"]] == ["A", "B"]
    with pytest.raises(ConflictError):
        grid.add("Mon", "8-9", Assignment("C", "Art", "101"))
    assert len(grid) == 2


def test_read_access_returns_copies() -> None:
    grid = Grid()
    grid.add("Mon", "8-9", Assignment("A", "Maths", "101"))
    grid["Mon"]["8-9"].clear()
    grid.cell("Mon", "8-9").clear()
    assert len(grid) == 1


def test_unknown_cell_and_bad_index() -> None:
    grid = Grid()
    with pytest.raises(ValidationError):
        grid.cell("Sat", "8-9")
    with pytest.raises(ValidationError):
        grid.remove("Mon", "8-9", 0)


@pytest.mark.parametrize("days, slots", [([], []), ([], ["8-9"]), (["Mon"], [])])
def test_grid_needs_a_day_and_a_slot(days, slots) -> None:
    with pytest.raises(ValidationError):
        Grid(days, slots)
