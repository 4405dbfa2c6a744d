import pytest

from staffgrid.errors import ConflictError, ValidationError
from staffgrid.models import Assignment, Grid
from staffgrid.scheduler.edit import move


def _grid() -> Grid:
    grid = Grid()
    grid.add("Mon", "8-9", Assignment("A", "Maths", "101"))
    grid.add("Mon", "8-9", Assignment("B", "Art", "102"))
    grid.add("Tue", "8-9", Assignment("C", "Music", "103"))
    return grid


def test_move_appends_to_destination() -> None:
    grid = move(_grid(), "Mon", "8-9", 1, "Tue", "8-9")
    assert grid["Mon"]["8-9"] == [Assignment("A", "Maths", "101")]
    assert grid["Tue"]["8-9"] == [
        Assignment("C", "Music", "103"),
        Assignment("B", "Art", "102"),
    ]


def test_move_within_same_cell_is_allowed() -> None:
    grid = move(_grid(), "Mon", "8-9", 0, "Mon", "8-9")
    assert [a.teacher for a in grid["Mon"]["8-9"]] == ["B", "A"]


@pytest.mark.parametrize(
    "blocker",
    [Assignment("A", "Maths", "999"), Assignment("Z", "Maths", "101")],
)
def test_conflicting_move_is_rejected_and_grid_untouched(blocker: Assignment) -> None:
    grid = _grid()
    grid.add("Wed", "9-10", blocker)
    before = grid.to_mapping()
    with pytest.raises(ConflictError):
        move(grid, "Mon", "8-9", 0, "Wed", "9-10")
    assert grid.to_mapping() == before


def test_invalid_coordinates() -> None:
    grid = _grid()
    before = grid.to_mapping()
    with pytest.raises(ValidationError):
        move(grid, "Mon", "8-9", 5, "Tue", "9-10")
    with pytest.raises(ValidationError):
        move(grid, "Mon", "8-9", 0, "Sun", "9-10")
    assert grid.to_mapping() == before
