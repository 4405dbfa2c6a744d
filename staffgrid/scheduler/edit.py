from __future__ import annotations

import logging

from ..errors import ConflictError, ValidationError
from ..models.timetable import Grid
from .conflicts import is_free


def move(
    grid: Grid,
    original_day: str,
    original_slot: str,
    original_index: int,
    new_day: str,
    new_slot: str,
) -> Grid:
    """Relocate one assignment to the end of another cell.

    The grid is left untouched when the destination already holds the same
    teacher or classroom (ConflictError) or a coordinate is invalid
    (ValidationError).
    """
    logger = logging.getLogger(__name__)
    if not grid.has(new_day, new_slot):
        raise ValidationError(f"Unknown grid cell {new_day} {new_slot}")
    a = grid.remove(original_day, original_slot, original_index)
    if not is_free(grid, new_day, new_slot, a.teacher, a.classroom):
        grid.restore(original_day, original_slot, original_index, a)
        raise ConflictError(new_day, new_slot, a.teacher, a.classroom)
    grid.add(new_day, new_slot, a)
    logger.info(
        f"Move {a.teacher} {a.classroom}: {original_day} {original_slot} -> {new_day} {new_slot}"
    )
    return grid
