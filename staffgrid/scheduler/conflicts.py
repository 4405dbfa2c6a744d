from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.timetable import Grid


def is_free(grid: "Grid", day: str, slot: str, teacher: str, classroom: str) -> bool:
    for a in grid.cell(day, slot):
        if a.teacher == teacher or a.classroom == classroom:
            return False
    return True
