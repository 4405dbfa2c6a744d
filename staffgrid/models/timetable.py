from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from ..errors import ConflictError, ValidationError
from ..scheduler.conflicts import is_free
from .assignment import Assignment
from .period import DAYS, TIME_SLOTS


Key = Tuple[str, str]  # (day, slot)


@dataclass
class Grid:
    """Weekly timetable: an ordered list of assignments per (day, slot) cell.

    Cells are created for every configured day and slot up front so the grid
    always has the same shape, empty or not. Reading ``grid[day][slot]`` gives
    copies; mutation goes through :meth:`add` and :meth:`remove`.
    """

    days: List[str] = field(default_factory=lambda: list(DAYS))
    slots: List[str] = field(default_factory=lambda: list(TIME_SLOTS))
    cells: Dict[Key, List[Assignment]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.days = list(self.days)
        self.slots = list(self.slots)
        if not self.days or not self.slots:
            raise ValidationError("A grid needs at least one day and one slot")
        for d in self.days:
            for s in self.slots:
                self.cells.setdefault((d, s), [])

    def has(self, day: str, slot: str) -> bool:
        return (day, slot) in self.cells

    def _cell(self, day: str, slot: str) -> List[Assignment]:
        try:
            return self.cells[(day, slot)]
        except KeyError:
            raise ValidationError(f"Unknown grid cell {day} {slot}") from None

    def cell(self, day: str, slot: str) -> List[Assignment]:
        return list(self._cell(day, slot))

    def __getitem__(self, day: str) -> Dict[str, List[Assignment]]:
        if day not in self.days:
            raise KeyError(day)
        return {s: list(self.cells[(day, s)]) for s in self.slots}

    def add(self, day: str, slot: str, a: Assignment) -> None:
        if not is_free(self, day, slot, a.teacher, a.classroom):
            raise ConflictError(day, slot, a.teacher, a.classroom)
        self._cell(day, slot).append(a)

    def remove(self, day: str, slot: str, index: int) -> Assignment:
        entries = self._cell(day, slot)
        if not 0 <= index < len(entries):
            raise ValidationError(f"No assignment at {day} {slot} index {index}")
        return entries.pop(index)

    def restore(self, day: str, slot: str, index: int, a: Assignment) -> None:
        # Puts back an entry taken out by remove(); the cell held it a moment ago
        self._cell(day, slot).insert(index, a)

    def hours_for(self, teacher: str, day: str) -> int:
        return sum(
            1 for s in self.slots for a in self.cells[(day, s)] if a.teacher == teacher
        )

    def weekly_hours_for(self, teacher: str) -> int:
        return sum(1 for _, _, a in self.placements() if a.teacher == teacher)

    def placements(self) -> Iterator[Tuple[str, str, Assignment]]:
        for d in self.days:
            for s in self.slots:
                for a in self.cells[(d, s)]:
                    yield d, s, a

    def all(self) -> Iterable[Assignment]:
        return (a for _, _, a in self.placements())

    def __len__(self) -> int:
        return sum(len(v) for v in self.cells.values())

    def to_mapping(self) -> Dict[str, Dict[str, List[Assignment]]]:
        return {d: self[d] for d in self.days}
