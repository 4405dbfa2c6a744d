from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..models.assignment import Assignment
from ..models.period import DAYS, TIME_SLOTS, slot_start
from ..models.teacher import Teacher
from ..models.timetable import Grid
from .conflicts import is_free


@dataclass(frozen=True)
class Shortfall:
    teacher: str
    classroom: str
    requested: int
    placed: int

    @property
    def missing(self) -> int:
        return self.requested - self.placed


@dataclass
class AllocationResult:
    grid: Grid
    shortfall: List[Shortfall] = field(default_factory=list)
    audit: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.shortfall


def generate(roster: Iterable[Teacher]) -> Grid:
    return allocate(roster).grid


def allocate(
    roster: Iterable[Teacher],
    days: Sequence[str] = DAYS,
    slots: Sequence[str] = TIME_SLOTS,
    *,
    spread_days: bool = False,
) -> AllocationResult:
    """Build a fresh grid from the roster with a single greedy pass.

    Teachers are handled in roster order and each teacher's classrooms in
    preference order. For a classroom, the candidate days are tried least
    loaded first and the earliest free slot is taken, until the classroom's
    quota is met or no candidate day is left. Whatever cannot be placed is
    reported as shortfall, never raised.

    ``spread_days`` ranks candidate days by the teacher's hours on that day
    rather than over the whole week, interleaving days instead of filling
    each one up to the daily ceiling first.
    """
    logger = logging.getLogger(__name__)
    grid = Grid(list(days), list(slots))
    result = AllocationResult(grid)

    for t in roster:
        targets = t.classroom_targets()
        subject = t.first_subject
        for room, target in targets.items():
            placed = _place_classroom(grid, t, room, subject, target, spread_days)
            if placed < target:
                gap = Shortfall(t.name, room, target, placed)
                result.shortfall.append(gap)
                logger.info(f"Shortfall {t.name} {room}: placed {placed}/{target}")
        result.audit.append(
            f"{t.name}: placed {grid.weekly_hours_for(t.name)} of {sum(targets.values())} hours"
        )
    return result


def _place_classroom(
    grid: Grid,
    t: Teacher,
    room: str,
    subject: str,
    target: int,
    spread_days: bool,
) -> int:
    logger = logging.getLogger(__name__)
    candidates = [d for d in t.available_days if d in grid.days]
    slots = [s for s in t.available_time_slots if s in grid.slots]
    remaining = target

    while remaining > 0 and candidates:
        # list.sort is stable: earlier position breaks ties
        if spread_days:
            candidates.sort(key=lambda d: grid.hours_for(t.name, d))
        else:
            candidates.sort(key=lambda d: grid.weekly_hours_for(t.name))
        day = candidates[0]
        if grid.hours_for(t.name, day) >= t.max_hours_per_day:
            candidates.pop(0)
            continue
        free = [s for s in slots if is_free(grid, day, s, t.name, room)]
        if not free:
            candidates.pop(0)
            continue
        free.sort(key=slot_start)
        sid = free[0]
        grid.add(day, sid, Assignment(t.name, subject, room))
        remaining -= 1
        logger.debug(f"Place {t.name} {day} {sid} -> {room} ({subject})")

    return target - remaining
