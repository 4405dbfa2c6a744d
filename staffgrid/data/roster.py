from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence

from ..errors import ValidationError
from ..models.period import DAYS, TIME_SLOTS
from ..models.teacher import Teacher

logger = logging.getLogger(__name__)


def validate_teacher(
    t: Teacher,
    days: Sequence[str] = DAYS,
    slots: Sequence[str] = TIME_SLOTS,
) -> None:
    """Reject a malformed teacher record at entry time.

    Raises ValidationError for missing required fields, non-positive hour
    counts, and days or slots outside the week. An explicit classroom quota
    summing above the weekly total is only logged: the allocator caps it.
    """
    if not isinstance(t.name, str) or not t.name.strip():
        raise ValidationError("Teacher name is required")
    for attr in ("total_weekly_hours", "max_hours_per_day"):
        v = getattr(t, attr)
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ValidationError(f"{t.name}: {attr} must be a positive integer, got {v!r}")
    if not t.subjects:
        raise ValidationError(f"{t.name}: at least one subject is required")
    if not t.preferred_classrooms:
        raise ValidationError(f"{t.name}: at least one classroom is required")
    for room, hours in t.classroom_hours.items():
        if isinstance(hours, bool) or not isinstance(hours, int) or hours < 0:
            raise ValidationError(f"{t.name}: hours for classroom {room!r} must be >= 0")
    unknown_days = [d for d in t.available_days if d not in days]
    if unknown_days:
        raise ValidationError(f"{t.name}: unknown days {unknown_days}")
    unknown_slots = [s for s in t.available_time_slots if s not in slots]
    if unknown_slots:
        raise ValidationError(f"{t.name}: unknown time slots {unknown_slots}")
    explicit = sum(t.classroom_hours.values())
    if explicit > t.total_weekly_hours:
        logger.warning(
            f"{t.name}: classroom quotas sum to {explicit}, above weekly total {t.total_weekly_hours}"
        )


@dataclass
class Roster:
    teachers: List[Teacher] = field(default_factory=list)

    def __iter__(self) -> Iterator[Teacher]:
        return iter(self.teachers)

    def __len__(self) -> int:
        return len(self.teachers)

    def names(self) -> List[str]:
        return [t.name for t in self.teachers]

    def get(self, name: str) -> Teacher | None:
        for t in self.teachers:
            if t.name == name:
                return t
        return None

    def index_of(self, name: str) -> int:
        for i, t in enumerate(self.teachers):
            if t.name == name:
                return i
        raise ValidationError(f"No teacher named {name!r}")

    def add(self, t: Teacher, *, days: Sequence[str] = DAYS, slots: Sequence[str] = TIME_SLOTS) -> None:
        validate_teacher(t, days, slots)
        if self.get(t.name) is not None:
            raise ValidationError(f"Teacher {t.name!r} already exists")
        self.teachers.append(t)

    def replace(
        self, name: str, t: Teacher, *, days: Sequence[str] = DAYS, slots: Sequence[str] = TIME_SLOTS
    ) -> None:
        idx = self.index_of(name)
        validate_teacher(t, days, slots)
        if t.name != name and self.get(t.name) is not None:
            raise ValidationError(f"Teacher {t.name!r} already exists")
        self.teachers[idx] = t

    def remove(self, name: str) -> Teacher:
        return self.teachers.pop(self.index_of(name))

    @classmethod
    def from_teachers(
        cls, teachers: Iterable[Teacher], *, days: Sequence[str] = DAYS, slots: Sequence[str] = TIME_SLOTS
    ) -> "Roster":
        roster = cls()
        for t in teachers:
            roster.add(t, days=days, slots=slots)
        return roster
