from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List

DEFAULT_MAX_HOURS_PER_DAY = 8


@dataclass(frozen=True)
class Teacher:
    name: str
    total_weekly_hours: int
    subjects: List[str] = field(default_factory=list)
    preferred_classrooms: List[str] = field(default_factory=list)
    classroom_hours: Dict[str, int] = field(default_factory=dict)
    max_hours_per_day: int = DEFAULT_MAX_HOURS_PER_DAY
    available_days: List[str] = field(default_factory=list)
    available_time_slots: List[str] = field(default_factory=list)

    @property
    def first_subject(self) -> str:
        return self.subjects[0] if self.subjects else ""

    def classroom_targets(self) -> Dict[str, int]:
        # Explicit quota wins; a missing or zero entry falls back to an even split.
        # No classroom at all means one unnamed classroom carrying every hour.
        rooms = self.preferred_classrooms or [""]
        even = math.ceil(self.total_weekly_hours / len(rooms))
        return {room: self.classroom_hours.get(room) or even for room in rooms}
