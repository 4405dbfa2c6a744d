from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from ..models.teacher import Teacher
from ..models.timetable import Grid


def validate_all(grid: Grid, roster: Iterable[Teacher]) -> Dict[str, object]:
    report: Dict[str, object] = {}
    teachers = {t.name: t for t in roster}
    violations_by_rule: Dict[str, List[str]] = defaultdict(list)

    # Collisions
    teacher_slots: Counter = Counter()
    class_slots: Counter = Counter()
    for d, s, a in grid.placements():
        teacher_slots[(a.teacher, d, s)] += 1
        class_slots[(a.classroom, d, s)] += 1
    for (who, d, s), c in teacher_slots.items():
        if c > 1:
            violations_by_rule["teacher_double_booked"].append(f"{who} {d} {s}")
    for (room, d, s), c in class_slots.items():
        if c > 1:
            violations_by_rule["classroom_double_booked"].append(f"{room} {d} {s}")
    report["clash_count"] = sum(1 for c in teacher_slots.values() if c > 1) + sum(
        1 for c in class_slots.values() if c > 1
    )

    # Daily ceiling and availability per teacher
    per_day: Counter = Counter()
    for d, s, a in grid.placements():
        t = teachers.get(a.teacher)
        if t is None:
            violations_by_rule["unknown_teacher"].append(f"{a.teacher} {d} {s}")
            continue
        per_day[(a.teacher, d)] += 1
        if d not in t.available_days or s not in t.available_time_slots:
            violations_by_rule["availability"].append(f"{a.teacher} {d} {s}")
    for (who, d), c in per_day.items():
        if c > teachers[who].max_hours_per_day:
            violations_by_rule["day_ceiling"].append(f"{who} {d}: {c}")

    report["violations_by_rule"] = dict(violations_by_rule)
    report["assignment_count"] = len(grid)
    return report
