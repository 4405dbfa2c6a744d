from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence, Tuple

from ..errors import ConflictError, DecodeError, ValidationError
from ..models.assignment import Assignment
from ..models.period import DAYS, TIME_SLOTS
from ..models.teacher import DEFAULT_MAX_HOURS_PER_DAY, Teacher
from ..models.timetable import Grid
from .roster import Roster


def teacher_to_dict(t: Teacher) -> Dict[str, Any]:
    return {
        "name": t.name,
        "totalWeeklyHours": t.total_weekly_hours,
        "subjects": list(t.subjects),
        "preferredClassrooms": list(t.preferred_classrooms),
        "classroomHours": dict(t.classroom_hours),
        "maxHoursPerDay": t.max_hours_per_day,
        "availableDays": list(t.available_days),
        "availableTimeSlots": list(t.available_time_slots),
    }


def _as_int(value: Any, what: str) -> int:
    # Older exports stored form input verbatim, so numbers may arrive as strings
    if isinstance(value, bool):
        raise DecodeError(f"{what}: expected a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise DecodeError(f"{what}: expected a number, got {value!r}")


def _as_names(value: Any, what: str) -> List[str]:
    # Older exports keep comma-joined strings for subjects and classrooms
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise DecodeError(f"{what}: expected a list of names, got {value!r}")


def teacher_from_dict(raw: Any) -> Teacher:
    if not isinstance(raw, dict):
        raise DecodeError(f"Teacher record must be an object, got {type(raw).__name__}")
    name = raw.get("name")
    if not isinstance(name, str):
        raise DecodeError(f"Teacher record without a name: {raw!r}")
    if "totalWeeklyHours" in raw:
        total = _as_int(raw["totalWeeklyHours"], f"{name}.totalWeeklyHours")
    elif "hoursPerWeek" in raw:
        total = _as_int(raw["hoursPerWeek"], f"{name}.hoursPerWeek")
    else:
        raise DecodeError(f"{name}: totalWeeklyHours is missing")
    hours_raw = raw.get("classroomHours") or {}
    if not isinstance(hours_raw, dict):
        raise DecodeError(f"{name}.classroomHours: expected an object")
    max_raw = raw.get("maxHoursPerDay")
    return Teacher(
        name=name,
        total_weekly_hours=total,
        subjects=_as_names(raw.get("subjects", []), f"{name}.subjects"),
        preferred_classrooms=_as_names(
            raw.get("preferredClassrooms", []), f"{name}.preferredClassrooms"
        ),
        classroom_hours={
            str(k).strip(): _as_int(v, f"{name}.classroomHours.{k}") for k, v in hours_raw.items()
        },
        max_hours_per_day=(
            DEFAULT_MAX_HOURS_PER_DAY
            if max_raw in (None, "")
            else _as_int(max_raw, f"{name}.maxHoursPerDay")
        ),
        available_days=_as_names(raw.get("availableDays", []), f"{name}.availableDays"),
        available_time_slots=_as_names(
            raw.get("availableTimeSlots", []), f"{name}.availableTimeSlots"
        ),
    )


def grid_to_dict(grid: Grid) -> Dict[str, Dict[str, List[Dict[str, str]]]]:
    return {
        d: {
            s: [
                {"teacher": a.teacher, "subject": a.subject, "classroom": a.classroom}
                for a in grid.cell(d, s)
            ]
            for s in grid.slots
        }
        for d in grid.days
    }


def grid_from_dict(
    raw: Any, days: Sequence[str] | None = None, slots: Sequence[str] | None = None
) -> Grid:
    """Rebuild a grid from its day -> slot -> list mapping.

    With ``days`` and ``slots`` given the grid takes that week, and any day
    or slot in the mapping outside it is a DecodeError. Without them the
    mapping's own key order defines the shape, and an empty mapping gives an
    empty grid of the default week.
    """
    if not isinstance(raw, dict):
        raise DecodeError("schedule must be an object keyed by day")
    for d, by_slot in raw.items():
        if not isinstance(by_slot, dict):
            raise DecodeError(f"schedule[{d!r}] must be an object keyed by slot")
    if days is None and slots is None and not raw:
        days, slots = DAYS, TIME_SLOTS
    if days is None:
        days = list(raw)
    if slots is None:
        slots = list(dict.fromkeys(s for by_slot in raw.values() for s in by_slot))
    try:
        grid = Grid(list(days), list(slots))
    except ValidationError as exc:
        raise DecodeError(f"schedule has no usable week: {exc}") from exc
    for d, by_slot in raw.items():
        for s, entries in by_slot.items():
            if not grid.has(d, s):
                raise DecodeError(f"schedule cell {d} {s} is outside the week")
            if not isinstance(entries, list):
                raise DecodeError(f"schedule[{d!r}][{s!r}] must be a list")
            for e in entries:
                if not isinstance(e, dict) or not all(
                    isinstance(e.get(k), str) for k in ("teacher", "subject", "classroom")
                ):
                    raise DecodeError(f"Malformed assignment at {d} {s}: {e!r}")
                try:
                    grid.add(d, s, Assignment(e["teacher"], e["subject"], e["classroom"]))
                except ConflictError as exc:
                    raise DecodeError(f"Conflicting assignments in document: {exc}") from exc
    return grid


def encode(roster: Roster, grid: Grid) -> str:
    doc = {
        "teachers": [teacher_to_dict(t) for t in roster],
        "schedule": grid_to_dict(grid),
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


def decode(
    document: str | bytes,
    days: Sequence[str] | None = None,
    slots: Sequence[str] | None = None,
) -> Tuple[Roster, Grid]:
    """Parse an exported document back into a roster and grid.

    ``days`` and ``slots`` pin the week the schedule and the teachers are
    checked against; see :func:`grid_from_dict`. Any malformation raises
    DecodeError; nothing is substituted with empty data.
    """
    try:
        data = json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Document is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError("Document must be an object")
    for key in ("teachers", "schedule"):
        if key not in data:
            raise DecodeError(f"Document is missing {key!r}")
    if not isinstance(data["teachers"], list):
        raise DecodeError("teachers must be a list")
    grid = grid_from_dict(data["schedule"], days, slots)
    teachers = [teacher_from_dict(raw) for raw in data["teachers"]]
    try:
        roster = Roster.from_teachers(teachers, days=grid.days, slots=grid.slots)
    except ValidationError as exc:
        raise DecodeError(f"Invalid teacher in document: {exc}") from exc
    return roster, grid
