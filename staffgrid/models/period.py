from __future__ import annotations

from typing import List

DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
TIME_SLOTS = (
    "8-9",
    "9-10",
    "10-11",
    "11-12",
    "12-13",
    "13-14",
    "14-15",
    "15-16",
)

# Slots starting at or after this hour are left out of the default selection
AFTERNOON_CUTOFF = 14


def slot_start(slot: str) -> int:
    """Minutes after midnight at which ``slot`` starts.

    Accepts both ``"8-9"`` and ``"8:00-9:00"`` forms. Unparseable names sort last.
    """
    head = slot.split("-", 1)[0].strip()
    hours, _, minutes = head.partition(":")
    try:
        return int(hours) * 60 + (int(minutes) if minutes else 0)
    except ValueError:
        return 24 * 60


def all_days(days: List[str] | tuple = DAYS) -> List[str]:
    return list(days)


def default_time_slots(slots: List[str] | tuple = TIME_SLOTS) -> List[str]:
    return [s for s in slots if slot_start(s) < AFTERNOON_CUTOFF * 60]
