# Re-export common types
from .assignment import Assignment
from .period import DAYS, TIME_SLOTS
from .teacher import Teacher
from .timetable import Grid

__all__ = [
    "Assignment",
    "Teacher",
    "Grid",
    "DAYS",
    "TIME_SLOTS",
]
