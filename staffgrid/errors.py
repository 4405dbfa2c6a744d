from __future__ import annotations


class StaffgridError(Exception):
    """Base class for errors raised by the scheduling engine."""


class ValidationError(StaffgridError, ValueError):
    """Raised when a teacher record or an edit request is malformed."""


class ConflictError(StaffgridError):
    """Raised when a cell already holds the same teacher or classroom."""

    def __init__(self, day: str, slot: str, teacher: str, classroom: str):
        super().__init__(
            f"{day} {slot} already holds teacher {teacher!r} or classroom {classroom!r}"
        )
        self.day = day
        self.slot = slot
        self.teacher = teacher
        self.classroom = classroom


class PersistenceError(StaffgridError):
    """Raised when the store cannot be read or written."""


class DecodeError(StaffgridError, ValueError):
    """Raised when an import document cannot be parsed into a roster and grid."""
