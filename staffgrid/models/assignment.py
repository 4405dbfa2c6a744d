from dataclasses import dataclass


@dataclass(frozen=True)
class Assignment:
    teacher: str
    subject: str
    classroom: str
