from __future__ import annotations

from typing import Callable

import pytest

from staffgrid.models import Teacher


@pytest.fixture
def make_teacher() -> Callable[..., Teacher]:
    def _make(name: str = "A", **kw) -> Teacher:
        kw.setdefault("total_weekly_hours", 3)
        kw.setdefault("subjects", ["Maths"])
        kw.setdefault("preferred_classrooms", ["101"])
        kw.setdefault("available_days", ["Mon", "Tue"])
        kw.setdefault("available_time_slots", ["8-9", "9-10", "10-11"])
        return Teacher(name=name, **kw)

    return _make
