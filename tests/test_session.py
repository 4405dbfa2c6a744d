from __future__ import annotations

import json
import threading
import time
from pathlib import Path

import pytest

from staffgrid.config import Settings
from staffgrid.data.roster import Roster
from staffgrid.errors import ConflictError, DecodeError, PersistenceError
from staffgrid.models import Grid
from staffgrid.scheduler import allocate as allocate_mod
from staffgrid.session import Scheduler
from staffgrid.store.gateway import StoreGateway


def _settings(tmp_path: Path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'store.db'}")


def test_generate_persists_and_reopens(tmp_path: Path, make_teacher) -> None:
    settings = _settings(tmp_path)
    session = Scheduler.open(settings)
    session.add_teacher(make_teacher("A"))
    result = session.generate()
    assert session.last_save_ok
    assert session.generation == 1
    assert len(result.grid) == 3

    again = Scheduler.open(settings)
    assert again.roster == session.roster
    assert again.grid == session.grid


def test_move_persists_and_rejects_conflicts(tmp_path: Path, make_teacher) -> None:
    settings = _settings(tmp_path)
    session = Scheduler.open(settings)
    session.add_teacher(make_teacher("A", total_weekly_hours=2))
    session.generate()
    session.move("Mon", "8-9", 0, "Fri", "15-16")
    assert Scheduler.open(settings).grid["Fri"]["15-16"][0].teacher == "A"
    with pytest.raises(ConflictError):
        session.move("Mon", "9-10", 0, "Fri", "15-16")


def test_generation_requests_are_serialised(make_teacher, monkeypatch) -> None:
    session = Scheduler(Roster([make_teacher("A")]))
    active = []
    overlap = []
    real = allocate_mod.allocate

    def slow_allocate(*args, **kwargs):
        active.append(1)
        if len(active) > 1:
            overlap.append(True)
        time.sleep(0.05)
        try:
            return real(*args, **kwargs)
        finally:
            active.pop()

    monkeypatch.setattr("staffgrid.session.allocate", slow_allocate)
    threads = [threading.Thread(target=session.generate) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not overlap
    assert session.generation == 3
    assert len(session.grid) == 3


class _FailingGateway(StoreGateway):
    def save_grid(self, grid: Grid) -> None:
        raise PersistenceError("disk full")


def test_failed_save_keeps_memory_state(tmp_path: Path, make_teacher) -> None:
    gw = _FailingGateway(f"sqlite:///{tmp_path / 'store.db'}")
    session = Scheduler(Roster([make_teacher("A")]), gateway=gw)
    result = session.generate()
    assert not session.last_save_ok
    assert session.last_error == "disk full"
    assert session.grid is result.grid
    assert len(session.grid) == 3


def test_failed_import_leaves_state(make_teacher) -> None:
    session = Scheduler(Roster([make_teacher("A")]))
    session.generate()
    doc = session.export_document()
    with pytest.raises(DecodeError):
        session.import_document("{broken")
    assert session.export_document() == doc


def test_import_replaces_state(make_teacher) -> None:
    source = Scheduler(Roster([make_teacher("B", total_weekly_hours=1)]))
    source.generate()
    target = Scheduler(Roster([make_teacher("A")]))
    assert target.import_document(source.export_document())
    assert target.roster.names() == ["B"]
    assert target.grid == source.grid


def test_validate_includes_shortfall(make_teacher) -> None:
    session = Scheduler(
        Roster(
            [
                make_teacher(
                    "B", total_weekly_hours=4, available_days=["Mon"], available_time_slots=["8-9"]
                )
            ]
        )
    )
    session.generate()
    report = session.validate()
    assert report["clash_count"] == 0
    assert report["unmet_weekly_loads"] == {"B:101": 3}


def _italian_week(tmp_path: Path) -> Settings:
    return Settings(
        days=["Lunedì", "Martedì"],
        time_slots=["8:00-9:00", "9:00-10:00"],
        database_url=f"sqlite:///{tmp_path / 'store.db'}",
    )


def test_import_uses_configured_week(tmp_path: Path) -> None:
    legacy = {
        "teachers": [
            {
                "name": "Rossi",
                "hoursPerWeek": "2",
                "subjects": "Matematica",
                "preferredClassrooms": "1A",
                "availableDays": ["Lunedì"],
                "availableTimeSlots": ["8:00-9:00", "9:00-10:00"],
            }
        ],
        "schedule": {},
    }
    session = Scheduler.open(_italian_week(tmp_path))
    assert session.import_document(json.dumps(legacy))
    assert session.grid.days == ["Lunedì", "Martedì"]
    assert session.grid.slots == ["8:00-9:00", "9:00-10:00"]
    assert len(session.generate().grid) == 2
    assert Scheduler.open(_italian_week(tmp_path)).roster.names() == ["Rossi"]


def test_import_rejects_cells_outside_configured_week(tmp_path: Path) -> None:
    session = Scheduler(settings=_italian_week(tmp_path))
    entry = {"teacher": "A", "subject": "Maths", "classroom": "101"}
    doc = {"teachers": [], "schedule": {"Mon": {"8-9": [entry]}}}
    with pytest.raises(DecodeError):
        session.import_document(json.dumps(doc))
    assert len(session.grid) == 0


def test_roster_edits_persist(tmp_path: Path, make_teacher) -> None:
    settings = _settings(tmp_path)
    session = Scheduler.open(settings)
    assert session.add_teacher(make_teacher("A"))
    assert session.add_teacher(make_teacher("B"))
    assert session.update_teacher("A", make_teacher("C"))
    session.remove_teacher("B")
    assert Scheduler.open(settings).roster.names() == ["C"]


def test_roster_edits_wait_for_running_request(make_teacher) -> None:
    session = Scheduler()
    session._lock.acquire()
    worker = threading.Thread(target=session.add_teacher, args=(make_teacher("A"),))
    worker.start()
    worker.join(0.05)
    assert worker.is_alive()
    assert len(session.roster) == 0
    session._lock.release()
    worker.join()
    assert session.roster.names() == ["A"]
