from __future__ import annotations

import logging
import threading
from typing import Dict

from .config import Settings
from .data.codec import decode, encode
from .data.roster import Roster
from .errors import PersistenceError
from .models.teacher import Teacher
from .models.timetable import Grid
from .render.csv_out import table_csv
from .scheduler.allocate import AllocationResult, allocate
from .scheduler.edit import move as move_assignment
from .store.gateway import StoreGateway
from .validate.checks import validate_all
from .validate.report import shortfall_entries

logger = logging.getLogger(__name__)


class Scheduler:
    """Owns one roster and its grid, plus the store they are saved to.

    Roster edits, ``generate``, ``move`` and ``import_document`` hold a lock
    for the whole run, so a second request waits for the first and then sees
    its finished state. Each saves roster and grid afterwards; a failed save
    is logged and reported through ``last_save_ok`` while the in-memory state
    stays as computed.
    """

    def __init__(
        self,
        roster: Roster | None = None,
        grid: Grid | None = None,
        *,
        gateway: StoreGateway | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or Settings()
        self.roster = roster if roster is not None else Roster()
        self.grid = grid if grid is not None else self._empty_grid()
        self.gateway = gateway
        self.generation = 0
        self.last_result: AllocationResult | None = None
        self.last_save_ok = True
        self.last_error: str | None = None
        self._lock = threading.Lock()

    @classmethod
    def open(cls, settings: Settings) -> "Scheduler":
        gateway = StoreGateway(
            settings.database_url, days=settings.days, slots=settings.time_slots
        )
        return cls(
            gateway.load_roster(), gateway.load_grid(), gateway=gateway, settings=settings
        )

    def _empty_grid(self) -> Grid:
        return Grid(self.settings.days, self.settings.time_slots)

    # Roster entry

    def add_teacher(self, t: Teacher) -> bool:
        with self._lock:
            self.roster.add(t, days=self.settings.days, slots=self.settings.time_slots)
            return self._persist()

    def update_teacher(self, name: str, t: Teacher) -> bool:
        with self._lock:
            self.roster.replace(
                name, t, days=self.settings.days, slots=self.settings.time_slots
            )
            return self._persist()

    def remove_teacher(self, name: str) -> Teacher:
        with self._lock:
            removed = self.roster.remove(name)
            self._persist()
        return removed

    # Grid operations

    def generate(self) -> AllocationResult:
        with self._lock:
            result = allocate(
                list(self.roster),
                self.settings.days,
                self.settings.time_slots,
                spread_days=self.settings.spread_days,
            )
            self.grid = result.grid
            self.last_result = result
            self.generation += 1
            logger.info(
                f"Generation {self.generation}: {len(result.grid)} assignments, "
                f"{len(result.shortfall)} shortfalls"
            )
            self._persist()
        return result

    def move(
        self,
        original_day: str,
        original_slot: str,
        original_index: int,
        new_day: str,
        new_slot: str,
    ) -> Grid:
        with self._lock:
            move_assignment(
                self.grid, original_day, original_slot, original_index, new_day, new_slot
            )
            self._persist()
        return self.grid

    # Persistence and exchange

    def save(self) -> bool:
        with self._lock:
            return self._persist()

    def _persist(self) -> bool:
        if self.gateway is None:
            return True
        try:
            self.gateway.save_roster(self.roster)
            self.gateway.save_grid(self.grid)
        except PersistenceError as exc:
            logger.exception("Saving roster and grid failed")
            self.last_save_ok = False
            self.last_error = str(exc)
            return False
        self.last_save_ok = True
        self.last_error = None
        return True

    def export_document(self) -> str:
        return encode(self.roster, self.grid)

    def import_document(self, document: str | bytes) -> bool:
        # decode() raises before anything here is replaced
        roster, grid = decode(document, self.settings.days, self.settings.time_slots)
        with self._lock:
            self.roster = roster
            self.grid = grid
            self.last_result = None
            logger.info(f"Imported {len(roster)} teachers and {len(grid)} assignments")
            return self._persist()

    def export_table(self) -> str:
        return table_csv(self.roster, self.grid)

    def validate(self) -> Dict[str, object]:
        report = validate_all(self.grid, self.roster)
        if self.last_result is not None:
            report["unmet_weekly_loads"] = shortfall_entries(self.last_result.shortfall)
        return report
