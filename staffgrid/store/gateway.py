from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..data.codec import grid_from_dict, grid_to_dict, teacher_from_dict, teacher_to_dict
from ..data.roster import Roster
from ..errors import DecodeError, PersistenceError
from ..models.period import DAYS, TIME_SLOTS
from ..models.timetable import Grid
from .tables import CURRENT_SCHEDULE_ID, Base, ScheduleRow, TeacherRow

logger = logging.getLogger(__name__)


class StoreGateway:
    """Roster and grid storage backed by a SQL database.

    Each save clears its table and writes the new contents inside a single
    transaction, so a failure part-way through rolls back to what was there
    before. Every database error surfaces as PersistenceError.
    """

    def __init__(
        self,
        database_url: str = "sqlite:///staffgrid.db",
        *,
        engine: Engine | None = None,
        days: Sequence[str] = DAYS,
        slots: Sequence[str] = TIME_SLOTS,
    ):
        self.days = list(days)
        self.slots = list(slots)
        try:
            self.engine = engine if engine is not None else create_engine(database_url)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot open store {database_url}: {exc}") from exc
        self._sessions = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def save_roster(self, roster: Roster) -> None:
        rows = [
            TeacherRow(name=t.name, position=i, payload=teacher_to_dict(t))
            for i, t in enumerate(roster)
        ]
        try:
            with self._sessions.begin() as session:
                session.execute(delete(TeacherRow))
                session.add_all(rows)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Saving roster failed: {exc}") from exc
        logger.info(f"Saved roster ({len(rows)} teachers)")

    def load_roster(self) -> Roster:
        try:
            with self._sessions() as session:
                payloads = session.scalars(
                    select(TeacherRow.payload).order_by(TeacherRow.position)
                ).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Loading roster failed: {exc}") from exc
        try:
            return Roster([teacher_from_dict(p) for p in payloads])
        except DecodeError as exc:
            raise PersistenceError(f"Stored roster is corrupt: {exc}") from exc

    def save_grid(self, grid: Grid) -> None:
        row = ScheduleRow(id=CURRENT_SCHEDULE_ID, payload=grid_to_dict(grid))
        try:
            with self._sessions.begin() as session:
                session.execute(delete(ScheduleRow))
                session.add(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Saving grid failed: {exc}") from exc
        logger.info(f"Saved grid ({len(grid)} assignments)")

    def load_grid(self) -> Grid:
        try:
            with self._sessions() as session:
                row = session.get(ScheduleRow, CURRENT_SCHEDULE_ID)
                payload = row.payload if row is not None else {}
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Loading grid failed: {exc}") from exc
        try:
            return grid_from_dict(payload, self.days, self.slots)
        except DecodeError as exc:
            raise PersistenceError(f"Stored grid is corrupt: {exc}") from exc
