from __future__ import annotations

from sqlalchemy import JSON, Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

CURRENT_SCHEDULE_ID = "current"


class TeacherRow(Base):
    __tablename__ = "teachers"

    name = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    payload = Column(JSON, nullable=False)


class ScheduleRow(Base):
    __tablename__ = "schedule"

    id = Column(String, primary_key=True, default=CURRENT_SCHEDULE_ID)
    payload = Column(JSON, nullable=False)
