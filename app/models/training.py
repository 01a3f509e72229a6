"""
Training history database models.

Sessions store their exercise entries (with sets) as JSON; exercises store
their secondary muscles as JSON.  Rows are soft-deleted through
``deleted_at`` and never read back once deleted.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class SessionRecord(SQLModel, table=True):
    """A logged workout."""

    __tablename__ = "sessions"

    id: str = Field(primary_key=True, max_length=64)
    date: datetime.date = Field(nullable=False, index=True)
    week_number: int = Field(default=1, nullable=False)
    phase_number: Optional[int] = Field(default=None)
    ended_at: Optional[datetime.datetime] = Field(default=None)

    # [{"exercise_id": ..., "sets": [{"weight_kg": ..., "reps": ..., "rpe": ...}]}]
    entries: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )

    created_at: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))
    deleted_at: Optional[datetime.datetime] = Field(default=None, index=True)


class ExerciseRecord(SQLModel, table=True):
    """A user or catalog exercise."""

    __tablename__ = "exercises"

    id: str = Field(primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=200)
    muscle_group: Optional[str] = Field(default=None, max_length=50)
    secondary_muscles: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )
    movement_type: Optional[str] = Field(default=None, max_length=20)
    high_fatigue: bool = Field(default=False, nullable=False)

    deleted_at: Optional[datetime.datetime] = Field(default=None, index=True)


class MeasurementRecord(SQLModel, table=True):
    """A body-metric sample."""

    __tablename__ = "measurements"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime.date = Field(nullable=False, index=True)
    weight_kg: Optional[float] = Field(default=None)

    deleted_at: Optional[datetime.datetime] = Field(default=None, index=True)
