"""
Training data repository.

Reads live (non-deleted) rows and converts them into the immutable domain
schemas the engine consumes.
"""

import logging

from sqlmodel import Session, select

from app.catalog.exercise_catalog import exercise_from_name
from app.models.training import ExerciseRecord, MeasurementRecord, SessionRecord
from app.schemas.training import Exercise, Measurement, MovementType
from app.schemas.training import Session as TrainingSessionSchema

logger = logging.getLogger(__name__)


class TrainingDataRepository:
    """Repository for sessions, exercises and measurements."""

    def __init__(self, session: Session):
        self.session = session

    def list_sessions(self) -> list[TrainingSessionSchema]:
        statement = (select(SessionRecord).where(SessionRecord.deleted_at == None)  # noqa: E711
                     .order_by(SessionRecord.date, SessionRecord.id))
        return [
            TrainingSessionSchema(id=row.id, date=row.date, week_number=row.week_number,
                                  phase_number=row.phase_number, ended_at=row.ended_at, entries=row.entries or [], )
            for row in self.session.exec(statement).all()
        ]

    def list_exercises(self) -> list[Exercise]:
        statement = (select(ExerciseRecord).where(ExerciseRecord.deleted_at == None)  # noqa: E711
                     .order_by(ExerciseRecord.id))
        return [self._to_exercise(row) for row in self.session.exec(statement).all()]

    def list_measurements(self) -> list[Measurement]:
        statement = (select(MeasurementRecord).where(MeasurementRecord.deleted_at == None)  # noqa: E711
                     .order_by(MeasurementRecord.date))
        return [Measurement(date=row.date, weight_kg=row.weight_kg) for row in self.session.exec(statement).all()]

    def add_all(self, rows: list) -> None:
        self.session.add_all(rows)
        self.session.commit()

    @staticmethod
    def _to_exercise(row: ExerciseRecord) -> Exercise:
        if not (row.muscle_group or "").strip():
            # No muscle recorded: infer from the name.
            logger.debug("Inferring muscles for exercise %s from name '%s'", row.id, row.name)
            return exercise_from_name(row.id, row.name, high_fatigue=row.high_fatigue)
        movement = MovementType(row.movement_type) if row.movement_type else None
        return Exercise(id=row.id, name=row.name, muscle_group=row.muscle_group.strip(),
                        secondary_muscles=[m for m in (row.secondary_muscles or []) if isinstance(m, str)],
                        movement_type=movement, high_fatigue=row.high_fatigue, )
