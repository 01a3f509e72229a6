"""SQLModel database models."""

from app.models.training import ExerciseRecord, MeasurementRecord, SessionRecord

__all__ = [
    "ExerciseRecord",
    "MeasurementRecord",
    "SessionRecord",
]
