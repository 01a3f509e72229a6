"""Pydantic schemas for the training snapshot and every derived summary."""

from app.schemas.aggregates import AggregateBundle, ExercisePR
from app.schemas.analytics import (
    AnalyticsBundle,
    IntensityBucket,
    PlateauEntry,
    UndertrainedEntry,
    VolumeTrendRow,
)
from app.schemas.compute import ComputeFailure, ComputeRequest, ComputeResult, ComputeSuccess
from app.schemas.recovery import MuscleRecoveryState, RecoveryBundle, RecoveryView
from app.schemas.training import (
    Exercise,
    Measurement,
    MovementType,
    Session,
    SessionEntry,
    SetEntry,
    TrainingSnapshot,
)

__all__ = [
    "AggregateBundle",
    "ExercisePR",
    "AnalyticsBundle",
    "IntensityBucket",
    "PlateauEntry",
    "UndertrainedEntry",
    "VolumeTrendRow",
    "ComputeFailure",
    "ComputeRequest",
    "ComputeResult",
    "ComputeSuccess",
    "MuscleRecoveryState",
    "RecoveryBundle",
    "RecoveryView",
    "Exercise",
    "Measurement",
    "MovementType",
    "Session",
    "SessionEntry",
    "SetEntry",
    "TrainingSnapshot",
]
