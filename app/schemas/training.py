"""
Training history schemas — the immutable snapshot the engine consumes.

A :class:`TrainingSnapshot` bundles every ``Session``, ``Exercise`` and
``Measurement`` known at one point in time.  The engine never mutates it:
all models are frozen, and every derived summary is recomputed from a
snapshot rather than patched.

A *completed set* has positive reps and a positive ``weight_kg × reps``
product.  Anything else (blank rows, warm-up placeholders, bodyweight rows
logged with zero load) is excluded from every volume, PR, intensity and
stress computation.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MUSCLE_GROUPS = ["chest", "back", "shoulders", "biceps", "triceps", "forearms", "quads", "hamstrings", "glutes",
                 "calves", "core", "other", ]

DEFAULT_MUSCLE = "other"


class MovementType(str, Enum):
    """Whether the exercise is multi-joint (compound) or single-joint."""
    COMPOUND = "compound"
    ISOLATION = "isolation"


class SetEntry(BaseModel):
    """One logged set."""

    model_config = ConfigDict(frozen=True)

    weight_kg: float = Field(0.0, description="Load in kilograms")
    reps: int = Field(0, ge=0, description="Repetitions performed")
    rpe: Optional[float] = Field(None, ge=1.0, le=10.0, description="Rate of perceived exertion (1-10)")

    @property
    def score(self) -> float:
        """``weight × reps`` — the per-set score used for PRs and plateaus."""
        return self.weight_kg * self.reps

    @property
    def is_completed(self) -> bool:
        return self.reps > 0 and self.score > 0


class SessionEntry(BaseModel):
    """One exercise performed within a session."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    sets: list[SetEntry] = Field(default_factory=list)

    def completed_sets(self) -> list[SetEntry]:
        return [s for s in self.sets if s.is_completed]

    def best_score(self) -> float:
        """Best single completed-set score, ``0.0`` when nothing was completed."""
        return max((s.score for s in self.sets if s.is_completed), default=0.0)


class Session(BaseModel):
    """One workout occurrence."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    date: datetime.date
    week_number: int = Field(1, ge=1, description="Ordinal week within the phase")
    phase_number: Optional[int] = Field(None, ge=1, description="Ordinal phase (defaults to 1)")
    ended_at: Optional[datetime.datetime] = Field(None, description="When the session was logged as finished")
    entries: list[SessionEntry] = Field(default_factory=list)

    @property
    def phase(self) -> int:
        return self.phase_number or 1

    def performed_at(self) -> datetime.datetime:
        """Timestamp of the session as a UTC-aware datetime.

        Uses ``ended_at`` when logged; otherwise approximates the session as
        noon of its calendar date.
        """
        if self.ended_at is not None:
            return as_utc(self.ended_at)
        return datetime.datetime.combine(self.date, datetime.time(12, 0), tzinfo=datetime.timezone.utc)


class Exercise(BaseModel):
    """Catalog entry for an exercise."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    muscle_group: str = Field(DEFAULT_MUSCLE, description="Primary muscle group")
    secondary_muscles: list[str] = Field(default_factory=list)
    movement_type: Optional[MovementType] = Field(None, description="Compound / isolation (None = unclassified)")
    high_fatigue: bool = Field(False, description="Heavy hinge / squat pattern with slower recovery")

    @property
    def primary_muscle(self) -> str:
        return (self.muscle_group or "").strip() or DEFAULT_MUSCLE

    def clean_secondary_muscles(self) -> list[str]:
        """Secondary muscles trimmed, de-duplicated, without blanks or the primary."""
        primary = self.primary_muscle
        seen: set[str] = set()
        out: list[str] = []
        for raw in self.secondary_muscles or []:
            if not isinstance(raw, str):
                continue
            name = raw.strip()
            if not name or name == primary or name in seen:
                continue
            seen.add(name)
            out.append(name)
        return out


class Measurement(BaseModel):
    """Body metric sample.  Not used by the decay model yet."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    weight_kg: Optional[float] = Field(None, gt=0.0)


class TrainingSnapshot(BaseModel):
    """Full read-only view of the training history at one point in time."""

    model_config = ConfigDict(frozen=True)

    sessions: list[Session] = Field(default_factory=list)
    exercises: list[Exercise] = Field(default_factory=list)
    measurements: list[Measurement] = Field(default_factory=list)

    def exercise_map(self) -> dict[str, Exercise]:
        return {ex.id: ex for ex in self.exercises}


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Return *value* as an aware UTC datetime (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
