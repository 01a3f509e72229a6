"""
Muscle recovery schemas.

Recovery models accumulated training stress per muscle group decaying by
half every ``baseline_hours``:

    stress(t) = Σ contribution_i × 2^(-(t - t_i) / baseline_hours)
    percent   = 100 × (1 - min(1, stress / capacity))

Status labels:

- ``Ready``      — percent >= 99
- ``Near``       — percent >= 90
- ``Caution``    — percent >= 50
- ``Not Ready``  — percent < 50
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

RecoveryStatus = Literal["Ready", "Near", "Caution", "Not Ready"]


class MuscleRecoveryState(BaseModel):
    """Recovery state for a single muscle group."""

    muscle: str
    percent: float = Field(..., ge=0.0, le=100.0, description="Recovered percent (0 = fully fatigued)")
    status: RecoveryStatus
    remaining: float = Field(..., ge=0.0, description="Residual stress units at evaluation time")
    capacity: float = Field(..., gt=0.0, description="Stress at which the muscle counts as fully fatigued")
    eta_full: Optional[datetime.datetime] = Field(
        None,
        description="When residual stress is projected to fall under the full-recovery tolerance",
    )


class RecoveryBundle(BaseModel):
    """Per-muscle recovery computed from one snapshot."""

    updated_at: datetime.datetime
    muscles: list[MuscleRecoveryState]

    @property
    def by_muscle(self) -> dict[str, MuscleRecoveryState]:
        return {m.muscle: m for m in self.muscles}


class RecoveryView(BaseModel):
    """What the recovery page receives.

    ``error`` is set when the latest refresh failed; ``muscles`` then still
    holds the last successful result (empty if there never was one).
    """

    muscles: list[MuscleRecoveryState] = Field(default_factory=list)
    updated_at: Optional[datetime.datetime] = None
    error: Optional[str] = None
    stale: bool = Field(False, description="True when serving a result older than the refresh policy allows")
