"""
Aggregate bundle schema.

The bundle is recomputed from scratch on every invocation.  ``version`` is
bumped whenever the shape changes so cached bundles from an older build are
recognised as incompatible and discarded.
"""

import datetime

from pydantic import BaseModel, Field


class ExercisePR(BaseModel):
    """Running personal record for one exercise."""

    best_score: float = Field(..., gt=0.0, description="Best weight × reps of any completed set")
    est_1rm: float = Field(..., gt=0.0, description="Estimated one-rep max of the best-scoring set")


class AggregateBundle(BaseModel):
    weekly_volume: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        description="Week key → muscle → weighted completed sets (secondary muscles at 0.5×)",
    )
    exercise_prs: dict[str, ExercisePR] = Field(default_factory=dict)
    weekly_pr_counts: dict[str, int] = Field(default_factory=dict)
    version: int
    computed_at: datetime.datetime
