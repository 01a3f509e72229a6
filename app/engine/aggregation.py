"""
Aggregation unit — weekly volume and running PR state.

For every session, in chronological order:

1. Week key ``P<phase>-W<week>`` (phase defaults to 1).
2. Per entry, count completed sets and find the best single-set score
   (``weight × reps``).  Entries without completed sets are skipped.
3. Completed sets go to the primary muscle at full weight and to each
   secondary muscle at ``SECONDARY_FACTOR``.
4. A session best strictly above the exercise's previous best is a PR and
   increments the week's PR counter.  Ties are not PRs.  The first
   performance of an exercise records its baseline without counting as a
   PR.

The bundle is a pure function of the snapshot (plus ``computed_at``).
"""

from __future__ import annotations

import datetime
from typing import Optional

from app.engine.weeks import WeekKey, week_key
from app.schemas.aggregates import AggregateBundle, ExercisePR
from app.schemas.training import SetEntry, TrainingSnapshot, utc_now

# Bump when the bundle shape changes so cached bundles are discarded.
AGGREGATE_SCHEMA_VERSION = 2

SECONDARY_FACTOR = 0.5


def estimate_1rm(set_entry: SetEntry) -> float:
    """Epley one-rep-max estimate: ``weight × (1 + reps / 30)``."""
    if set_entry.reps == 1:
        return set_entry.weight_kg
    return round(set_entry.weight_kg * (1 + set_entry.reps / 30.0), 3)


def _ordered(table: dict[WeekKey, dict]) -> dict[str, dict]:
    return {key.label: table[key] for key in sorted(table)}


def compute_aggregates(snapshot: TrainingSnapshot,
                       computed_at: Optional[datetime.datetime] = None, ) -> AggregateBundle:
    """Compute the aggregate bundle for *snapshot*."""
    exercises = snapshot.exercise_map()

    weekly_volume: dict[WeekKey, dict[str, float]] = {}
    weekly_pr_counts: dict[WeekKey, int] = {}
    exercise_prs: dict[str, ExercisePR] = {}

    for session in sorted(snapshot.sessions, key=lambda s: s.performed_at()):
        key = week_key(session)
        volume = weekly_volume.setdefault(key, {})

        for entry in session.entries:
            completed = entry.completed_sets()
            if not completed:
                continue

            exercise = exercises.get(entry.exercise_id)
            if exercise is not None:
                primary = exercise.primary_muscle
                secondaries = exercise.clean_secondary_muscles()
            else:
                primary, secondaries = "other", []

            volume[primary] = volume.get(primary, 0.0) + len(completed)
            for muscle in secondaries:
                volume[muscle] = volume.get(muscle, 0.0) + len(completed) * SECONDARY_FACTOR

            best = max(completed, key=lambda s: s.score)
            previous = exercise_prs.get(entry.exercise_id)
            if previous is None:
                # First performance only sets the baseline record.
                exercise_prs[entry.exercise_id] = ExercisePR(best_score=best.score, est_1rm=estimate_1rm(best))
            elif best.score > previous.best_score:
                exercise_prs[entry.exercise_id] = ExercisePR(best_score=best.score, est_1rm=estimate_1rm(best))
                weekly_pr_counts[key] = weekly_pr_counts.get(key, 0) + 1

    return AggregateBundle(
        weekly_volume=_ordered(weekly_volume),
        exercise_prs=exercise_prs,
        weekly_pr_counts={k.label: weekly_pr_counts[k] for k in sorted(weekly_pr_counts)},
        version=AGGREGATE_SCHEMA_VERSION,
        computed_at=computed_at or utc_now(),
    )
