"""
Analytics unit — cross-session diagnostics.

Four independent computations over one snapshot:

* **Volume trend**: completed sets per primary muscle, one row per week.
* **Undertrained**: average completed sets per observed week, flagged under
  ``undertrained_threshold``; lowest first, capped.
* **Intensity distribution**: share of completed sets per rep bucket,
  rounded to whole percent (the sum may drift from 100).
* **Plateaus**: first → last weekly best score per exercise over at least
  ``plateau_min_weeks`` weeks; change under ``plateau_threshold_pct`` is a
  plateau.  Flattest / most negative first, capped.

Weeks are ordered numerically (phase, week), never as strings.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.engine.weeks import WeekKey, week_key
from app.schemas.analytics import AnalyticsBundle, IntensityBucket, PlateauEntry, UndertrainedEntry, VolumeTrendRow
from app.schemas.training import DEFAULT_MUSCLE, Exercise, TrainingSnapshot

ANALYTICS_SCHEMA_VERSION = 1

# (label, lowest reps, highest reps); None = open-ended
_INTENSITY_BUCKETS: list[tuple[str, int, int | None]] = [
    ("1-3", 1, 3),
    ("4-6", 4, 6),
    ("7-9", 7, 9),
    ("10-12", 10, 12),
    ("13+", 13, None),
]


class AnalyticsConfig(BaseModel):
    """Thresholds and caps of the analytics unit."""

    undertrained_threshold: float = Field(8.0, gt=0.0, description="Average sets/week below which a muscle is flagged")
    undertrained_limit: int = Field(5, ge=1)
    plateau_min_weeks: int = Field(4, ge=2)
    plateau_threshold_pct: float = Field(1.0, description="Change (percent) below which an exercise is a plateau")
    plateau_limit: int = Field(8, ge=1)


DEFAULT_ANALYTICS_CONFIG = AnalyticsConfig()


# ======================================================================
# Volume trend / undertrained
# ======================================================================


def _weekly_primary_sets(snapshot: TrainingSnapshot, exercises: dict[str, Exercise]) -> dict[WeekKey, dict[str, int]]:
    """Completed sets per primary muscle per week.  Every week with a session is present."""
    weeks: dict[WeekKey, dict[str, int]] = {}
    for session in snapshot.sessions:
        muscles = weeks.setdefault(week_key(session), {})
        for entry in session.entries:
            count = len(entry.completed_sets())
            if count == 0:
                continue
            exercise = exercises.get(entry.exercise_id)
            muscle = exercise.primary_muscle if exercise is not None else DEFAULT_MUSCLE
            muscles[muscle] = muscles.get(muscle, 0) + count
    return weeks


def _compute_volume_trend(weeks: dict[WeekKey, dict[str, int]]) -> list[VolumeTrendRow]:
    return [VolumeTrendRow(week=key.label, muscles=dict(sorted(weeks[key].items()))) for key in sorted(weeks)]


def _compute_undertrained(weeks: dict[WeekKey, dict[str, int]], cfg: AnalyticsConfig) -> list[UndertrainedEntry]:
    totals: dict[str, int] = {}
    for muscles in weeks.values():
        for muscle, sets in muscles.items():
            totals[muscle] = totals.get(muscle, 0) + sets

    week_count = len(weeks) or 1
    flagged = [
        UndertrainedEntry(muscle=muscle, avg_sets=total / week_count)
        for muscle, total in totals.items()
        if total / week_count < cfg.undertrained_threshold
    ]
    flagged.sort(key=lambda e: (e.avg_sets, e.muscle))
    return flagged[:cfg.undertrained_limit]


# ======================================================================
# Intensity distribution
# ======================================================================


def _bucket_for(reps: int) -> str:
    for label, low, high in _INTENSITY_BUCKETS:
        if reps >= low and (high is None or reps <= high):
            return label
    return _INTENSITY_BUCKETS[-1][0]


def _compute_intensity(snapshot: TrainingSnapshot) -> list[IntensityBucket]:
    counts = {label: 0 for label, _, _ in _INTENSITY_BUCKETS}
    for session in snapshot.sessions:
        for entry in session.entries:
            for s in entry.completed_sets():
                counts[_bucket_for(s.reps)] += 1

    total = sum(counts.values()) or 1
    return [IntensityBucket(bucket=label, sets=round(count / total * 100)) for label, count in counts.items()]


# ======================================================================
# Plateaus
# ======================================================================


def _compute_plateaus(snapshot: TrainingSnapshot, exercises: dict[str, Exercise],
                      cfg: AnalyticsConfig, ) -> list[PlateauEntry]:
    # exercise id -> week -> best completed-set score
    weekly_best: dict[str, dict[WeekKey, float]] = {}
    for session in snapshot.sessions:
        key = week_key(session)
        for entry in session.entries:
            best = entry.best_score()
            if best <= 0:
                continue
            weeks = weekly_best.setdefault(entry.exercise_id, {})
            weeks[key] = max(weeks.get(key, 0.0), best)

    plateaus: list[PlateauEntry] = []
    for exercise_id, weeks in weekly_best.items():
        if len(weeks) < cfg.plateau_min_weeks:
            continue
        ordered = [weeks[k] for k in sorted(weeks)]
        first, last = ordered[0], ordered[-1]
        change = (last - first) / first
        if change * 100 >= cfg.plateau_threshold_pct:
            continue
        exercise = exercises.get(exercise_id)
        plateaus.append(PlateauEntry(
            exercise_id=exercise_id,
            exercise=(exercise.name if exercise is not None and exercise.name else exercise_id),
            change_pct=round(change * 100, 1),
            first_score=first,
            last_score=last,
            weeks=len(ordered),
        ))

    plateaus.sort(key=lambda p: (p.change_pct, p.exercise_id))
    return plateaus[:cfg.plateau_limit]


# ======================================================================
# Main entry point
# ======================================================================


def compute_analytics(snapshot: TrainingSnapshot, config: AnalyticsConfig | None = None) -> AnalyticsBundle:
    """Compute every analytics view for *snapshot*."""
    cfg = config or DEFAULT_ANALYTICS_CONFIG
    exercises = snapshot.exercise_map()
    weeks = _weekly_primary_sets(snapshot, exercises)

    return AnalyticsBundle(
        volume_trend=_compute_volume_trend(weeks),
        intensity_distribution=_compute_intensity(snapshot),
        plateaus=_compute_plateaus(snapshot, exercises, cfg),
        undertrained=_compute_undertrained(weeks, cfg),
    )
