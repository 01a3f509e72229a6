"""What does the analytics core say about a sample training log?

Builds a snapshot from an embedded FitNotes-style export (date, exercise
name, weight, reps), then prints recovery, weekly volume, PRs and trends.

Usage:
    python scripts/simulate_recovery.py
"""

import datetime
import sys
from collections import defaultdict
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.catalog.exercise_catalog import catalog_exercises, exercise_from_name
from app.core.logging import setup_logging
from app.engine.aggregation import compute_aggregates
from app.engine.analytics import compute_analytics
from app.engine.recovery import compute_recovery
from app.schemas.training import Session, SessionEntry, SetEntry, TrainingSnapshot

AS_OF = datetime.datetime(2025, 12, 14, 18, 0, tzinfo=datetime.timezone.utc)
FIRST_DAY = datetime.date(2025, 11, 10)

# ─── Export exercise name → catalog ID ──────────────────────────────
EXERCISE_MAP = {
    "Conventional Barbell Deadlift": "deadlift",
    "Barbell Back Squat": "back_squat",
    "Barbell Overhead Press": "overhead_press",
    "Barbell Flat Bench Press": "bench_press",
    "Weighted Pull-up": "pull_up",
    "Weighted Dead Bug": "weighted_dead_bug",
    "Farmer's Carry": "farmers_carry",
    "Cable Pallof Press Hold": "cable_pallof_press",
}

DEFAULT_RPE = 7.0

RAW_DATA = [
    ("2025-11-13", "Conventional Barbell Deadlift", 60, 5),
    ("2025-11-13", "Conventional Barbell Deadlift", 80, 3),
    ("2025-11-13", "Conventional Barbell Deadlift", 90, 2),
    ("2025-11-13", "One-Arm Dumbbell Row", 20, 10),
    ("2025-11-13", "One-Arm Dumbbell Row", 22.5, 10),
    ("2025-11-13", "Farmer's Carry", 60, 0),
    ("2025-11-16", "Barbell Back Squat", 60, 6),
    ("2025-11-16", "Barbell Back Squat", 70, 5),
    ("2025-11-16", "Barbell Overhead Press", 30, 5),
    ("2025-11-16", "Barbell Flat Bench Press", 60, 5),
    ("2025-11-20", "Conventional Barbell Deadlift", 90, 3),
    ("2025-11-20", "Conventional Barbell Deadlift", 95, 2),
    ("2025-11-20", "Weighted Pull-up", 5, 5),
    ("2025-11-20", "Cable Pallof Press Hold", 16, 10),
    ("2025-11-23", "Barbell Back Squat", 70, 5),
    ("2025-11-23", "Barbell Flat Bench Press", 60, 6),
    ("2025-11-23", "Barbell Overhead Press", 32.5, 5),
    ("2025-11-27", "Conventional Barbell Deadlift", 95, 3),
    ("2025-11-27", "Weighted Pull-up", 5, 6),
    ("2025-11-30", "Barbell Back Squat", 75, 5),
    ("2025-11-30", "Barbell Flat Bench Press", 60, 6),
    ("2025-12-04", "Conventional Barbell Deadlift", 100, 3),
    ("2025-12-04", "Weighted Pull-up", 7.5, 5),
    ("2025-12-07", "Barbell Back Squat", 75, 5),
    ("2025-12-07", "Barbell Flat Bench Press", 60, 6),
    ("2025-12-07", "Weighted Dead Bug", 5, 12),
    ("2025-12-11", "Conventional Barbell Deadlift", 100, 4),
    ("2025-12-11", "Weighted Pull-up", 7.5, 6),
    ("2025-12-13", "Barbell Back Squat", 80, 5),
    ("2025-12-13", "Barbell Flat Bench Press", 62.5, 5),
    ("2025-12-13", "Barbell Overhead Press", 35, 4),
]


def _exercise_id(name: str) -> str:
    return EXERCISE_MAP.get(name) or name.lower().replace(" ", "_").replace("-", "_")


def build_snapshot(raw_data) -> TrainingSnapshot:
    """Group raw sets into sessions (one per date, one entry per exercise)."""
    by_date = defaultdict(lambda: defaultdict(list))
    for date, name, weight_kg, reps in raw_data:
        by_date[date][name].append(SetEntry(weight_kg=weight_kg, reps=reps, rpe=DEFAULT_RPE))

    sessions = []
    for date_str in sorted(by_date):
        date = datetime.date.fromisoformat(date_str)
        entries = [SessionEntry(exercise_id=_exercise_id(name), sets=sets) for name, sets in by_date[date_str].items()]
        sessions.append(Session(id=date_str, date=date, week_number=(date - FIRST_DAY).days // 7 + 1,
                                entries=entries))

    exercises = {ex.id: ex for ex in catalog_exercises()}
    for name in {name for _, name, _, _ in raw_data}:
        ex_id = _exercise_id(name)
        if ex_id not in exercises:
            exercises[ex_id] = exercise_from_name(ex_id, name)

    return TrainingSnapshot(sessions=sessions, exercises=list(exercises.values()))


def main():
    setup_logging()
    snapshot = build_snapshot(RAW_DATA)

    recovery = compute_recovery(snapshot, as_of=AS_OF)
    aggregates = compute_aggregates(snapshot, computed_at=AS_OF)
    analytics = compute_analytics(snapshot)

    print()
    print("=" * 65)
    print(f"  Recovery — {AS_OF.strftime('%A %d %B %Y %H:%M')} UTC")
    print("=" * 65)
    print(f"  {'Muscle':<12} {'Recovered':>10} {'Status':<10} {'Full at':>18}")
    print("  " + "-" * 63)
    for state in recovery.muscles:
        eta = state.eta_full.strftime("%d %b %H:%M") if state.eta_full and state.eta_full > AS_OF else "now"
        print(f"  {state.muscle:<12} {state.percent:>9.1f}% {state.status:<10} {eta:>18}")

    print()
    print("  Weekly volume (sets, secondary muscles at 0.5x):")
    for week, muscles in aggregates.weekly_volume.items():
        cells = ", ".join(f"{m} {v:g}" for m, v in sorted(muscles.items()))
        prs = aggregates.weekly_pr_counts.get(week, 0)
        print(f"  {week:<7} PRs {prs}  {cells}")

    print()
    print("  Personal records:")
    for ex_id, pr in sorted(aggregates.exercise_prs.items()):
        print(f"  {ex_id:<28} best {pr.best_score:>7.1f}  e1RM {pr.est_1rm:>6.1f}")

    print()
    print("  Intensity: " + ", ".join(f"{b.bucket} {b.sets}%" for b in analytics.intensity_distribution))
    print("  Plateaus:  " + (", ".join(f"{p.exercise} ({p.change_pct:+.1f}%)" for p in analytics.plateaus) or "none"))
    print("  Undertrained: " + (", ".join(f"{u.muscle} ({u.avg_sets:.1f}/wk)" for u in analytics.undertrained)
                                or "none"))
    print()


if __name__ == "__main__":
    main()
