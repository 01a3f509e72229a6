"""
Built-in exercise catalog.

Each entry is an :class:`~app.schemas.training.Exercise` with a primary
muscle group, secondary muscles, a compound / isolation classification and
the high-fatigue flag used by the recovery model (heavy hinge and squat
patterns recover more slowly and deposit more stress).

The catalog seeds a fresh database and backs the simulation script.  Users
can log exercises not listed here; :func:`exercise_from_name` builds an
entry from a free-text name via :mod:`app.catalog.muscle_map`.

To add a new exercise, call :func:`register_exercise` or append to
``_EXERCISES`` at import time.
"""

from __future__ import annotations

from app.catalog.muscle_map import infer_muscles, is_isolation_name
from app.schemas.training import Exercise, MovementType

# ======================================================================
# Catalog storage
# ======================================================================

EXERCISE_CATALOG: dict[str, Exercise] = {}


def register_exercise(exercise: Exercise) -> None:
    """Register an exercise in the global catalog."""
    EXERCISE_CATALOG[exercise.id] = exercise


def get_exercise(exercise_id: str) -> Exercise | None:
    """Look up an exercise by its ID.  Returns ``None`` if not found."""
    return EXERCISE_CATALOG.get(exercise_id)


def catalog_exercises() -> list[Exercise]:
    """All catalog entries, sorted by ID."""
    return [EXERCISE_CATALOG[k] for k in sorted(EXERCISE_CATALOG)]


def exercise_from_name(exercise_id: str, name: str, *, high_fatigue: bool = False) -> Exercise:
    """Build an exercise for a free-text name using muscle inference."""
    primary, secondaries = infer_muscles(name)
    movement = MovementType.ISOLATION if is_isolation_name(name) else MovementType.COMPOUND
    return Exercise(id=exercise_id, name=name, muscle_group=primary,
                    secondary_muscles=[] if movement is MovementType.ISOLATION else secondaries,
                    movement_type=movement, high_fatigue=high_fatigue, )


# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
C = MovementType.COMPOUND
I = MovementType.ISOLATION

# ======================================================================
# Built-in exercises
# ======================================================================

_EXERCISES: list[Exercise] = [
    # ── Lower Body ────────────────────────────────────────────────
    Exercise(id="back_squat", name="Back Squat", muscle_group="quads",
             secondary_muscles=["glutes", "hamstrings", "core"], movement_type=C, high_fatigue=True),
    Exercise(id="front_squat", name="Front Squat", muscle_group="quads",
             secondary_muscles=["glutes", "core"], movement_type=C, high_fatigue=True),
    Exercise(id="deadlift", name="Deadlift", muscle_group="hamstrings",
             secondary_muscles=["glutes", "back", "forearms"], movement_type=C, high_fatigue=True),
    Exercise(id="romanian_deadlift", name="Romanian Deadlift", muscle_group="hamstrings",
             secondary_muscles=["glutes", "back"], movement_type=C, high_fatigue=True),
    Exercise(id="leg_press", name="Leg Press", muscle_group="quads",
             secondary_muscles=["glutes"], movement_type=C),
    Exercise(id="bulgarian_split_squat", name="Bulgarian Split Squat", muscle_group="quads",
             secondary_muscles=["glutes"], movement_type=C),
    Exercise(id="leg_extension", name="Leg Extension", muscle_group="quads", movement_type=I),
    Exercise(id="leg_curl", name="Leg Curl", muscle_group="hamstrings", movement_type=I),
    Exercise(id="hip_thrust", name="Hip Thrust", muscle_group="glutes",
             secondary_muscles=["hamstrings"], movement_type=C),
    Exercise(id="standing_calf_raise", name="Standing Calf Raise", muscle_group="calves", movement_type=I),

    # ── Upper Push ────────────────────────────────────────────────
    Exercise(id="bench_press", name="Bench Press", muscle_group="chest",
             secondary_muscles=["triceps", "shoulders"], movement_type=C),
    Exercise(id="incline_db_press", name="Incline Dumbbell Press", muscle_group="chest",
             secondary_muscles=["shoulders", "triceps"], movement_type=C),
    Exercise(id="overhead_press", name="Overhead Press", muscle_group="shoulders",
             secondary_muscles=["triceps", "core"], movement_type=C),
    Exercise(id="dip", name="Dip", muscle_group="chest",
             secondary_muscles=["triceps", "shoulders"], movement_type=C),
    Exercise(id="cable_fly", name="Cable Fly", muscle_group="chest", movement_type=I),
    Exercise(id="lateral_raise", name="Lateral Raise", muscle_group="shoulders", movement_type=I),
    Exercise(id="tricep_pushdown", name="Tricep Pushdown", muscle_group="triceps", movement_type=I),

    # ── Upper Pull ────────────────────────────────────────────────
    Exercise(id="barbell_row", name="Barbell Row", muscle_group="back",
             secondary_muscles=["biceps", "shoulders"], movement_type=C),
    Exercise(id="pull_up", name="Pull-Up", muscle_group="back",
             secondary_muscles=["biceps"], movement_type=C),
    Exercise(id="lat_pulldown", name="Lat Pulldown", muscle_group="back",
             secondary_muscles=["biceps"], movement_type=C),
    Exercise(id="bicep_curl", name="Bicep Curl", muscle_group="biceps", movement_type=I),
    Exercise(id="face_pull", name="Face Pull", muscle_group="shoulders", movement_type=I),

    # ── Core / Carry ──────────────────────────────────────────────
    Exercise(id="cable_pallof_press", name="Cable Pallof Press Hold", muscle_group="core", movement_type=I),
    Exercise(id="weighted_dead_bug", name="Weighted Dead Bug", muscle_group="core", movement_type=I),
    Exercise(id="farmers_carry", name="Farmer's Carry", muscle_group="forearms",
             secondary_muscles=["back", "core"], movement_type=C),
]

# Auto-register all built-in exercises
for _ex in _EXERCISES:
    register_exercise(_ex)
