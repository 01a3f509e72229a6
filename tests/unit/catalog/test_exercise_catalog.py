"""Tests for the exercise catalog."""

from app.catalog.exercise_catalog import (
    EXERCISE_CATALOG,
    catalog_exercises,
    exercise_from_name,
    get_exercise,
)
from app.schemas.training import MUSCLE_GROUPS, Exercise, MovementType


class TestCatalogContents:
    """Verify the built-in exercise catalog is well-formed."""

    def test_catalog_not_empty(self):
        assert len(EXERCISE_CATALOG) >= 20, (
            f"Expected at least 20 exercises, got {len(EXERCISE_CATALOG)}"
        )

    def test_all_entries_are_classified(self):
        for eid, ex in EXERCISE_CATALOG.items():
            assert isinstance(ex, Exercise), f"Catalog entry '{eid}' is {type(ex)}"
            assert isinstance(ex.movement_type, MovementType), f"{eid}: missing movement_type"

    def test_exercise_id_matches_key(self):
        for key, ex in EXERCISE_CATALOG.items():
            assert ex.id == key, f"Key '{key}' does not match id '{ex.id}'"

    def test_muscles_are_known_groups(self):
        for eid, ex in EXERCISE_CATALOG.items():
            assert ex.muscle_group in MUSCLE_GROUPS, f"{eid}: unknown primary '{ex.muscle_group}'"
            for m in ex.secondary_muscles:
                assert m in MUSCLE_GROUPS, f"{eid}: unknown secondary '{m}'"
            assert ex.muscle_group not in ex.secondary_muscles, f"{eid}: primary listed as secondary"

    def test_isolation_entries_have_no_secondaries(self):
        for eid, ex in EXERCISE_CATALOG.items():
            if ex.movement_type is MovementType.ISOLATION:
                assert ex.secondary_muscles == [], f"{eid}: isolation with secondaries"

    def test_no_duplicate_display_names(self):
        names = [ex.name for ex in EXERCISE_CATALOG.values()]
        assert len(names) == len(set(names))

    def test_squat_and_hinge_patterns_are_high_fatigue(self):
        for eid in ("back_squat", "front_squat", "deadlift", "romanian_deadlift"):
            assert EXERCISE_CATALOG[eid].high_fatigue, f"{eid} should be high fatigue"
        assert not EXERCISE_CATALOG["bicep_curl"].high_fatigue

    def test_catalog_exercises_sorted(self):
        ids = [ex.id for ex in catalog_exercises()]
        assert ids == sorted(EXERCISE_CATALOG)


class TestCatalogLookup:
    """Test the get_exercise() function."""

    def test_known_exercise(self):
        ex = get_exercise("back_squat")
        assert ex is not None
        assert ex.name == "Back Squat"
        assert ex.primary_muscle == "quads"

    def test_unknown_exercise_returns_none(self):
        assert get_exercise("nonexistent_exercise") is None

    def test_empty_string_returns_none(self):
        assert get_exercise("") is None


class TestExerciseFromName:

    def test_compound_keeps_secondaries(self):
        ex = exercise_from_name("u1", "Barbell Row")
        assert ex.primary_muscle == "back"
        assert ex.secondary_muscles == ["biceps"]
        assert ex.movement_type is MovementType.COMPOUND

    def test_isolation_drops_secondaries(self):
        ex = exercise_from_name("u2", "Leg Extension")
        assert ex.primary_muscle == "quads"
        assert ex.secondary_muscles == []
        assert ex.movement_type is MovementType.ISOLATION

    def test_unknown_name(self):
        ex = exercise_from_name("u3", "Sled Push", high_fatigue=True)
        assert ex.primary_muscle == "other"
        assert ex.high_fatigue
