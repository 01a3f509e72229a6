"""Tests for name-based muscle inference."""

import pytest

from app.catalog.muscle_map import infer_muscles, is_isolation_name


class TestInferMuscles:

    @pytest.mark.parametrize("name,primary", [
        ("Tricep Pushdown", "triceps"),
        ("Cable Rope Pressdown", "triceps"),
        ("Skull Crusher", "triceps"),
        ("Lying Leg Curl", "hamstrings"),
        ("Leg Extension", "quads"),
        ("Romanian Deadlift", "hamstrings"),
        ("Hack Squat", "quads"),
        ("Hip Thrust", "glutes"),
        ("Seated Calf Raise", "calves"),
        ("Decline Crunch", "core"),
        ("Hanging Leg Raise", "core"),
        ("Hammer Curl", "biceps"),
        ("Wrist Curl", "forearms"),
        ("Lateral Raise", "shoulders"),
        ("Seated Shoulder Press", "shoulders"),
        ("Pec Deck", "chest"),
        ("Incline Bench Press", "chest"),
        ("Chin-Up", "back"),
        ("Seated Cable Row", "back"),
    ])
    def test_primary(self, name, primary):
        assert infer_muscles(name)[0] == primary

    def test_compound_secondaries(self):
        assert infer_muscles("Bench Press") == ("chest", ["triceps", "shoulders"])
        assert infer_muscles("Deadlift") == ("hamstrings", ["glutes", "back", "forearms"])

    def test_isolation_has_no_secondaries(self):
        assert infer_muscles("Cable Fly") == ("chest", [])

    @pytest.mark.parametrize("name", ["", "Sled Push", "Yoga"])
    def test_unknown_falls_back_to_other(self, name):
        assert infer_muscles(name) == ("other", [])

    def test_case_insensitive(self):
        assert infer_muscles("BARBELL ROW")[0] == "back"


class TestIsIsolationName:

    @pytest.mark.parametrize("name,expected", [
        ("Bicep Curl", True),
        ("Leg Extension", True),
        ("Lateral Raise", True),
        ("Cable Fly", True),
        ("Rope Pushdown", True),
        ("Rear Delt Fly", True),
        ("Bench Press", False),
        ("Back Squat", False),
        ("Pull-Up", False),
        ("", False),
    ])
    def test_keywords(self, name, expected):
        assert is_isolation_name(name) is expected
