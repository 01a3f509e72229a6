"""Exercise catalog and name-based muscle inference."""

from app.catalog.exercise_catalog import catalog_exercises, exercise_from_name, get_exercise
from app.catalog.muscle_map import infer_muscles, is_isolation_name

__all__ = ["catalog_exercises", "exercise_from_name", "get_exercise", "infer_muscles", "is_isolation_name"]
