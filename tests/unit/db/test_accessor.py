"""
Unit tests for the training data repository and cached accessor.

Uses an in-memory SQLite database.
"""

import datetime

import pytest
from sqlmodel import Session

from app.db.accessor import CachedDataAccessor, StaticDataAccessor
from app.db.init_db import init_db
from app.db.repositories.training_data import TrainingDataRepository
from app.models.training import ExerciseRecord, MeasurementRecord, SessionRecord
from app.schemas.training import MovementType, TrainingSnapshot


# ======================================================================
# Helpers
# ======================================================================


def _session_record(id: str, day: int = 6, **overrides) -> SessionRecord:
    fields = {
        "id": id,
        "date": datetime.date(2025, 1, day),
        "week_number": 1,
        "entries": [{"exercise_id": "bench", "sets": [{"weight_kg": 60.0, "reps": 8, "rpe": 8}]}],
    }
    fields.update(overrides)
    return SessionRecord(**fields)


def _seed(engine, *rows) -> None:
    with Session(engine) as session:
        session.add_all(rows)
        session.commit()


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# ======================================================================
# Repository
# ======================================================================


class TestTrainingDataRepository:

    def test_converts_sessions(self, sqlite_engine):
        ended = datetime.datetime(2025, 1, 6, 19, 30, tzinfo=datetime.timezone.utc)
        _seed(sqlite_engine, _session_record("s1", phase_number=2, ended_at=ended))
        with Session(sqlite_engine) as session:
            sessions = TrainingDataRepository(session).list_sessions()
        assert len(sessions) == 1
        s = sessions[0]
        assert (s.id, s.phase, s.week_number) == ("s1", 2, 1)
        assert s.entries[0].sets[0].score == 480.0
        assert s.performed_at() == ended

    def test_soft_deleted_rows_excluded(self, sqlite_engine):
        deleted_at = datetime.datetime(2025, 2, 1, tzinfo=datetime.timezone.utc)
        _seed(sqlite_engine,
              _session_record("s1"), _session_record("s2", deleted_at=deleted_at),
              ExerciseRecord(id="gone", name="Gone", muscle_group="chest", deleted_at=deleted_at),
              MeasurementRecord(date=datetime.date(2025, 1, 1), weight_kg=80.0, deleted_at=deleted_at))
        with Session(sqlite_engine) as session:
            repo = TrainingDataRepository(session)
            assert [s.id for s in repo.list_sessions()] == ["s1"]
            assert repo.list_exercises() == []
            assert repo.list_measurements() == []

    def test_exercise_fields(self, sqlite_engine):
        _seed(sqlite_engine, ExerciseRecord(id="bench", name="Bench Press", muscle_group="chest",
                                            secondary_muscles=["triceps", "shoulders"], movement_type="compound"))
        with Session(sqlite_engine) as session:
            [ex] = TrainingDataRepository(session).list_exercises()
        assert ex.primary_muscle == "chest"
        assert ex.secondary_muscles == ["triceps", "shoulders"]
        assert ex.movement_type is MovementType.COMPOUND

    def test_blank_muscle_inferred_from_name(self, sqlite_engine):
        _seed(sqlite_engine, ExerciseRecord(id="x1", name="Incline Dumbbell Press", muscle_group=" "))
        with Session(sqlite_engine) as session:
            [ex] = TrainingDataRepository(session).list_exercises()
        assert ex.primary_muscle == "chest"
        assert "triceps" in ex.secondary_muscles

    def test_init_db_seeds_catalog_once(self, sqlite_engine):
        init_db(sqlite_engine, seed_catalog=True)
        init_db(sqlite_engine, seed_catalog=True)
        with Session(sqlite_engine) as session:
            exercises = TrainingDataRepository(session).list_exercises()
        ids = [ex.id for ex in exercises]
        assert "deadlift" in ids
        assert len(ids) == len(set(ids))
        assert next(ex for ex in exercises if ex.id == "deadlift").high_fatigue


# ======================================================================
# Cached accessor
# ======================================================================


class TestCachedDataAccessor:

    def _make_accessor(self, engine, clock):
        return CachedDataAccessor(lambda: Session(engine), clock=clock)

    def test_snapshot_contents(self, sqlite_engine):
        _seed(sqlite_engine, _session_record("s1"),
              ExerciseRecord(id="bench", name="Bench Press", muscle_group="chest"),
              MeasurementRecord(date=datetime.date(2025, 1, 1), weight_kg=80.0))
        snapshot = self._make_accessor(sqlite_engine, Clock()).get_all_cached()
        assert isinstance(snapshot, TrainingSnapshot)
        assert (len(snapshot.sessions), len(snapshot.exercises), len(snapshot.measurements)) == (1, 1, 1)

    def test_ttl_per_store(self, sqlite_engine):
        clock = Clock()
        accessor = self._make_accessor(sqlite_engine, clock)
        accessor.get_all_cached()

        _seed(sqlite_engine, _session_record("s1"), ExerciseRecord(id="bench", name="Bench", muscle_group="chest"))
        clock.now += 30
        cached = accessor.get_all_cached()
        assert cached.sessions == [] and cached.exercises == []

        clock.now += 16  # 46s: sessions (45s) expired, exercises (60s) not
        snapshot = accessor.get_all_cached()
        assert len(snapshot.sessions) == 1
        assert snapshot.exercises == []

    def test_force_reloads_everything(self, sqlite_engine):
        accessor = self._make_accessor(sqlite_engine, Clock())
        accessor.get_all_cached()
        _seed(sqlite_engine, _session_record("s1"))
        assert len(accessor.get_all_cached(force=True).sessions) == 1

    def test_invalidate_notifies_listeners(self, sqlite_engine):
        accessor = self._make_accessor(sqlite_engine, Clock())
        accessor.get_all_cached()
        seen = []
        accessor.add_listener(seen.append)

        _seed(sqlite_engine, _session_record("s1"))
        accessor.invalidate("sessions")
        assert seen == ["sessions"]
        assert len(accessor.get_all_cached().sessions) == 1

        accessor.invalidate()
        assert seen == ["sessions", "sessions", "exercises", "measurements"]

    def test_invalidate_unknown_store(self, sqlite_engine):
        with pytest.raises(ValueError):
            self._make_accessor(sqlite_engine, Clock()).invalidate("workouts")


class TestStaticDataAccessor:

    def test_returns_snapshot(self):
        snapshot = TrainingSnapshot()
        assert StaticDataAccessor(snapshot).get_all_cached() is snapshot
