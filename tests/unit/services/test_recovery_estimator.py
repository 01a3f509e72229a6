"""
Unit tests for the recovery estimator service.

Tests caching and expiry, forced refresh, failure handling (errors are
reported, prior results kept) and convergence of concurrent refreshes.
"""

import datetime
import threading
import time

from app.schemas.training import Exercise, Session, SessionEntry, SetEntry, TrainingSnapshot
from app.services.recovery_service import RecoveryEstimator, RecoveryRefreshScheduler

T0 = datetime.datetime(2025, 3, 10, 18, 0, tzinfo=datetime.timezone.utc)


# ======================================================================
# Helpers
# ======================================================================


def _make_snapshot() -> TrainingSnapshot:
    session = Session(id="s1", date=T0.date(), ended_at=T0 - datetime.timedelta(hours=6),
                      entries=[SessionEntry(exercise_id="bench", sets=[SetEntry(weight_kg=80.0, reps=8)] * 4)])
    bench = Exercise(id="bench", name="Bench Press", muscle_group="chest", secondary_muscles=["triceps"])
    return TrainingSnapshot(sessions=[session], exercises=[bench])


class FakeAccessor:
    """Counts reads; raises when ``error`` is set; optional delay."""

    def __init__(self, snapshot=None, delay: float = 0.0):
        self.snapshot = snapshot if snapshot is not None else _make_snapshot()
        self.delay = delay
        self.error: Exception | None = None
        self.calls = 0
        self._lock = threading.Lock()

    def get_all_cached(self, force: bool = False):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.snapshot


class Clock:
    def __init__(self, now: datetime.datetime = T0):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += datetime.timedelta(**kwargs)


def _make_estimator(accessor=None, clock=None) -> RecoveryEstimator:
    return RecoveryEstimator(accessor or FakeAccessor(), max_age=datetime.timedelta(minutes=60),
                             clock=clock or Clock())


# ======================================================================
# Caching
# ======================================================================


class TestCaching:

    def test_first_call_computes(self):
        view = _make_estimator().get_recovery()
        assert view.error is None
        assert view.updated_at == T0
        assert view.stale is False
        chest = next(m for m in view.muscles if m.muscle == "chest")
        assert chest.percent < 100.0

    def test_cached_result_reused(self):
        accessor = FakeAccessor()
        estimator = _make_estimator(accessor)
        first = estimator.get_recovery()
        second = estimator.get_recovery()
        assert accessor.calls == 1
        assert first == second

    def test_force_refresh_recomputes(self):
        accessor = FakeAccessor()
        clock = Clock()
        estimator = _make_estimator(accessor, clock)
        estimator.get_recovery()
        clock.advance(minutes=5)
        view = estimator.get_recovery(force_refresh=True)
        assert accessor.calls == 2
        assert view.updated_at == T0 + datetime.timedelta(minutes=5)

    def test_refresh_recovery_bypasses_cache(self):
        accessor = FakeAccessor()
        estimator = _make_estimator(accessor)
        estimator.get_recovery()
        estimator.refresh_recovery()
        assert accessor.calls == 2

    def test_expired_result_recomputed(self):
        accessor = FakeAccessor()
        clock = Clock()
        estimator = _make_estimator(accessor, clock)
        estimator.get_recovery()
        clock.advance(minutes=61)
        view = estimator.get_recovery()
        assert accessor.calls == 2
        assert view.updated_at == clock.now

    def test_invalidate(self):
        accessor = FakeAccessor()
        estimator = _make_estimator(accessor)
        estimator.get_recovery()
        estimator.invalidate()
        estimator.get_recovery()
        assert accessor.calls == 2

    def test_store_listener_ignores_measurements(self):
        accessor = FakeAccessor()
        estimator = _make_estimator(accessor)
        estimator.get_recovery()
        estimator.on_store_invalidated("measurements")
        estimator.get_recovery()
        assert accessor.calls == 1
        estimator.on_store_invalidated("sessions")
        estimator.get_recovery()
        assert accessor.calls == 2


# ======================================================================
# Failures
# ======================================================================


class TestFailures:

    def test_source_failure_without_prior_result(self):
        accessor = FakeAccessor()
        accessor.error = RuntimeError("database is locked")
        view = _make_estimator(accessor).get_recovery()
        assert view.error == "database is locked"
        assert view.muscles == []
        assert view.updated_at is None

    def test_source_failure_keeps_prior_muscles(self):
        accessor = FakeAccessor()
        clock = Clock()
        estimator = _make_estimator(accessor, clock)
        good = estimator.get_recovery()

        accessor.error = RuntimeError("database is locked")
        clock.advance(minutes=90)
        view = estimator.get_recovery()
        assert view.error == "database is locked"
        assert view.muscles == good.muscles
        assert view.updated_at == T0
        assert view.stale is True

    def test_computation_failure_is_reported(self):
        accessor = FakeAccessor()
        accessor.snapshot = object()  # not a snapshot
        view = _make_estimator(accessor).get_recovery()
        assert view.error
        assert view.muscles == []

    def test_error_message_falls_back_to_class_name(self):
        accessor = FakeAccessor()
        accessor.error = KeyError()
        view = _make_estimator(accessor).get_recovery()
        assert view.error == "KeyError"

    def test_success_clears_error(self):
        accessor = FakeAccessor()
        estimator = _make_estimator(accessor)
        accessor.error = RuntimeError("offline")
        assert estimator.get_recovery().error == "offline"
        assert estimator.last_error == "offline"

        accessor.error = None
        view = estimator.refresh_recovery()
        assert view.error is None
        assert view.muscles


# ======================================================================
# Concurrency
# ======================================================================


class TestConcurrentRefresh:

    def test_overlapping_refreshes_converge(self):
        accessor = FakeAccessor(delay=0.05)
        estimator = _make_estimator(accessor)
        barrier = threading.Barrier(8)
        views = []
        views_lock = threading.Lock()

        def worker():
            barrier.wait()
            view = estimator.refresh_recovery()
            with views_lock:
                views.append(view)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(views) == 8
        assert all(v.error is None for v in views)
        assert all(v.muscles == views[0].muscles for v in views)
        assert estimator.get_recovery().muscles == views[0].muscles
        assert accessor.calls <= 8


# ======================================================================
# Scheduler
# ======================================================================


class TestRecoveryRefreshScheduler:

    def test_start_and_stop_are_idempotent(self):
        scheduler = RecoveryRefreshScheduler(_make_estimator(), interval_minutes=60)
        assert not scheduler.is_running
        assert scheduler.next_run_time() is None

        scheduler.start()
        try:
            scheduler.start()
            assert scheduler.is_running
            assert scheduler.next_run_time() is not None
        finally:
            scheduler.stop()
        scheduler.stop()
        assert not scheduler.is_running

    def test_job_refreshes_estimator(self):
        accessor = FakeAccessor()
        scheduler = RecoveryRefreshScheduler(_make_estimator(accessor))
        scheduler._run_refresh()
        assert accessor.calls == 1
