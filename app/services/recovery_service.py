"""
Recovery estimator service.

Runs :func:`~app.engine.recovery.compute_recovery` inline against the data
accessor and caches the result.  Failures never propagate: the view then
carries an ``error`` string and keeps the last successful muscles.

Concurrent refreshes are single-flight: one caller computes while the
others wait on the lock, and a waiter whose refresh was already served by
the caller ahead of it returns that result instead of computing again.
"""

import datetime
import logging
import threading
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.db.accessor import DataAccessor
from app.engine.cache import RefreshPolicy, ResultCache
from app.engine.recovery import RecoveryConfig, compute_recovery
from app.schemas.recovery import RecoveryBundle, RecoveryView
from app.schemas.training import utc_now

logger = logging.getLogger(__name__)


class RecoveryEstimator:
    """Cached, thread-safe access to per-muscle recovery."""

    def __init__(self, accessor: DataAccessor, config: Optional[RecoveryConfig] = None,
                 max_age: datetime.timedelta = datetime.timedelta(minutes=60),
                 clock: Callable[[], datetime.datetime] = utc_now, ):
        self.accessor = accessor
        self.config = config
        self.clock = clock
        self._cache: ResultCache[RecoveryBundle] = ResultCache(RefreshPolicy(max_age=max_age))
        self._refresh_lock = threading.Lock()
        self._generation = 0
        self._last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_recovery(self, force_refresh: bool = False) -> RecoveryView:
        """Recovery view, served from cache unless expired or forced."""
        if not force_refresh and self._cache.get_fresh(self.clock()) is not None:
            return self._view()
        return self._refresh()

    def refresh_recovery(self) -> RecoveryView:
        """Recompute, bypassing the cached result."""
        return self._refresh()

    def invalidate(self) -> None:
        self._cache.invalidate()

    def on_store_invalidated(self, store: str) -> None:
        """Accessor listener: training data changed."""
        if store in ("sessions", "exercises"):
            self.invalidate()

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh(self) -> RecoveryView:
        generation = self._generation
        with self._refresh_lock:
            if self._generation != generation:
                # Another caller finished a refresh while we waited.
                return self._view()
            try:
                self._compute()
            finally:
                self._generation += 1
            return self._view()

    def _compute(self) -> None:
        try:
            snapshot = self.accessor.get_all_cached()
        except Exception as exc:
            logger.error("Recovery refresh could not read training data: %s", exc)
            self._last_error = str(exc) or exc.__class__.__name__
            return

        try:
            bundle = compute_recovery(snapshot, as_of=self.clock(), config=self.config)
        except Exception as exc:
            logger.warning("Recovery computation failed: %s", exc)
            self._last_error = str(exc) or exc.__class__.__name__
            return

        self._cache.put(bundle, computed_at=bundle.updated_at)
        self._last_error = None
        logger.debug("Recovery refreshed for %d muscles", len(bundle.muscles))

    def _view(self) -> RecoveryView:
        entry = self._cache.peek()
        if entry is None:
            return RecoveryView(error=self._last_error)
        return RecoveryView(
            muscles=entry.value.muscles,
            updated_at=entry.value.updated_at,
            error=self._last_error,
            stale=not self._cache.policy.is_fresh(entry, self.clock()),
        )


class RecoveryRefreshScheduler:
    """Periodic background recovery refresh.

    Usage:
        scheduler = RecoveryRefreshScheduler(estimator)
        scheduler.start()
        # ... app runs ...
        scheduler.stop()
    """

    JOB_ID = "recovery_refresh"

    def __init__(self, estimator: RecoveryEstimator, interval_minutes: float = 60.0):
        self.estimator = estimator
        self.interval_minutes = interval_minutes
        self.scheduler: Optional[BackgroundScheduler] = None

    @property
    def is_running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        if self.scheduler is not None:
            logger.warning("Recovery refresh scheduler is already running")
            return

        self.scheduler = BackgroundScheduler(timezone="UTC")
        self.scheduler.add_job(
            self._run_refresh,
            IntervalTrigger(minutes=self.interval_minutes),
            id=self.JOB_ID,
            name="Recovery refresh",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info("Recovery refresh scheduler started (every %s min)", self.interval_minutes)

    def stop(self) -> None:
        if self.scheduler is None:
            return
        self.scheduler.shutdown(wait=True)
        self.scheduler = None
        logger.info("Recovery refresh scheduler stopped")

    def next_run_time(self) -> Optional[datetime.datetime]:
        if self.scheduler is None:
            return None
        job = self.scheduler.get_job(self.JOB_ID)
        return job.next_run_time if job else None

    def _run_refresh(self) -> None:
        view = self.estimator.refresh_recovery()
        if view.error:
            logger.warning("Scheduled recovery refresh failed: %s", view.error)
