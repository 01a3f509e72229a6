"""
Training analytics service — orchestrates the aggregation and analytics
units.

Each bundle is cached with its schema version and a time-based refresh
policy.  When the accessor or a unit fails the last known good bundle is
served; only when nothing was ever computed does the failure surface as
:class:`SnapshotUnavailableError` / :class:`ComputationError`.
"""

import datetime
import logging
import threading
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.exceptions import ComputationError, SnapshotUnavailableError, TrainingAnalyticsError
from app.db.accessor import DataAccessor
from app.engine.aggregation import AGGREGATE_SCHEMA_VERSION
from app.engine.analytics import ANALYTICS_SCHEMA_VERSION
from app.engine.cache import RefreshPolicy, ResultCache
from app.engine.worker import UNIT_AGGREGATES, UNIT_ANALYTICS, ComputationRunner
from app.schemas.aggregates import AggregateBundle, ExercisePR
from app.schemas.analytics import AnalyticsBundle
from app.schemas.compute import ComputeFailure
from app.schemas.training import utc_now

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=BaseModel)


class TrainingAnalyticsService:
    """Cached aggregate and analytics bundles."""

    def __init__(self, accessor: DataAccessor, runner: ComputationRunner,
                 max_age: datetime.timedelta = datetime.timedelta(minutes=30),
                 clock: Callable[[], datetime.datetime] = utc_now, ):
        self.accessor = accessor
        self.runner = runner
        self.clock = clock
        self._caches: dict[str, ResultCache] = {
            UNIT_AGGREGATES: ResultCache(RefreshPolicy(max_age=max_age, version=AGGREGATE_SCHEMA_VERSION)),
            UNIT_ANALYTICS: ResultCache(RefreshPolicy(max_age=max_age, version=ANALYTICS_SCHEMA_VERSION)),
        }
        self._locks = {unit: threading.Lock() for unit in self._caches}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_aggregates(self, force_refresh: bool = False) -> AggregateBundle:
        return self._get(UNIT_AGGREGATES, AggregateBundle, force_refresh)

    def get_analytics(self, force_refresh: bool = False) -> AnalyticsBundle:
        return self._get(UNIT_ANALYTICS, AnalyticsBundle, force_refresh)

    def get_exercise_pr(self, exercise_id: str) -> Optional[ExercisePR]:
        return self.get_aggregates().exercise_prs.get(exercise_id)

    def get_weekly_volume(self) -> dict[str, dict[str, float]]:
        return self.get_aggregates().weekly_volume

    def invalidate(self) -> None:
        for cache in self._caches.values():
            cache.invalidate()

    def on_store_invalidated(self, store: str) -> None:
        """Accessor listener: training data changed."""
        if store in ("sessions", "exercises"):
            self.invalidate()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get(self, unit: str, model: type[B], force_refresh: bool) -> B:
        cache = self._caches[unit]
        if not force_refresh:
            entry = cache.get_fresh(self.clock())
            if entry is not None:
                return entry.value

        with self._locks[unit]:
            if not force_refresh:
                entry = cache.get_fresh(self.clock())
                if entry is not None:
                    return entry.value
            return self._compute(unit, model, cache)

    def _compute(self, unit: str, model: type[B], cache: ResultCache) -> B:
        try:
            snapshot = self.accessor.get_all_cached()
        except Exception as exc:
            logger.error("Could not read training data for '%s': %s", unit, exc)
            return self._fallback(cache, SnapshotUnavailableError(details={"unit": unit, "reason": str(exc)}))

        computed_at = self.clock()
        result = self.runner.run(unit, snapshot)
        if isinstance(result, ComputeFailure):
            return self._fallback(cache, ComputationError(result.error, details={"unit": unit}))

        try:
            bundle = model.model_validate(result.bundle)
        except ValidationError as exc:
            logger.error("Unit '%s' returned a malformed bundle: %s", unit, exc)
            return self._fallback(cache, ComputationError(f"Malformed {unit} bundle", details={"unit": unit}))

        version = getattr(bundle, "version", cache.policy.version)
        cache.put(bundle, computed_at=computed_at, version=version)
        logger.info("Computed '%s' bundle", unit)
        return bundle

    @staticmethod
    def _fallback(cache: ResultCache, error: TrainingAnalyticsError):
        entry = cache.peek()
        if entry is not None and (cache.policy.version is None or entry.version == cache.policy.version):
            logger.info("Serving last known good bundle from %s", entry.computed_at.isoformat())
            return entry.value
        raise error
