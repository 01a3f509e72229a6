"""
Shared API dependencies.

One accessor, runner, estimator and analytics service per process.  Tests
replace them with ``app.dependency_overrides``.
"""

import datetime
from functools import lru_cache

from sqlmodel import Session

from app.core.config import settings
from app.db.accessor import CachedDataAccessor
from app.db.session import engine
from app.engine.worker import ComputationRunner
from app.services.analytics_service import TrainingAnalyticsService
from app.services.recovery_service import RecoveryEstimator


@lru_cache
def get_data_accessor() -> CachedDataAccessor:
    return CachedDataAccessor(
        lambda: Session(engine),
        ttls={
            "sessions": settings.CACHE_TTL_SESSIONS_S,
            "exercises": settings.CACHE_TTL_EXERCISES_S,
            "measurements": settings.CACHE_TTL_MEASUREMENTS_S,
        },
    )


@lru_cache
def get_computation_runner() -> ComputationRunner:
    return ComputationRunner(backend=settings.COMPUTE_BACKEND, max_workers=settings.COMPUTE_MAX_WORKERS)


@lru_cache
def get_recovery_estimator() -> RecoveryEstimator:
    accessor = get_data_accessor()
    estimator = RecoveryEstimator(accessor, max_age=datetime.timedelta(minutes=settings.RECOVERY_MAX_AGE_MINUTES))
    accessor.add_listener(estimator.on_store_invalidated)
    return estimator


@lru_cache
def get_analytics_service() -> TrainingAnalyticsService:
    accessor = get_data_accessor()
    service = TrainingAnalyticsService(accessor, get_computation_runner(),
                                       max_age=datetime.timedelta(minutes=settings.BUNDLE_MAX_AGE_MINUTES), )
    accessor.add_listener(service.on_store_invalidated)
    return service
