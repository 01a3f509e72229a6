"""Orchestration services."""

from app.services.analytics_service import TrainingAnalyticsService
from app.services.recovery_service import RecoveryEstimator, RecoveryRefreshScheduler

__all__ = [
    "TrainingAnalyticsService",
    "RecoveryEstimator",
    "RecoveryRefreshScheduler",
]
