"""
Analytics endpoints — recovery, aggregates and training trends.
"""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_analytics_service, get_recovery_estimator
from app.core.exceptions import NotFoundError
from app.schemas.aggregates import AggregateBundle, ExercisePR
from app.schemas.analytics import AnalyticsBundle
from app.schemas.recovery import RecoveryView
from app.services.analytics_service import TrainingAnalyticsService
from app.services.recovery_service import RecoveryEstimator

router = APIRouter()


@router.get(
    "/recovery",
    summary="Get per-muscle recovery (percent, status, ETA to full recovery).",
    response_model=RecoveryView,
)
def get_recovery(
    force_refresh: bool = Query(False, description="Recompute instead of serving the cached result"),
    estimator: RecoveryEstimator = Depends(get_recovery_estimator),
):
    return estimator.get_recovery(force_refresh=force_refresh)


@router.post(
    "/recovery/refresh",
    summary="Recompute recovery now.",
    response_model=RecoveryView,
)
def refresh_recovery(estimator: RecoveryEstimator = Depends(get_recovery_estimator)):
    return estimator.refresh_recovery()


@router.get(
    "/aggregates",
    summary="Get weekly volume and personal records.",
    response_model=AggregateBundle,
)
def get_aggregates(
    force_refresh: bool = Query(False),
    service: TrainingAnalyticsService = Depends(get_analytics_service),
):
    return service.get_aggregates(force_refresh=force_refresh)


@router.get(
    "/aggregates/prs/{exercise_id}",
    summary="Get the personal record of one exercise.",
    response_model=ExercisePR,
)
def get_exercise_pr(exercise_id: str, service: TrainingAnalyticsService = Depends(get_analytics_service)):
    pr = service.get_exercise_pr(exercise_id)
    if pr is None:
        raise NotFoundError(f"No personal record for exercise '{exercise_id}'", {"exercise_id": exercise_id})
    return pr


@router.get(
    "/trends",
    summary="Get volume trend, intensity distribution, plateaus and undertrained muscles.",
    response_model=AnalyticsBundle,
)
def get_trends(
    force_refresh: bool = Query(False),
    service: TrainingAnalyticsService = Depends(get_analytics_service),
):
    return service.get_analytics(force_refresh=force_refresh)
