"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import get_computation_runner, get_recovery_estimator
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import TrainingAnalyticsError
from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.services.recovery_service import RecoveryRefreshScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()

    scheduler = None
    if settings.RECOVERY_REFRESH_ENABLED:
        scheduler = RecoveryRefreshScheduler(get_recovery_estimator(),
                                             interval_minutes=settings.RECOVERY_MAX_AGE_MINUTES)
        scheduler.start()

    yield

    if scheduler is not None:
        scheduler.stop()
    get_computation_runner().shutdown()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Training-load analytics: muscle recovery, weekly volume, PRs and training trends.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan)


@app.exception_handler(TrainingAnalyticsError)
async def training_analytics_error_handler(request: Request, exc: TrainingAnalyticsError):
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "training-analytics",
        "version": settings.VERSION
    }
