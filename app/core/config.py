"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).

Only deployment-level knobs live here.  Heuristic coefficients of the
recovery model and the analytics thresholds are configuration *objects*
(:class:`~app.engine.recovery.RecoveryConfig`,
:class:`~app.engine.analytics.AnalyticsConfig`) injected at construction.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Progress Training-Load Analytics"
    VERSION: str = "0.1.0"

    DEBUG: bool = False

    # Database (read side only; the logging UI owns writes)
    DATABASE_URL: str = "sqlite:///./progress.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    # Recovery estimator
    RECOVERY_MAX_AGE_MINUTES: int = 60
    RECOVERY_REFRESH_ENABLED: bool = False

    # Aggregate / analytics bundles
    BUNDLE_MAX_AGE_MINUTES: int = 30
    COMPUTE_BACKEND: Literal["thread", "process"] = "thread"
    COMPUTE_MAX_WORKERS: int = 2

    # Data accessor TTLs (seconds)
    CACHE_TTL_SESSIONS_S: float = 45.0
    CACHE_TTL_EXERCISES_S: float = 60.0
    CACHE_TTL_MEASUREMENTS_S: float = 20.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
