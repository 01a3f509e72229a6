"""
Analytics engine — pure computations over a :class:`TrainingSnapshot`.

Sub-modules:
    recovery     — per-muscle stress decay and recovered percent
    aggregation  — weekly volume and PR state
    analytics    — volume trend, intensity, plateaus, undertrained muscles
    worker       — computation-unit boundary and runner
    cache        — versioned result cache
    weeks        — ``P<phase>-W<week>`` keys
"""

from app.engine.aggregation import AGGREGATE_SCHEMA_VERSION, compute_aggregates
from app.engine.analytics import AnalyticsConfig, compute_analytics
from app.engine.recovery import RecoveryConfig, compute_recovery

__all__ = [
    "AGGREGATE_SCHEMA_VERSION",
    "AnalyticsConfig",
    "RecoveryConfig",
    "compute_aggregates",
    "compute_analytics",
    "compute_recovery",
]
