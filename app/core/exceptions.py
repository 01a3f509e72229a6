"""
Exception hierarchy for the analytics core.

Computation units never let these (or anything else) escape their
boundary: they answer with a ``Failure`` message instead.  The exceptions
are raised by the orchestration layer and mapped to JSON by the API.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    SNAPSHOT_UNAVAILABLE = "SNAPSHOT_UNAVAILABLE"
    COMPUTATION_FAILED = "COMPUTATION_FAILED"
    UNKNOWN_UNIT = "UNKNOWN_UNIT"
    NOT_FOUND = "NOT_FOUND"


class TrainingAnalyticsError(Exception):
    """Base exception for the training-load analytics core.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code.value, "details": self.details}


class SnapshotUnavailableError(TrainingAnalyticsError):
    """The data accessor could not provide a snapshot and no prior result exists."""

    def __init__(self, message: str = "Training data is unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.SNAPSHOT_UNAVAILABLE, 503, details)


class ComputationError(TrainingAnalyticsError):
    """A computation unit reported a failure and there is no result to fall back on."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.COMPUTATION_FAILED, 500, details)


class UnknownUnitError(TrainingAnalyticsError):
    """A request named a computation unit that does not exist."""

    def __init__(self, unit: str):
        super().__init__(f"Unknown computation unit: '{unit}'", ErrorCode.UNKNOWN_UNIT, 400, {"unit": unit})


class NotFoundError(TrainingAnalyticsError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.NOT_FOUND, 404, details)
