"""
Versioned result cache with an explicit refresh policy.

One :class:`ResultCache` holds the last computed value of one derived
summary (recovery, aggregates or analytics).  Writers replace the whole
entry; readers get the latest complete entry.  Last write wins.
"""

from __future__ import annotations

import datetime
import threading
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from app.schemas.training import utc_now

T = TypeVar("T")


@dataclass(frozen=True)
class CachedResult(Generic[T]):
    value: T
    computed_at: datetime.datetime
    version: Optional[int] = None


@dataclass(frozen=True)
class RefreshPolicy:
    """Time-based staleness plus an optional version pin.

    ``max_age=None`` never expires by time.  ``version=None`` accepts any
    version.
    """

    max_age: Optional[datetime.timedelta] = None
    version: Optional[int] = None

    def is_fresh(self, entry: Optional[CachedResult[Any]], now: datetime.datetime) -> bool:
        if entry is None:
            return False
        if self.version is not None and entry.version != self.version:
            return False
        if self.max_age is None:
            return True
        return now - entry.computed_at <= self.max_age


class ResultCache(Generic[T]):
    """Thread-safe single-slot cache."""

    def __init__(self, policy: Optional[RefreshPolicy] = None):
        self.policy = policy or RefreshPolicy()
        self._entry: Optional[CachedResult[T]] = None
        self._lock = threading.Lock()

    def peek(self) -> Optional[CachedResult[T]]:
        """Latest entry regardless of freshness."""
        with self._lock:
            return self._entry

    def get_fresh(self, now: Optional[datetime.datetime] = None) -> Optional[CachedResult[T]]:
        """Latest entry if the policy still accepts it, else ``None``."""
        entry = self.peek()
        return entry if self.policy.is_fresh(entry, now or utc_now()) else None

    def put(self, value: T, computed_at: Optional[datetime.datetime] = None,
            version: Optional[int] = None, ) -> CachedResult[T]:
        entry = CachedResult(value=value, computed_at=computed_at or utc_now(), version=version)
        with self._lock:
            self._entry = entry
        return entry

    def invalidate(self) -> None:
        with self._lock:
            self._entry = None
