"""
Data accessor — read-only, cached snapshots of the training history.

The engine only ever sees a :class:`TrainingSnapshot` returned by
``get_all_cached()``.  Each store (sessions, exercises, measurements) is
cached separately with its own TTL; a store is reloaded when its TTL has
expired, when ``force=True`` or after :meth:`CachedDataAccessor.invalidate`.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, ContextManager, Optional, Protocol

from sqlmodel import Session

from app.db.repositories.training_data import TrainingDataRepository
from app.schemas.training import TrainingSnapshot

logger = logging.getLogger(__name__)

STORES = ("sessions", "exercises", "measurements")

_DEFAULT_TTLS: dict[str, float] = {
    "sessions": 45.0,
    "exercises": 60.0,
    "measurements": 20.0,
}


class DataAccessor(Protocol):
    def get_all_cached(self, force: bool = False) -> TrainingSnapshot:
        ...


class StaticDataAccessor:
    """Serves one fixed snapshot (scripts, tests)."""

    def __init__(self, snapshot: Optional[TrainingSnapshot] = None):
        self.snapshot = snapshot or TrainingSnapshot()

    def get_all_cached(self, force: bool = False) -> TrainingSnapshot:
        return self.snapshot


class CachedDataAccessor:
    """Per-store TTL cache in front of :class:`TrainingDataRepository`.

    ``session_factory`` returns a context manager yielding a SQLModel
    session.  Listeners registered with :meth:`add_listener` are called with
    the store name whenever a store is invalidated, so derived-result caches
    can drop their entries too.
    """

    def __init__(self, session_factory: Callable[[], ContextManager[Session]],
                 ttls: Optional[dict[str, float]] = None,
                 clock: Callable[[], float] = time.monotonic, ):
        self.session_factory = session_factory
        self.ttls = {**_DEFAULT_TTLS, **(ttls or {})}
        self.clock = clock
        self._values: dict[str, list] = {}
        self._loaded_at: dict[str, float] = {}
        self._listeners: list[Callable[[str], None]] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def _is_fresh(self, store: str, now: float) -> bool:
        loaded_at = self._loaded_at.get(store)
        return loaded_at is not None and now - loaded_at < self.ttls[store]

    def get_all_cached(self, force: bool = False) -> TrainingSnapshot:
        with self._lock:
            now = self.clock()
            stale = [s for s in STORES if force or not self._is_fresh(s, now)]
            if stale:
                logger.debug("Reloading stores: %s", ", ".join(stale))
                with self.session_factory() as session:
                    repo = TrainingDataRepository(session)
                    loaders = {
                        "sessions": repo.list_sessions,
                        "exercises": repo.list_exercises,
                        "measurements": repo.list_measurements,
                    }
                    for store in stale:
                        self._values[store] = loaders[store]()
                        self._loaded_at[store] = now
            return TrainingSnapshot(sessions=self._values["sessions"], exercises=self._values["exercises"],
                                    measurements=self._values["measurements"], )

    def invalidate(self, store: Optional[str] = None) -> None:
        """Drop one store (or all) so the next read reloads it."""
        if store is not None and store not in STORES:
            raise ValueError(f"Unknown store: '{store}'")
        targets = STORES if store is None else (store,)
        with self._lock:
            for name in targets:
                self._loaded_at.pop(name, None)
        for name in targets:
            for listener in self._listeners:
                listener(name)
