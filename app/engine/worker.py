"""
Computation-unit boundary.

A unit is a stateless function ``message -> response`` over plain dicts so
it can run in a thread or in another process.  It never raises: any
exception becomes ``{"error": "<message>"}``.  :class:`ComputationRunner`
submits messages to an executor and parses the response into the tagged
``ComputeSuccess | ComputeFailure`` union.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Callable, Literal, Union

from pydantic import TypeAdapter, ValidationError

from app.core.exceptions import UnknownUnitError
from app.engine.aggregation import compute_aggregates
from app.engine.analytics import compute_analytics
from app.schemas.compute import ComputeFailure, ComputeRequest, ComputeResult, ComputeSuccess
from app.schemas.training import TrainingSnapshot

logger = logging.getLogger(__name__)

UNIT_AGGREGATES = "aggregates"
UNIT_ANALYTICS = "analytics"

_RESULT_ADAPTER = TypeAdapter(ComputeResult)


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def aggregate_unit(message: dict[str, Any]) -> dict[str, Any]:
    """Aggregation unit: snapshot message → aggregate bundle or ``{"error"}``."""
    try:
        snapshot = ComputeRequest.model_validate(message).to_snapshot()
        return compute_aggregates(snapshot).model_dump(mode="json")
    except Exception as exc:
        return {"error": _error_message(exc)}


def analytics_unit(message: dict[str, Any]) -> dict[str, Any]:
    """Analytics unit: snapshot message → analytics bundle or ``{"error"}``."""
    try:
        snapshot = ComputeRequest.model_validate(message).to_snapshot()
        return compute_analytics(snapshot).model_dump(mode="json")
    except Exception as exc:
        return {"error": _error_message(exc)}


UNITS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    UNIT_AGGREGATES: aggregate_unit,
    UNIT_ANALYTICS: analytics_unit,
}


def handle_message(unit: str, message: dict[str, Any]) -> dict[str, Any]:
    """Dispatch *message* to the named unit."""
    handler = UNITS.get(unit)
    if handler is None:
        raise UnknownUnitError(unit)
    return handler(message)


def parse_response(unit: str, response: dict[str, Any]) -> Union[ComputeSuccess, ComputeFailure]:
    """Turn a raw unit response into the tagged result."""
    if "error" in response:
        payload = {"status": "error", "unit": unit, "error": str(response["error"])}
    else:
        payload = {"status": "ok", "unit": unit, "bundle": response}
    return _RESULT_ADAPTER.validate_python(payload)


class ComputationRunner:
    """Runs units on a thread or process pool.

    Each :meth:`run` is one request and one response.  There is no
    cancellation and no timeout: a submitted computation always runs to
    completion.
    """

    def __init__(self, backend: Literal["thread", "process"] = "thread", max_workers: int = 2):
        self.backend = backend
        self.max_workers = max_workers
        self._executor: Executor | None = None

    def _get_executor(self) -> Executor:
        if self._executor is None:
            if self.backend == "process":
                self._executor = ProcessPoolExecutor(max_workers=self.max_workers)
            else:
                self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="compute")
        return self._executor

    def run(self, unit: str, snapshot: TrainingSnapshot) -> Union[ComputeSuccess, ComputeFailure]:
        if unit not in UNITS:
            raise UnknownUnitError(unit)
        message = ComputeRequest.from_snapshot(snapshot).model_dump(mode="json")
        try:
            response = self._get_executor().submit(handle_message, unit, message).result()
        except Exception as exc:
            # Broken pool, pickling failure: the unit never answered.
            logger.warning("Computation unit '%s' did not answer: %s", unit, exc)
            return ComputeFailure(unit=unit, error=_error_message(exc))

        try:
            result = parse_response(unit, response)
        except ValidationError as exc:
            return ComputeFailure(unit=unit, error=f"Malformed response: {exc.error_count()} error(s)")
        if isinstance(result, ComputeFailure):
            logger.warning("Computation unit '%s' failed: %s", unit, result.error)
        return result

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
