"""
Unit tests for the computation-unit boundary and runner.
"""

import datetime

import pytest

from app.core.exceptions import UnknownUnitError
from app.engine.worker import (
    UNIT_AGGREGATES,
    UNIT_ANALYTICS,
    ComputationRunner,
    aggregate_unit,
    analytics_unit,
    handle_message,
    parse_response,
)
from app.schemas.aggregates import AggregateBundle
from app.schemas.analytics import AnalyticsBundle
from app.schemas.compute import ComputeFailure, ComputeRequest, ComputeSuccess
from app.schemas.training import Exercise, Session, SessionEntry, SetEntry, TrainingSnapshot


def _make_snapshot() -> TrainingSnapshot:
    sessions = [
        Session(date=datetime.date(2025, 1, 6) + datetime.timedelta(days=7 * (w - 1)), week_number=w,
                entries=[SessionEntry(exercise_id="bench", sets=[SetEntry(weight_kg=60.0 + w, reps=8)] * 3)])
        for w in range(1, 4)
    ]
    return TrainingSnapshot(sessions=sessions, exercises=[Exercise(id="bench", name="Bench", muscle_group="chest")])


def _message() -> dict:
    return ComputeRequest.from_snapshot(_make_snapshot()).model_dump(mode="json")


# ======================================================================
# Units
# ======================================================================


class TestUnits:

    def test_aggregate_unit_returns_bundle(self):
        response = aggregate_unit(_message())
        bundle = AggregateBundle.model_validate(response)
        assert bundle.weekly_pr_counts == {"P1-W2": 1, "P1-W3": 1}

    def test_analytics_unit_returns_bundle(self):
        response = analytics_unit(_message())
        bundle = AnalyticsBundle.model_validate(response)
        assert [row.week for row in bundle.volume_trend] == ["P1-W1", "P1-W2", "P1-W3"]

    def test_measurements_optional(self):
        message = _message()
        del message["measurements"]
        assert "error" not in aggregate_unit(message)

    @pytest.mark.parametrize("unit", [aggregate_unit, analytics_unit])
    def test_malformed_message_becomes_error(self, unit):
        response = unit({"sessions": [{"date": "not-a-date", "entries": []}], "exercises": []})
        assert set(response) == {"error"}
        assert response["error"]

    def test_handle_message_dispatches(self):
        assert "weekly_volume" in handle_message(UNIT_AGGREGATES, _message())
        assert "plateaus" in handle_message(UNIT_ANALYTICS, _message())

    def test_handle_message_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            handle_message("forecast", _message())


# ======================================================================
# parse_response
# ======================================================================


class TestParseResponse:

    def test_error_response(self):
        result = parse_response(UNIT_AGGREGATES, {"error": "boom"})
        assert isinstance(result, ComputeFailure)
        assert result.error == "boom"
        assert result.unit == UNIT_AGGREGATES

    def test_success_response(self):
        result = parse_response(UNIT_ANALYTICS, {"plateaus": []})
        assert isinstance(result, ComputeSuccess)
        assert result.bundle == {"plateaus": []}


# ======================================================================
# ComputationRunner
# ======================================================================


class TestComputationRunner:

    def test_thread_backend_runs_units(self):
        runner = ComputationRunner(backend="thread", max_workers=1)
        try:
            result = runner.run(UNIT_AGGREGATES, _make_snapshot())
            assert isinstance(result, ComputeSuccess)
            assert AggregateBundle.model_validate(result.bundle).weekly_volume["P1-W1"] == {"chest": 3.0}
        finally:
            runner.shutdown()

    def test_unknown_unit_raises(self):
        runner = ComputationRunner()
        with pytest.raises(UnknownUnitError):
            runner.run("forecast", _make_snapshot())
        runner.shutdown()

    def test_shutdown_is_repeatable(self):
        runner = ComputationRunner()
        runner.run(UNIT_ANALYTICS, TrainingSnapshot())
        runner.shutdown()
        runner.shutdown()
