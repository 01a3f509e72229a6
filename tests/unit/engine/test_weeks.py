"""
Unit tests for week keys.
"""

import datetime

import pytest

from app.engine.weeks import WeekKey, sorted_week_labels, week_key
from app.schemas.training import Session


class TestWeekKey:

    def test_label(self):
        assert WeekKey(2, 11).label == "P2-W11"

    @pytest.mark.parametrize("label,expected", [
        ("P1-W1", WeekKey(1, 1)),
        ("P3-W12", WeekKey(3, 12)),
    ])
    def test_parse(self, label, expected):
        assert WeekKey.parse(label) == expected

    @pytest.mark.parametrize("label", ["", "W1", "P1W1", "P1-W", "p1-w1"])
    def test_parse_invalid(self, label):
        with pytest.raises(ValueError):
            WeekKey.parse(label)

    def test_phase_defaults_to_one(self):
        session = Session(date=datetime.date(2025, 1, 6), week_number=4)
        assert week_key(session) == WeekKey(1, 4)

    def test_sorted_numerically(self):
        labels = ["P1-W10", "P2-W1", "P1-W2", "P1-W9", "P10-W1"]
        assert sorted_week_labels(labels) == ["P1-W2", "P1-W9", "P1-W10", "P2-W1", "P10-W1"]
