"""
Week keys — ``(phase, week)`` buckets for weekly aggregates.

Labels render as ``P<phase>-W<week>`` but ordering always uses the numeric
tuple, so ``P1-W10`` sorts after ``P1-W9`` and ``P2-W1`` after both.
"""

from __future__ import annotations

import re
from typing import Iterable, NamedTuple

from app.schemas.training import Session

_LABEL_RE = re.compile(r"^P(\d+)-W(\d+)$")


class WeekKey(NamedTuple):
    phase: int
    week: int

    @property
    def label(self) -> str:
        return f"P{self.phase}-W{self.week}"

    @classmethod
    def parse(cls, label: str) -> WeekKey:
        match = _LABEL_RE.match(label)
        if match is None:
            raise ValueError(f"Invalid week key: '{label}'")
        return cls(int(match.group(1)), int(match.group(2)))


def week_key(session: Session) -> WeekKey:
    """Week key of a session (phase defaults to 1)."""
    return WeekKey(session.phase, session.week_number)


def sorted_week_labels(labels: Iterable[str]) -> list[str]:
    """Sort week labels chronologically (phase-major, week-minor)."""
    return sorted(labels, key=WeekKey.parse)
