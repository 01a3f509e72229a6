"""
Muscle recovery — per-muscle-group decay model of accumulated stress.

This module estimates how recovered each muscle group is from the training
history alone.  It is a **heuristic estimator**, not a physiological
simulation: coefficients are conservative and configurable, and the
guarantees that matter are internal consistency, monotonic recovery while
no training happens, and reproducibility for a given snapshot and time.

Model
-----
Every completed set deposits stress on the muscles its exercise trains:

    set_stress = volume_factor × effort × movement × high_fatigue_boost

    volume_factor = min(weight × reps × sqrt(clamp(weight / ref_kg)) / divisor, max_set_stress)
    effort        = rpe / neutral_rpe            (1.0 when no RPE was logged)
    movement      = 1.0 compound, 0.75 isolation

The sets of one exercise entry are summed and credited to the primary muscle
at full weight and to each secondary muscle at ``secondary_weight`` (0.5),
then scaled by the muscle's intensity modifier.  All stress one session puts
on one muscle forms a *bout*.

Stress decays by half every ``baseline_hours`` of the muscle (longer for
high-fatigue exercises):

    remaining(t) = Σ bout_i × damping_i × 2^(-(t - t_i) / half_life_i)

Damping
-------
Bouts closer together than one baseline interval do not stack linearly.  A
bout arriving ``gap`` hours after the previous one, while ``residual``
stress is still present, is scaled by

    damping = 1 / (1 + strength × proximity × (1 + residual / capacity))
    proximity = 1 - gap / window          (window = baseline_hours × factor)

The factor is 1 for bouts at least one window apart (independent,
additive), strictly below 1 inside the window, decreases as bouts get closer
or residual stress grows, and never drops below
``1 / (1 + strength × (1 + residual / capacity))``.  Damping is decided when
a bout happens and never revisited, so recovery stays monotonic.

Recovered percent and status
----------------------------
    percent = 100 × (1 - min(1, remaining / capacity))

``Ready`` >= 99, ``Near`` >= 90, ``Caution`` >= 50, ``Not Ready`` below.

``eta_full`` inverts the decay of the slowest remaining component: the time
at which ``remaining`` falls under ``full_recovery_tolerance × capacity``
(1 %, i.e. the ``Ready`` threshold) with no further training.
"""

from __future__ import annotations

import datetime
import logging
import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.catalog.muscle_map import is_isolation_name
from app.schemas.recovery import MuscleRecoveryState, RecoveryBundle
from app.schemas.training import DEFAULT_MUSCLE, Exercise, MovementType, SetEntry, TrainingSnapshot, as_utc, utc_now

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

# Baseline half-life (hours) per muscle group.  Small / fast-recovering
# muscles sit near 24h, large lower-body groups near 72h.
_DEFAULT_BASELINE_HOURS: dict[str, float] = {
    "shoulders": 24.0,
    "forearms": 24.0,
    "biceps": 24.0,
    "core": 24.0,
    "triceps": 30.0,
    "calves": 30.0,
    "chest": 48.0,
    "back": 48.0,
    "other": 48.0,
    "glutes": 60.0,
    "hamstrings": 72.0,
    "quads": 72.0,
}

# How much stress a bout contributes per muscle (0.7-1.2).
_DEFAULT_INTENSITY_MODIFIERS: dict[str, float] = {
    "forearms": 0.7,
    "shoulders": 0.8,
    "biceps": 0.8,
    "core": 0.8,
    "triceps": 0.9,
    "calves": 0.9,
    "chest": 1.0,
    "other": 1.0,
    "back": 1.1,
    "glutes": 1.1,
    "hamstrings": 1.2,
    "quads": 1.2,
}

_RECOVERY_THRESHOLDS: list[tuple[str, float, float]] = [
    ("Not Ready", 0.0, 50.0),
    ("Caution", 50.0, 90.0),
    ("Near", 90.0, 99.0),
    ("Ready", 99.0, float("inf")),
]


class RecoveryConfig(BaseModel):
    """Heuristic coefficients of the recovery model.

    Everything the algorithm needs is here so that configs can be swapped
    (tests, tuning) without touching the computation.
    """

    baseline_hours: dict[str, float] = Field(default_factory=lambda: dict(_DEFAULT_BASELINE_HOURS))
    intensity_modifiers: dict[str, float] = Field(default_factory=lambda: dict(_DEFAULT_INTENSITY_MODIFIERS))

    # Stress units at which a muscle counts as fully fatigued
    # (roughly 3-4 days of hard multi-set work).
    capacity: float = Field(12.0, gt=0.0)
    capacity_overrides: dict[str, float] = Field(default_factory=dict)

    # Per-set stress
    reference_load_kg: float = Field(40.0, gt=0.0)
    volume_divisor: float = Field(800.0, gt=0.0)
    max_set_stress: float = Field(3.0, gt=0.0)
    neutral_rpe: float = Field(8.0, ge=1.0, le=10.0)
    compound_multiplier: float = Field(1.0, gt=0.0)
    isolation_multiplier: float = Field(0.75, gt=0.0)
    high_fatigue_stress_boost: float = Field(1.25, ge=1.0)
    high_fatigue_decay_factor: float = Field(1.25, ge=1.0, description="Half-life multiplier")
    secondary_weight: float = Field(0.5, ge=0.0, le=1.0)

    # Damping of closely spaced bouts
    damping_window_factor: float = Field(1.0, gt=0.0, description="Window in multiples of baseline hours")
    damping_strength: float = Field(0.5, ge=0.0)

    full_recovery_tolerance: float = Field(0.01, gt=0.0, lt=1.0)

    @field_validator("baseline_hours", "capacity_overrides")
    @classmethod
    def validate_positive_values(cls, v):
        for muscle, value in v.items():
            if value <= 0:
                raise ValueError(f"'{muscle}' must be positive, got {value}")
        return v

    @field_validator("intensity_modifiers")
    @classmethod
    def validate_modifier_range(cls, v):
        for muscle, value in v.items():
            if not 0.7 <= value <= 1.2:
                raise ValueError(f"Intensity modifier for '{muscle}' must be within 0.7-1.2, got {value}")
        return v

    def baseline_for(self, muscle: str) -> float:
        return self.baseline_hours.get(muscle, self.baseline_hours.get(DEFAULT_MUSCLE, 48.0))

    def modifier_for(self, muscle: str) -> float:
        return self.intensity_modifiers.get(muscle, self.intensity_modifiers.get(DEFAULT_MUSCLE, 1.0))

    def capacity_for(self, muscle: str) -> float:
        return self.capacity_overrides.get(muscle, self.capacity)


DEFAULT_RECOVERY_CONFIG = RecoveryConfig()


# ======================================================================
# Status labelling
# ======================================================================


def _label_recovery(percent: float) -> str:
    """Map a recovered percent to its status label."""
    for label, low, high in _RECOVERY_THRESHOLDS:
        if low <= percent < high:
            return label
    return "Ready"


# ======================================================================
# Stress deposition
# ======================================================================


@dataclass(frozen=True)
class StressBout:
    """All stress one session deposited on one muscle.

    ``components`` holds ``(stress, half_life_hours)`` pairs: exercises with
    the high-fatigue flag decay on a longer half-life than the rest.
    """

    muscle: str
    at: datetime.datetime
    components: tuple[tuple[float, float], ...]

    @property
    def stress(self) -> float:
        return sum(s for s, _ in self.components)

    def residual(self, at: datetime.datetime, scale: float = 1.0) -> float:
        """Stress left at *at* (nothing decays before the bout happened)."""
        hours = max(0.0, (at - self.at).total_seconds() / 3600.0)
        return scale * sum(s * 2.0 ** (-hours / half_life) for s, half_life in self.components)


def _set_stress(set_entry: SetEntry, cfg: RecoveryConfig) -> float:
    """Base stress of one completed set (before exercise/muscle scaling)."""
    if not set_entry.is_completed:
        return 0.0
    weight = set_entry.weight_kg
    intensity_proxy = math.sqrt(min(max(weight / cfg.reference_load_kg, 0.5), 1.6))
    volume_factor = min(set_entry.score * intensity_proxy / cfg.volume_divisor, cfg.max_set_stress)
    return volume_factor * _effort_factor(set_entry.rpe, cfg)


def _effort_factor(rpe: Optional[float], cfg: RecoveryConfig) -> float:
    """Proportional RPE scaling; sets without RPE count as the neutral effort."""
    if rpe is None:
        return 1.0
    return rpe / cfg.neutral_rpe


def _exercise_multiplier(exercise: Exercise, cfg: RecoveryConfig) -> float:
    movement = exercise.movement_type
    if movement is None:
        movement = MovementType.ISOLATION if is_isolation_name(exercise.name) else MovementType.COMPOUND
    multiplier = cfg.isolation_multiplier if movement is MovementType.ISOLATION else cfg.compound_multiplier
    if exercise.high_fatigue:
        multiplier *= cfg.high_fatigue_stress_boost
    return multiplier


def collect_bouts(snapshot: TrainingSnapshot, cfg: RecoveryConfig) -> dict[str, list[StressBout]]:
    """Turn the session history into chronologically ordered bouts per muscle."""
    exercises = snapshot.exercise_map()
    bouts: dict[str, list[StressBout]] = {}

    for session in sorted(snapshot.sessions, key=lambda s: s.performed_at()):
        at = session.performed_at()
        per_muscle: dict[str, dict[float, float]] = {}

        for entry in session.entries:
            exercise = exercises.get(entry.exercise_id)
            if exercise is None:
                logger.debug("Skipping entry for unknown exercise %s", entry.exercise_id)
                continue
            entry_stress = sum(_set_stress(s, cfg) for s in entry.sets)
            if entry_stress <= 0:
                continue
            entry_stress *= _exercise_multiplier(exercise, cfg)

            involvement = [(exercise.primary_muscle, 1.0)]
            involvement += [(m, cfg.secondary_weight) for m in exercise.clean_secondary_muscles()]
            for muscle, weight in involvement:
                if weight <= 0:
                    continue
                half_life = cfg.baseline_for(muscle)
                if exercise.high_fatigue:
                    half_life *= cfg.high_fatigue_decay_factor
                stress = entry_stress * weight * cfg.modifier_for(muscle)
                components = per_muscle.setdefault(muscle, {})
                components[half_life] = components.get(half_life, 0.0) + stress

        for muscle, components in per_muscle.items():
            bouts.setdefault(muscle, []).append(
                StressBout(muscle=muscle, at=at,
                           components=tuple((stress, half_life) for half_life, stress in sorted(components.items())))
            )

    return bouts


# ======================================================================
# Accumulation with damping
# ======================================================================


def _damping_factor(gap_hours: float, window_hours: float, residual_ratio: float, strength: float) -> float:
    """Diminishing-returns factor for a bout arriving *gap_hours* after the previous one."""
    if gap_hours >= window_hours or strength <= 0:
        return 1.0
    proximity = 1.0 - max(gap_hours, 0.0) / window_hours
    return 1.0 / (1.0 + strength * proximity * (1.0 + max(residual_ratio, 0.0)))


def accumulate_stress(bouts: list[StressBout], muscle: str, as_of: datetime.datetime,
                      cfg: RecoveryConfig, ) -> tuple[float, Optional[float]]:
    """Residual stress of *muscle* at *as_of*.

    Returns:
        ``(remaining, slowest_half_life)`` — the half-life is ``None`` when
        nothing contributes.
    """
    window = cfg.baseline_for(muscle) * cfg.damping_window_factor
    capacity = cfg.capacity_for(muscle)

    applied: list[tuple[StressBout, float]] = []
    previous_at: Optional[datetime.datetime] = None

    for bout in bouts:
        if bout.at > as_of:
            continue  # Future bout, skip.
        scale = 1.0
        if previous_at is not None:
            gap = (bout.at - previous_at).total_seconds() / 3600.0
            residual = sum(b.residual(bout.at, s) for b, s in applied)
            scale = _damping_factor(gap, window, residual / capacity, cfg.damping_strength)
        applied.append((bout, scale))
        previous_at = bout.at

    if not applied:
        return 0.0, None

    remaining = sum(b.residual(as_of, s) for b, s in applied)
    slowest = max(half_life for b, _ in applied for _, half_life in b.components)
    return remaining, slowest


# ======================================================================
# Per-muscle state
# ======================================================================


def _compute_muscle_state(muscle: str, remaining: float, half_life: Optional[float], as_of: datetime.datetime,
                          cfg: RecoveryConfig, ) -> MuscleRecoveryState:
    capacity = cfg.capacity_for(muscle)
    percent = 100.0 * (1.0 - min(1.0, remaining / capacity))
    percent = round(max(0.0, min(100.0, percent)), 2)

    tolerance = cfg.full_recovery_tolerance * capacity
    if remaining <= tolerance or half_life is None:
        eta_full = as_of
    else:
        hours = half_life * math.log2(remaining / tolerance)
        eta_full = as_of + datetime.timedelta(hours=hours)

    return MuscleRecoveryState(muscle=muscle, percent=percent, status=_label_recovery(percent),
                               remaining=remaining, capacity=capacity, eta_full=eta_full, )


# ======================================================================
# Main entry point
# ======================================================================


def compute_recovery(snapshot: TrainingSnapshot, as_of: Optional[datetime.datetime] = None,
                     config: Optional[RecoveryConfig] = None, ) -> RecoveryBundle:
    """Compute per-muscle recovery from a training snapshot.

    Args:
        snapshot: Immutable training history.
        as_of: Evaluation time (defaults to now, UTC).
        config: Optional :class:`RecoveryConfig` override.

    Returns:
        :class:`RecoveryBundle` with every configured muscle group (plus any
        other muscle that received stress), sorted by name.
    """
    cfg = config or DEFAULT_RECOVERY_CONFIG
    now = as_utc(as_of) if as_of is not None else utc_now()

    bouts = collect_bouts(snapshot, cfg)
    muscles = sorted(set(cfg.baseline_hours) | set(bouts))

    states = []
    for muscle in muscles:
        remaining, half_life = accumulate_stress(bouts.get(muscle, []), muscle, now, cfg)
        states.append(_compute_muscle_state(muscle, remaining, half_life, now, cfg))

    return RecoveryBundle(updated_at=now, muscles=states)
