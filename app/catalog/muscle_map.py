"""
Exercise name → muscle group inference.

Used when an exercise record carries a name but no (or a blank) primary
muscle.  Patterns are ordered: more specific patterns MUST come first
(e.g. pushdowns before anything containing "down", leg curls before the
generic curl).

* Isolation patterns map to a primary muscle only.
* Compound patterns map to a primary muscle plus secondaries.

Unknown names fall back to ``other`` with no secondaries.
"""

from __future__ import annotations

import re

from app.schemas.training import DEFAULT_MUSCLE

_PATTERNS: list[tuple[re.Pattern[str], str, tuple[str, ...]]] = [
    # ── Triceps (before any "down" pattern) ──────────────────────
    (re.compile(r"push.?down|press.?down", re.I), "triceps", ()),
    (re.compile(r"tricep.*extension|overhead.*extension|skull\s*crush", re.I), "triceps", ()),
    (re.compile(r"kickback|french\s*press", re.I), "triceps", ()),
    (re.compile(r"close\s*grip.*bench", re.I), "triceps", ("chest",)),

    # ── Legs (before the generic curl) ───────────────────────────
    (re.compile(r"leg\s*curl|ham(string)?\s*curl|nordic", re.I), "hamstrings", ()),
    (re.compile(r"leg\s*extension", re.I), "quads", ()),
    (re.compile(r"romanian|rdl|stiff.?leg", re.I), "hamstrings", ("glutes", "back")),
    (re.compile(r"deadlift", re.I), "hamstrings", ("glutes", "back", "forearms")),
    (re.compile(r"squat|leg\s*press|lunge|split", re.I), "quads", ("glutes", "hamstrings")),
    (re.compile(r"hip\s*thrust|glute\s*bridge", re.I), "glutes", ("hamstrings",)),
    (re.compile(r"calf|calves", re.I), "calves", ()),

    # ── Core (before chest: "decline crunch") ────────────────────
    (re.compile(r"crunch|plank|sit.?up|\babs?\b|pallof|dead\s*bug|leg\s*raise", re.I), "core", ()),

    # ── Arms ─────────────────────────────────────────────────────
    (re.compile(r"wrist\s*curl|grip|farmer", re.I), "forearms", ()),
    (re.compile(r"curl|bicep|preacher|bayesian", re.I), "biceps", ()),

    # ── Shoulders ────────────────────────────────────────────────
    (re.compile(r"lateral\s*raise|front\s*raise|rear\s*delt|face\s*pull|reverse\s*fly", re.I), "shoulders", ()),
    (re.compile(r"overhead\s*press|shoulder\s*press|military|arnold", re.I), "shoulders", ("triceps",)),

    # ── Chest ────────────────────────────────────────────────────
    (re.compile(r"fly|flye|pec\s*deck|cable\s*cross", re.I), "chest", ()),
    (re.compile(r"bench|chest\s*press|incline|decline|push.?up|dip", re.I), "chest", ("triceps", "shoulders")),

    # ── Back ─────────────────────────────────────────────────────
    (re.compile(r"pullover", re.I), "back", ()),
    (re.compile(r"pull.?up|chin.?up|pulldown|row", re.I), "back", ("biceps",)),
    (re.compile(r"shrug", re.I), "back", ()),
]

_ISOLATION_KEYWORDS = re.compile(
    r"curl|extension|raise|fly|pullover|pressdown|push.?down|lateral|reverse fly|cable cross|rear delt",
    re.I,
)


def infer_muscles(name: str) -> tuple[str, list[str]]:
    """Return ``(primary, secondaries)`` for a free-text exercise name."""
    for pattern, primary, secondaries in _PATTERNS:
        if pattern.search(name or ""):
            return primary, list(secondaries)
    return DEFAULT_MUSCLE, []


def is_isolation_name(name: str) -> bool:
    """Keyword heuristic for single-joint movements."""
    return bool(_ISOLATION_KEYWORDS.search(name or ""))
