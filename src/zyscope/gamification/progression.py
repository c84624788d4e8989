"""Points and level computation.

Flat curve: every 250 accumulated points is one level, starting at level 1.
The dashboard derives its progress bar from the same caps, so
:func:`level_progress` must stay in step with it.
"""

from __future__ import annotations

from dataclasses import dataclass

POINTS_PER_LEVEL = 250
VISIT_XP = 25


@dataclass(frozen=True)
class Progress:
    points: int
    level: int


def compute_level(points: int) -> int:
    """Level for a points total. Never below 1."""
    return max(1, points // POINTS_PER_LEVEL + 1)


def apply_xp(current_points: int, delta: int) -> Progress:
    """Add ``delta`` to ``current_points`` and derive the level.

    Pure and total for non-negative integers. Callers reject negative or
    non-finite deltas before calling.
    """
    points = current_points + delta
    return Progress(points=points, level=compute_level(points))


def level_progress(points: int, level: int) -> dict:
    """Progress toward the next level cap for a stored points/level pair.

    Uses the stored level rather than recomputing it, since grants made with
    the level preserved can leave points past the current cap.
    """
    level = max(1, level)
    prev_cap = (level - 1) * POINTS_PER_LEVEL
    next_cap = level * POINTS_PER_LEVEL
    pct = round((points - prev_cap) / POINTS_PER_LEVEL * 100)
    return {
        "level": level,
        "points": points,
        "prev_cap": prev_cap,
        "next_cap": next_cap,
        "percent": min(100, max(0, pct)),
    }
