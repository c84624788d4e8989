"""Limit handling shared by the feed and leaderboard queries."""

from __future__ import annotations

from typing import Any

from zyscope.db.base import MAX_INTEGER

DEFAULT_LIMIT = 10


def clamp_limit(limit: Any, default: int = DEFAULT_LIMIT) -> int:  # noqa: ANN401
    """Return ``limit`` if it is a positive int the store accepts, otherwise ``default``.

    Bools are ints in Python and are rejected explicitly.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or not 0 < limit <= MAX_INTEGER:
        return default
    return limit


def parse_limit(raw: str | None, default: int = DEFAULT_LIMIT) -> int:
    """Clamp a ``?limit=`` query value; anything that is not a positive integer gives ``default``."""
    if raw is None:
        return default
    try:
        return clamp_limit(int(raw.strip()), default)
    except ValueError:
        return default
