"""Angle utilities shared across kundliengine modules."""

from __future__ import annotations

import math

__all__ = [
    "norm360",
    "separation",
    "circular_midpoint",
]


def norm360(x: float) -> float:
    """Normalize angle to [0, 360)."""

    y = math.fmod(x, 360.0)
    y = y + 360.0 if y < 0 else y
    # fmod of a tiny negative value can round back up to a full turn
    return 0.0 if y >= 360.0 else y


def separation(a: float, b: float) -> float:
    """Return the shortest angular distance between two longitudes in [0, 180].

    Both inputs must already lie in ``[0, 360)``.  The computation is
    symmetric in its arguments, which keeps aspect classification
    independent of argument order.
    """

    raw = abs(a - b)
    return 360.0 - raw if raw > 180.0 else raw


def circular_midpoint(a: float, b: float) -> float:
    """Return the midpoint of ``a`` and ``b`` lying on the shorter arc.

    The naive average is shifted by half a turn when the two points straddle
    the 0°/360° seam (``|a - b| > 180``).  The rule is commutative, so
    ``circular_midpoint(a, b) == circular_midpoint(b, a)`` exactly.
    """

    mid = (a + b) / 2.0
    if abs(a - b) > 180.0:
        mid += 180.0
    return norm360(mid)
