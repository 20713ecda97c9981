"""Utility submodule for kundliengine."""

from __future__ import annotations

from .angles import circular_midpoint, norm360, separation

__all__ = [
    "circular_midpoint",
    "norm360",
    "separation",
]
