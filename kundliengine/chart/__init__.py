"""Chart positions and nakshatra placement.

The composite builder lives in :mod:`kundliengine.chart.composite` and is
imported on demand because it depends on :mod:`kundliengine.aspects`.
"""

from __future__ import annotations

from .nakshatra import NakshatraPlacement, placement_for
from .positions import NatalChart, PlanetPosition, planets_of, resolve

__all__ = [
    "NakshatraPlacement",
    "NatalChart",
    "PlanetPosition",
    "placement_for",
    "planets_of",
    "resolve",
]
