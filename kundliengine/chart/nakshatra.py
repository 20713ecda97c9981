"""Nakshatra and pada placement for chart longitudes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..utils.angles import norm360

__all__ = [
    "NAKSHATRA_ARC_DEGREES",
    "PADA_ARC_DEGREES",
    "NAKSHATRA_NAMES",
    "NakshatraPlacement",
    "lord_of_nakshatra",
    "placement_for",
]

NAKSHATRA_ARC_DEGREES = 360.0 / 27.0
PADA_ARC_DEGREES = NAKSHATRA_ARC_DEGREES / 4.0

# Vimshottari order; repeats three times around the zodiac starting at Ashwini.
LORD_SEQUENCE: Sequence[str] = (
    "Ketu",
    "Venus",
    "Sun",
    "Moon",
    "Mars",
    "Rahu",
    "Jupiter",
    "Saturn",
    "Mercury",
)

NAKSHATRA_NAMES: Sequence[str] = (
    "Ashwini",
    "Bharani",
    "Krittika",
    "Rohini",
    "Mrigashira",
    "Ardra",
    "Punarvasu",
    "Pushya",
    "Ashlesha",
    "Magha",
    "Purva Phalguni",
    "Uttara Phalguni",
    "Hasta",
    "Chitra",
    "Swati",
    "Vishakha",
    "Anuradha",
    "Jyeshtha",
    "Mula",
    "Purva Ashadha",
    "Uttara Ashadha",
    "Shravana",
    "Dhanishta",
    "Shatabhisha",
    "Purva Bhadrapada",
    "Uttara Bhadrapada",
    "Revati",
)


@dataclass(frozen=True)
class NakshatraPlacement:
    """Lunar mansion and quarter occupied by a longitude."""

    index: int
    name: str
    lord: str
    pada: int
    degree_in_nakshatra: float

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "name": self.name,
            "lord": self.lord,
            "pada": self.pada,
            "degree_in_nakshatra": self.degree_in_nakshatra,
        }


def lord_of_nakshatra(index: int) -> str:
    """Return the Vimshottari lord for the zero-based nakshatra ``index``."""

    return LORD_SEQUENCE[index % len(LORD_SEQUENCE)]


def placement_for(longitude: float) -> NakshatraPlacement:
    """Return the :class:`NakshatraPlacement` containing ``longitude``.

    ``pada`` is one-based (1-4) as it is written on a chart.
    """

    lon = norm360(float(longitude))
    idx = min(int(lon // NAKSHATRA_ARC_DEGREES), len(NAKSHATRA_NAMES) - 1)
    offset = lon - idx * NAKSHATRA_ARC_DEGREES
    pada = min(int(offset // PADA_ARC_DEGREES), 3) + 1
    return NakshatraPlacement(
        index=idx,
        name=NAKSHATRA_NAMES[idx],
        lord=lord_of_nakshatra(idx),
        pada=pada,
        degree_in_nakshatra=offset,
    )
