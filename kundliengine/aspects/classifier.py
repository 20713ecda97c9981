"""Deterministic classification of angular relationships between two longitudes."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..chart.positions import ChartLike, PlanetPosition, planets_of
from ..core.bodies import canonical_name
from ..errors import OutOfRange
from ..utils.angles import norm360, separation
from .policy import DEFAULT_ORB_TABLE, AspectNature, AspectType, OrbTable, nature_of

__all__ = [
    "Aspect",
    "AspectMatch",
    "AspectClassifier",
]

LOG = logging.getLogger(__name__)


def _longitude(field_name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise OutOfRange(field_name, value, "a finite longitude") from None
    if not math.isfinite(number):
        raise OutOfRange(field_name, value, "a finite longitude")
    return norm360(number)


@dataclass(frozen=True)
class AspectMatch:
    """Aspect type assigned to a separation together with its orb."""

    type: AspectType
    separation: float
    orb: float

    @property
    def nature(self) -> AspectNature:
        return nature_of(self.type)


@dataclass(frozen=True)
class Aspect:
    """A classified relationship between two named chart points."""

    planet_a: str
    planet_b: str
    type: AspectType
    orb: float
    separation: float

    @property
    def nature(self) -> AspectNature:
        return nature_of(self.type)

    def involves(self, name: str) -> bool:
        key = canonical_name(name)
        return key in (canonical_name(self.planet_a), canonical_name(self.planet_b))

    def to_dict(self) -> dict[str, object]:
        return {
            "planet_a": self.planet_a,
            "planet_b": self.planet_b,
            "type": self.type.value,
            "symbol": self.type.symbol,
            "nature": self.nature.value,
            "orb": self.orb,
            "separation": self.separation,
        }


@dataclass(frozen=True)
class AspectClassifier:
    """Assign at most one :class:`AspectType` to a pair of longitudes.

    Every row of the orb table whose target lies within its maximum orb of
    the separation is a candidate.  The candidate with the smallest orb wins;
    an exact tie goes to the row listed first in priority order
    (conjunction, opposition, trine, square, sextile).  The classifier holds
    no mutable state and may be shared freely between threads.
    """

    orb_table: OrbTable = DEFAULT_ORB_TABLE

    def classify_separation(self, sep: float) -> AspectMatch | None:
        """Classify an angular separation already folded into ``[0, 180]``."""

        value = float(sep)
        if not math.isfinite(value) or not 0.0 <= value <= 180.0:
            raise OutOfRange("separation", sep, "a value in [0, 180]")
        best: AspectMatch | None = None
        for spec in self.orb_table.specs:
            orb = abs(value - spec.target)
            if orb > spec.max_orb:
                continue
            if best is None or orb < best.orb:
                best = AspectMatch(type=spec.type, separation=value, orb=orb)
        return best

    def classify(self, lon_a: float, lon_b: float) -> AspectMatch | None:
        """Return the aspect formed by two ecliptic longitudes, or ``None``.

        Inputs are normalised into ``[0, 360)`` first; non-finite values raise
        :class:`~kundliengine.errors.OutOfRange`.  The result does not depend
        on argument order.
        """

        a = _longitude("lon_a", lon_a)
        b = _longitude("lon_b", lon_b)
        return self.classify_separation(separation(a, b))

    def aspect_between(self, pos_a: PlanetPosition, pos_b: PlanetPosition) -> Aspect | None:
        match = self.classify(pos_a.longitude, pos_b.longitude)
        if match is None:
            return None
        return Aspect(
            planet_a=pos_a.name,
            planet_b=pos_b.name,
            type=match.type,
            orb=match.orb,
            separation=match.separation,
        )

    def natal_aspects(self, chart: ChartLike | Iterable[PlanetPosition]) -> list[Aspect]:
        """Return aspects for every unordered pair within a single chart.

        Pairs are visited as ``(planets[i], planets[j])`` for ``i < j`` in
        input order, so the output order is stable.
        """

        planets = planets_of(chart)
        aspects: list[Aspect] = []
        for i, first in enumerate(planets):
            for second in planets[i + 1 :]:
                aspect = self.aspect_between(first, second)
                if aspect is not None:
                    aspects.append(aspect)
        LOG.debug("natal aspects: %d planets, %d aspects", len(planets), len(aspects))
        return aspects
