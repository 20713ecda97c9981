"""Composite (relationship) charts built from angular midpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..aspects.classifier import Aspect, AspectClassifier
from ..core.bodies import canonical_name, symbol_for
from ..core.signs import SIGN_ARC_DEGREES, ZodiacSign, sign_for_longitude
from ..errors import OutOfRange
from ..utils.angles import circular_midpoint, norm360
from .nakshatra import NakshatraPlacement, placement_for
from .positions import NatalChart, PlanetPosition

__all__ = [
    "CompositePlanet",
    "CompositeChart",
    "CompositeChartBuilder",
    "equal_house",
]

LOG = logging.getLogger(__name__)


def equal_house(longitude: float, ascendant: float) -> int:
    """Return the equal house (1-12) of ``longitude``.

    Houses are 30° wide and counted from the ascendant degree itself, not from
    the start of its sign.
    """

    offset = norm360(longitude - ascendant)
    return min(int(offset // SIGN_ARC_DEGREES), 11) + 1


@dataclass(frozen=True)
class CompositePlanet:
    """Midpoint placement of a graha shared by both source charts."""

    name: str
    longitude: float
    house: int
    nakshatra: NakshatraPlacement

    @property
    def sign(self) -> ZodiacSign:
        return sign_for_longitude(self.longitude)

    @property
    def sign_index(self) -> int:
        return self.sign.index

    @property
    def degree_in_sign(self) -> float:
        return self.longitude - self.sign.start

    @property
    def pada(self) -> int:
        return self.nakshatra.pada

    def to_position(self) -> PlanetPosition:
        return PlanetPosition.from_longitude(self.name, self.longitude, house=self.house)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "symbol": symbol_for(self.name),
            "longitude": self.longitude,
            "sign": self.sign.name,
            "sign_index": self.sign_index,
            "degree_in_sign": self.degree_in_sign,
            "house": self.house,
            "nakshatra": self.nakshatra.name,
            "pada": self.pada,
        }


@dataclass(frozen=True)
class CompositeChart:
    """Composite ascendant, planets and the aspects formed among them."""

    ascendant: float
    planets: tuple[CompositePlanet, ...]
    aspects: tuple[Aspect, ...]

    @property
    def ascendant_sign(self) -> ZodiacSign:
        return sign_for_longitude(self.ascendant)

    @property
    def ascendant_nakshatra(self) -> NakshatraPlacement:
        return placement_for(self.ascendant)

    def planet(self, name: str) -> CompositePlanet | None:
        key = canonical_name(name)
        for planet in self.planets:
            if canonical_name(planet.name) == key:
                return planet
        return None

    def planets_in_house(self, house: int) -> list[CompositePlanet]:
        if not 1 <= house <= 12:
            raise OutOfRange("house", house, "an integer in 1..12")
        return [planet for planet in self.planets if planet.house == house]

    def to_dict(self) -> dict[str, object]:
        return {
            "ascendant": self.ascendant,
            "ascendant_sign": self.ascendant_sign.name,
            "ascendant_nakshatra": self.ascendant_nakshatra.to_dict(),
            "planets": [planet.to_dict() for planet in self.planets],
            "aspects": [aspect.to_dict() for aspect in self.aspects],
        }


@dataclass(frozen=True)
class CompositeChartBuilder:
    """Derive a :class:`CompositeChart` from two natal charts.

    Each graha present in both charts is placed at the midpoint of its two
    longitudes on the shorter arc; grahas found in only one chart are left
    out.  The ascendant uses the same rule, so ``build(a, b)`` and
    ``build(b, a)`` produce identical longitudes.
    """

    classifier: AspectClassifier = AspectClassifier()

    def build(self, chart_a: NatalChart, chart_b: NatalChart) -> CompositeChart:
        ascendant = circular_midpoint(chart_a.ascendant, chart_b.ascendant)
        planets: list[CompositePlanet] = []
        for position_a in chart_a.planets:
            position_b = chart_b.planet(position_a.name)
            if position_b is None:
                continue
            longitude = circular_midpoint(position_a.longitude, position_b.longitude)
            planets.append(
                CompositePlanet(
                    name=position_a.name,
                    longitude=longitude,
                    house=equal_house(longitude, ascendant),
                    nakshatra=placement_for(longitude),
                )
            )

        aspects: list[Aspect] = []
        for i, first in enumerate(planets):
            for second in planets[i + 1 :]:
                match = self.classifier.classify(first.longitude, second.longitude)
                if match is None:
                    continue
                aspects.append(
                    Aspect(
                        planet_a=first.name,
                        planet_b=second.name,
                        type=match.type,
                        orb=match.orb,
                        separation=match.separation,
                    )
                )

        LOG.debug(
            "composite chart: %d shared planets (%d/%d), %d aspects",
            len(planets),
            len(chart_a.planets),
            len(chart_b.planets),
            len(aspects),
        )
        return CompositeChart(ascendant=ascendant, planets=tuple(planets), aspects=tuple(aspects))
