"""Compatibility scoring and thematic filters over synastry results."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..aspects.classifier import Aspect
from ..aspects.policy import AspectNature
from ..core.bodies import canonical_name
from .engine import SynastryResult

__all__ = [
    "CompatibilityRating",
    "AspectRecord",
    "SynastrySummary",
    "NATURE_VALUES",
    "compatibility_score",
    "rating_for",
    "romantic_indicators",
    "communication_indicators",
    "stability_indicators",
    "summarize",
]


NEUTRAL_SCORE = 50.0

# Base contribution of a single exact aspect before orb and pair weighting.
NATURE_VALUES: dict[AspectNature, float] = {
    AspectNature.HARMONIOUS: 10.0,
    AspectNature.CHALLENGING: -8.0,
    AspectNature.NEUTRAL: 3.0,
    AspectNature.ADJUSTING: -2.0,
}

ROMANTIC_PLANETS = frozenset({"venus", "mars", "moon"})
COMMUNICATION_PLANETS = frozenset({"mercury"})
STABILITY_PLANETS = frozenset({"saturn"})


class CompatibilityRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    DIFFICULT = "difficult"

    @property
    def label(self) -> str:
        return self.value.title()


_RATING_FLOORS: tuple[tuple[float, CompatibilityRating], ...] = (
    (80.0, CompatibilityRating.EXCELLENT),
    (65.0, CompatibilityRating.GOOD),
    (50.0, CompatibilityRating.MODERATE),
    (35.0, CompatibilityRating.CHALLENGING),
)


def compatibility_score(result: SynastryResult) -> float:
    """Return a 0-100 compatibility score for ``result``.

    Scoring starts from a neutral 50.  Each aspect adds its nature value
    scaled by how close it is to exact (``1 - orb / max_orb``) and by the
    combined graha weight divided by ten.  The total is clamped to
    ``[0, 100]``; a result without aspects scores exactly 50.
    """

    if not result.aspects:
        return NEUTRAL_SCORE
    total = NEUTRAL_SCORE
    for aspect in result.aspects:
        max_orb = result.orb_table.max_orb(aspect.type)
        orb_factor = 1.0 if max_orb <= 0.0 else 1.0 - aspect.orb / max_orb
        value = NATURE_VALUES[aspect.nature] * orb_factor
        total += value * (result.pair_weight(aspect) / 10.0)
    return min(max(total, 0.0), 100.0)


def rating_for(score: float) -> CompatibilityRating:
    for floor, rating in _RATING_FLOORS:
        if score >= floor:
            return rating
    return CompatibilityRating.DIFFICULT


def _touching(aspects: Iterable[Aspect], planets: frozenset[str]) -> list[Aspect]:
    return [
        aspect
        for aspect in aspects
        if canonical_name(aspect.planet_a) in planets or canonical_name(aspect.planet_b) in planets
    ]


def romantic_indicators(result: SynastryResult) -> list[Aspect]:
    """Aspects involving Venus, Mars or the Moon from either chart."""

    return _touching(result.aspects, ROMANTIC_PLANETS)


def communication_indicators(result: SynastryResult) -> list[Aspect]:
    return _touching(result.aspects, COMMUNICATION_PLANETS)


def stability_indicators(result: SynastryResult) -> list[Aspect]:
    return _touching(result.aspects, STABILITY_PLANETS)


class AspectRecord(BaseModel):
    """Serialisable view of one synastry aspect."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    planet_a: str = Field(alias="planetA")
    planet_b: str = Field(alias="planetB")
    aspect: str
    nature: str
    orb: float
    separation: float

    @classmethod
    def from_aspect(cls, aspect: Aspect) -> "AspectRecord":
        return cls(
            planet_a=aspect.planet_a,
            planet_b=aspect.planet_b,
            aspect=aspect.type.value,
            nature=aspect.nature.value,
            orb=aspect.orb,
            separation=aspect.separation,
        )


class SynastrySummary(BaseModel):
    """Export payload combining aspects, tallies and the compatibility score."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    aspects: list[AspectRecord]
    key_aspects: list[AspectRecord] = Field(alias="keyAspects")
    harmonious_count: int = Field(alias="harmoniousCount")
    challenging_count: int = Field(alias="challengingCount")
    score: float
    rating: CompatibilityRating


def summarize(result: SynastryResult, *, key_limit: int = 5) -> SynastrySummary:
    score = compatibility_score(result)
    return SynastrySummary(
        aspects=[AspectRecord.from_aspect(aspect) for aspect in result.aspects],
        key_aspects=[AspectRecord.from_aspect(aspect) for aspect in result.key_aspects(key_limit)],
        harmonious_count=result.harmonious_count,
        challenging_count=result.challenging_count,
        score=score,
        rating=rating_for(score),
    )
