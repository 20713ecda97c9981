"""Cross-chart aspect detection between two natal charts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from ..aspects.classifier import Aspect, AspectClassifier
from ..aspects.policy import DEFAULT_ORB_TABLE, AspectNature, OrbTable
from ..chart.positions import ChartLike, PlanetPosition, planets_of
from ..core.bodies import canonical_name, synastry_weight

__all__ = [
    "SynastryEngine",
    "SynastryResult",
    "pairwise_separation",
]

LOG = logging.getLogger(__name__)


def pairwise_separation(lons_a: np.ndarray, lons_b: np.ndarray) -> np.ndarray:
    """Return the ``len(a) x len(b)`` matrix of shortest angular distances.

    Uses the same fold as :func:`kundliengine.utils.angles.separation` so each
    cell equals the scalar result bit for bit.
    """

    if lons_a.size == 0 or lons_b.size == 0:
        return np.empty((lons_a.size, lons_b.size), dtype=float)
    raw = np.abs(lons_a[:, None] - lons_b[None, :])
    return np.where(raw > 180.0, 360.0 - raw, raw)


def _longitudes(planets: Sequence[PlanetPosition]) -> np.ndarray:
    return np.asarray([planet.longitude for planet in planets], dtype=float)


@dataclass(frozen=True)
class SynastryResult:
    """Aspects between two charts and the tallies derived from them.

    ``aspects`` keeps row-major order: every planet of the first chart is
    paired with the planets of the second chart in input order.
    """

    aspects: tuple[Aspect, ...]
    orb_table: OrbTable = field(default=DEFAULT_ORB_TABLE, repr=False, compare=False)
    weights: Mapping[str, float] | None = field(default=None, repr=False, compare=False)

    @property
    def harmonious_count(self) -> int:
        return sum(1 for aspect in self.aspects if aspect.nature is AspectNature.HARMONIOUS)

    @property
    def challenging_count(self) -> int:
        return sum(1 for aspect in self.aspects if aspect.nature is AspectNature.CHALLENGING)

    def by_nature(self) -> dict[AspectNature, list[Aspect]]:
        """Group aspects by nature; every nature is present, possibly empty."""

        grouped: dict[AspectNature, list[Aspect]] = {nature: [] for nature in AspectNature}
        for aspect in self.aspects:
            grouped[aspect.nature].append(aspect)
        return grouped

    def aspects_for(self, planet_a: str) -> list[Aspect]:
        """Return aspects made by ``planet_a`` of the first chart."""

        key = canonical_name(planet_a)
        return [aspect for aspect in self.aspects if canonical_name(aspect.planet_a) == key]

    def aspects_to(self, planet_b: str) -> list[Aspect]:
        """Return aspects received by ``planet_b`` of the second chart."""

        key = canonical_name(planet_b)
        return [aspect for aspect in self.aspects if canonical_name(aspect.planet_b) == key]

    def pair_weight(self, aspect: Aspect) -> float:
        return synastry_weight(aspect.planet_a, self.weights) + synastry_weight(
            aspect.planet_b, self.weights
        )

    def key_aspects(self, limit: int = 5) -> list[Aspect]:
        """Return the ``limit`` most significant aspects.

        Aspects rank by the combined weight of the two grahas, heaviest first,
        then by tighter orb.  The sort is stable so equal entries keep
        row-major order.
        """

        if limit < 0:
            raise ValueError("limit must be non-negative")
        ranked = sorted(self.aspects, key=lambda aspect: (-self.pair_weight(aspect), aspect.orb))
        return ranked[:limit]

    def to_dict(self) -> dict[str, object]:
        return {
            "aspects": [aspect.to_dict() for aspect in self.aspects],
            "harmonious_count": self.harmonious_count,
            "challenging_count": self.challenging_count,
        }


@dataclass(frozen=True)
class SynastryEngine:
    """Classify every planet pair drawn from two different charts.

    ``weights`` overrides the graha ranking weights used by
    :meth:`SynastryResult.key_aspects` and compatibility scoring.
    """

    classifier: AspectClassifier = AspectClassifier()
    weights: Mapping[str, float] | None = None

    def __post_init__(self) -> None:
        if self.weights is not None:
            frozen = {canonical_name(name): float(value) for name, value in self.weights.items()}
            object.__setattr__(self, "weights", MappingProxyType(frozen))

    def compute(self, chart_a: ChartLike, chart_b: ChartLike) -> SynastryResult:
        planets_a = planets_of(chart_a)
        planets_b = planets_of(chart_b)
        separations = pairwise_separation(_longitudes(planets_a), _longitudes(planets_b))

        table = self.classifier.orb_table
        candidate = np.zeros(separations.shape, dtype=bool)
        for spec in table.specs:
            candidate |= np.abs(separations - spec.target) <= spec.max_orb

        aspects: list[Aspect] = []
        # argwhere yields indices in row-major order
        for i, j in np.argwhere(candidate).tolist():
            match = self.classifier.classify_separation(float(separations[i, j]))
            if match is None:
                continue
            aspects.append(
                Aspect(
                    planet_a=planets_a[i].name,
                    planet_b=planets_b[j].name,
                    type=match.type,
                    orb=match.orb,
                    separation=match.separation,
                )
            )

        result = SynastryResult(aspects=tuple(aspects), orb_table=table, weights=self.weights)
        LOG.debug(
            "synastry: %dx%d pairs, %d aspects (%d harmonious, %d challenging)",
            len(planets_a),
            len(planets_b),
            len(aspects),
            result.harmonious_count,
            result.challenging_count,
        )
        return result
