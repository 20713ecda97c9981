"""Classical Śaḍbala aggregation and strength classification.

The six balas of a graha are computed elsewhere (from divisional charts,
sunrise timings, motion and aspect modelling) and arrive here as plain
Virupa values.  This module sums them, compares the total with the graha's
classical requirement and assigns a strength level.  Component values are
validated rather than clamped: a bala outside ``[0, maximum]`` points to a
defect in the upstream calculator and raises
:class:`~kundliengine.errors.OutOfRange`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ...core.bodies import display_name, vedic_name
from ...errors import ConfigurationError, OutOfRange
from .constants import COMPONENT_MAXIMUM, VIRUPAS_PER_RUPA, required_strength_for

__all__ = [
    "ShadbalaKind",
    "ShadbalaComponent",
    "StrengthLevel",
    "StrengthThresholds",
    "PlanetaryStrength",
    "ShadbalaSummary",
    "ShadbalaAggregator",
    "DEFAULT_THRESHOLDS",
]

LOG = logging.getLogger(__name__)


class ShadbalaKind(str, Enum):
    """The six balas, in their traditional order."""

    STHANA = "sthana"
    DIK = "dik"
    KALA = "kala"
    CHESHTA = "cheshta"
    NAISARGIKA = "naisargika"
    DRIK = "drik"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self][0]

    @property
    def english(self) -> str:
        return _KIND_LABELS[self][1]

    @classmethod
    def parse(cls, value: "ShadbalaKind | str") -> "ShadbalaKind":
        """Resolve a kind from its Sanskrit key, label or English name."""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", " ")
        if key.endswith(" bala"):
            key = key[: -len(" bala")]
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise OutOfRange("kind", value, "one of the six Shadbala components") from None


_KIND_LABELS: dict[ShadbalaKind, tuple[str, str]] = {
    ShadbalaKind.STHANA: ("Sthana Bala", "positional"),
    ShadbalaKind.DIK: ("Dik Bala", "directional"),
    ShadbalaKind.KALA: ("Kala Bala", "temporal"),
    ShadbalaKind.CHESHTA: ("Cheshta Bala", "motional"),
    ShadbalaKind.NAISARGIKA: ("Naisargika Bala", "natural"),
    ShadbalaKind.DRIK: ("Drik Bala", "aspectual"),
}

_KIND_ALIASES: dict[str, str] = {
    **{english: kind.value for kind, (_, english) in _KIND_LABELS.items()},
    "chesta": "cheshta",
    "drig": "drik",
    "dig": "dik",
}


@dataclass(frozen=True)
class ShadbalaComponent:
    """Value of one bala in Virupas together with its maximum."""

    kind: ShadbalaKind
    value: float
    max_value: float = COMPONENT_MAXIMUM

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ShadbalaKind.parse(self.kind))
        maximum = float(self.max_value)
        if not math.isfinite(maximum) or maximum <= 0.0:
            raise OutOfRange("max_value", self.max_value, "a positive finite number")
        try:
            value = float(self.value)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value) or not 0.0 <= value <= maximum:
            raise OutOfRange(f"{self.kind.value}.value", self.value, f"a value in [0, {maximum:g}]")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "max_value", maximum)

    @property
    def percentage(self) -> float:
        return self.value / self.max_value * 100.0


class StrengthLevel(str, Enum):
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very_weak"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]


_LEVEL_COLORS: dict[StrengthLevel, str] = {
    StrengthLevel.VERY_STRONG: "green",
    StrengthLevel.STRONG: "blue",
    StrengthLevel.MODERATE: "yellow",
    StrengthLevel.WEAK: "orange",
    StrengthLevel.VERY_WEAK: "red",
}

_LEVEL_DESCRIPTIONS: dict[StrengthLevel, str] = {
    StrengthLevel.VERY_STRONG: "Planet is exceptionally powerful and delivers excellent results",
    StrengthLevel.STRONG: "Planet is well-placed and gives good results",
    StrengthLevel.MODERATE: "Planet has average strength; results depend on other factors",
    StrengthLevel.WEAK: "Planet is weak and may struggle to deliver positive results",
    StrengthLevel.VERY_WEAK: "Planet is very weak and needs remedies for improvement",
}


@dataclass(frozen=True)
class StrengthThresholds:
    """Lower bounds of the strength-ratio buckets.

    A ratio equal to a bound belongs to the higher bucket.
    """

    very_strong: float = 1.5
    strong: float = 1.0
    moderate: float = 0.75
    weak: float = 0.5

    def __post_init__(self) -> None:
        bounds = (self.very_strong, self.strong, self.moderate, self.weak)
        if not all(math.isfinite(float(bound)) for bound in bounds):
            raise ConfigurationError(f"strength thresholds must be finite: {bounds!r}")
        if float(self.weak) < 0.0:
            raise ConfigurationError(f"weak threshold must be non-negative, got {self.weak!r}")
        if not bounds[0] > bounds[1] > bounds[2] > bounds[3]:
            raise ConfigurationError(f"strength thresholds must strictly decrease: {bounds!r}")

    def level_for(self, ratio: float) -> StrengthLevel:
        if ratio >= self.very_strong:
            return StrengthLevel.VERY_STRONG
        if ratio >= self.strong:
            return StrengthLevel.STRONG
        if ratio >= self.moderate:
            return StrengthLevel.MODERATE
        if ratio >= self.weak:
            return StrengthLevel.WEAK
        return StrengthLevel.VERY_WEAK


DEFAULT_THRESHOLDS = StrengthThresholds()


@dataclass(frozen=True)
class PlanetaryStrength:
    """Aggregated Śaḍbala of one graha."""

    planet: str
    components: tuple[ShadbalaComponent, ...]
    total_shadbala: float
    required_strength: float
    strength_ratio: float
    strength_level: StrengthLevel

    @property
    def vedic_name(self) -> str:
        return vedic_name(self.planet)

    @property
    def percentage_strength(self) -> float:
        """Total as a percentage of the summed component maxima."""

        ceiling = math.fsum(component.max_value for component in self.components)
        return self.total_shadbala / ceiling * 100.0

    @property
    def rupas(self) -> float:
        return self.total_shadbala / VIRUPAS_PER_RUPA

    def component(self, kind: ShadbalaKind | str) -> ShadbalaComponent:
        wanted = ShadbalaKind.parse(kind)
        for component in self.components:
            if component.kind is wanted:
                return component
        raise KeyError(wanted.value)

    def to_dict(self) -> dict[str, object]:
        return {
            "planet": self.planet,
            "vedic_name": self.vedic_name,
            "components": {c.kind.value: c.value for c in self.components},
            "total_shadbala": self.total_shadbala,
            "required_strength": self.required_strength,
            "strength_ratio": self.strength_ratio,
            "strength_level": self.strength_level.value,
            "percentage_strength": self.percentage_strength,
        }


_STRONG_LEVELS = frozenset({StrengthLevel.STRONG, StrengthLevel.VERY_STRONG})
_WEAK_LEVELS = frozenset({StrengthLevel.WEAK, StrengthLevel.VERY_WEAK})


@dataclass(frozen=True)
class ShadbalaSummary:
    """Chart-wide view over several :class:`PlanetaryStrength` values."""

    strengths: tuple[PlanetaryStrength, ...]

    @property
    def strongest(self) -> PlanetaryStrength | None:
        return max(self.strengths, key=lambda s: s.strength_ratio, default=None)

    @property
    def weakest(self) -> PlanetaryStrength | None:
        return min(self.strengths, key=lambda s: s.strength_ratio, default=None)

    @property
    def strong_planets(self) -> list[PlanetaryStrength]:
        return [s for s in self.strengths if s.strength_level in _STRONG_LEVELS]

    @property
    def weak_planets(self) -> list[PlanetaryStrength]:
        return [s for s in self.strengths if s.strength_level in _WEAK_LEVELS]

    @property
    def average_ratio(self) -> float:
        if not self.strengths:
            return 0.0
        return math.fsum(s.strength_ratio for s in self.strengths) / len(self.strengths)

    def strength_for(self, planet: str) -> PlanetaryStrength | None:
        wanted = display_name(planet)
        for strength in self.strengths:
            if display_name(strength.planet) == wanted:
                return strength
        return None


ComponentInput = Iterable[ShadbalaComponent] | Mapping[ShadbalaKind | str, float]


def _coerce_components(components: ComponentInput) -> list[ShadbalaComponent]:
    if isinstance(components, Mapping):
        return [
            ShadbalaComponent(ShadbalaKind.parse(kind), value) for kind, value in components.items()
        ]
    items = list(components)
    for item in items:
        if not isinstance(item, ShadbalaComponent):
            raise TypeError(f"expected ShadbalaComponent, got {type(item).__name__}")
    return items


@dataclass(frozen=True)
class ShadbalaAggregator:
    """Sum the six balas of a graha and classify the result.

    ``required_strengths`` replaces the classical table used by
    :meth:`aggregate_chart` when no table is passed explicitly.
    """

    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS
    required_strengths: Mapping[str, float] | None = None

    def __post_init__(self) -> None:
        if self.required_strengths is not None:
            frozen = MappingProxyType(dict(self.required_strengths))
            object.__setattr__(self, "required_strengths", frozen)

    def aggregate(
        self,
        planet: str,
        components: ComponentInput,
        required_strength: float,
    ) -> PlanetaryStrength:
        items = _coerce_components(components)
        by_kind: dict[ShadbalaKind, ShadbalaComponent] = {}
        for item in items:
            if item.kind in by_kind:
                raise OutOfRange(
                    "components", item.kind.value, "each Shadbala component exactly once"
                )
            by_kind[item.kind] = item
        missing = [kind.value for kind in ShadbalaKind if kind not in by_kind]
        if missing:
            raise OutOfRange("components", tuple(missing), "all six Shadbala components")

        try:
            required = float(required_strength)
        except (TypeError, ValueError):
            required = math.nan
        if not math.isfinite(required) or required <= 0.0:
            raise ConfigurationError(
                f"required strength for {planet!r} must be positive, got {required_strength!r}"
            )

        ordered = tuple(by_kind[kind] for kind in ShadbalaKind)
        total = math.fsum(component.value for component in ordered)
        ratio = total / required
        return PlanetaryStrength(
            planet=planet,
            components=ordered,
            total_shadbala=total,
            required_strength=required,
            strength_ratio=ratio,
            strength_level=self.thresholds.level_for(ratio),
        )

    def aggregate_chart(
        self,
        components_by_planet: Mapping[str, ComponentInput],
        constants: Mapping[str, float] | None = None,
    ) -> ShadbalaSummary:
        """Aggregate every planet of a chart, looking up its required strength.

        ``constants`` falls back to :attr:`required_strengths` and then to the
        classical table in :mod:`kundliengine.engine.vedic.constants`.
        """

        table = constants if constants is not None else self.required_strengths
        strengths = tuple(
            self.aggregate(planet, components, required_strength_for(planet, table))
            for planet, components in components_by_planet.items()
        )
        summary = ShadbalaSummary(strengths=strengths)
        LOG.debug(
            "shadbala: %d planets, %d strong, %d weak",
            len(strengths),
            len(summary.strong_planets),
            len(summary.weak_planets),
        )
        return summary
