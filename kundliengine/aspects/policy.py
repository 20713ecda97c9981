"""Aspect catalogue and orb allowances for the classifier."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ..errors import ConfigurationError

__all__ = [
    "AspectType",
    "AspectNature",
    "AspectSpec",
    "OrbTable",
    "ASPECT_PRIORITY",
    "DEFAULT_ORBS",
    "DEFAULT_ORB_TABLE",
    "HARMONIOUS_ASPECTS",
    "CHALLENGING_ASPECTS",
    "nature_of",
]


class AspectType(str, Enum):
    """Named angular relationships recognised by the engine."""

    CONJUNCTION = "conjunction"
    OPPOSITION = "opposition"
    TRINE = "trine"
    SQUARE = "square"
    SEXTILE = "sextile"

    @property
    def target(self) -> float:
        return _TARGETS[self]

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


class AspectNature(str, Enum):
    HARMONIOUS = "harmonious"
    CHALLENGING = "challenging"
    NEUTRAL = "neutral"
    ADJUSTING = "adjusting"


_TARGETS: dict[AspectType, float] = {
    AspectType.CONJUNCTION: 0.0,
    AspectType.OPPOSITION: 180.0,
    AspectType.TRINE: 120.0,
    AspectType.SQUARE: 90.0,
    AspectType.SEXTILE: 60.0,
}

_SYMBOLS: dict[AspectType, str] = {
    AspectType.CONJUNCTION: "☌",
    AspectType.OPPOSITION: "☍",
    AspectType.TRINE: "△",
    AspectType.SQUARE: "□",
    AspectType.SEXTILE: "⚹",
}

# Evaluation order; an exact orb tie resolves to the earlier entry.
ASPECT_PRIORITY: tuple[AspectType, ...] = (
    AspectType.CONJUNCTION,
    AspectType.OPPOSITION,
    AspectType.TRINE,
    AspectType.SQUARE,
    AspectType.SEXTILE,
)

HARMONIOUS_ASPECTS = frozenset({AspectType.TRINE, AspectType.SEXTILE})
CHALLENGING_ASPECTS = frozenset({AspectType.SQUARE, AspectType.OPPOSITION})


def nature_of(aspect: AspectType | str | None) -> AspectNature:
    """Return the :class:`AspectNature` of ``aspect``.

    Values outside the five recognised types are reported as
    :attr:`AspectNature.ADJUSTING`.
    """

    try:
        kind = AspectType(aspect)
    except ValueError:
        return AspectNature.ADJUSTING
    if kind in HARMONIOUS_ASPECTS:
        return AspectNature.HARMONIOUS
    if kind in CHALLENGING_ASPECTS:
        return AspectNature.CHALLENGING
    return AspectNature.NEUTRAL


@dataclass(frozen=True)
class AspectSpec:
    """One row of the orb table: aspect type and its maximum orb in degrees."""

    type: AspectType
    max_orb: float

    @property
    def target(self) -> float:
        return self.type.target


@dataclass(frozen=True)
class OrbTable:
    """Ordered set of :class:`AspectSpec` rows evaluated by the classifier.

    Rows are stored in :data:`ASPECT_PRIORITY` order whatever order they are
    supplied in, so classification never depends on mapping iteration.
    """

    specs: tuple[AspectSpec, ...]

    def __post_init__(self) -> None:
        specs = tuple(self.specs)
        if not specs:
            raise ConfigurationError("orb table must contain at least one aspect")
        seen: set[AspectType] = set()
        checked: list[AspectSpec] = []
        for spec in specs:
            try:
                kind = AspectType(spec.type)
            except ValueError:
                raise ConfigurationError(f"unknown aspect type {spec.type!r}") from None
            if kind in seen:
                raise ConfigurationError(f"aspect {kind.value!r} listed more than once")
            try:
                orb = float(spec.max_orb)
            except (TypeError, ValueError):
                orb = math.nan
            if not math.isfinite(orb) or orb < 0.0:
                raise ConfigurationError(
                    f"orb for {kind.value!r} must be a non-negative number, got {spec.max_orb!r}"
                )
            seen.add(kind)
            checked.append(AspectSpec(kind, orb))
        checked.sort(key=lambda spec: ASPECT_PRIORITY.index(spec.type))
        object.__setattr__(self, "specs", tuple(checked))

    @classmethod
    def from_mapping(cls, orbs: Mapping[AspectType | str, float]) -> "OrbTable":
        """Build a table from ``{aspect: max_orb}``; keys may be enum members or names."""

        specs: list[AspectSpec] = []
        for key, value in orbs.items():
            try:
                kind = AspectType(str(getattr(key, "value", key)).strip().lower())
            except ValueError:
                raise ConfigurationError(f"unknown aspect type {key!r}") from None
            specs.append(AspectSpec(kind, value))
        return cls(tuple(specs))

    def __iter__(self) -> Iterator[AspectSpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    @property
    def types(self) -> tuple[AspectType, ...]:
        return tuple(spec.type for spec in self.specs)

    def max_orb(self, aspect: AspectType | str) -> float:
        kind = AspectType(aspect)
        for spec in self.specs:
            if spec.type is kind:
                return spec.max_orb
        raise KeyError(kind.value)

    def as_dict(self) -> dict[str, float]:
        return {spec.type.value: spec.max_orb for spec in self.specs}


DEFAULT_ORBS: Mapping[AspectType, float] = MappingProxyType(
    {
        AspectType.CONJUNCTION: 10.0,
        AspectType.OPPOSITION: 10.0,
        AspectType.TRINE: 8.0,
        AspectType.SQUARE: 8.0,
        AspectType.SEXTILE: 6.0,
    }
)

DEFAULT_ORB_TABLE = OrbTable.from_mapping(DEFAULT_ORBS)
