"""Graha catalogue helpers for naming and relationship pair weighting."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

__all__ = [
    "DEFAULT_SYNASTRY_WEIGHT",
    "SYNASTRY_WEIGHTS",
    "canonical_name",
    "display_name",
    "vedic_name",
    "symbol_for",
    "synastry_weight",
]


_BODY_ALIASES: Dict[str, str] = {
    "surya": "sun",
    "ravi": "sun",
    "chandra": "moon",
    "soma": "moon",
    "mangal": "mars",
    "mangala": "mars",
    "kuja": "mars",
    "budha": "mercury",
    "guru": "jupiter",
    "brihaspati": "jupiter",
    "shukra": "venus",
    "shani": "saturn",
    "north node": "rahu",
    "north_node": "rahu",
    "true node": "rahu",
    "mean node": "rahu",
    "south node": "ketu",
    "south_node": "ketu",
}


_DISPLAY: Dict[str, tuple[str, str, str]] = {
    # canonical: (English, Sanskrit, chart abbreviation)
    "sun": ("Sun", "Surya", "Su"),
    "moon": ("Moon", "Chandra", "Mo"),
    "mars": ("Mars", "Mangal", "Ma"),
    "mercury": ("Mercury", "Budha", "Me"),
    "jupiter": ("Jupiter", "Guru", "Ju"),
    "venus": ("Venus", "Shukra", "Ve"),
    "saturn": ("Saturn", "Shani", "Sa"),
    "rahu": ("Rahu", "Rahu", "Ra"),
    "ketu": ("Ketu", "Ketu", "Ke"),
    "uranus": ("Uranus", "Uranus", "Ur"),
    "neptune": ("Neptune", "Neptune", "Ne"),
    "pluto": ("Pluto", "Pluto", "Pl"),
}


# Relative importance of a graha when ranking relationship contacts.
SYNASTRY_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "sun": 10.0,
        "moon": 10.0,
        "venus": 9.0,
        "mars": 8.0,
        "jupiter": 7.0,
        "saturn": 7.0,
        "mercury": 6.0,
        "rahu": 4.0,
        "ketu": 4.0,
    }
)

DEFAULT_SYNASTRY_WEIGHT = 5.0


def canonical_name(name: str) -> str:
    """Return the canonical lower-case identifier for ``name``."""

    lowered = " ".join((name or "").split()).lower()
    if not lowered:
        return ""
    return _BODY_ALIASES.get(lowered, lowered)


def display_name(name: str) -> str:
    """Return the English display name, falling back to ``name`` itself."""

    entry = _DISPLAY.get(canonical_name(name))
    return entry[0] if entry else name.strip()


def vedic_name(name: str) -> str:
    entry = _DISPLAY.get(canonical_name(name))
    return entry[1] if entry else name.strip()


def symbol_for(name: str) -> str:
    entry = _DISPLAY.get(canonical_name(name))
    return entry[2] if entry else name.strip()[:2].title()


def synastry_weight(name: str, weights: Mapping[str, float] | None = None) -> float:
    """Return the ranking weight of ``name`` for relationship analysis.

    ``weights`` may override the built-in table; keys are matched through
    :func:`canonical_name`.
    """

    if weights is None:
        table: Mapping[str, float] = SYNASTRY_WEIGHTS
    else:
        table = {canonical_name(key): float(value) for key, value in weights.items()}
    return float(table.get(canonical_name(name), DEFAULT_SYNASTRY_WEIGHT))
