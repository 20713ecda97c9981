"""Vedic (Jyotisha) strength analysis."""

from __future__ import annotations

from .constants import REQUIRED_STRENGTH, required_strength_for
from .shadbala import (
    DEFAULT_THRESHOLDS,
    PlanetaryStrength,
    ShadbalaAggregator,
    ShadbalaComponent,
    ShadbalaKind,
    ShadbalaSummary,
    StrengthLevel,
    StrengthThresholds,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "REQUIRED_STRENGTH",
    "PlanetaryStrength",
    "ShadbalaAggregator",
    "ShadbalaComponent",
    "ShadbalaKind",
    "ShadbalaSummary",
    "StrengthLevel",
    "StrengthThresholds",
    "required_strength_for",
]
