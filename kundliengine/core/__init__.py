"""Catalogues of grahas and rashis shared by the analysis engines."""

from __future__ import annotations

from .bodies import (
    DEFAULT_SYNASTRY_WEIGHT,
    canonical_name,
    display_name,
    symbol_for,
    synastry_weight,
    vedic_name,
)
from .signs import (
    SIGN_ARC_DEGREES,
    ZODIAC_SIGNS,
    ZodiacSign,
    sign_for_index,
    sign_for_longitude,
    sign_index_for,
)

__all__ = [
    "DEFAULT_SYNASTRY_WEIGHT",
    "SIGN_ARC_DEGREES",
    "ZODIAC_SIGNS",
    "ZodiacSign",
    "canonical_name",
    "display_name",
    "sign_for_index",
    "sign_for_longitude",
    "sign_index_for",
    "symbol_for",
    "synastry_weight",
    "vedic_name",
]
