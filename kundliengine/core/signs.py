"""Zodiac sign catalogue used by chart positions and composite placements."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..errors import OutOfRange

__all__ = [
    "SIGN_ARC_DEGREES",
    "ZodiacSign",
    "ZODIAC_SIGNS",
    "sign_for_index",
    "sign_for_longitude",
    "sign_index_for",
]

SIGN_ARC_DEGREES = 30.0


@dataclass(frozen=True)
class ZodiacSign:
    """A rashi with its English and Sanskrit names and ruling graha."""

    index: int
    name: str
    sanskrit: str
    lord: str

    @property
    def start(self) -> float:
        return self.index * SIGN_ARC_DEGREES


_SIGN_DATA: Sequence[tuple[str, str, str]] = (
    ("Aries", "Mesha", "Mars"),
    ("Taurus", "Vrishabha", "Venus"),
    ("Gemini", "Mithuna", "Mercury"),
    ("Cancer", "Karka", "Moon"),
    ("Leo", "Simha", "Sun"),
    ("Virgo", "Kanya", "Mercury"),
    ("Libra", "Tula", "Venus"),
    ("Scorpio", "Vrishchika", "Mars"),
    ("Sagittarius", "Dhanu", "Jupiter"),
    ("Capricorn", "Makara", "Saturn"),
    ("Aquarius", "Kumbha", "Saturn"),
    ("Pisces", "Meena", "Jupiter"),
)

ZODIAC_SIGNS: tuple[ZodiacSign, ...] = tuple(
    ZodiacSign(index=idx, name=name, sanskrit=sanskrit, lord=lord)
    for idx, (name, sanskrit, lord) in enumerate(_SIGN_DATA)
)

_NAME_INDEX: Mapping[str, int] = MappingProxyType(
    {
        **{sign.name.lower(): sign.index for sign in ZODIAC_SIGNS},
        **{sign.sanskrit.lower(): sign.index for sign in ZODIAC_SIGNS},
        # common alternate transliterations
        "vrishabh": 1,
        "karkata": 3,
        "kark": 3,
        "singh": 4,
        "vrischika": 7,
        "dhanus": 8,
        "makar": 9,
        "kumbh": 10,
        "mina": 11,
    }
)


def sign_for_index(index: int) -> ZodiacSign:
    """Return the sign for a zero-based ``index`` (0 = Aries)."""

    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 11:
        raise OutOfRange("sign_index", index, "an integer in 0..11")
    return ZODIAC_SIGNS[index]


def sign_for_longitude(longitude: float) -> ZodiacSign:
    """Return the sign containing a longitude already normalised into ``[0, 360)``."""

    return ZODIAC_SIGNS[min(int(longitude // SIGN_ARC_DEGREES), 11)]


def sign_index_for(name: str) -> int:
    """Resolve an English or Sanskrit sign name to its zero-based index.

    Matching ignores case and surrounding whitespace.  Unknown names raise
    :class:`~kundliengine.errors.OutOfRange` instead of defaulting to Aries.
    """

    key = " ".join(str(name or "").split()).lower()
    try:
        return _NAME_INDEX[key]
    except KeyError:
        raise OutOfRange("sign_name", name, "an English or Sanskrit zodiac sign name") from None
