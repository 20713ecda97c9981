"""Planet placements and their conversion to ecliptic longitude."""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..core.bodies import canonical_name
from ..core.signs import SIGN_ARC_DEGREES, ZodiacSign, sign_for_index, sign_index_for
from ..errors import OutOfRange
from ..utils.angles import norm360

__all__ = [
    "PlanetPosition",
    "NatalChart",
    "ChartLike",
    "planets_of",
    "resolve",
]


def _finite(field_name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise OutOfRange(field_name, value, "a finite number") from None
    if not math.isfinite(number):
        raise OutOfRange(field_name, value, "a finite number")
    return number


def _sign_index(value: int) -> int:
    if isinstance(value, bool):
        raise OutOfRange("sign_index", value, "an integer in 0..11")
    try:
        index = operator.index(value)
    except TypeError:
        raise OutOfRange("sign_index", value, "an integer in 0..11") from None
    if not 0 <= index <= 11:
        raise OutOfRange("sign_index", value, "an integer in 0..11")
    return index


def _check_half_open(field_name: str, value: float, upper: float) -> float:
    number = _finite(field_name, value)
    if not 0.0 <= number < upper:
        raise OutOfRange(field_name, value, f"a value in [0, {upper:g})")
    return number


def resolve(sign_index: int, degree: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Return the ecliptic longitude in ``[0, 360)`` for a sign-relative placement.

    ``sign_index`` counts from Aries (0) to Pisces (11).  Each input must lie
    in its documented range; violations raise
    :class:`~kundliengine.errors.OutOfRange` rather than being clamped.  A
    fractional ``degree`` combined with ``minutes`` may carry the sum past
    360°, in which case the result wraps back to the start of the zodiac.
    """

    index = _sign_index(sign_index)
    deg = _check_half_open("degree", degree, SIGN_ARC_DEGREES)
    mins = _check_half_open("minutes", minutes, 60.0)
    secs = _check_half_open("seconds", seconds, 60.0)
    return norm360(index * SIGN_ARC_DEGREES + deg + mins / 60.0 + secs / 3600.0)


@dataclass(frozen=True)
class PlanetPosition:
    """Placement of a graha as written on a chart: sign, degree, minutes, seconds."""

    name: str
    sign_index: int
    degree: float
    minutes: float = 0.0
    seconds: float = 0.0
    house: int | None = None

    def __post_init__(self) -> None:
        if not str(self.name or "").strip():
            raise OutOfRange("name", self.name, "a non-empty planet name")
        object.__setattr__(self, "sign_index", _sign_index(self.sign_index))
        degree = _check_half_open("degree", self.degree, SIGN_ARC_DEGREES)
        object.__setattr__(self, "degree", degree)
        object.__setattr__(self, "minutes", _check_half_open("minutes", self.minutes, 60.0))
        object.__setattr__(self, "seconds", _check_half_open("seconds", self.seconds, 60.0))
        if self.house is not None:
            house = self.house
            if isinstance(house, bool) or not isinstance(house, int) or not 1 <= house <= 12:
                raise OutOfRange("house", self.house, "an integer in 1..12")

    @classmethod
    def from_longitude(
        cls, name: str, longitude: float, house: int | None = None
    ) -> "PlanetPosition":
        """Split an absolute longitude into sign, whole degrees, minutes and seconds."""

        lon = norm360(_finite("longitude", longitude))
        sign_index = min(int(lon // SIGN_ARC_DEGREES), 11)
        total_seconds = (lon - sign_index * SIGN_ARC_DEGREES) * 3600.0
        degree = min(int(total_seconds // 3600.0), 29)
        minutes = min(int((total_seconds - degree * 3600.0) // 60.0), 59)
        seconds = total_seconds - degree * 3600.0 - minutes * 60.0
        return cls(
            name=name,
            sign_index=sign_index,
            degree=float(degree),
            minutes=float(minutes),
            seconds=min(max(seconds, 0.0), math.nextafter(60.0, 0.0)),
            house=house,
        )

    @classmethod
    def from_sign_name(
        cls,
        name: str,
        sign: str,
        degree: float,
        minutes: float = 0.0,
        seconds: float = 0.0,
        house: int | None = None,
    ) -> "PlanetPosition":
        """Build a position from an English or Sanskrit sign name such as ``"Mesha"``."""

        return cls(
            name=name,
            sign_index=sign_index_for(sign),
            degree=degree,
            minutes=minutes,
            seconds=seconds,
            house=house,
        )

    @property
    def longitude(self) -> float:
        """Absolute longitude from :func:`resolve`.

        A fractional ``degree`` plus ``minutes`` near the end of Pisces can wrap
        past 360° into Aries while :attr:`sign` still names the stored sign.
        """

        return resolve(self.sign_index, self.degree, self.minutes, self.seconds)

    @property
    def sign(self) -> ZodiacSign:
        return sign_for_index(self.sign_index)

    @property
    def key(self) -> str:
        """Canonical identity used to match the same graha across charts."""

        return canonical_name(self.name)

    @property
    def degree_string(self) -> str:
        in_sign = self.degree + self.minutes / 60.0 + self.seconds / 3600.0
        total = int(round(in_sign * 3600.0))
        d, rem = divmod(total, 3600)
        m, s = divmod(rem, 60)
        return f"{d:02d}°{m:02d}'{s:02d}\""

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "sign_index": self.sign_index,
            "sign": self.sign.name,
            "degree": self.degree,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "house": self.house,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class NatalChart:
    """Planet placements of one chart together with its ascendant longitude."""

    planets: tuple[PlanetPosition, ...]
    ascendant: float = 0.0
    name: str | None = None
    _index: dict[str, PlanetPosition] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        planets = tuple(self.planets)
        asc = _finite("ascendant", self.ascendant)
        if not 0.0 <= asc < 360.0:
            raise OutOfRange("ascendant", self.ascendant, "a longitude in [0, 360)")
        index: dict[str, PlanetPosition] = {}
        for position in planets:
            if not isinstance(position, PlanetPosition):
                raise TypeError(f"expected PlanetPosition, got {type(position).__name__}")
            if position.key in index:
                raise OutOfRange("planets", position.name, "each planet listed at most once")
            index[position.key] = position
        object.__setattr__(self, "planets", planets)
        object.__setattr__(self, "ascendant", asc)
        object.__setattr__(self, "_index", index)

    def planet(self, name: str) -> PlanetPosition | None:
        return self._index.get(canonical_name(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._index

    def __iter__(self):
        return iter(self.planets)

    def __len__(self) -> int:
        return len(self.planets)


ChartLike = NatalChart | Sequence[PlanetPosition]


def planets_of(chart: ChartLike | Iterable[PlanetPosition]) -> tuple[PlanetPosition, ...]:
    """Return the planets of ``chart`` as a tuple, accepting bare sequences."""

    if isinstance(chart, NatalChart):
        return chart.planets
    return tuple(chart)
