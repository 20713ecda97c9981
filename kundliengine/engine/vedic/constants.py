"""Classical Shadbala reference values."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ...core.bodies import canonical_name, display_name
from ...errors import ConfigurationError

__all__ = [
    "COMPONENT_MAXIMUM",
    "REQUIRED_STRENGTH",
    "VIRUPAS_PER_RUPA",
    "required_strength_for",
]

VIRUPAS_PER_RUPA = 60.0

# Upper bound of a single bala in Virupas.
COMPONENT_MAXIMUM = 60.0

# Minimum total Shadbala (Virupas) for a graha to be considered adequately strong.
# Rahu and Ketu carry no classical requirement.
REQUIRED_STRENGTH: Mapping[str, float] = MappingProxyType(
    {
        "sun": 6.5 * VIRUPAS_PER_RUPA,
        "moon": 6.0 * VIRUPAS_PER_RUPA,
        "mars": 5.0 * VIRUPAS_PER_RUPA,
        "mercury": 7.0 * VIRUPAS_PER_RUPA,
        "jupiter": 6.5 * VIRUPAS_PER_RUPA,
        "venus": 5.5 * VIRUPAS_PER_RUPA,
        "saturn": 5.0 * VIRUPAS_PER_RUPA,
    }
)


def required_strength_for(planet: str, constants: Mapping[str, float] | None = None) -> float:
    """Return the required Shadbala of ``planet`` from ``constants``.

    Keys of ``constants`` are matched through
    :func:`~kundliengine.core.bodies.canonical_name`, so ``"Surya"`` and
    ``"sun"`` resolve to the same entry.  A planet missing from the table
    raises :class:`~kundliengine.errors.ConfigurationError`.
    """

    table = REQUIRED_STRENGTH if constants is None else {
        canonical_name(name): value for name, value in constants.items()
    }
    try:
        return float(table[canonical_name(planet)])
    except KeyError:
        raise ConfigurationError(
            f"no required strength configured for {display_name(planet)!r}"
        ) from None
