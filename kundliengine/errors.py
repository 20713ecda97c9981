"""Exception types raised by the kundliengine computation core."""

from __future__ import annotations

__all__ = [
    "KundliEngineError",
    "OutOfRange",
    "ConfigurationError",
]


class KundliEngineError(Exception):
    """Base class for every error raised by :mod:`kundliengine`."""


class OutOfRange(KundliEngineError, ValueError):
    """Raised when a structural input falls outside its documented domain.

    Typical causes are a sign index outside ``0..11``, minutes or seconds
    outside ``[0, 60)``, a Shadbala component below zero or above its
    maximum, or a chart listing the same planet twice.  These indicate a
    defect in the upstream chart calculator and are never clamped.
    """

    def __init__(self, field: str, value: object, expected: str) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"{field}={value!r} is out of range (expected {expected})")


class ConfigurationError(KundliEngineError, ValueError):
    """Raised when engine configuration or an astrological constant is invalid."""
