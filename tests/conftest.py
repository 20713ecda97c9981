"""Shared fixtures for the kundliengine test suite."""

from __future__ import annotations

import pytest

from kundliengine.chart.positions import NatalChart, PlanetPosition
from kundliengine.engine.vedic.shadbala import ShadbalaComponent, ShadbalaKind


@pytest.fixture
def chart_a() -> NatalChart:
    return NatalChart(
        planets=(
            PlanetPosition.from_longitude("Sun", 10.0, house=1),
            PlanetPosition.from_longitude("Moon", 100.0, house=4),
            PlanetPosition.from_longitude("Venus", 15.0, house=1),
            PlanetPosition.from_longitude("Saturn", 250.0, house=9),
        ),
        ascendant=5.0,
        name="A",
    )


@pytest.fixture
def chart_b() -> NatalChart:
    return NatalChart(
        planets=(
            PlanetPosition.from_longitude("Mars", 195.0, house=7),
            PlanetPosition.from_longitude("Sun", 5.0, house=1),
            PlanetPosition.from_longitude("Moon", 220.0, house=8),
            PlanetPosition.from_longitude("Mercury", 40.0, house=2),
        ),
        ascendant=355.0,
        name="B",
    )


@pytest.fixture
def balanced_components() -> list[ShadbalaComponent]:
    """Six components worth 60 Virupas each (360 in total)."""

    return [ShadbalaComponent(kind, 60.0) for kind in ShadbalaKind]
