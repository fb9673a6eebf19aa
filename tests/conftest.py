"""
Shared fixtures for the structcalc test suite
"""

import pytest

from structcalc.catalog import default_registry, rectangular_section
from structcalc.config import EngineSettings
from structcalc.footing_calculator import FoundationDesigner
from structcalc.models import BuildingParameters, SoilProperties


@pytest.fixture
def params():
    """20 m x 15 m, 3 storeys, 5 x 4 column grid (5 m bays)"""
    return BuildingParameters()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def designer(registry, settings):
    return FoundationDesigner(registry, settings)


@pytest.fixture
def column():
    return rectangular_section("C400x400", 0.4, 0.4, role="column")


@pytest.fixture
def medium_clay():
    return SoilProperties(soil_type="Medium clay")


@pytest.fixture
def soft_clay():
    return SoilProperties(soil_type="Soft clay")


@pytest.fixture
def dense_sand():
    return SoilProperties(soil_type="Dense sand", spt_n=40)
