"""
Catalog registry and engine settings tests
"""

import math

import pytest

from structcalc.catalog import CatalogRegistry, default_registry, rectangular_section
from structcalc.config import DEFAULT_SETTINGS, EngineSettings, load_settings, save_settings
from structcalc.errors import CatalogError
from structcalc.footing_calculator import FoundationDesigner
from structcalc.models import BuildingParameters, Material, MaterialFamily
from structcalc.pipeline import calculate_building_results


def test_lookup_is_case_insensitive(registry):
    assert registry.section("ipe200").name == "IPE200"
    assert registry.material("STEEL").family == MaterialFamily.STEEL


def test_unknown_names_list_alternatives(registry):
    with pytest.raises(CatalogError, match="Available"):
        registry.section("IPE999")
    with pytest.raises(KeyError):
        registry.material("unobtainium")


def test_material_fallback(registry):
    assert registry.material_or_default("unobtainium").name == "steel"
    assert registry.material_or_default(None).name == "steel"


def test_settings_choose_fallback_material():
    timber = EngineSettings(default_material="timber")
    assert default_registry("timber").material_or_default("unobtainium").name == "timber"
    assert FoundationDesigner(settings=timber).registry.material_or_default(None).name == "timber"

    unknown = BuildingParameters(material_name="unobtainium")
    steel_frame = calculate_building_results(unknown)
    timber_frame = calculate_building_results(unknown, settings=timber)
    assert timber_frame.total_weight < steel_frame.total_weight, "Fallback follows the settings"


def test_rectangular_section_properties():
    section = rectangular_section("B300x500", 0.3, 0.5)

    assert math.isclose(section.area, 0.15)
    assert math.isclose(section.I_x, 0.3 * 0.5 ** 3 / 12)
    assert math.isclose(section.S_x, 0.3 * 0.5 ** 2 / 6)
    assert math.isclose(section.shear_area_y, 5 / 6 * 0.15)


def test_registry_is_never_mutated(registry):
    custom = Material("glulam", "Glulam GL24h", 1.15e10, 420, 24e6, 30e6, 0.2, 5e-6, MaterialFamily.TIMBER)
    extended = registry.with_material(custom)

    assert extended.has_material("glulam")
    assert not registry.has_material("glulam")
    assert "materials" in repr(extended)


def test_registry_validates_default_material():
    with pytest.raises(ValueError, match="Default material"):
        CatalogRegistry([], [], default_material="steel")


def test_section_overrides_return_copy(registry):
    original = registry.section("IPE300")
    edited = original.with_overrides(I_x=original.I_x * 2)

    assert edited.I_x == 2 * original.I_x
    assert registry.section("IPE300").I_x == original.I_x


def test_settings_validation_and_overrides():
    with pytest.raises(ValueError):
        EngineSettings(diagram_points=1)
    with pytest.raises(ValueError):
        EngineSettings(max_resize_attempts=0)

    custom = EngineSettings.from_dict({"deflection_limit_ratio": 250, "not_a_setting": 1})
    assert custom.deflection_limit_ratio == 250
    assert custom.diagram_points == DEFAULT_SETTINGS.diagram_points


def test_settings_file_round_trip(tmp_path):
    assert load_settings(tmp_path / "missing.json") is DEFAULT_SETTINGS

    path = tmp_path / "config" / "settings.json"
    save_settings(EngineSettings(bearing_safety_factor=2.5), path)
    loaded = load_settings(path)
    assert loaded.bearing_safety_factor == 2.5
    assert loaded == EngineSettings(bearing_safety_factor=2.5)


def test_default_registry_contents():
    registry = default_registry()
    assert len(registry.list_sections(role="column")) == 11
    assert registry.material("concrete").yield_strength == 30e6
