"""
Unit conversion tests
"""

import math
from dataclasses import fields, is_dataclass

import pytest

from structcalc.models import UnitSystem
from structcalc.pipeline import calculate_building_results
from structcalc.units import IMPERIAL_TO_METRIC, METRIC_TO_IMPERIAL, convert_results


def _assert_close(original, converted, path="results"):
    """Walk two records field by field and compare every number."""
    if is_dataclass(original):
        for f in fields(original):
            _assert_close(getattr(original, f.name), getattr(converted, f.name), f"{path}.{f.name}")
    elif isinstance(original, (tuple, list)):
        assert len(original) == len(converted), f"{path}: length changed"
        for i, (a, b) in enumerate(zip(original, converted)):
            _assert_close(a, b, f"{path}[{i}]")
    elif isinstance(original, float):
        assert math.isclose(original, converted, rel_tol=1e-12, abs_tol=1e-15), \
            f"{path}: {original} != {converted}"
    else:
        assert original == converted, f"{path}: {original!r} != {converted!r}"


@pytest.fixture
def results(params, registry):
    return calculate_building_results(params, registry)


def test_round_trip_reproduces_results(results):
    print("\n" + "="*80)
    print("TEST: metric -> imperial -> metric round trip")
    print("="*80)

    imperial = convert_results(results, UnitSystem.METRIC, UnitSystem.IMPERIAL)
    back = convert_results(imperial, "imperial", "metric")

    print(f"  Max beam deflection: {results.max_beam_deflection:.6f} m -> "
          f"{imperial.max_beam_deflection:.6f} ft -> {back.max_beam_deflection:.6f} m")

    assert imperial.unit_system == UnitSystem.IMPERIAL
    assert back.unit_system == UnitSystem.METRIC
    _assert_close(results, back)


def test_conversion_factors_applied(results):
    imperial = convert_results(results, "metric", "imperial")
    beam, converted = results.beam_results[0], imperial.beam_results[0]

    assert math.isclose(converted.span, beam.span * 3.28084)
    assert math.isclose(converted.reaction_left, beam.reaction_left * 0.224809)
    assert math.isclose(converted.max_stress, beam.max_stress * 0.000145038)
    assert math.isclose(converted.max_moment, beam.max_moment * 0.224809 * 3.28084)
    assert converted.utilization_ratio == beam.utilization_ratio, "Ratios are dimensionless"

    # Diagram arrays convert element by element
    assert math.isclose(converted.diagrams.positions[-1], beam.diagrams.positions[-1] * 3.28084)
    assert math.isclose(converted.diagrams.shear[0], beam.diagrams.shear[0] * 0.224809)
    assert converted.diagrams.positions[0] == 0.0

    # Untagged nested records are copied through
    assert imperial.structural_checks == results.structural_checks


def test_reverse_factors_are_exact_reciprocals():
    for unit, factor in METRIC_TO_IMPERIAL.items():
        assert IMPERIAL_TO_METRIC[unit] == 1.0 / factor


def test_same_system_returns_input(results):
    assert convert_results(results, "metric", "metric") is results


def test_declared_system_must_match(results):
    with pytest.raises(ValueError, match="metric"):
        convert_results(results, "imperial", "metric")
