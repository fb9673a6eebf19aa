"""
Parameter validation tests
"""

import pytest

from structcalc.errors import ParameterValidationError
from structcalc.models import BuildingParameters
from structcalc.pipeline import calculate_building_results
from structcalc.validation import validate_parameters


def test_default_parameters_are_valid(params):
    report = validate_parameters(params)
    assert report.valid, f"Default building should validate, got {report.errors}"
    assert report.errors == []
    assert bool(report)


def test_single_column_line_reports_exactly_one_error():
    print("\n" + "="*80)
    print("TEST: columns_along_length = 1 on an otherwise valid building")
    print("="*80)

    report = validate_parameters(BuildingParameters(columns_along_length=1))
    print(f"  Errors: {report.errors}")

    assert not report.valid
    assert report.errors == ["Must have at least 2 columns along length"]


def test_every_violation_is_collected():
    report = validate_parameters(BuildingParameters(length=0.0, beam_width=-0.3, columns_along_width=1))

    assert "Building length must be positive" in report.errors
    assert "Beam width must be positive" in report.errors
    assert "Must have at least 2 columns along width" in report.errors
    assert len(report.errors) == 3


def test_limits_and_storey_height():
    report = validate_parameters(BuildingParameters(length=120.0, height=30.0, number_of_storeys=3))
    assert "Building length should not exceed 100m" in report.errors
    assert "Story height seems too high (> 6m)" in report.errors

    low = validate_parameters(BuildingParameters(height=5.0, number_of_storeys=3))
    assert low.errors == ["Story height seems too low (< 2m)"]


def test_zero_storeys_skips_storey_height_rule():
    report = validate_parameters(BuildingParameters(number_of_storeys=0))
    assert report.errors == ["Number of storeys must be positive"]


def test_calculation_refuses_invalid_parameters():
    bad = BuildingParameters(columns_along_length=1, slab_load=0.0)
    with pytest.raises(ParameterValidationError) as excinfo:
        calculate_building_results(bad)

    assert excinfo.value.errors == [
        "Must have at least 2 columns along length",
        "Slab load must be positive",
    ]
    assert isinstance(excinfo.value, ValueError)
