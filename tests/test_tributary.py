"""
Grid and tributary-area tests

Default building: 20 m x 15 m, 5 x 4 columns (5 m bays), 3 storeys,
5 kPa slab load.
"""

import math

import pytest

from structcalc.loads.tributary import beam_segments, build_grid, column_tributaries
from structcalc.loads.weight import structural_volume
from structcalc.models import BuildingParameters


def test_grid_spacing(params):
    grid = build_grid(params)
    assert grid.dx == 5.0 and grid.dz == 5.0
    assert grid.storey_height == 4.0
    assert grid.column_count == 20


def test_tributary_areas_sum_to_floor_area(params):
    print("\n" + "="*80)
    print("TEST: Tributary areas preserve equilibrium")
    print("="*80)

    columns = column_tributaries(build_grid(params), params.slab_load)
    total_area = sum(c.tributary_area for c in columns)
    total_load = sum(c.axial_load for c in columns)

    print(f"  Sum of tributary areas: {total_area:.1f} m² (floor {params.footprint_area:.1f} m²)")
    assert math.isclose(total_area, params.footprint_area), "Tributary areas must cover the floor exactly"
    assert math.isclose(total_load, params.slab_load * params.footprint_area * params.number_of_storeys)


def test_column_classification(params):
    columns = column_tributaries(build_grid(params), params.slab_load)
    by_type = {}
    for c in columns:
        by_type.setdefault(c.column_type, []).append(c)

    assert len(by_type["corner"]) == 4
    assert len(by_type["edge"]) == 10
    assert len(by_type["interior"]) == 6
    assert all(math.isclose(c.tributary_area, 6.25) for c in by_type["corner"])
    assert all(math.isclose(c.tributary_area, 25.0) for c in by_type["interior"])


def test_beam_segments_and_supports(params):
    segments = beam_segments(build_grid(params), params.slab_load)

    # Per storey: 4 z-lines x 4 spans + 5 x-lines x 3 spans
    assert len(segments) == 3 * (16 + 15)

    first_line = [s for s in segments if s.direction == "x" and s.storey == 0 and s.line == 0]
    assert [s.support for s in first_line] == ["simple", "continuous", "continuous", "simple"]
    assert all(math.isclose(s.load, params.slab_load * 2.5) for s in first_line), "Edge beams carry half a bay"

    interior = [s for s in segments if s.direction == "z" and s.storey == 0 and s.line == 2]
    assert all(math.isclose(s.load, params.slab_load * 5.0) for s in interior)


def test_grid_rejects_single_column_line():
    with pytest.raises(ValueError):
        build_grid(BuildingParameters(columns_along_length=1))


def test_structural_volume_components(params):
    volume = structural_volume(params)

    assert math.isclose(volume['columns'], 20 * 4.0 * 3 * 0.4 * 0.4)
    assert math.isclose(volume['slabs'], 3 * 300 * 0.2)
    assert math.isclose(volume['total'],
                        volume['columns'] + volume['beams_x'] + volume['beams_z'] + volume['slabs'])
