"""
End-to-end building analysis:

1. Validate parameters (every violated rule is reported together).
2. Build the column grid and tributary loads.
3. Solve every beam span and load every column.
4. Column buckling, frame weight, lateral stiffness, modal estimate.
5. Structural checks against the allowable limits.

run_analysis continues from the building results to a recommended
foundation, its settlement and cost, and a diagnostics summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from loguru import logger

from .beam_solver import solve_uniform_beam
from .catalog import CatalogRegistry, default_registry, rectangular_section
from .checks.column import check_column
from .config import DEFAULT_SETTINGS, EngineSettings
from .cost_engine import CostBreakdown, estimate_foundation_cost
from .errors import ParameterValidationError
from .footing_calculator import ColumnLoadInput, FoundationDesigner
from .loads.tributary import beam_segments, build_grid, column_tributaries
from .loads.weight import GRAVITY, structural_weight
from .models import (
    BuildingParameters,
    CalculationResults,
    ColumnLoad,
    Foundation,
    FoundationType,
    SectionProfile,
    SeismicParameters,
    SeismicResult,
    SoilProperties,
    StructuralChecks,
)
from .recommendation import BuildingSummary, Recommendation, SoilConditions, recommend_optimal_foundation
from .reporting import build_summary
from .seismic import estimate_modal_properties, estimate_seismic_response
from .settlement import LoadParameters, SettlementResult, calculate_settlement
from .soil import bearing_capacity_for
from .validation import validate_parameters


def _beam_section(params: BuildingParameters, registry: CatalogRegistry) -> SectionProfile:
    if params.beam_section:
        return registry.section(params.beam_section)
    return rectangular_section("beam", params.beam_width, params.beam_height)


def _column_section(params: BuildingParameters, registry: CatalogRegistry) -> SectionProfile:
    if params.column_section:
        return registry.section(params.column_section)
    return rectangular_section("column", params.column_width, params.column_depth, role="column")


def calculate_building_results(
    params: BuildingParameters,
    registry: Optional[CatalogRegistry] = None,
    settings: Optional[EngineSettings] = None,
) -> CalculationResults:
    """
    Beam, column, weight and dynamic results for one building

    Args:
        params: Building parameters (SI)
        registry: Materials and sections (shipped catalog by default)
        settings: Engine settings

    Returns:
        CalculationResults

    Raises:
        ParameterValidationError: with every violated rule, before any calculation
        CatalogError: a named beam/column section is not in the registry
    """
    report = validate_parameters(params)
    if not report.valid:
        raise ParameterValidationError(report.errors)
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry(settings.default_material)

    material = registry.material_or_default(params.material_name)
    if material.name.lower() != params.material_name.lower():
        logger.warning(f"Unknown material '{params.material_name}', using {material.name}")
    E = params.elastic_modulus
    beam = _beam_section(params, registry)
    column = _column_section(params, registry)

    grid = build_grid(params)
    logger.info(f"Analysing {grid.columns_x}x{grid.columns_z} grid, {grid.storeys} storeys, "
                f"bays {grid.dx:.2f} x {grid.dz:.2f} m")

    # Beams
    beam_results = tuple(
        solve_uniform_beam(
            seg.load, seg.span, E, beam.I_x, beam.height, seg.support,
            yield_strength=material.yield_strength,
            shear_area=beam.shear_area_y,
            settings=settings,
            label=seg.label,
        )
        for seg in beam_segments(grid, params.slab_load)
    )

    # Columns
    column_loads = tuple(
        ColumnLoad(
            column_id=trib.column_id, x=trib.x, z=trib.z, column_type=trib.column_type,
            tributary_area=trib.tributary_area, axial_load=trib.axial_load,
        )
        for trib in column_tributaries(grid, params.slab_load)
    )
    max_column_load = max(c.axial_load for c in column_loads)

    max_beam_deflection = max(b.max_deflection for b in beam_results)
    max_beam_stress = max(b.max_stress for b in beam_results)
    max_column_stress = max_column_load / column.area
    allowable_deflection = max(grid.dx, grid.dz) / settings.deflection_limit_ratio
    allowable_stress = material.yield_strength * settings.allowable_stress_ratio

    buckling = check_column(
        E=E, I=min(column.I_x, column.I_y), area=column.area,
        length=grid.storey_height, axial_load=max_column_load,
    )

    # Lumped single-degree-of-freedom estimate
    total_weight = structural_weight(params, material)
    stiffness = 48 * E * beam.I_x / ((grid.dx + grid.dz) / 2) ** 3
    natural_frequency = math.sqrt(stiffness / (total_weight / GRAVITY)) / (2 * math.pi)
    base_shear = settings.seismic_coefficient * total_weight

    max_shear_utilization = max(b.shear_utilization for b in beam_results)
    checks = StructuralChecks(
        deflection_check=max_beam_deflection <= allowable_deflection,
        stress_check=max_beam_stress <= allowable_stress,
        buckling_check=buckling.passes,
        shear_check=max_shear_utilization <= 1.0,
        deflection_ratio=max_beam_deflection / allowable_deflection,
        stress_ratio=max_beam_stress / allowable_stress,
        shear_ratio=max_shear_utilization,
    )
    if not checks.all_pass:
        logger.warning(f"Structural checks failed: {checks}")

    return CalculationResults(
        beam_results=beam_results,
        column_loads=column_loads,
        max_beam_deflection=max_beam_deflection,
        max_beam_stress=max_beam_stress,
        max_column_stress=max_column_stress,
        allowable_deflection=allowable_deflection,
        allowable_stress=allowable_stress,
        total_weight=total_weight,
        natural_frequency=natural_frequency,
        period_of_vibration=1 / natural_frequency,
        maximum_displacement=base_shear / stiffness,
        base_shear=base_shear,
        structural_checks=checks,
        buckling=buckling,
        dynamic_analysis=estimate_modal_properties(params, registry, settings),
        unit_system=params.unit_system,
    )


def design_recommended_foundation(
    foundation_type: FoundationType,
    params: BuildingParameters,
    results: CalculationResults,
    soil: SoilProperties,
    designer: FoundationDesigner,
) -> Foundation:
    """
    Design the given foundation type for the analysed building

    Spread footings and piles are sized for the heaviest column, strip
    footings for the heaviest column line along the building length, mats
    for every column.
    """
    capacity = soil.bearing_capacity or bearing_capacity_for(soil.soil_type)
    column = _column_section(params, designer.registry)
    heaviest = max(results.column_loads, key=lambda c: c.axial_load)

    if foundation_type == FoundationType.SPREAD_FOOTING:
        return designer.design_spread_footing(column, heaviest.axial_load, 0.0, capacity)
    if foundation_type == FoundationType.STRIP_FOOTING:
        lines: Dict[float, List[ColumnLoad]] = {}
        for c in results.column_loads:
            lines.setdefault(c.z, []).append(c)
        line = max(lines.values(), key=lambda cs: sum(c.axial_load for c in cs))
        loads = [ColumnLoadInput(axial_load=c.axial_load, x=c.x, z=c.z, section=column) for c in line]
        return designer.design_strip_footing(loads, params.length, capacity)
    if foundation_type == FoundationType.MAT_FOUNDATION:
        loads = [ColumnLoadInput(axial_load=c.axial_load, x=c.x, z=c.z, section=column)
                 for c in results.column_loads]
        total = sum(c.axial_load for c in results.column_loads)
        return designer.design_mat_foundation(params.length, params.width, total, loads, capacity)
    if foundation_type == FoundationType.PILE_FOUNDATION:
        return designer.design_pile_foundation(column, heaviest.axial_load, 0.0, soil)
    raise ValueError(f"Cannot design foundation type {foundation_type.value}")


@dataclass
class AnalysisResult:
    results: CalculationResults
    seismic: SeismicResult
    recommendation: Recommendation
    foundation: Foundation
    settlement: SettlementResult
    cost: CostBreakdown
    diagnostics: Dict[str, Any]


def run_analysis(
    *,
    inputs: Dict[str, Any],
    soil: Optional[SoilProperties] = None,
    seismic: Optional[SeismicParameters] = None,
    building_type: str = "commercial",
    region: str = "US",
    project_scale: str = "medium",
    cost_database: Optional[Dict[str, Any]] = None,
    registry: Optional[CatalogRegistry] = None,
    settings: Optional[EngineSettings] = None,
) -> AnalysisResult:
    """
    Execute the full building-to-foundation pipeline and return an AnalysisResult.
    """
    params = BuildingParameters.from_dict(inputs)
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry(settings.default_material)
    soil = soil or SoilProperties(soil_type=inputs.get("soil_type", "Medium clay"))

    results = calculate_building_results(params, registry, settings)
    seismic_result = estimate_seismic_response(params, seismic, registry, settings)

    total_load = sum(results.column_axial_loads) + results.total_weight
    recommendation = recommend_optimal_foundation(
        BuildingSummary(
            total_load=total_load,
            area=params.footprint_area,
            height=params.height,
            building_type=building_type,
            column_spacing=max(params.length / (params.columns_along_length - 1),
                               params.width / (params.columns_along_width - 1)),
            maximum_column_load=max(results.column_axial_loads),
        ),
        SoilConditions(soil_type=soil.soil_type, spt_n=soil.spt_n),
    )

    designer = FoundationDesigner(registry, settings)
    foundation = design_recommended_foundation(
        recommendation.foundation_type, params, results, soil, designer)
    results = replace(results, foundation=foundation)

    settlement = calculate_settlement(
        foundation, soil, LoadParameters(total_load=_foundation_load(foundation, results)), settings)
    cost = estimate_foundation_cost(foundation, region, project_scale, cost_database)

    diagnostics = build_summary(results)
    diagnostics["foundation"] = {
        "type": foundation.foundation_type.value,
        "governing_mode": foundation.governing_mode,
        "warnings": list(foundation.warnings),
        "settlement_mm": settlement.total,
        "differential_risk": settlement.differential_risk,
        "cost_total": cost.total,
    }
    diagnostics["seismic"] = {
        "base_shear": seismic_result.base_shear,
        "dynamic_amplification": seismic_result.dynamic_amplification,
        "warnings": list(seismic_result.warnings),
    }

    return AnalysisResult(
        results=results,
        seismic=seismic_result,
        recommendation=recommendation,
        foundation=foundation,
        settlement=settlement,
        cost=cost,
        diagnostics=diagnostics,
    )


def _foundation_load(foundation: Foundation, results: CalculationResults) -> float:
    """Load carried by the designed foundation (N)"""
    if foundation.foundation_type == FoundationType.MAT_FOUNDATION:
        return sum(results.column_axial_loads)
    return foundation.max_soil_pressure * foundation.plan_area
