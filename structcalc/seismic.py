"""
Simplified seismic and modal estimates

Lumped-mass shear building:
- Storey mass from the frame self-weight, storey stiffness 12EI/h³ per column
- Mode m: f_m = m·√(k/m)/2π, shape φ_j = sin((2m-1)π(j+1)/2N)
- Participation Γ = Σφm / Σφ²m

Equivalent lateral force:
- Cs = Sa·Ie/R, V = Cs·W
- Storey drifts from a cantilever analogy (δ = Vz³/3EI over the plan
  inertia) amplified by the largest participation factor
"""

import math
from typing import List, Optional

import numpy as np
from loguru import logger

from .catalog import CatalogRegistry, default_registry
from .config import DEFAULT_SETTINGS, EngineSettings
from .loads.weight import GRAVITY, structural_weight
from .models import (
    BuildingParameters,
    CriticalElement,
    DynamicAnalysis,
    SeismicParameters,
    SeismicResult,
)

DRIFT_RATIO_LIMIT = 0.02


def _column_inertia(params: BuildingParameters, registry: CatalogRegistry) -> float:
    if params.column_section:
        return registry.section(params.column_section).I_x
    return params.column_width * params.column_depth ** 3 / 12


def storey_stiffness(params: BuildingParameters, registry: Optional[CatalogRegistry] = None) -> float:
    """Lateral stiffness of one storey, all columns fixed-fixed (N/m)"""
    registry = registry or default_registry()
    h = params.storey_height
    column_count = params.columns_along_length * params.columns_along_width
    return 12 * params.elastic_modulus * _column_inertia(params, registry) / h ** 3 * column_count


def estimate_modal_properties(
    params: BuildingParameters,
    registry: Optional[CatalogRegistry] = None,
    settings: Optional[EngineSettings] = None,
    modes: Optional[int] = None,
) -> DynamicAnalysis:
    """
    Approximate frequencies, mode shapes and participation factors

    Args:
        params: Building parameters
        registry: Catalog for the frame material and column section
        settings: Engine settings (modal_count)
        modes: Number of modes; capped at the number of storeys

    Returns:
        DynamicAnalysis
    """
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry(settings.default_material)
    storeys = params.number_of_storeys
    count = min(modes or settings.modal_count, storeys)
    if count < 1:
        raise ValueError(f"Mode count must be at least 1, got {count}")

    material = registry.material_or_default(params.material_name)
    mass = structural_weight(params, material) / (storeys * GRAVITY)
    k = storey_stiffness(params, registry)
    base_frequency = math.sqrt(k / mass) / (2 * math.pi)

    levels = np.arange(1, storeys + 1)
    masses = np.full(storeys, mass)
    frequencies = []
    shapes = []
    factors = []
    for m in range(1, count + 1):
        phi = np.sin((2 * m - 1) * math.pi * levels / (2 * storeys))
        gamma = float(np.sum(phi * masses) / np.sum(phi ** 2 * masses))
        frequencies.append(m * base_frequency)
        shapes.append(tuple(float(v) for v in phi))
        factors.append(gamma)

    return DynamicAnalysis(
        frequencies=tuple(frequencies),
        mode_shapes=tuple(shapes),
        participation_factors=tuple(factors),
        storey_mass=mass,
        storey_stiffness=k,
    )


def _plan_inertia(params: BuildingParameters, direction: str) -> float:
    """Second moment of the building plan used for the cantilever analogy"""
    about_x = params.width * params.length ** 3 / 12
    about_z = params.length * params.width ** 3 / 12
    if direction == "x":
        return about_x
    if direction == "z":
        return about_z
    return min(about_x, about_z)


def critical_elements(params: BuildingParameters) -> List[CriticalElement]:
    """Corner columns on every floor, stress ratio falling 60% to the roof"""
    last_i = params.columns_along_length - 1
    last_j = params.columns_along_width - 1
    corners = [(0, 0), (0, last_j), (last_i, 0), (last_i, last_j)]
    elements = []
    for floor in range(params.number_of_storeys):
        ratio = 1 - floor / params.number_of_storeys * 0.6
        for i, j in corners:
            elements.append(CriticalElement(element_id=f"column_{i}_{j}_{floor}", storey=floor, stress_ratio=ratio))
    return elements


def estimate_seismic_response(
    params: BuildingParameters,
    seismic: Optional[SeismicParameters] = None,
    registry: Optional[CatalogRegistry] = None,
    settings: Optional[EngineSettings] = None,
) -> SeismicResult:
    """
    Equivalent-lateral-force response with modal amplification

    Returns:
        SeismicResult with base shear, amplified storey drifts and drift
        ratios, roof displacement, critical elements and the modal estimate.
        Drift ratios above 2% are reported as warnings.
    """
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry(settings.default_material)
    seismic = seismic or SeismicParameters()
    material = registry.material_or_default(params.material_name)

    weight = structural_weight(params, material)
    coefficient = seismic.spectral_acceleration * seismic.importance_factor / seismic.response_modification_factor
    base_shear = coefficient * weight

    modal = estimate_modal_properties(params, registry, settings)
    amplification = max([1.0] + [abs(g) for g in modal.participation_factors])

    EI = params.elastic_modulus * _plan_inertia(params, seismic.direction)
    h = params.storey_height
    heights = h * np.arange(0, params.number_of_storeys + 1)
    displacement = base_shear * heights ** 3 / (3 * EI)
    drifts = np.diff(displacement) * amplification
    ratios = drifts / h

    warnings = []
    for storey, ratio in enumerate(ratios, start=1):
        if ratio > DRIFT_RATIO_LIMIT:
            msg = f"Storey {storey} drift ratio {ratio:.4f} exceeds {DRIFT_RATIO_LIMIT}"
            warnings.append(msg)
            logger.warning(msg)

    logger.info(f"Seismic estimate: Cs={coefficient:.4f}, V={base_shear / 1000:.1f} kN, "
                f"amplification={amplification:.3f}")
    return SeismicResult(
        base_shear=base_shear,
        seismic_coefficient=coefficient,
        building_weight=weight,
        dynamic_amplification=amplification,
        storey_drifts=tuple(float(d) for d in drifts),
        drift_ratios=tuple(float(r) for r in ratios),
        max_displacement=float(np.sum(drifts)),
        critical_elements=tuple(critical_elements(params)),
        modal=modal,
        warnings=tuple(warnings),
    )
