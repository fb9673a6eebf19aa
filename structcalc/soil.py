"""
Soil property derivation

Turns a SoilProperties record (a soil-type label plus whatever index
properties were measured) into a complete DerivedSoil record. Missing values
are estimated from correlation tables keyed on the label, or from other
measured values where a correlation exists:

- Es from SPT N (sand 0.5N, clay 0.4N, gravel 1.0N, other 0.45N MPa)
- Cc from liquid limit, Cc = 0.009 (LL - 10)
- e0 from water content, e0 = w·Gs with Gs = 2.7
- σp' as 1.2 × overburden (lightly overconsolidated)

Labels are matched case-insensitively against the tables below. Soil family
follows the dominant noun, the last word of the label: "Silty sand" is a
sand, "Sandy clay" a clay.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from .models import SoilProperties

UNIT_WEIGHT = 18.0  # kN/m³
SPECIFIC_GRAVITY = 2.7
OVERCONSOLIDATION = 1.2

# Allowable bearing capacity (kPa)
BEARING_CAPACITIES: Dict[str, float] = {
    'Soft clay': 75, 'Medium clay': 150, 'Stiff clay': 300, 'Very stiff clay': 600,
    'Hard clay': 800, 'Loose sand': 100, 'Medium dense sand': 250, 'Dense sand': 500,
    'Very dense sand': 800, 'Loose gravel': 200, 'Medium dense gravel': 500,
    'Dense gravel': 800, 'Soft rock': 1500, 'Medium rock': 3000, 'Hard rock': 10000,
    'Weathered rock': 1000, 'Organic soil': 30, 'Fill (uncompacted)': 50,
    'Fill (compacted)': 150, 'Silt': 100, 'Sandy silt': 150, 'Silty sand': 200,
    'Clayey sand': 175, 'Sandy clay': 200, 'Silty clay': 125, 'Peat': 20, 'Hardpan': 1000,
}

# Elastic modulus (MPa)
ELASTIC_MODULI: Dict[str, float] = {
    'Soft clay': 5, 'Medium clay': 15, 'Stiff clay': 30, 'Very stiff clay': 60,
    'Hard clay': 100, 'Loose sand': 10, 'Medium dense sand': 30, 'Dense sand': 60,
    'Very dense sand': 100, 'Loose gravel': 30, 'Medium dense gravel': 80,
    'Dense gravel': 150, 'Soft rock': 500, 'Medium rock': 2000, 'Hard rock': 10000,
    'Weathered rock': 300, 'Organic soil': 2, 'Fill (uncompacted)': 5,
    'Fill (compacted)': 20, 'Silt': 8, 'Sandy silt': 15, 'Silty sand': 20,
    'Clayey sand': 25, 'Sandy clay': 30, 'Silty clay': 10, 'Peat': 1, 'Hardpan': 200,
}

COMPRESSION_INDICES: Dict[str, float] = {
    'Soft clay': 0.35, 'Medium clay': 0.25, 'Stiff clay': 0.15, 'Very stiff clay': 0.10,
    'Hard clay': 0.05, 'Silt': 0.20, 'Sandy silt': 0.15, 'Silty clay': 0.30,
    'Organic soil': 0.80, 'Peat': 3.00,
}

VOID_RATIOS: Dict[str, float] = {
    'Soft clay': 1.2, 'Medium clay': 0.9, 'Stiff clay': 0.7, 'Very stiff clay': 0.6,
    'Hard clay': 0.5, 'Loose sand': 0.8, 'Medium dense sand': 0.65, 'Dense sand': 0.5,
    'Very dense sand': 0.4, 'Loose gravel': 0.7, 'Medium dense gravel': 0.5,
    'Dense gravel': 0.3, 'Silt': 0.9, 'Sandy silt': 0.7, 'Silty sand': 0.6,
    'Clayey sand': 0.6, 'Sandy clay': 0.6, 'Silty clay': 1.0, 'Organic soil': 2.5,
    'Peat': 4.0, 'Fill (uncompacted)': 1.0, 'Fill (compacted)': 0.6,
}

# Coefficient of consolidation (m²/month)
CONSOLIDATION_COEFFICIENTS: Dict[str, float] = {
    'Soft clay': 0.1, 'Medium clay': 0.4, 'Stiff clay': 1.0, 'Very stiff clay': 2.0,
    'Hard clay': 4.0, 'Silt': 0.3, 'Sandy silt': 1.0, 'Silty clay': 0.2,
    'Clayey sand': 2.0, 'Sandy clay': 1.5, 'Organic soil': 0.05, 'Peat': 0.03,
}

DEFAULT_BEARING_CAPACITY = 150.0
DEFAULT_ELASTIC_MODULUS = 20.0
DEFAULT_COMPRESSION_INDEX = 0.2
DEFAULT_VOID_RATIO = 0.8
DEFAULT_CONSOLIDATION_COEFFICIENT = 0.1


def _lookup(table: Dict[str, float], label: str, default: float) -> float:
    key = label.strip().lower()
    for name, value in table.items():
        if name.lower() == key:
            return float(value)
    return default


def bearing_capacity_for(soil_type: str) -> float:
    """Tabulated allowable bearing capacity (kPa), 150 kPa when unknown."""
    return _lookup(BEARING_CAPACITIES, soil_type, DEFAULT_BEARING_CAPACITY)


def dominant_soil(soil_type: str) -> str:
    """Principal soil noun, e.g. 'sand' for 'Silty sand', 'fill' for 'Fill (compacted)'"""
    words = re.sub(r"\(.*?\)", " ", soil_type).lower().split()
    return words[-1] if words else ''


def is_organic(soil_type: str) -> bool:
    return soil_type.strip().lower() in ('organic soil', 'peat')


def is_cohesive(soil_type: str) -> bool:
    """Soils that consolidate: clays, silts, organic soil and peat."""
    return dominant_soil(soil_type) in ('clay', 'silt') or is_organic(soil_type)


def is_clay(soil_type: str) -> bool:
    return dominant_soil(soil_type) == 'clay'


def is_granular(soil_type: str) -> bool:
    return dominant_soil(soil_type) in ('sand', 'gravel')


def is_rock(soil_type: str) -> bool:
    return 'rock' in soil_type.lower()


@dataclass(frozen=True)
class DerivedSoil:
    """
    Complete soil description

    Attributes:
        bearing_capacity: Allowable bearing pressure (kPa)
        elastic_modulus: Es (MPa)
        preconsolidation_pressure: σp' (kPa)
        overburden_pressure: σ0' at the reference depth (kPa)
        consolidation_coefficient: cv (m²/month)
        secondary_index: Cα, zero where creep is not considered
    """
    soil_type: str
    bearing_capacity: float
    elastic_modulus: float
    poisson_ratio: float
    compression_index: float
    recompression_index: float
    void_ratio: float
    preconsolidation_pressure: float
    overburden_pressure: float
    consolidation_coefficient: float
    secondary_index: float
    spt_n: Optional[float]
    plasticity_index: Optional[float]
    cohesive: bool
    organic: bool
    granular: bool
    rock: bool
    soft: bool


def _poisson_ratio(label: str) -> float:
    noun = dominant_soil(label)
    if noun == 'clay':
        return 0.4
    if noun == 'sand':
        return 0.3
    if noun == 'rock':
        return 0.25
    return 0.3


def _elastic_modulus(soil: SoilProperties) -> float:
    if soil.elastic_modulus:
        return float(soil.elastic_modulus)
    if soil.spt_n:
        noun = dominant_soil(soil.soil_type)
        if noun == 'sand':
            return 0.5 * soil.spt_n
        if noun == 'clay':
            return 0.4 * soil.spt_n
        if noun == 'gravel':
            return 1.0 * soil.spt_n
        return 0.45 * soil.spt_n
    return _lookup(ELASTIC_MODULI, soil.soil_type, DEFAULT_ELASTIC_MODULUS)


def _secondary_index(soil_type: str, compression_index: float, plasticity_index: Optional[float]) -> float:
    label = soil_type.strip().lower()
    if label == 'organic soil':
        return 0.03
    if label == 'peat':
        return 0.05
    if is_clay(label) and plasticity_index is not None and plasticity_index > 30:
        return 0.04 * compression_index
    return 0.0


def derive_soil_properties(soil: SoilProperties, reference_depth: float = 0.0) -> DerivedSoil:
    """
    Fill every missing soil property

    Args:
        soil: Measured properties; only soil_type is required
        reference_depth: Depth (m) at which the effective overburden is
            evaluated for the default preconsolidation pressure

    Returns:
        DerivedSoil

    Raises:
        ValueError: empty soil type, negative depth, or a measured value
            that is physically impossible (non-positive modulus or void ratio)
    """
    if not soil.soil_type or not soil.soil_type.strip():
        raise ValueError("Soil type label is required")
    if reference_depth < 0:
        raise ValueError(f"Reference depth cannot be negative, got {reference_depth}")
    if soil.elastic_modulus is not None and soil.elastic_modulus <= 0:
        raise ValueError(f"Soil elastic modulus must be positive, got {soil.elastic_modulus}")
    if soil.void_ratio is not None and soil.void_ratio <= 0:
        raise ValueError(f"Void ratio must be positive, got {soil.void_ratio}")

    label = soil.soil_type

    if soil.compression_index:
        cc = float(soil.compression_index)
    elif soil.liquid_limit:
        cc = max(0.0, 0.009 * (soil.liquid_limit - 10))
    else:
        cc = _lookup(COMPRESSION_INDICES, label, DEFAULT_COMPRESSION_INDEX)

    if soil.void_ratio:
        e0 = float(soil.void_ratio)
    elif soil.water_content:
        e0 = soil.water_content * SPECIFIC_GRAVITY / 100.0
    else:
        e0 = _lookup(VOID_RATIOS, label, DEFAULT_VOID_RATIO)

    overburden = reference_depth * UNIT_WEIGHT
    sigma_p = float(soil.preconsolidation_pressure) if soil.preconsolidation_pressure else overburden * OVERCONSOLIDATION

    rock = is_rock(label)
    return DerivedSoil(
        soil_type=label,
        bearing_capacity=float(soil.bearing_capacity) if soil.bearing_capacity else bearing_capacity_for(label),
        elastic_modulus=_elastic_modulus(soil),
        poisson_ratio=_poisson_ratio(label),
        compression_index=cc,
        recompression_index=cc / 5.0,
        void_ratio=e0,
        preconsolidation_pressure=sigma_p,
        overburden_pressure=overburden,
        consolidation_coefficient=_lookup(CONSOLIDATION_COEFFICIENTS, label, DEFAULT_CONSOLIDATION_COEFFICIENT),
        secondary_index=_secondary_index(label, cc, soil.plasticity_index),
        spt_n=soil.spt_n,
        plasticity_index=soil.plasticity_index,
        cohesive=is_cohesive(label),
        organic=is_organic(label),
        granular=is_granular(label),
        rock=rock,
        soft=('soft' in label.lower() and not rock) or is_organic(label)
             or label.strip().lower() == 'fill (uncompacted)',
    )
