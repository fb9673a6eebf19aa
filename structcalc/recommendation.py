"""
Foundation type recommendation

recommend_foundation_type is a pure function of the average bearing
pressure ratio and building height:

    ratio = (load / area / 1000) / tabulated bearing capacity (kPa)

    PileFoundation  ratio > 1.5, or tall (> 40 m) and ratio > 0.8
    MatFoundation   ratio > 0.7, or tall and ratio > 0.5
    StripFooting    ratio > 0.4
    SpreadFooting   otherwise

recommend_optimal_foundation starts from that answer and adjusts it for
groundwater, frost, neighbours, site access, schedule, soil family and
building use.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from .models import FoundationType
from .soil import bearing_capacity_for, is_clay

TALL_BUILDING_HEIGHT = 40.0  # m


@dataclass(frozen=True)
class BuildingSummary:
    """
    Building-level inputs for the recommendation

    Attributes:
        total_load: Total building load (N)
        area: Footprint area (m²)
        height: Building height (m)
        building_type: 'residential', 'commercial', 'industrial', 'healthcare', ...
        column_spacing: Typical column spacing (m)
        maximum_column_load: Heaviest column load (N)
    """
    total_load: float
    area: float
    height: float
    building_type: str = "commercial"
    column_spacing: Optional[float] = None
    maximum_column_load: Optional[float] = None


@dataclass(frozen=True)
class SoilConditions:
    soil_type: str
    groundwater_level: Optional[float] = None  # m below surface
    frost_depth: Optional[float] = None  # m
    adjacent_structures: bool = False
    spt_n: Optional[float] = None


@dataclass(frozen=True)
class ConstructabilityFactors:
    site_prepared: Optional[bool] = None
    access_for_equipment: Optional[bool] = None
    construction_schedule: Optional[float] = None  # months
    environmental_constraints: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendedDimensions:
    length: float
    width: float
    depth: float


@dataclass(frozen=True)
class Recommendation:
    foundation_type: FoundationType
    alternative_type: FoundationType
    rationale: Tuple[str, ...]
    estimated_cost_impact: str
    pressure_ratio: float
    dimensions: Optional[RecommendedDimensions] = None
    special_considerations: Tuple[str, ...] = field(default_factory=tuple)


def pressure_ratio(total_load: float, area: float, soil_type: str) -> float:
    """Average bearing pressure over tabulated capacity"""
    if area <= 0:
        raise ValueError(f"Building area must be positive, got {area}")
    return (total_load / area / 1000) / bearing_capacity_for(soil_type)


def recommend_foundation_type(total_load: float, area: float, soil_type: str, height: float) -> FoundationType:
    ratio = pressure_ratio(total_load, area, soil_type)
    tall = height > TALL_BUILDING_HEIGHT
    if ratio > 1.5 or (tall and ratio > 0.8):
        return FoundationType.PILE_FOUNDATION
    if ratio > 0.7 or (tall and ratio > 0.5):
        return FoundationType.MAT_FOUNDATION
    if ratio > 0.4:
        return FoundationType.STRIP_FOOTING
    return FoundationType.SPREAD_FOOTING


_DEFAULT_RATIONALE = {
    FoundationType.SPREAD_FOOTING: "Soil bearing capacity adequate for isolated footings",
    FoundationType.STRIP_FOOTING: "Strip footings provide efficient load distribution for this structure",
    FoundationType.MAT_FOUNDATION: "Mat foundation provides uniform settlement control and load distribution",
    FoundationType.PILE_FOUNDATION: "Deep foundation required due to soil conditions or structural loads",
}


def _default_alternative(recommended: FoundationType, ratio: float) -> FoundationType:
    if recommended == FoundationType.SPREAD_FOOTING:
        return FoundationType.STRIP_FOOTING
    if recommended == FoundationType.STRIP_FOOTING:
        return FoundationType.MAT_FOUNDATION if ratio > 0.6 else FoundationType.SPREAD_FOOTING
    if recommended == FoundationType.MAT_FOUNDATION:
        return FoundationType.PILE_FOUNDATION if ratio > 1.0 else FoundationType.STRIP_FOOTING
    if recommended == FoundationType.PILE_FOUNDATION:
        return FoundationType.MAT_FOUNDATION
    return FoundationType.SPREAD_FOOTING


def recommend_optimal_foundation(
    building: BuildingSummary,
    soil: SoilConditions,
    constructability: Optional[ConstructabilityFactors] = None,
) -> Recommendation:
    """
    Recommended and alternative foundation types with rationale

    Args:
        building: Load, footprint, height and use
        soil: Soil type and site conditions
        constructability: Access, schedule and environmental constraints

    Returns:
        Recommendation
    """
    soil_type = soil.soil_type
    label = soil_type.lower()
    initial = recommend_foundation_type(building.total_load, building.area, soil_type, building.height)
    ratio = pressure_ratio(building.total_load, building.area, soil_type)
    capacity = bearing_capacity_for(soil_type)

    recommended = initial
    alternative = FoundationType.NONE
    rationale: List[str] = []
    considerations: List[str] = []
    cost_impact = 'medium'
    shallow = (FoundationType.SPREAD_FOOTING, FoundationType.STRIP_FOOTING)

    def switch(new_type: FoundationType, reason: str):
        nonlocal recommended, alternative
        alternative = recommended
        recommended = new_type
        rationale.append(reason)

    # Groundwater
    if soil.groundwater_level is not None and soil.groundwater_level < 2 and initial in shallow:
        considerations.append("High groundwater table requires waterproofing and dewatering during construction")
        if soil.groundwater_level < 1 and ('sand' in label or 'silt' in label):
            switch(FoundationType.PILE_FOUNDATION, "High groundwater in liquefiable soil requires deep foundation")
            cost_impact = 'high'

    # Frost
    if soil.frost_depth is not None and soil.frost_depth > 0.5 and initial in shallow:
        considerations.append(f"Foundation depth must extend below frost line ({soil.frost_depth}m)")

    # Neighbours
    if soil.adjacent_structures:
        if initial == FoundationType.PILE_FOUNDATION:
            considerations.append("Vibration monitoring required for pile driving near adjacent structures")
            considerations.append("Consider auger-cast piles or drilled shafts to minimize vibration")
        if building.height > 20 and initial != FoundationType.PILE_FOUNDATION:
            considerations.append("Foundation excavation may require shoring to protect adjacent structures")

    # Construction constraints
    if constructability:
        if constructability.access_for_equipment is False and recommended == FoundationType.PILE_FOUNDATION:
            switch(FoundationType.MAT_FOUNDATION, "Limited site access for pile driving equipment")
            cost_impact = 'medium'

        schedule = constructability.construction_schedule
        if schedule is not None and schedule < 3 and recommended in (
                FoundationType.PILE_FOUNDATION, FoundationType.MAT_FOUNDATION):
            message = "Tight schedule may require accelerated construction methods"
            considerations.append(message)
            logger.warning(message)
            if ratio < 0.9 and recommended == FoundationType.MAT_FOUNDATION:
                switch(FoundationType.STRIP_FOOTING, "Faster construction time with strip footings meets tight schedule")

        constraints = [c.lower() for c in constructability.environmental_constraints]
        if 'noise restrictions' in constraints and recommended == FoundationType.PILE_FOUNDATION:
            considerations.append("Noise restrictions may require silent piling methods")
        if 'groundwater protection' in constraints:
            considerations.append("Special precautions needed for groundwater protection during excavation")

    # Soil family
    if 'organic' in label or label == 'peat':
        recommended = FoundationType.PILE_FOUNDATION
        alternative = FoundationType.NONE
        rationale.append(f"{soil_type} has very poor bearing capacity and high settlement potential")
        considerations.append("Piles must extend through organic layer to competent bearing strata")
        cost_impact = 'high'

    if is_clay(soil_type) and ratio > 0.5:
        considerations.append("Monitor long-term consolidation settlement in clay")
        if building.building_type in ('industrial', 'healthcare') and recommended != FoundationType.PILE_FOUNDATION:
            switch(FoundationType.PILE_FOUNDATION, "Sensitive equipment in this building type requires minimal settlement")

    # Building use
    if building.building_type == 'residential' and building.height < 15 and ratio < 0.6 \
            and recommended == FoundationType.MAT_FOUNDATION:
        switch(FoundationType.STRIP_FOOTING, "Low-rise residential allows for more economical strip footings")
        cost_impact = 'low'

    if building.building_type == 'industrial':
        max_column = building.maximum_column_load or building.total_load / 10
        if max_column > 2_000_000 and recommended == FoundationType.SPREAD_FOOTING:
            switch(FoundationType.MAT_FOUNDATION, "Heavy column loads benefit from more rigid foundation system")
        considerations.append("Consider dynamic loading and vibration from machinery in design")

    if alternative == FoundationType.NONE:
        alternative = _default_alternative(recommended, ratio)

    if cost_impact == 'medium':
        if recommended == FoundationType.SPREAD_FOOTING:
            cost_impact = 'low'
        elif recommended == FoundationType.PILE_FOUNDATION:
            cost_impact = 'high'
        elif recommended == FoundationType.MAT_FOUNDATION and building.area > 1000:
            cost_impact = 'high'

    dimensions = None
    if recommended == FoundationType.SPREAD_FOOTING and building.column_spacing:
        column_load = building.maximum_column_load or \
            building.total_load / (building.area / building.column_spacing ** 2)
        size = math.sqrt(column_load / (capacity * 1000))
        rounded = math.ceil(size * 10) / 10
        dimensions = RecommendedDimensions(
            length=rounded, width=rounded,
            depth=max(0.3, math.ceil(size * 0.4 * 10) / 10),
        )
    elif recommended == FoundationType.MAT_FOUNDATION:
        side = math.sqrt(building.area) + 1
        dimensions = RecommendedDimensions(
            length=side, width=side,
            depth=max(0.3, math.ceil(math.sqrt(building.area) * 0.03 * 10) / 10),
        )

    if not rationale and recommended in _DEFAULT_RATIONALE:
        rationale.append(_DEFAULT_RATIONALE[recommended])

    logger.info(f"Recommended {recommended.value} (alternative {alternative.value}), pressure ratio {ratio:.2f}")
    return Recommendation(
        foundation_type=recommended,
        alternative_type=alternative,
        rationale=tuple(rationale),
        estimated_cost_impact=cost_impact,
        pressure_ratio=ratio,
        dimensions=dimensions,
        special_considerations=tuple(considerations),
    )
