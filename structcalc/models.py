"""
Records exchanged between the structural engine and its callers.

All values are SI (m, N, Pa, kg) unless a field says otherwise. Numeric
fields that carry a physical dimension are tagged with ``unit`` metadata so
units.convert_results can rescale any record without a per-class table.
Result records are frozen: a resized footing or a converted result is a new
object, never a mutated one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


def measure(unit: str, **kwargs) -> Any:
    """Dataclass field tagged with its physical dimension."""
    return field(metadata={"unit": unit}, **kwargs)


class MaterialFamily(Enum):
    STEEL = "Steel"
    CONCRETE = "Concrete"
    TIMBER = "Timber"
    ALUMINUM = "Aluminum"
    COMPOSITE = "Composite"


class FoundationType(Enum):
    SPREAD_FOOTING = "SpreadFooting"
    STRIP_FOOTING = "StripFooting"
    MAT_FOUNDATION = "MatFoundation"
    PILE_FOUNDATION = "PileFoundation"
    NONE = "None"


class DesignCode(Enum):
    ASCE7_16 = "ASCE7-16"
    EUROCODE = "Eurocode"


class CombinationType(Enum):
    LRFD = "LRFD"
    ASD = "ASD"


class UnitSystem(Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


# ===== INPUTS ================================================================

@dataclass(frozen=True)
class BuildingParameters:
    """
    Rectangular building description

    Attributes:
        length: Plan dimension along x (m)
        width: Plan dimension along z (m)
        height: Total height (m)
        number_of_storeys: Storey count (>= 1)
        columns_along_length: Column lines along x (>= 2)
        columns_along_width: Column lines along z (>= 2)
        beams_along_length / beams_along_width: Beam counts per axis
        slab_thickness: Floor slab thickness (m)
        slab_load: Surface load on each floor (Pa)
        beam_width / beam_height: Beam cross-section (m)
        column_width / column_depth: Column cross-section (m)
        elastic_modulus: Frame material E (Pa)
        material_name: Catalog material key
        beam_section / column_section: Optional catalog section keys that
            replace the rectangular beam/column dimensions
    """
    length: float = measure("length", default=20.0)
    width: float = measure("length", default=15.0)
    height: float = measure("length", default=12.0)
    number_of_storeys: int = 3
    columns_along_length: int = 5
    columns_along_width: int = 4
    beams_along_length: int = 4
    beams_along_width: int = 3
    slab_thickness: float = measure("length", default=0.2)
    slab_load: float = measure("stress", default=5000.0)
    beam_width: float = measure("length", default=0.3)
    beam_height: float = measure("length", default=0.5)
    column_width: float = measure("length", default=0.4)
    column_depth: float = measure("length", default=0.4)
    elastic_modulus: float = measure("stress", default=2.1e11)
    material_name: str = "steel"
    beam_section: Optional[str] = None
    column_section: Optional[str] = None
    design_code: Optional[DesignCode] = None
    unit_system: UnitSystem = UnitSystem.METRIC

    @property
    def storey_height(self) -> float:
        return self.height / self.number_of_storeys

    @property
    def footprint_area(self) -> float:
        return self.length * self.width

    @classmethod
    def from_dict(cls, inputs: Dict[str, Any]) -> "BuildingParameters":
        defaults = cls()
        code = inputs.get("design_code")
        return cls(
            length=float(inputs.get("length", defaults.length)),
            width=float(inputs.get("width", defaults.width)),
            height=float(inputs.get("height", defaults.height)),
            number_of_storeys=int(inputs.get("number_of_storeys", defaults.number_of_storeys)),
            columns_along_length=int(inputs.get("columns_along_length", defaults.columns_along_length)),
            columns_along_width=int(inputs.get("columns_along_width", defaults.columns_along_width)),
            beams_along_length=int(inputs.get("beams_along_length", defaults.beams_along_length)),
            beams_along_width=int(inputs.get("beams_along_width", defaults.beams_along_width)),
            slab_thickness=float(inputs.get("slab_thickness", defaults.slab_thickness)),
            slab_load=float(inputs.get("slab_load", defaults.slab_load)),
            beam_width=float(inputs.get("beam_width", defaults.beam_width)),
            beam_height=float(inputs.get("beam_height", defaults.beam_height)),
            column_width=float(inputs.get("column_width", defaults.column_width)),
            column_depth=float(inputs.get("column_depth", defaults.column_depth)),
            elastic_modulus=float(inputs.get("elastic_modulus", defaults.elastic_modulus)),
            material_name=inputs.get("material_name", defaults.material_name),
            beam_section=inputs.get("beam_section"),
            column_section=inputs.get("column_section"),
            design_code=DesignCode(code) if code is not None else None,
            unit_system=UnitSystem(inputs.get("unit_system", "metric")),
        )


@dataclass(frozen=True)
class Material:
    name: str
    display_name: str
    elastic_modulus: float
    density: float
    yield_strength: float
    ultimate_strength: float
    poisson_ratio: float
    thermal_expansion: float
    family: MaterialFamily
    grade_code: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.display_name} (E={self.elastic_modulus / 1e9:.0f} GPa, fy={self.yield_strength / 1e6:.0f} MPa)"


@dataclass(frozen=True)
class SectionProfile:
    """
    Cross-section properties (m, m², m³, m⁴)

    I_x is about the strong (horizontal) axis.
    """
    name: str
    shape: str
    width: float
    height: float
    area: float
    I_x: float
    I_y: float
    S_x: float
    S_y: float
    Z_x: float
    Z_y: float
    J: float
    shear_area_x: float
    shear_area_y: float
    flange_thickness: Optional[float] = None
    web_thickness: Optional[float] = None
    designation_code: Optional[str] = None
    role: str = "beam"

    @property
    def r_x(self) -> float:
        return (self.I_x / self.area) ** 0.5

    @property
    def r_y(self) -> float:
        return (self.I_y / self.area) ** 0.5

    def with_overrides(self, **changes) -> "SectionProfile":
        """User-edited copy; catalog entries themselves never change."""
        return replace(self, **changes)


@dataclass(frozen=True)
class SoilProperties:
    """
    Soil description for foundation and settlement work

    Only soil_type is required. Missing values are estimated from the label
    by soil.derive_soil_properties.

    Attributes:
        elastic_modulus: Es (MPa)
        preconsolidation_pressure: σp' (kPa)
        water_content / liquid_limit / plasticity_index: percent
        bearing_capacity: Allowable bearing pressure (kPa)
        cohesion: Undrained shear strength cu (Pa), for pile skin friction in clay
    """
    soil_type: str
    elastic_modulus: Optional[float] = None
    compression_index: Optional[float] = None
    void_ratio: Optional[float] = None
    preconsolidation_pressure: Optional[float] = None
    water_content: Optional[float] = None
    liquid_limit: Optional[float] = None
    plasticity_index: Optional[float] = None
    spt_n: Optional[float] = None
    bearing_capacity: Optional[float] = None
    cohesion: Optional[float] = None


@dataclass(frozen=True)
class SeismicParameters:
    intensity: float = 0.3
    frequency: float = 2.0
    duration: float = 20.0
    direction: str = "x"
    spectral_acceleration: float = 1.0
    importance_factor: float = 1.0
    response_modification_factor: float = 8.0
    soil_class: str = "D"
    damping_ratio: float = 0.05

    def __post_init__(self):
        if self.direction not in ("x", "z", "both"):
            raise ValueError(f"direction must be 'x', 'z' or 'both', got {self.direction!r}")
        if self.soil_class not in ("A", "B", "C", "D", "E"):
            raise ValueError(f"soil_class must be A-E, got {self.soil_class!r}")
        if self.response_modification_factor <= 0:
            raise ValueError("response_modification_factor must be positive")


@dataclass(frozen=True)
class LoadCombination:
    name: str
    description: str
    formula: str
    factors: Mapping[str, float]  # read-only view
    code: DesignCode
    combination_type: CombinationType


# ===== BEAM / COLUMN RESULTS ================================================

@dataclass(frozen=True)
class BeamDiagrams:
    """Sampled diagrams, all of the same length"""
    positions: Tuple[float, ...] = measure("length")
    moment: Tuple[float, ...] = measure("moment")
    shear: Tuple[float, ...] = measure("force")
    deflection: Tuple[float, ...] = measure("length")


@dataclass(frozen=True)
class BeamResult:
    support: str
    span: float = measure("length")
    load: float = measure("line_load")
    max_deflection: float = measure("length")
    max_stress: float = measure("stress")
    max_moment: float = measure("moment")
    max_shear: float = measure("force")
    reaction_left: float = measure("force")
    reaction_right: float = measure("force")
    support_moment_left: float = measure("moment", default=0.0)
    support_moment_right: float = measure("moment", default=0.0)
    utilization_ratio: float = 0.0
    bending_utilization: float = 0.0
    deflection_utilization: float = 0.0
    shear_utilization: float = 0.0
    interaction_ratio: float = 0.0
    diagrams: Optional[BeamDiagrams] = None
    label: str = ""


@dataclass(frozen=True)
class ColumnLoad:
    column_id: str
    x: float = measure("length")
    z: float = measure("length")
    column_type: str = "interior"
    tributary_area: float = measure("area", default=0.0)
    axial_load: float = measure("force", default=0.0)


@dataclass(frozen=True)
class BucklingResult:
    critical_load: float = measure("force")
    buckling_factor: float = 0.0
    effective_length_factor: float = 1.0
    effective_length: float = measure("length", default=0.0)
    radius_of_gyration: float = measure("length", default=0.0)
    slenderness_ratio: float = 0.0
    axial_stress: float = measure("stress", default=0.0)
    passes: bool = True


@dataclass(frozen=True)
class StructuralChecks:
    deflection_check: bool
    stress_check: bool
    buckling_check: bool
    shear_check: bool
    deflection_ratio: float = 0.0
    stress_ratio: float = 0.0
    shear_ratio: float = 0.0

    @property
    def all_pass(self) -> bool:
        return self.deflection_check and self.stress_check and self.buckling_check and self.shear_check


@dataclass(frozen=True)
class DynamicAnalysis:
    frequencies: Tuple[float, ...]
    mode_shapes: Tuple[Tuple[float, ...], ...]
    participation_factors: Tuple[float, ...]
    storey_mass: float = 0.0
    storey_stiffness: float = 0.0


@dataclass(frozen=True)
class CriticalElement:
    element_id: str
    storey: int
    stress_ratio: float


@dataclass(frozen=True)
class SeismicResult:
    base_shear: float = measure("force")
    seismic_coefficient: float = 0.0
    building_weight: float = measure("force", default=0.0)
    dynamic_amplification: float = 1.0
    storey_drifts: Tuple[float, ...] = measure("length", default=())
    drift_ratios: Tuple[float, ...] = ()
    max_displacement: float = measure("length", default=0.0)
    critical_elements: Tuple[CriticalElement, ...] = ()
    modal: Optional[DynamicAnalysis] = None
    warnings: Tuple[str, ...] = ()


# ===== FOUNDATIONS ===========================================================

@dataclass(frozen=True)
class ReinforcementDesign:
    required_area: float = measure("area")
    minimum_area: float = measure("area")
    provided_area: float = measure("area")
    bar_diameter: float = measure("length")
    bar_count: int = 0
    bar_spacing: float = measure("length", default=0.0)

    @property
    def designation(self) -> str:
        return f"{self.bar_count} x {self.bar_diameter * 1000:.0f}mm @ {self.bar_spacing * 1000:.0f}mm each way"


@dataclass(frozen=True)
class PileGroup:
    pile_count: int
    rows: int
    columns: int
    diameter: float = measure("length")
    length: float = measure("length")
    spacing: float = measure("length")
    end_bearing: float = measure("force")
    skin_friction: float = measure("force")
    single_pile_capacity: float = measure("force")
    group_efficiency: float = 1.0
    group_capacity: float = measure("force", default=0.0)
    group_safety_factor: float = 0.0
    settlement_mm: float = 0.0


@dataclass(frozen=True)
class Foundation:
    """
    Designed foundation

    soil_bearing_capacity is the design (factored) value in Pa. The
    reinforcement_details text always names the governing mode, the steel
    area, and the bar or pile count.
    """
    foundation_type: FoundationType
    length: float = measure("length")
    width: float = measure("length")
    depth: float = measure("length")
    material: str = "concrete"
    reinforcement_details: str = ""
    soil_bearing_capacity: float = measure("stress", default=0.0)
    depth_below_grade: float = measure("length", default=0.0)
    governing_mode: str = ""
    max_soil_pressure: float = measure("stress", default=0.0)
    min_soil_pressure: float = measure("stress", default=0.0)
    reinforcement: Optional[ReinforcementDesign] = None
    pile_group: Optional[PileGroup] = None
    warnings: Tuple[str, ...] = ()
    design_attempts: int = 1

    @property
    def plan_area(self) -> float:
        return self.length * self.width

    @property
    def concrete_volume(self) -> float:
        return self.length * self.width * self.depth


# ===== AGGREGATE RESULTS =====================================================

@dataclass(frozen=True)
class CalculationResults:
    """
    Output of one calculate_building_results call

    structural_checks, buckling, dynamic_analysis and foundation are
    Optional: a consumer must check for None before reading them.
    """
    beam_results: Tuple[BeamResult, ...]
    column_loads: Tuple[ColumnLoad, ...]
    max_beam_deflection: float = measure("length")
    max_beam_stress: float = measure("stress")
    max_column_stress: float = measure("stress")
    allowable_deflection: float = measure("length")
    allowable_stress: float = measure("stress")
    total_weight: float = measure("force")
    natural_frequency: float = 0.0
    period_of_vibration: float = 0.0
    maximum_displacement: float = measure("length", default=0.0)
    base_shear: float = measure("force", default=0.0)
    structural_checks: Optional[StructuralChecks] = None
    buckling: Optional[BucklingResult] = None
    dynamic_analysis: Optional[DynamicAnalysis] = None
    foundation: Optional[Foundation] = None
    unit_system: UnitSystem = UnitSystem.METRIC

    @property
    def column_axial_loads(self) -> Tuple[float, ...]:
        return tuple(c.axial_load for c in self.column_loads)
