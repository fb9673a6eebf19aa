"""
Foundation design calculator

Implements simplified reinforced-concrete design for:
- Spread footings under single columns (bounded resize loop for bearing,
  punching shear, one-way shear, flexure)
- Strip footings under a line of columns or a wall
- Mat foundations under the whole building footprint
- Pile groups with a pile cap (α / β skin friction, Converse-Labarre
  group efficiency, Meyerhof settlement)

Every design returns a new Foundation record; nothing is resized in place.
Advisory conditions (uplift, large eccentricity, over-designed mat, low
group safety factor) are logged and kept on Foundation.warnings.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .catalog import CatalogRegistry, default_registry
from .checks.punching import one_way_shear_check, punching_shear_check
from .config import DEFAULT_SETTINGS, EngineSettings
from .errors import FoundationConvergenceError
from .models import (
    Foundation,
    FoundationType,
    Material,
    PileGroup,
    ReinforcementDesign,
    SectionProfile,
    SoilProperties,
)
from .soil import bearing_capacity_for, is_clay

COVER = 0.075  # m, concrete cast against soil
EMBEDMENT_ALLOWANCE = 0.15  # m of soil cover over the foundation
PHI_FLEXURE = 0.9
DEPTH_RATIO = 0.85  # d / h used for sizing

# Bar diameters tried in order (m)
BAR_DIAMETERS = [0.012, 0.016, 0.020, 0.025, 0.032]
MIN_BAR_SPACING = 0.10
MAX_BAR_SPACING = 0.30


def _round_up(value: float, increment: float) -> float:
    # tolerance keeps exact multiples from jumping a step
    return math.ceil(value / increment - 1e-9) * increment


@dataclass(frozen=True)
class ColumnLoadInput:
    """
    One column bearing on a strip or mat foundation

    Attributes:
        axial_load: Service axial load (N)
        moment: Service moment (N·m)
        x / z: Plan position (m)
        section: Column cross-section (defaults to 0.4 m square)
    """
    axial_load: float
    moment: float = 0.0
    x: float = 0.0
    z: float = 0.0
    section: Optional[SectionProfile] = None

    @property
    def width(self) -> float:
        return self.section.width if self.section else 0.4

    @property
    def depth(self) -> float:
        return self.section.height if self.section else 0.4


class FoundationDesigner:
    """
    Size foundations for column loads and soil conditions

    Design basis:
    - Spread footings: bearing (service loads, FS on capacity), punching
      shear, one-way shear and flexure (factored loads)
    - Strip / mat: bearing against the given capacity, flexure and punching
    - Piles: static capacity with a safety factor, group efficiency
    """

    def __init__(
        self,
        registry: Optional[CatalogRegistry] = None,
        settings: Optional[EngineSettings] = None,
    ):
        """
        Initialize designer

        Args:
            registry: Material/section catalog (shipped tables by default)
            settings: Engine settings (safety factors, resize bound, rebar fy)
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.registry = registry or default_registry(self.settings.default_material)
        self.fy = self.settings.rebar_yield_strength

    def _concrete(self, concrete: Optional[Material]) -> Material:
        return concrete or self.registry.material(self.settings.concrete_material)

    # ===== Shared RC helpers =================================================

    def _required_depth(self, check, start: float = 0.1, step: float = 0.025, limit: float = 5.0) -> float:
        """
        Smallest effective depth (m) for which check(d) has utilization <= 1

        Raises:
            FoundationConvergenceError: if no depth up to the limit works
        """
        d = start
        while d <= limit:
            if check(d)['utilization'] <= 1.0:
                return d
            d += step
        raise FoundationConvergenceError("shear depth search", int((limit - start) / step) + 1)

    def _flexural_depth(self, Mu: float, width: float, fc: float) -> float:
        """Effective depth from Mu = φ·0.85·0.9·f'c·b·d²/2"""
        if Mu <= 0:
            return 0.0
        return math.sqrt(2 * Mu / (PHI_FLEXURE * 0.85 * 0.9 * fc * width))

    def _design_flexural_steel(self, Mu: float, width: float, thickness: float,
                               min_ratio: float = 0.0018) -> ReinforcementDesign:
        """
        Reinforcement across one width of footing

        Args:
            Mu: Factored moment on the section (N·m)
            width: Section width (m)
            thickness: Overall thickness h (m)
            min_ratio: Temperature/shrinkage steel ratio on b·h

        Returns:
            ReinforcementDesign with the first bar size giving a practical spacing
        """
        d = thickness - COVER
        As_req = Mu / (PHI_FLEXURE * self.fy * 0.9 * d) if Mu > 0 else 0.0
        As_min = min_ratio * width * thickness
        As = max(As_req, As_min)

        clear_width = max(width - 2 * COVER, MIN_BAR_SPACING)
        for dia in BAR_DIAMETERS:
            bar_area = math.pi * dia ** 2 / 4
            count = max(2, math.ceil(As / bar_area))
            spacing = clear_width / (count - 1)
            if MIN_BAR_SPACING <= spacing <= MAX_BAR_SPACING:
                return ReinforcementDesign(
                    required_area=As_req, minimum_area=As_min, provided_area=count * bar_area,
                    bar_diameter=dia, bar_count=count, bar_spacing=spacing,
                )

        # Narrow or heavily loaded sections: largest bar at whatever spacing results
        dia = BAR_DIAMETERS[-1]
        bar_area = math.pi * dia ** 2 / 4
        count = max(2, math.ceil(As / bar_area))
        return ReinforcementDesign(
            required_area=As_req, minimum_area=As_min, provided_area=count * bar_area,
            bar_diameter=dia, bar_count=count, bar_spacing=clear_width / (count - 1),
        )

    # ===== Spread footing ====================================================

    def _size_spread_footing(self, axial_load: float, moment: float,
                             design_capacity: float) -> Dict:
        """
        Bounded resize loop for plan width

        Each attempt sizes B for a sizing capacity q_eff. When the P/A + M/S
        pressure exceeds the design capacity, q_eff shrinks by
        q_design / q_max; when the footing lifts off (q_min < 0 with e > B/6)
        q_eff shrinks until B reaches 6e. A rejected trial width is never
        tried again: the next width is at least one 0.1 m increment larger.
        """
        e = abs(moment) / axial_load
        q_eff = design_capacity
        min_width = 0.0
        warnings: List[str] = []
        ratio = None

        for attempt in range(1, self.settings.max_resize_attempts + 1):
            width = math.sqrt(axial_load / q_eff)
            if e > 0:
                ecc_ratio = e / width
                if ecc_ratio < 1 / 6:
                    width *= 1 + 2 * ecc_ratio
                else:
                    width *= 1 + 3 * ecc_ratio
                    msg = "Large eccentricity detected. Consider adding a grade beam or adjusting column location."
                    if msg not in warnings:
                        warnings.append(msg)
                        logger.warning(msg)
            width = max(round(_round_up(width, 0.1), 3), min_width)

            area = width * width
            section_modulus = width ** 3 / 6
            q_max = axial_load / area + abs(moment) / section_modulus
            q_min = axial_load / area - abs(moment) / section_modulus
            ratio = q_max / design_capacity
            logger.debug(f"Spread footing attempt {attempt}: B={width:.2f} m, q_max/q_design={ratio:.3f}")

            if q_max > design_capacity:
                q_eff *= design_capacity / q_max
                min_width = round(width + 0.1, 3)
                continue
            if q_min < 0 and e > width / 6:
                msg = "Footing experiences uplift. Redesigning with larger size."
                if msg not in warnings:
                    warnings.append(msg)
                    logger.warning(msg)
                q_eff = min(0.8 * q_eff, axial_load / (3 * e) ** 2)
                min_width = round(width + 0.1, 3)
                continue
            return {
                'width': width, 'q_max': q_max, 'q_min': q_min,
                'attempts': attempt, 'warnings': warnings,
            }

        raise FoundationConvergenceError(FoundationType.SPREAD_FOOTING.value,
                                         self.settings.max_resize_attempts, ratio)

    def design_spread_footing(
        self,
        column: SectionProfile,
        axial_load: float,
        moment: float,
        soil_bearing_capacity: float,
        concrete: Optional[Material] = None,
    ) -> Foundation:
        """
        Design a square spread footing

        Args:
            column: Column section (width and height are the plan dimensions)
            axial_load: Service axial load P (N)
            moment: Service moment M (N·m)
            soil_bearing_capacity: Soil capacity (kPa), reduced by the
                bearing safety factor for design
            concrete: Footing concrete (registry concrete by default)

        Returns:
            Foundation with q_max <= design capacity

        Raises:
            ValueError: non-positive axial load or capacity
            FoundationConvergenceError: resize loop exhausted
        """
        if axial_load <= 0:
            raise ValueError(f"Spread footing needs a positive axial load, got {axial_load}")
        if soil_bearing_capacity <= 0:
            raise ValueError(f"Soil bearing capacity must be positive, got {soil_bearing_capacity}")
        concrete = self._concrete(concrete)
        fc = concrete.yield_strength

        design_capacity = soil_bearing_capacity * 1000 / self.settings.bearing_safety_factor
        sized = self._size_spread_footing(axial_load, moment, design_capacity)
        B = sized['width']

        # Factored pressures for strength design
        factor = self.settings.ultimate_load_factor
        Pu = factor * axial_load
        qu = factor * sized['q_max']
        c1, c2 = column.width, column.height
        cantilever = max((B - min(c1, c2)) / 2, 0.0)

        d_punch = self._required_depth(lambda d: punching_shear_check(
            fc=fc, d=d, column_width=c1, column_depth=c2,
            factored_load=Pu, soil_pressure=Pu / (B * B)))
        d_shear = self._required_depth(lambda d: one_way_shear_check(
            fc=fc, d=d, width=B, cantilever=cantilever, soil_pressure=qu))
        Mu = 0.5 * qu * B * cantilever ** 2
        d_flex = self._flexural_depth(Mu, B, fc)

        candidates = {
            'punching shear': d_punch / DEPTH_RATIO,
            'one-way shear': d_shear / DEPTH_RATIO,
            'flexure': d_flex / DEPTH_RATIO,
        }
        mode = max(candidates, key=candidates.get)
        thickness = candidates[mode]
        if thickness < 0.3:
            thickness, mode = 0.3, 'minimum thickness'
        thickness = round(_round_up(thickness, 0.05), 3)

        steel = self._design_flexural_steel(Mu, B, thickness)
        details = (
            f"Governing mode: {mode}. {math.ceil(steel.provided_area * 1e6)} mm² steel each way "
            f"(required {math.ceil(steel.required_area * 1e6)} mm², minimum {math.ceil(steel.minimum_area * 1e6)} mm²). "
            f"{steel.bar_count} bars of {steel.bar_diameter * 1000:.0f}mm at "
            f"{math.floor(steel.bar_spacing * 1000)}mm spacing in both directions."
        )
        logger.info(f"Spread footing {B:.1f} x {B:.1f} x {thickness:.2f} m, governed by {mode}")
        return Foundation(
            foundation_type=FoundationType.SPREAD_FOOTING,
            length=B,
            width=B,
            depth=thickness,
            material=concrete.name,
            reinforcement_details=details,
            soil_bearing_capacity=design_capacity,
            depth_below_grade=thickness + EMBEDMENT_ALLOWANCE,
            governing_mode=mode,
            max_soil_pressure=sized['q_max'],
            min_soil_pressure=sized['q_min'],
            reinforcement=steel,
            warnings=tuple(sized['warnings']),
            design_attempts=sized['attempts'],
        )

    # ===== Strip footing =====================================================

    def design_strip_footing(
        self,
        column_loads: Sequence[ColumnLoadInput],
        wall_length: float,
        soil_bearing_capacity: float,
        concrete: Optional[Material] = None,
    ) -> Foundation:
        """
        Combined strip footing under a line of columns

        Area = 1.3 ΣP / q. Individual column moments are ignored; a warning
        records when any were supplied.
        """
        if not column_loads:
            raise ValueError("Strip footing needs at least one column load")
        if wall_length <= 0 or soil_bearing_capacity <= 0:
            raise ValueError("Wall length and bearing capacity must be positive")
        concrete = self._concrete(concrete)
        fc = concrete.yield_strength
        q = soil_bearing_capacity * 1000

        total = sum(c.axial_load for c in column_loads)
        if total <= 0:
            raise ValueError(f"Strip footing needs a positive total load, got {total}")
        warnings: List[str] = []
        if any(c.moment for c in column_loads):
            msg = "Column moments are ignored in strip footing design."
            warnings.append(msg)
            logger.warning(msg)

        length = wall_length
        width = round(_round_up(1.3 * total / q / length, 0.1), 3)

        load_per_metre = total / length
        moment_per_metre = load_per_metre * (width / 2) ** 2 / 2
        thickness = math.sqrt(6 * moment_per_metre / (0.1 * fc))
        mode = 'flexure'
        if thickness < 0.4:
            thickness, mode = 0.4, 'minimum thickness'
        thickness = round(_round_up(thickness, 0.05), 3)

        As_req = moment_per_metre / (PHI_FLEXURE * self.fy * 0.9 * thickness)
        As_min = 0.002 * width * thickness
        longitudinal = max(As_req, As_min)
        transverse = 0.5 * longitudinal
        steel = self._design_flexural_steel(moment_per_metre * width, width, thickness, min_ratio=0.002)

        details = (
            f"Governing mode: {mode}. {math.ceil(longitudinal * 1e6)} mm² longitudinal, "
            f"{math.ceil(transverse * 1e6)} mm² transverse. "
            f"{steel.bar_count} bars of {steel.bar_diameter * 1000:.0f}mm across the {width:.1f} m width."
        )
        return Foundation(
            foundation_type=FoundationType.STRIP_FOOTING,
            length=length,
            width=width,
            depth=thickness,
            material=concrete.name,
            reinforcement_details=details,
            soil_bearing_capacity=q,
            depth_below_grade=thickness + EMBEDMENT_ALLOWANCE,
            governing_mode=mode,
            max_soil_pressure=total / (length * width),
            min_soil_pressure=total / (length * width),
            reinforcement=steel,
            warnings=tuple(warnings),
        )

    # ===== Mat foundation ====================================================

    def design_mat_foundation(
        self,
        building_length: float,
        building_width: float,
        total_load: float,
        column_loads: Sequence[ColumnLoadInput],
        soil_bearing_capacity: float,
        concrete: Optional[Material] = None,
    ) -> Foundation:
        """
        Mat under the whole building footprint

        Raises:
            ValueError: no columns, or non-positive footprint/capacity
        """
        if not column_loads:
            raise ValueError("No columns found for mat foundation design")
        if building_length <= 0 or building_width <= 0 or soil_bearing_capacity <= 0:
            raise ValueError("Mat footprint and bearing capacity must be positive")
        concrete = self._concrete(concrete)
        fc = concrete.yield_strength
        q = soil_bearing_capacity * 1000

        area = building_length * building_width
        average = total_load / area
        warnings: List[str] = []
        if average < 0.5 * q:
            msg = "Individual footings might be more economical than a mat foundation."
            warnings.append(msg)
            logger.warning(msg)
        if average > q:
            msg = (f"Average mat pressure {average / 1000:.0f} kPa exceeds the bearing capacity "
                   f"{soil_bearing_capacity:.0f} kPa; consider a deep foundation.")
            warnings.append(msg)
            logger.warning(msg)

        factor = self.settings.ultimate_load_factor
        heaviest = max(column_loads, key=lambda c: c.axial_load)
        d_punch = self._required_depth(lambda d: punching_shear_check(
            fc=fc, d=d, column_width=heaviest.width, column_depth=heaviest.depth,
            factored_load=factor * heaviest.axial_load, soil_pressure=factor * average))

        spacing = math.sqrt(area / len(column_loads))
        moment_per_metre = factor * average * spacing ** 2 / 8
        h_flex = math.sqrt(6 * moment_per_metre / (0.1 * fc))

        candidates = {'punching shear': d_punch / DEPTH_RATIO, 'flexure': h_flex}
        mode = max(candidates, key=candidates.get)
        thickness = candidates[mode]
        if thickness < 0.5:
            thickness, mode = 0.5, 'minimum thickness'
        thickness = round(_round_up(thickness, 0.05), 3)

        steel = self._design_flexural_steel(moment_per_metre, 1.0, thickness)
        details = (
            f"Governing mode: {mode}. {math.ceil(steel.provided_area * 1e6)} mm²/m in both directions "
            f"({steel.bar_count} bars of {steel.bar_diameter * 1000:.0f}mm per metre), additional "
            f"{math.ceil(steel.provided_area * 0.5 * 1e6)} mm²/m at columns."
        )
        return Foundation(
            foundation_type=FoundationType.MAT_FOUNDATION,
            length=building_length,
            width=building_width,
            depth=thickness,
            material=concrete.name,
            reinforcement_details=details,
            soil_bearing_capacity=q,
            depth_below_grade=thickness + EMBEDMENT_ALLOWANCE,
            governing_mode=mode,
            max_soil_pressure=average,
            min_soil_pressure=average,
            reinforcement=steel,
            warnings=tuple(warnings),
        )

    # ===== Pile foundation ===================================================

    @staticmethod
    def _pile_length(soil: SoilProperties) -> float:
        if soil.spt_n:
            return max(10.0, 500.0 / soil.spt_n)
        if is_clay(soil.soil_type):
            return 15.0
        return 12.0

    @staticmethod
    def _pile_arrangement(count: int, axial_load: float, moment: float, diameter: float) -> Tuple[int, int]:
        """(rows, columns), longer side in the moment direction"""
        if count > 4 and abs(moment) > 0.2 * axial_load and abs(moment) / (axial_load * diameter) > 0.5:
            rows = math.ceil(math.sqrt(count * 0.6))
            cols = math.ceil(count / rows)
            if cols < rows:
                rows, cols = cols, rows
            return rows, cols
        rows = math.ceil(math.sqrt(count))
        return rows, math.ceil(count / rows)

    @staticmethod
    def group_efficiency(rows: int, cols: int, diameter: float, spacing: float) -> float:
        """Converse-Labarre: E = 1 - θ[(n-1)m + (m-1)n] / (90mn), θ = atan(D/s) in degrees"""
        theta = math.degrees(math.atan(diameter / spacing))
        return 1 - theta * ((rows - 1) * cols + (cols - 1) * rows) / (90 * rows * cols)

    def design_pile_foundation(
        self,
        column: SectionProfile,
        axial_load: float,
        moment: float,
        soil: SoilProperties,
        concrete: Optional[Material] = None,
        pile_diameter: float = 0.5,
    ) -> Foundation:
        """
        Pile group with cap

        Steps: pile length, single pile capacity ((Qb + Qs) / FS), count for
        axial load plus moment, arrangement, group efficiency, cap size and
        thickness, reinforcement, settlement (capped at 50 mm).

        Args:
            column: Column section on the cap
            axial_load: Service axial load (N)
            moment: Service moment (N·m)
            soil: Soil description; bearing_capacity (kPa), spt_n and
                cohesion (Pa) are used when present
            pile_diameter: Pile diameter D (m)
        """
        if axial_load <= 0:
            raise ValueError(f"Pile foundation needs a positive axial load, got {axial_load}")
        if pile_diameter <= 0:
            raise ValueError(f"Pile diameter must be positive, got {pile_diameter}")
        concrete = self._concrete(concrete)
        capacity_kpa = soil.bearing_capacity or bearing_capacity_for(soil.soil_type)
        D = pile_diameter

        # 1. Length and single pile capacity
        length = self._pile_length(soil)
        tip_area = math.pi * D ** 2 / 4
        end_bearing = tip_area * capacity_kpa * 1000
        if is_clay(soil.soil_type):
            cu = soil.cohesion or 50_000.0
            unit_friction = 0.55 * cu
        else:
            unit_friction = 0.35 * 10000 * length / 2
        skin_friction = math.pi * D * length * unit_friction
        single = (end_bearing + skin_friction) / self.settings.pile_safety_factor

        # 2. Count for axial load and moment
        count = math.ceil(axial_load / single)
        if abs(moment) / axial_load > 0.1:
            count += math.ceil(abs(moment) / (single * 1.5 * D))

        # 3. Arrangement and group effects
        rows, cols = self._pile_arrangement(count, axial_load, moment, D)
        piles = rows * cols
        spacing = 3 * D
        efficiency = self.group_efficiency(rows, cols, D, spacing)
        group_capacity = single * piles * efficiency
        safety_factor = group_capacity / axial_load

        warnings: List[str] = []
        if safety_factor < 1.5:
            msg = (f"Pile group safety factor is {safety_factor:.2f}, which is lower than "
                   f"recommended 1.5. Consider adding more piles.")
            warnings.append(msg)
            logger.warning(msg)

        # 4. Cap
        cap_length = (cols - 1) * spacing + 2 * D
        cap_width = (rows - 1) * spacing + 2 * D
        empirical = max(D, column.width) + 0.15
        pile_force = axial_load / piles
        v = 0.33 * math.sqrt(concrete.yield_strength / 1e6) * 1e6
        # π(D + t)·t·v = F
        punching = (-D + math.sqrt(D ** 2 + 4 * pile_force / (math.pi * v))) / 2
        candidates = {'pile punching shear': punching, 'cap proportioning': empirical}
        mode = max(candidates, key=candidates.get)
        thickness = candidates[mode]
        if thickness < 0.6:
            thickness, mode = 0.6, 'minimum thickness'
        thickness = round(_round_up(thickness, 0.05), 3)

        cap_steel = 0.003 * cap_width * thickness
        pile_steel = 0.01 * tip_area

        # 5. Settlement
        if soil.spt_n:
            cap_pressure_kpa = axial_load / (cap_length * cap_width) / 1000
            settlement_mm = 0.96 * cap_pressure_kpa * math.sqrt(cap_width) / soil.spt_n
        elif is_clay(soil.soil_type):
            settlement_mm = (0.02 + axial_load / group_capacity * 0.03) * 1000
        else:
            settlement_mm = (0.01 + axial_load / group_capacity * 0.02) * 1000
        settlement_mm = min(settlement_mm, 50.0)

        group = PileGroup(
            pile_count=piles, rows=rows, columns=cols, diameter=D, length=length,
            spacing=spacing, end_bearing=end_bearing, skin_friction=skin_friction,
            single_pile_capacity=single, group_efficiency=efficiency,
            group_capacity=group_capacity, group_safety_factor=safety_factor,
            settlement_mm=settlement_mm,
        )
        details = (
            f"Governing mode: {mode}. Pile cap: {math.ceil(cap_steel * 1e6)} mm² bottom steel mesh. "
            f"{piles} piles in {rows}x{cols} arrangement, each {round(D * 1000)}mm diameter x "
            f"{length:.1f}m deep with {math.ceil(pile_steel * 1e6)} mm² longitudinal steel (1%). "
            f"Group efficiency {efficiency:.2f}. Estimated settlement: {round(settlement_mm)}mm."
        )
        return Foundation(
            foundation_type=FoundationType.PILE_FOUNDATION,
            length=cap_length,
            width=cap_width,
            depth=thickness,
            material=concrete.name,
            reinforcement_details=details,
            soil_bearing_capacity=capacity_kpa * 1000,
            depth_below_grade=length + thickness,
            governing_mode=mode,
            max_soil_pressure=axial_load / (cap_length * cap_width),
            min_soil_pressure=axial_load / (cap_length * cap_width),
            reinforcement=ReinforcementDesign(
                required_area=cap_steel, minimum_area=cap_steel, provided_area=cap_steel,
                bar_diameter=0.020, bar_count=math.ceil(cap_steel / (math.pi * 0.020 ** 2 / 4)),
                bar_spacing=cap_width / max(1, math.ceil(cap_steel / (math.pi * 0.020 ** 2 / 4))),
            ),
            pile_group=group,
            warnings=tuple(warnings),
        )


# ===== Module-level entry points ============================================

def design_spread_footing(column, axial_load, moment, soil_bearing_capacity, concrete=None,
                          *, registry=None, settings=None) -> Foundation:
    return FoundationDesigner(registry, settings).design_spread_footing(
        column, axial_load, moment, soil_bearing_capacity, concrete)


def design_strip_footing(column_loads, wall_length, soil_bearing_capacity, concrete=None,
                         *, registry=None, settings=None) -> Foundation:
    return FoundationDesigner(registry, settings).design_strip_footing(
        column_loads, wall_length, soil_bearing_capacity, concrete)


def design_mat_foundation(building_length, building_width, total_load, column_loads,
                          soil_bearing_capacity, concrete=None, *, registry=None, settings=None) -> Foundation:
    return FoundationDesigner(registry, settings).design_mat_foundation(
        building_length, building_width, total_load, column_loads, soil_bearing_capacity, concrete)


def design_pile_foundation(column, axial_load, moment, soil, concrete=None, pile_diameter=0.5,
                           *, registry=None, settings=None) -> Foundation:
    return FoundationDesigner(registry, settings).design_pile_foundation(
        column, axial_load, moment, soil, concrete, pile_diameter)
