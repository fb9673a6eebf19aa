"""
Foundation cost estimator.

Turns a designed Foundation into quantities (concrete, reinforcement,
excavation, formwork, piling) and prices them from the JSON cost database
with regional and project-scale factors. Unit costs are reached through
CostRegistry by semantic name so the database layout can change without
touching the estimator.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .models import Foundation, FoundationType


class CostUnit(Enum):
    """Units for foundation unit costs"""
    M3 = "cubic metre"
    M2 = "square metre"
    M = "metre"
    TON = "tonne"
    LS = "lump sum"
    PCT = "percent"


@dataclass
class UnitCost:
    """
    A single unit cost with metadata

    Attributes:
        semantic_name: What this cost is (e.g., 'concrete')
        value: Cost in the database currency
        unit: Unit of measure
        scales_with_project: Whether the project-scale factor applies
        description: Human-readable description
        source: Database path of the value (for debugging)
    """
    semantic_name: str
    value: float
    unit: CostUnit
    scales_with_project: bool
    description: str
    source: str

    def __str__(self) -> str:
        return f"{self.description}: ${self.value:.2f}/{self.unit.value}"


def load_cost_database(path: Optional[Path] = None) -> Dict[str, Any]:
    base = path or Path(__file__).resolve().parent / "data" / "cost_database.json"
    with open(base, "r", encoding="utf-8") as fp:
        return json.load(fp)


class CostRegistry:
    """
    Registry of foundation unit costs with validation

    Example:
        registry = CostRegistry(load_cost_database())
        registry.get('concrete').value  # 200.0
    """

    REQUIRED = ['concrete', 'reinforcement', 'excavation', 'formwork', 'piling', 'mobilization', 'other_pct']

    def __init__(self, cost_database: Dict):
        """
        Args:
            cost_database: Raw cost database dict loaded from JSON
        """
        self._db = cost_database
        self._costs = self._build_registry()
        self._validate()

    def _build_registry(self) -> Dict[str, UnitCost]:
        foundation = self._db['unit_costs']['foundation']
        rows = [
            ('concrete', 'concrete_m3', CostUnit.M3, True, 'Foundation concrete'),
            ('reinforcement', 'reinforcement_ton', CostUnit.TON, True, 'Reinforcing steel'),
            ('excavation', 'excavation_m3', CostUnit.M3, True, 'Foundation excavation'),
            ('formwork', 'formwork_m2', CostUnit.M2, True, 'Edge formwork'),
            ('piling', 'piling_m', CostUnit.M, True, 'Piling (500 mm reference diameter)'),
            ('mobilization', 'pile_mobilization_ls', CostUnit.LS, False, 'Pile rig mobilization'),
        ]
        costs = {}
        for name, key, unit, scales, description in rows:
            if key in foundation:
                costs[name] = UnitCost(
                    semantic_name=name, value=float(foundation[key]), unit=unit,
                    scales_with_project=scales, description=description,
                    source=f'unit_costs.foundation.{key}',
                )
        if 'other_pct' in self._db['unit_costs']:
            costs['other_pct'] = UnitCost(
                semantic_name='other_pct', value=float(self._db['unit_costs']['other_pct']),
                unit=CostUnit.PCT, scales_with_project=False,
                description='Miscellaneous (share of direct cost)', source='unit_costs.other_pct',
            )
        return costs

    def _validate(self):
        """Validate that all expected costs are present"""
        missing = [name for name in self.REQUIRED if name not in self._costs]
        if missing:
            raise ValueError(f"Cost registry validation failed. Missing costs: {missing}")

    def get(self, semantic_name: str) -> UnitCost:
        """
        Get unit cost by semantic name

        Raises:
            KeyError: If cost not found
        """
        if semantic_name not in self._costs:
            available = ', '.join(self._costs.keys())
            raise KeyError(f"Cost '{semantic_name}' not found in registry. Available costs: {available}")
        return self._costs[semantic_name]

    def regional_factor(self, region: str) -> float:
        """Unknown regions price at the base (US) level."""
        factors = self._db.get('regional_factors', {})
        if region not in factors:
            logger.warning(f"Unknown region '{region}', using base costs")
        return float(factors.get(region, 1.0))

    def scale_factor(self, project_scale: str) -> float:
        factors = self._db.get('scale_factors', {})
        if project_scale not in factors:
            raise ValueError(f"Unknown project scale '{project_scale}'. Expected one of {sorted(factors)}")
        return float(factors[project_scale])

    def assumption(self, name: str, default: float) -> float:
        return float(self._db.get('quantity_assumptions', {}).get(name, default))

    def list_costs(self) -> List[UnitCost]:
        return sorted(self._costs.values(), key=lambda c: c.semantic_name)

    def __repr__(self) -> str:
        return f"CostRegistry({len(self._costs)} costs loaded)"


@dataclass(frozen=True)
class CostQuantities:
    concrete_volume: float  # m³
    reinforcement_tonnage: float  # t
    excavation_volume: float  # m³
    formwork_area: float  # m²
    piling_metres: float = 0.0


@dataclass(frozen=True)
class CostBreakdown:
    """Rounded cost lines; piling and mobilization are zero for shallow foundations"""
    total: int
    concrete: int
    reinforcement: int
    excavation: int
    formwork: int
    piling: int
    mobilization: int
    other: int
    quantities: CostQuantities
    region: str
    project_scale: str

    def as_dict(self) -> Dict[str, int]:
        return {
            'concrete': self.concrete,
            'reinforcement': self.reinforcement,
            'excavation': self.excavation,
            'formwork': self.formwork,
            'piling': self.piling,
            'mobilization': self.mobilization,
            'other': self.other,
            'total': self.total,
        }


def foundation_quantities(foundation: Foundation, registry: CostRegistry) -> CostQuantities:
    """
    Material quantities for one foundation

    Reinforcement runs both ways: steel volume = As·(L + W) for footings and
    pile caps (As across the width), 2·As·L·W for mats (As per metre).
    Pile shafts add their longitudinal steel ratio.
    """
    L, W, h = foundation.length, foundation.width, foundation.depth
    if L <= 0 or W <= 0 or h <= 0:
        raise ValueError(f"Cannot price a foundation with dimensions {L} x {W} x {h}")
    steel_density = registry.assumption('steel_density_kg_m3', 7850.0)
    working_space = registry.assumption('excavation_working_space_m', 0.5)
    overdig = registry.assumption('excavation_overdig_m', 0.2)

    concrete = L * W * h
    excavation = (L + 2 * working_space) * (W + 2 * working_space) * (h + overdig)
    formwork = 2 * (L + W) * h

    steel_volume = 0.0
    if foundation.reinforcement:
        area = foundation.reinforcement.provided_area
        if foundation.foundation_type == FoundationType.MAT_FOUNDATION:
            steel_volume = 2 * area * L * W
        else:
            steel_volume = area * (L + W)

    piling = 0.0
    group = foundation.pile_group
    if group:
        piling = group.pile_count * group.length
        shaft_volume = math.pi * (group.diameter / 2) ** 2 * piling
        # shaft concrete is priced in the piling rate
        steel_volume += shaft_volume * registry.assumption('pile_steel_ratio', 0.01)

    return CostQuantities(
        concrete_volume=round(concrete, 2),
        reinforcement_tonnage=round(steel_volume * steel_density / 1000, 2),
        excavation_volume=round(excavation, 2),
        formwork_area=round(formwork, 2),
        piling_metres=round(piling, 2),
    )


def estimate_foundation_cost(
    foundation: Foundation,
    region: str = 'US',
    project_scale: str = 'medium',
    database: Optional[Dict[str, Any]] = None,
) -> CostBreakdown:
    """
    Cost breakdown for one foundation

    Args:
        foundation: Designed foundation
        region: Key into the regional factors (unknown regions use 1.0)
        project_scale: 'small', 'medium' or 'large'
        database: Cost database dict (shipped database by default)

    Returns:
        CostBreakdown
    """
    registry = CostRegistry(database if database is not None else load_cost_database())
    regional = registry.regional_factor(region)
    scale = registry.scale_factor(project_scale)

    def unit(name: str) -> float:
        cost = registry.get(name)
        return cost.value * regional * (scale if cost.scales_with_project else 1.0)

    q = foundation_quantities(foundation, registry)
    concrete = q.concrete_volume * unit('concrete')
    reinforcement = q.reinforcement_tonnage * unit('reinforcement')
    excavation = q.excavation_volume * unit('excavation')
    formwork = q.formwork_area * unit('formwork')

    piling = 0.0
    mobilization = 0.0
    if foundation.pile_group:
        reference = registry.assumption('reference_pile_diameter_m', 0.5)
        piling = q.piling_metres * unit('piling') * (foundation.pile_group.diameter / reference)
        mobilization = unit('mobilization')

    direct = concrete + reinforcement + excavation + formwork + piling + mobilization
    other = direct * registry.get('other_pct').value
    total = direct + other
    logger.info(f"{foundation.foundation_type.value} cost estimate ({region}, {project_scale}): ${total:,.0f}")

    return CostBreakdown(
        total=round(total),
        concrete=round(concrete),
        reinforcement=round(reinforcement),
        excavation=round(excavation),
        formwork=round(formwork),
        piling=round(piling),
        mobilization=round(mobilization),
        other=round(other),
        quantities=q,
        region=region,
        project_scale=project_scale,
    )
