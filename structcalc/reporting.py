"""
Reporting utilities for presenting analysis results as tables.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .cost_engine import CostBreakdown
from .models import CalculationResults
from .settlement import SettlementResult


def beam_results_frame(results: CalculationResults) -> pd.DataFrame:
    """One row per beam segment with peak values and utilizations."""
    rows: List[Dict[str, Any]] = []
    for beam in results.beam_results:
        rows.append({
            "label": beam.label,
            "support": beam.support,
            "span": beam.span,
            "load": beam.load,
            "max_deflection": beam.max_deflection,
            "max_stress": beam.max_stress,
            "max_moment": beam.max_moment,
            "max_shear": beam.max_shear,
            "reaction_left": beam.reaction_left,
            "reaction_right": beam.reaction_right,
            "utilization": beam.utilization_ratio,
            "bending_utilization": beam.bending_utilization,
            "shear_utilization": beam.shear_utilization,
        })
    return pd.DataFrame(rows)


def column_loads_frame(results: CalculationResults) -> pd.DataFrame:
    rows = [{
        "column_id": c.column_id,
        "x": c.x,
        "z": c.z,
        "column_type": c.column_type,
        "tributary_area": c.tributary_area,
        "axial_load": c.axial_load,
    } for c in results.column_loads]
    return pd.DataFrame(rows)


def cost_breakdown_frame(cost: CostBreakdown) -> pd.DataFrame:
    """
    Cost lines with their share of the total.
    Zero lines (piling/mobilization on shallow foundations) are dropped.
    """
    lines = {k: v for k, v in cost.as_dict().items() if k != "total" and v}
    df = pd.DataFrame({"component": list(lines.keys()), "cost": list(lines.values())})
    df["share"] = df["cost"] / cost.total if cost.total else 0.0
    return df


def settlement_frame(settlement: SettlementResult) -> pd.DataFrame:
    return pd.DataFrame([
        {"component": "immediate", "settlement_mm": settlement.immediate},
        {"component": "consolidation", "settlement_mm": settlement.consolidation},
        {"component": "secondary", "settlement_mm": settlement.secondary},
        {"component": "total", "settlement_mm": settlement.total},
    ])


def build_summary(results: CalculationResults) -> Dict[str, Any]:
    """
    Float-based diagnostics for quick verification:
    - Beam counts by support type and the governing beam
    - Column load totals by column type
    - Check ratios and dynamic properties
    """
    beams = beam_results_frame(results)
    columns = column_loads_frame(results)

    governing = beams.loc[beams["utilization"].idxmax()]
    by_type = columns.groupby("column_type")["axial_load"].agg(["count", "sum", "max"])

    checks = results.structural_checks
    summary: Dict[str, Any] = {
        "beams": {
            "count": int(len(beams)),
            "by_support": {k: int(v) for k, v in beams["support"].value_counts().items()},
            "governing_label": str(governing["label"]),
            "governing_utilization": float(governing["utilization"]),
        },
        "columns": {
            "count": int(len(columns)),
            "total_axial_load": float(columns["axial_load"].sum()),
            "by_type": {
                t: {"count": int(row["count"]), "sum": float(row["sum"]), "max": float(row["max"])}
                for t, row in by_type.iterrows()
            },
        },
        "limits": {
            "max_beam_deflection": float(results.max_beam_deflection),
            "allowable_deflection": float(results.allowable_deflection),
            "max_beam_stress": float(results.max_beam_stress),
            "allowable_stress": float(results.allowable_stress),
            "max_column_stress": float(results.max_column_stress),
        },
        "dynamic": {
            "total_weight": float(results.total_weight),
            "natural_frequency": float(results.natural_frequency),
            "period_of_vibration": float(results.period_of_vibration),
            "base_shear": float(results.base_shear),
        },
    }
    if checks is not None:
        summary["checks"] = {
            "all_pass": checks.all_pass,
            "deflection_ratio": float(checks.deflection_ratio),
            "stress_ratio": float(checks.stress_ratio),
            "shear_ratio": float(checks.shear_ratio),
            "buckling": checks.buckling_check,
        }
    if results.buckling is not None:
        summary["dynamic"]["buckling_factor"] = float(results.buckling.buckling_factor)
    return summary
