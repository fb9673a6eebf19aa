"""
Plotly figures for analysis results

Generates:
- Beam shear / moment / deflection diagrams (stacked subplots)
- Column layout coloured by axial load
- Mat foundation settlement profile heatmap
- Seismic storey drift profile

Figures are returned to the caller; nothing here renders or saves them.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots
import numpy as np
from typing import Optional

from .models import BeamResult, CalculationResults, SeismicResult
from .settlement import SettlementResult


# ===== COLOR PALETTE =====
COLORS = {
    'shear': 'rgb(31, 119, 180)',
    'moment': 'rgb(214, 39, 40)',
    'deflection': 'rgb(44, 160, 44)',
    'column': 'rgb(80, 80, 80)',
    'drift': 'rgb(255, 140, 0)',
    'limit': 'rgba(200, 0, 0, 0.6)',
}


def create_beam_diagrams(beam: BeamResult, title: Optional[str] = None) -> go.Figure:
    """
    Shear, moment and deflection along one beam

    Raises:
        ValueError: the result was computed without diagrams
    """
    if beam.diagrams is None:
        raise ValueError("Beam result has no sampled diagrams; solve with include_diagrams=True")
    d = beam.diagrams
    x = np.asarray(d.positions)

    fig = make_subplots(rows=3, cols=1, shared_xaxes=True, vertical_spacing=0.06,
                        subplot_titles=("Shear (kN)", "Moment (kN·m)", "Deflection (mm)"))
    fig.add_trace(go.Scatter(x=x, y=np.asarray(d.shear) / 1000, name="Shear",
                             line=dict(color=COLORS['shear']), fill='tozeroy'), row=1, col=1)
    fig.add_trace(go.Scatter(x=x, y=np.asarray(d.moment) / 1000, name="Moment",
                             line=dict(color=COLORS['moment']), fill='tozeroy'), row=2, col=1)
    fig.add_trace(go.Scatter(x=x, y=np.asarray(d.deflection) * 1000, name="Deflection",
                             line=dict(color=COLORS['deflection'])), row=3, col=1)

    fig.update_xaxes(title_text="Position (m)", row=3, col=1)
    fig.update_layout(
        title=title or f"{beam.label or 'Beam'} ({beam.support}, L = {beam.span:.2f} m)",
        showlegend=False,
        height=700,
    )
    return fig


def create_column_load_plan(results: CalculationResults) -> go.Figure:
    """Plan view of columns, marker colour = accumulated axial load (kN)"""
    loads = np.array([c.axial_load for c in results.column_loads]) / 1000
    fig = go.Figure(go.Scatter(
        x=[c.x for c in results.column_loads],
        y=[c.z for c in results.column_loads],
        mode='markers+text',
        text=[c.column_id for c in results.column_loads],
        textposition='top center',
        marker=dict(size=14, color=loads, colorscale='Viridis', showscale=True,
                    colorbar=dict(title="kN"), line=dict(color=COLORS['column'], width=1)),
    ))
    fig.update_layout(
        title="Column axial loads",
        xaxis_title="x (m)",
        yaxis_title="z (m)",
        yaxis=dict(scaleanchor="x", scaleratio=1),
    )
    return fig


def create_settlement_heatmap(settlement: SettlementResult) -> go.Figure:
    """
    3x3 mat settlement profile

    Raises:
        ValueError: the result carries no profile (not a mat, or <= 10 mm)
    """
    if not settlement.has_profile:
        raise ValueError("Settlement result has no profile to plot")
    grid = np.array(settlement.settlement_profile)
    fig = go.Figure(go.Heatmap(
        z=grid,
        x=["left", "centre", "right"],
        y=["front", "middle", "back"],
        colorscale='RdYlBu_r',
        text=grid,
        texttemplate="%{text} mm",
        colorbar=dict(title="mm"),
    ))
    fig.update_layout(title=f"Settlement profile (total {settlement.total} mm, "
                            f"{settlement.differential_risk} differential risk)")
    return fig


def create_drift_profile(seismic: SeismicResult, drift_limit: float = 0.02) -> go.Figure:
    """Storey drift ratios against the drift limit"""
    storeys = list(range(1, len(seismic.drift_ratios) + 1))
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=list(seismic.drift_ratios), y=storeys, mode='lines+markers',
                             name="Drift ratio", line=dict(color=COLORS['drift'])))
    fig.add_vline(x=drift_limit, line=dict(color=COLORS['limit'], dash='dash'))
    fig.update_layout(title="Storey drift ratios", xaxis_title="Drift / storey height",
                      yaxis_title="Storey", yaxis=dict(dtick=1))
    return fig
