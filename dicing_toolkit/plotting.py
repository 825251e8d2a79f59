"""
Plotting Module.

plotly figures for the dashboard: the imported wafer map, the planned die grid
over the wafer outline, and the chipping-risk gauge.
"""
import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional

from dicing_toolkit.core.config import (
    PlotTheme, DEFAULT_THEME, RISK_MIN, RISK_MAX, RISK_LOW_THRESHOLD
)
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.models import DieLayout, WaferMapRecord
from dicing_toolkit.core.units import is_finite
from dicing_toolkit.enums import DieStatus
from dicing_toolkit.io.ingestion import records_to_dataframe

# Above this many cells only the wafer outline is drawn
MAX_DRAWN_CELLS = 20000

def apply_wafer_theme(fig: go.Figure, title: str = "", height: int = 600, theme_config: Optional[PlotTheme] = None) -> go.Figure:
    """Applies the standard engineering styling with equal axis scaling."""
    theme = theme_config or DEFAULT_THEME
    fig.update_layout(
        title=dict(text=title, font=dict(color=theme.text_color, size=18), x=0.5, xanchor='center'),
        plot_bgcolor=theme.plot_area_color,
        paper_bgcolor=theme.background_color,
        height=height,
        font=dict(color=theme.text_color),
        xaxis=dict(
            showgrid=False, zeroline=False, showline=True,
            linewidth=2, linecolor=theme.axis_color, mirror=True
        ),
        yaxis=dict(
            showgrid=False, zeroline=False, showline=True,
            linewidth=2, linecolor=theme.axis_color, mirror=True,
            scaleanchor="x", scaleratio=1
        ),
        legend=dict(
            font=dict(color=theme.text_color), bgcolor=theme.background_color,
            bordercolor=theme.axis_color, borderwidth=1
        ),
        margin=dict(l=20, r=20, t=60, b=20)
    )
    return fig

def create_wafer_map_traces(records: List[WaferMapRecord], theme_config: Optional[PlotTheme] = None) -> List[go.Scatter]:
    """One marker trace per die status; dies with unparseable coordinates are left out."""
    theme = theme_config or DEFAULT_THEME
    df = records_to_dataframe(records)
    if df.empty:
        return []
    df = df[pd.to_numeric(df['x'], errors='coerce').notna() & pd.to_numeric(df['y'], errors='coerce').notna()]

    colors = {DieStatus.GOOD.value: theme.good_die_color, DieStatus.BAD.value: theme.bad_die_color}
    traces = []
    for status in DieStatus.values():
        subset = df[df['status'] == status]
        if subset.empty:
            continue
        traces.append(go.Scatter(
            x=subset['x'], y=subset['y'], mode='markers',
            marker=dict(color=colors[status], size=8, symbol='square'),
            name=f"{status.capitalize()} ({len(subset)})",
            hovertemplate=f"Die (%{{x}}, %{{y}})<br>Status: {status}<extra></extra>"
        ))
    return traces

def create_wafer_map_figure(records: List[WaferMapRecord], theme_config: Optional[PlotTheme] = None) -> go.Figure:
    fig = go.Figure(data=create_wafer_map_traces(records, theme_config))
    return apply_wafer_theme(fig, title="Imported Wafer Map", theme_config=theme_config)

def create_wafer_outline(wafer_diameter_mm: float, theme_config: Optional[PlotTheme] = None) -> dict:
    theme = theme_config or DEFAULT_THEME
    radius = wafer_diameter_mm / 2
    return dict(
        type="circle", xref="x", yref="y",
        x0=-radius, y0=-radius, x1=radius, y1=radius,
        fillcolor=theme.wafer_color, opacity=0.35,
        line=dict(color=theme.axis_color, width=2), layer="below"
    )

def create_die_grid_figure(
    wafer_diameter_mm: float,
    die_width_mm: float,
    die_height_mm: float,
    street_width_um: float,
    layout: DieLayout,
    theme_config: Optional[PlotTheme] = None
) -> go.Figure:
    """
    Draws the planned die grid centred on the wafer outline.
    The grid spans columns x rows pitches, matching the die-count estimate.
    """
    theme = theme_config or DEFAULT_THEME
    fig = go.Figure()
    if not is_finite(wafer_diameter_mm) or wafer_diameter_mm <= 0:
        return apply_wafer_theme(fig, title="Die Grid", theme_config=theme_config)

    shapes = [create_wafer_outline(wafer_diameter_mm, theme_config)]
    cols, rows = layout.columns, layout.rows
    if is_finite(cols) and is_finite(rows) and cols > 0 and rows > 0 and cols * rows <= MAX_DRAWN_CELLS:
        pitch_x = GeometryEngine.pitch_mm(die_width_mm, street_width_um)
        pitch_y = GeometryEngine.pitch_mm(die_height_mm, street_width_um)
        x_start = -cols * pitch_x / 2
        y_start = -rows * pitch_y / 2
        x_end = x_start + cols * pitch_x
        y_end = y_start + rows * pitch_y

        # Street lines go in a single None-separated trace
        xs, ys = [], []
        for c in range(cols + 1):
            x = x_start + c * pitch_x
            xs += [x, x, None]
            ys += [y_start, y_end, None]
        for r in range(rows + 1):
            y = y_start + r * pitch_y
            xs += [x_start, x_end, None]
            ys += [y, y, None]
        fig.add_trace(go.Scatter(
            x=xs, y=ys, mode='lines', line=dict(color=theme.grid_line_color, width=1),
            name=f"Grid {cols} x {rows}", hoverinfo='skip'
        ))

    radius = wafer_diameter_mm / 2
    fig.update_layout(shapes=shapes)
    fig.update_xaxes(range=[-radius * 1.05, radius * 1.05])
    fig.update_yaxes(range=[-radius * 1.05, radius * 1.05])
    return apply_wafer_theme(fig, title="Die Grid", theme_config=theme_config)

def create_risk_gauge(score, theme_config: Optional[PlotTheme] = None) -> go.Figure:
    theme = theme_config or DEFAULT_THEME
    value = score if is_finite(score) else 0
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        title=dict(text="Chipping Risk"),
        gauge=dict(
            axis=dict(range=[RISK_MIN, RISK_MAX]),
            bar=dict(color=theme.text_color),
            steps=[
                dict(range=[RISK_MIN, RISK_LOW_THRESHOLD], color=theme.good_die_color),
                dict(range=[RISK_LOW_THRESHOLD, RISK_MAX], color=theme.bad_die_color),
            ],
        ),
    ))
    fig.update_layout(
        paper_bgcolor=theme.background_color, font=dict(color=theme.text_color),
        height=260, margin=dict(l=20, r=20, t=40, b=10)
    )
    return fig
