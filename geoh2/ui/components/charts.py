"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from geoh2.data.costs import CostMetric, resolve_cost
from geoh2.data.models import DemandCenter, Hexagon
from geoh2.ui.utils.colors import ColorMapper


DEFAULT_TEMPLATE = "plotly_white"
DEFAULT_COLOR_SEQUENCE = [
    "#0ea5e9",  # sky blue for counts
    "#22c55e",  # green for pipeline
    "#f59e0b",  # amber for solar
    "#ef4444",  # red for trucking
]
PIPELINE_COLOR = "#22c55e"
TRUCKING_COLOR = "#ef4444"
SOLAR_COLOR = "#f59e0b"
WIND_COLOR = "#0ea5e9"
MAP_STYLE = "carto-positron"
NO_DATA_LABEL = "No data"


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        colorway=DEFAULT_COLOR_SEQUENCE,
        title=title,
        legend_title=legend_title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_tickformat:
        fig.update_yaxes(tickformat=yaxis_tickformat)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure, key: Optional[str] = None) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False}, key=key)


def line_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    line_color: Optional[str] = None,
    markers: bool = False,
) -> go.Figure:
    fig = px.line(df, x=x, y=y, color=color, markers=markers)
    fig = _configure_layout(fig, title, yaxis_title)
    if line_color and color is None:
        fig.update_traces(line=dict(color=line_color, width=2))
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y,
    color: Optional[str] = None,
    barmode: str = "group",
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    color_discrete_map: Optional[Dict[str, str]] = None,
    labels: Optional[Dict[str, str]] = None,
    category_orders: Optional[Dict[str, List[str]]] = None,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=color,
        barmode=barmode,
        color_discrete_map=color_discrete_map,
        labels=labels,
        category_orders=category_orders,
    )
    fig = _configure_layout(fig, title, yaxis_title)
    return fig


def _map_center(hexagons: Sequence[Hexagon], centers: Sequence[DemandCenter]) -> Dict[str, float]:
    if centers:
        return {"lat": centers[0].lat, "lon": centers[0].lon}
    lats: List[float] = []
    lons: List[float] = []
    for hexagon in hexagons:
        coords = hexagon.geometry.coordinates
        try:
            ring = coords[0]
            lons.extend(float(pt[0]) for pt in ring)
            lats.extend(float(pt[1]) for pt in ring)
        except (TypeError, IndexError, ValueError):
            continue
    if not lats:
        return {"lat": 0.0, "lon": 0.0}
    return {"lat": sum(lats) / len(lats), "lon": sum(lons) / len(lons)}


def hexagon_map(
    hexagons: Sequence[Hexagon],
    centers: Sequence[DemandCenter],
    center_name: Optional[str],
    mapper: ColorMapper,
    zoom: float = 4.5,
    height: int = 600,
) -> go.Figure:
    """Hexagons colored by discrete cost band, plus demand-center markers."""
    rows = []
    for hexagon in hexagons:
        cost = resolve_cost(hexagon, center_name, CostMetric.LOWEST) if center_name else None
        rows.append(
            {
                "id": hexagon.id,
                "hexagon": hexagon.label,
                "lcoh": cost,
                "band": mapper.label(cost),
                "solar_mw": round(hexagon.solar_potential, 1),
                "wind_mw": round(hexagon.wind_potential, 1),
            }
        )
    frame = pd.DataFrame(rows, columns=["id", "hexagon", "lcoh", "band", "solar_mw", "wind_mw"])
    geojson = {"type": "FeatureCollection", "features": [h.to_feature() for h in hexagons]}
    band_order = [entry.label for entry in mapper.legend()] + [NO_DATA_LABEL]

    fig = px.choropleth_map(
        frame,
        geojson=geojson,
        locations="id",
        color="band",
        color_discrete_map=mapper.discrete_color_map(),
        category_orders={"band": band_order},
        hover_name="hexagon",
        hover_data={"id": False, "band": False, "lcoh": ":.2f", "solar_mw": True, "wind_mw": True},
        map_style=MAP_STYLE,
        center=_map_center(hexagons, centers),
        zoom=zoom,
        opacity=0.7,
        labels={"band": "Cost Range", "lcoh": "LCOH (€/kg)", "solar_mw": "Solar (MW)", "wind_mw": "Wind (MW)"},
    )
    fig.update_traces(marker_line_color="#64748b", marker_line_width=1)

    if centers:
        fig.add_trace(
            go.Scattermap(
                lat=[c.lat for c in centers],
                lon=[c.lon for c in centers],
                mode="markers+text",
                text=[c.name for c in centers],
                textposition="top right",
                marker=dict(size=14, color="#1f2937"),
                name="Demand Centers",
                customdata=[[c.demand_state.value, c.annual_demand] for c in centers],
                hovertemplate="<b>%{text}</b><br>State: %{customdata[0]}<br>"
                "Demand: %{customdata[1]:,.0f} kg/year<extra></extra>",
            )
        )
    fig.update_layout(height=height, margin=dict(l=0, r=0, t=0, b=0), legend_title="Cost Range")
    return fig
