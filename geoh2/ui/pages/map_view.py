from __future__ import annotations

from typing import Optional

import streamlit as st

from geoh2.data.costs import CostIndex, CostMetric
from geoh2.data.models import Hexagon
from geoh2.ui.components.charts import hexagon_map, render_plotly
from geoh2.ui.components.formatting import format_cost, format_number
from geoh2.ui.layout import render_cost_legend
from geoh2.ui.pages.context import PageContext
from geoh2.ui.state import select_hexagon, selected_hexagon_id

DETAIL_METRICS = [
    CostMetric.LOWEST,
    CostMetric.PIPELINE_TOTAL,
    CostMetric.TRUCKING_TOTAL,
    CostMetric.PIPELINE_PRODUCTION,
    CostMetric.TRUCKING_PRODUCTION,
    CostMetric.PIPELINE_TRANSPORT,
    CostMetric.TRUCKING_TRANSPORT,
]


def _hexagon_details(hexagon: Hexagon, center_name: Optional[str]) -> None:
    st.markdown(f"#### Hexagon {hexagon.label}")
    props = hexagon.properties
    st.write(f"**Country:** {hexagon.country}")
    st.write(f"**Solar Potential:** {format_number(hexagon.solar_potential, 1)} MW")
    st.write(f"**Wind Potential:** {format_number(hexagon.wind_potential, 1)} MW")
    st.write(f"**Ocean Distance:** {format_number(hexagon.ocean_distance, 1)} km")
    st.write(f"**Road Distance:** {format_number(hexagon.road_distance, 1)} km")
    st.write(f"**Grid Distance:** {format_number(props.get('grid_dist'), 1)} km")
    if not center_name:
        return
    index = CostIndex.build(hexagon)
    st.markdown(f"**Costs to {center_name} (€/kg)**")
    for metric in DETAIL_METRICS:
        st.write(f"{metric.label.capitalize()}: {format_cost(index.get(center_name, metric))}")


def render(context: PageContext) -> None:
    st.subheader("Hydrogen Production Cost Map")
    dataset = context.dataset
    if not dataset.hexagons:
        st.info("No hexagons loaded. Upload a GeoJSON or CSV file on the Data Upload tab.")
        return

    center_names = dataset.center_names()
    center_name = st.selectbox(
        "Color by lowest cost to",
        options=center_names,
        index=0,
        key="geoh2_map_center",
    ) if center_names else None

    if dataset.has_synthetic_geometry:
        st.warning(
            "Some hexagon shapes are placeholders because the source carried no polygon geometry. "
            "Upload GeoJSON for real cell outlines."
        )

    col_map, col_side = st.columns([3, 1])
    with col_map:
        fig = hexagon_map(dataset.hexagons, dataset.demand_centers, center_name, context.mapper)
        render_plotly(fig, key="geoh2_hexagon_map")
    with col_side:
        render_cost_legend(context.mapper)
        st.divider()
        ids = [h.id for h in dataset.hexagons]
        current = selected_hexagon_id()
        chosen = st.selectbox(
            "Inspect hexagon",
            options=[None] + ids,
            index=(ids.index(current) + 1) if current in ids else 0,
            format_func=lambda v: "–" if v is None else f"H{v}",
            key="geoh2_inspect_hexagon",
        )
        if chosen != current:
            select_hexagon(chosen)
        if chosen is not None:
            hexagon = dataset.hexagon_by_id(chosen)
            if hexagon is not None:
                _hexagon_details(hexagon, center_name)
