from __future__ import annotations

import pandas as pd
import streamlit as st

from geoh2.data.export import export_filename, export_results_csv
from geoh2.data.ranking import (
    build_results,
    chart_feed,
    results_feed,
    results_frame,
    sort_by_potential,
    top_performers,
)
from geoh2.data.statistics import aggregate
from geoh2.ui.components.charts import (
    PIPELINE_COLOR,
    SOLAR_COLOR,
    TRUCKING_COLOR,
    WIND_COLOR,
    bar_chart,
    line_chart,
    render_plotly,
)
from geoh2.ui.components.formatting import format_cost
from geoh2.ui.components.kpi import KpiCard, render_kpi_cards
from geoh2.ui.components.tables import render_table
from geoh2.ui.pages.context import PageContext

TOP_TABLE_COLUMNS = {
    "hexagon": "Hexagon",
    "lowest_cost": "LCOH (€/kg)",
    "solar_potential": "Solar Potential (MW)",
    "wind_potential": "Wind Potential (MW)",
    "ocean_distance": "Ocean Distance (km)",
}


def _top_table(records) -> pd.DataFrame:
    frame = results_frame(records)[list(TOP_TABLE_COLUMNS)]
    frame.insert(0, "rank", [f"#{i + 1}" for i in range(len(frame))])
    return frame


def render(context: PageContext) -> None:
    st.subheader("Analysis Results")
    dataset = context.dataset

    st.download_button(
        "Export Results",
        data=export_results_csv(dataset.hexagons),
        file_name=export_filename(context.scenario),
        mime="text/csv",
        key="geoh2_export",
    )

    center_names = dataset.center_names()
    if not center_names:
        st.info("No demand centers available.")
        return
    center_name = st.selectbox("Demand Center", options=center_names, index=0, key="geoh2_results_center")

    records = build_results(dataset.hexagons, center_name)
    if not records:
        st.info(f"No hexagons have cost data for {center_name}.")
        return
    feed = results_feed(records)

    st.markdown("#### Top 10 Lowest Cost Hexagons")
    render_table(
        _top_table(top_performers(records)),
        column_config={
            "lowest_cost": {"type": "cost", "decimals": 2},
            "solar_potential": {"type": "number", "decimals": 1},
            "wind_potential": {"type": "number", "decimals": 1},
            "ocean_distance": {"type": "number", "decimals": 1},
        },
        rename={"rank": "Rank", **TOP_TABLE_COLUMNS},
        height=390,
    )

    comparison = results_frame(chart_feed(feed))
    fig = bar_chart(
        comparison,
        x="hexagon",
        y=["pipeline_cost", "trucking_cost"],
        title="Transport Method Cost Comparison",
        yaxis_title="€/kg",
        color_discrete_map={"pipeline_cost": PIPELINE_COLOR, "trucking_cost": TRUCKING_COLOR},
    )
    render_plotly(fig)

    col_solar, col_wind = st.columns(2)
    with col_solar:
        solar = results_frame(sort_by_potential(feed, "solar"))
        render_plotly(
            line_chart(solar, x="solar_potential", y="lowest_cost", title="Solar Potential vs Cost",
                       yaxis_title="LCOH (€/kg)", line_color=SOLAR_COLOR)
        )
    with col_wind:
        wind = results_frame(sort_by_potential(feed, "wind"))
        render_plotly(
            line_chart(wind, x="wind_potential", y="lowest_cost", title="Wind Potential vs Cost",
                       yaxis_title="LCOH (€/kg)", line_color=WIND_COLOR)
        )

    st.markdown("#### Summary Statistics")
    summary = aggregate(r.lowest_cost for r in feed)
    render_kpi_cards(
        [
            KpiCard("Total Hexagons", summary.count),
            KpiCard("Average LCOH", value_display=format_cost(summary.mean)),
            KpiCard("Minimum LCOH", value_display=format_cost(summary.minimum)),
            KpiCard("Maximum LCOH", value_display=format_cost(summary.maximum)),
        ],
        columns=4,
    )
