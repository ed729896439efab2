from __future__ import annotations

import pandas as pd
import streamlit as st

from geoh2.data.statistics import (
    cost_distribution_frame,
    dashboard_stats,
    potential_frame,
    transport_comparison,
)
from geoh2.ui.components.charts import (
    PIPELINE_COLOR,
    SOLAR_COLOR,
    TRUCKING_COLOR,
    WIND_COLOR,
    bar_chart,
    render_plotly,
)
from geoh2.ui.components.formatting import format_compact, format_coordinates, format_cost
from geoh2.ui.components.kpi import KpiCard, render_kpi_cards
from geoh2.ui.components.tables import render_table
from geoh2.ui.pages.context import PageContext


def _demand_center_table(context: PageContext) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Name": c.name,
                "Location": format_coordinates(c.lat, c.lon),
                "Annual Demand": format_compact(c.annual_demand, 1, "kg/year"),
                "Demand State": c.demand_state.value,
            }
            for c in context.dataset.demand_centers
        ],
        columns=["Name", "Location", "Annual Demand", "Demand State"],
    )


def render(context: PageContext) -> None:
    st.subheader("Analysis Dashboard")
    scenario = context.scenario
    st.caption(
        "Hydrogen production costs and renewable potential for "
        f"{scenario.country_name} ({scenario.weather_year})."
    )

    dataset = context.dataset
    stats = dashboard_stats(dataset.hexagons, dataset.demand_centers)
    cards = [
        KpiCard("Average LCOH", stats.avg_cost, is_cost=True, decimals=2, help_text="per kg H₂"),
        KpiCard(
            "Cost Range",
            value_display=f"{format_cost(stats.min_cost)} - {format_cost(stats.max_cost)}",
            help_text="per kg H₂",
        ),
        KpiCard(
            "Total RE Potential",
            value_display=f"{stats.total_potential / 1000:.1f} GW",
            help_text="Solar and wind capacity added together",
        ),
        KpiCard("Demand Centers", len(dataset.demand_centers), help_text="locations"),
    ]
    render_kpi_cards(cards, columns=4)

    default_center = dataset.default_center
    col_left, col_right = st.columns(2)
    with col_left:
        distribution = cost_distribution_frame(dataset.hexagons, default_center.name) if default_center else pd.DataFrame()
        if distribution.empty:
            st.info("No lowest-cost data for the default demand center.")
        else:
            fig = bar_chart(
                distribution,
                x="range",
                y="count",
                title="Cost Distribution",
                yaxis_title="Hexagons",
                labels={"range": "LCOH (€/kg)", "count": "Hexagons"},
            )
            lowest, highest = distribution["lower"].min(), distribution["lower"].max()
            fig.update_traces(
                marker_color=[context.mapper.interpolate(v, lowest, highest) for v in distribution["lower"]]
            )
            render_plotly(fig)
    with col_right:
        potential = potential_frame(dataset.hexagons)
        if potential.empty:
            st.info("No hexagons loaded.")
        else:
            fig = bar_chart(
                potential,
                x="hexagon",
                y=["solar", "wind"],
                barmode="stack",
                title="Renewable Potential (Sample Hexagons)",
                yaxis_title="MW",
                color_discrete_map={"solar": SOLAR_COLOR, "wind": WIND_COLOR},
            )
            render_plotly(fig)

    comparison = transport_comparison(dataset.hexagons, dataset.demand_centers)
    if not comparison.empty:
        fig = bar_chart(
            comparison,
            x="center",
            y=["pipeline", "trucking"],
            title="Transport Method Comparison",
            yaxis_title="€/kg",
            color_discrete_map={"pipeline": PIPELINE_COLOR, "trucking": TRUCKING_COLOR},
        )
        render_plotly(fig)

    st.markdown("#### Demand Centers")
    render_table(_demand_center_table(context), height=200)
