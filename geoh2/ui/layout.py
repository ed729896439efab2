"""
Layout helpers for the Streamlit application (page setup, sidebar, legend).
"""

from __future__ import annotations

import logging

import streamlit as st

from geoh2.data.scenario import (
    COUNTRIES,
    DEFAULT_SCENARIO,
    GENERATORS,
    WEATHER_YEARS,
    ScenarioConfig,
    TransportConfig,
    serialize_scenario,
)
from geoh2.ui.utils.colors import ColorMapper

logger = logging.getLogger(__name__)


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="GeoH2 Dashboard",
        layout="wide",
        page_icon=":zap:",
    )


def sidebar_scenario_ui(defaults: ScenarioConfig = DEFAULT_SCENARIO) -> ScenarioConfig:
    """
    Render the scenario configuration controls and return the selection.
    """
    st.sidebar.header("Scenario Configuration")

    country_codes = list(COUNTRIES)
    country = st.sidebar.selectbox(
        "Country",
        options=country_codes,
        index=country_codes.index(defaults.country) if defaults.country in country_codes else 0,
        format_func=lambda code: COUNTRIES.get(code, code),
        key="geoh2_country",
    )
    weather_year = st.sidebar.selectbox(
        "Weather Year",
        options=WEATHER_YEARS,
        index=WEATHER_YEARS.index(defaults.weather_year) if defaults.weather_year in WEATHER_YEARS else 0,
        key="geoh2_weather_year",
    )

    st.sidebar.markdown("**Generators**")
    scenario = ScenarioConfig(country=country, weather_year=int(weather_year), generators=(), transport=defaults.transport)
    for generator in GENERATORS:
        enabled = st.sidebar.checkbox(
            generator,
            value=generator in defaults.generators,
            key=f"geoh2_gen_{generator.lower()}",
        )
        scenario = scenario.with_generator(generator, enabled)

    st.sidebar.markdown("**Transport Options**")
    pipeline = st.sidebar.checkbox(
        "Pipeline Construction",
        value=defaults.transport.pipeline_construction,
        key="geoh2_pipeline",
    )
    road = st.sidebar.checkbox(
        "Road Construction",
        value=defaults.transport.road_construction,
        key="geoh2_road",
    )
    return ScenarioConfig(
        country=scenario.country,
        weather_year=scenario.weather_year,
        generators=scenario.generators,
        transport=TransportConfig(pipeline_construction=pipeline, road_construction=road),
    )


def track_scenario_change(scenario: ScenarioConfig, state_key: str) -> None:
    serialized = serialize_scenario(scenario)
    if st.session_state.get(state_key) != serialized:
        logger.info("Scenario changed: %s", serialized)
        st.session_state[state_key] = serialized


def render_cost_legend(mapper: ColorMapper, title: str = "LCOH (€/kg)") -> None:
    st.markdown(f"**{title}**")
    for entry in mapper.legend():
        st.markdown(
            f'<span style="display:inline-block;width:14px;height:14px;'
            f'background:{entry.color};border-radius:3px;margin-right:8px;"></span>'
            f"{entry.range} &nbsp;<span style='color:#6b7280'>{entry.label}</span>",
            unsafe_allow_html=True,
        )
