import geoh2.bootstrap_env  # must be first to set env/secrets and logging
import streamlit as st

from geoh2.config import TABS, load_settings
from geoh2.ui.layout import setup_page, sidebar_scenario_ui, track_scenario_change
from geoh2.ui.pages import dashboard, data_upload, map_view, results
from geoh2.ui.pages.context import PageContext
from geoh2.ui.state import SCENARIO_KEY, get_active_dataset


def main() -> None:
    setup_page()
    settings = load_settings()
    geoh2.bootstrap_env.configure_logging(settings.log_level)

    st.title("GeoH2 Dashboard")
    st.caption("Green hydrogen production and transport costs by hexagon.")

    scenario = sidebar_scenario_ui()
    track_scenario_change(scenario, SCENARIO_KEY)

    dataset = get_active_dataset(settings)
    context = PageContext(dataset=dataset, scenario=scenario)

    st.sidebar.divider()
    st.sidebar.caption(
        f"{len(dataset.hexagons)} hexagons · {len(dataset.demand_centers)} demand centers · "
        f"source: {dataset.source_name or dataset.source_format}"
    )

    renderers = {
        "map": lambda: map_view.render(context),
        "dashboard": lambda: dashboard.render(context),
        "upload": lambda: data_upload.render(context, settings),
        "results": lambda: results.render(context),
    }

    streamlit_tabs = st.tabs([tab.label for tab in TABS])
    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = renderers.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer()


if __name__ == "__main__":
    main()
