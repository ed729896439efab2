from __future__ import annotations

import logging

import streamlit as st

from geoh2.config import Settings
from geoh2.data.errors import SUPPORTED_EXTENSIONS, IngestionError
from geoh2.data.loader import CSV_ROW_LIMIT, detect_format, load_dataset
from geoh2.data.models import FIXED_FIELDS
from geoh2.ui.pages.context import PageContext
from geoh2.ui.state import replace_dataset, reset_to_sample

logger = logging.getLogger(__name__)

FIELD_HELP = {
    "country": 'Country code (e.g., "NA")',
    "theo_pv": "Theoretical PV potential (MW)",
    "theo_wind": "Theoretical wind potential (MW)",
    "ocean_dist": "Distance to ocean (km)",
    "road_dist": "Distance to roads (km)",
    "waterbody_dist": "Distance to water bodies (km)",
    "waterway_dist": "Distance to waterways (km)",
    "grid_dist": "Distance to grid (km)",
}


UPLOAD_KEY = "geoh2_upload"
STATUS_KEY = "geoh2_upload_status"


def _on_upload_change() -> None:
    # Runs before the script reruns, so every tab sees the new dataset at once.
    uploaded = st.session_state.get(UPLOAD_KEY)
    if uploaded is None:
        st.session_state.pop(STATUS_KEY, None)
        return
    try:
        fmt = detect_format(uploaded.name)
        dataset = load_dataset(uploaded.getvalue(), fmt, source_name=uploaded.name)
    except IngestionError as exc:
        logger.warning("Upload of %s rejected: %s", uploaded.name, exc)
        st.session_state[STATUS_KEY] = ("error", str(exc))
        return
    replace_dataset(dataset)
    message = (
        f"File uploaded successfully! Loaded {len(dataset.hexagons)} hexagons and "
        f"{len(dataset.demand_centers)} demand center(s)."
    )
    if dataset.truncated:
        message += f" Only the first {CSV_ROW_LIMIT} of {dataset.row_count} rows were loaded."
    st.session_state[STATUS_KEY] = ("success", message)


def _render_status() -> None:
    status = st.session_state.get(STATUS_KEY)
    if not status:
        return
    kind, message = status
    if kind == "error":
        st.error(message)
    else:
        st.success(message)


def render(context: PageContext, settings: Settings) -> None:
    st.subheader("Data Upload")
    st.caption("Upload your hexagon data files to analyze hydrogen production costs in your region of interest.")
    st.write(f"Active dataset: **{context.dataset.source_name or context.dataset.source_format}**")

    st.file_uploader(
        "Upload Hexagon Data (GeoJSON or CSV)",
        type=[ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS],
        key=UPLOAD_KEY,
        on_change=_on_upload_change,
    )
    _render_status()

    if st.button("Reset to sample data", key="geoh2_reset_sample"):
        reset_to_sample(settings)
        st.session_state.pop(STATUS_KEY, None)
        st.rerun()

    st.markdown("#### Required Data Format")
    st.markdown("**Hexagon GeoJSON Properties**")
    for field_name in FIXED_FIELDS:
        st.markdown(f"- `{field_name}`: {FIELD_HELP[field_name]}")
    st.markdown(
        "Cost fields are named `<demand center> <metric>`, e.g. `Windhoek lowest cost` or "
        "`Windhoek pipeline total cost`. A GeoJSON file may list its demand centers in a top-level "
        "`demand_centers` array."
    )
    st.markdown("**CSV Format**")
    st.caption(
        f"CSV files should contain the same properties as columns, with one hexagon per row. "
        f"Only the first {CSV_ROW_LIMIT} rows are loaded; polygon shapes are placeholders."
    )
