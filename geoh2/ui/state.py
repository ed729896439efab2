"""
Session-level holder of the active dataset snapshot and the hexagon selection.

A dataset is replaced as a whole: consumers only ever see the old or the new
snapshot, never a mix.
"""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from geoh2.config import Settings
from geoh2.data.errors import IngestionError
from geoh2.data.loader import load_file
from geoh2.data.models import Dataset
from geoh2.data.sample import load_sample_dataset

logger = logging.getLogger(__name__)

DATASET_KEY = "geoh2_dataset"
SELECTED_HEXAGON_KEY = "geoh2_selected_hexagon"
SCENARIO_KEY = "geoh2_scenario"


@st.cache_data(show_spinner=False)
def _load_file_cached(path: str) -> Dataset:
    return load_file(path)


@st.cache_data(show_spinner="Loading GeoH2 data...")
def _load_sample_cached(count: int, seed: Optional[int]) -> Dataset:
    return load_sample_dataset(count=count, seed=seed)


def load_initial_dataset(settings: Settings) -> Dataset:
    """Configured data file if it loads, otherwise the sample dataset."""
    if settings.data_file:
        try:
            return _load_file_cached(settings.data_file)
        except IngestionError as exc:
            logger.error("Configured data file %s could not be loaded: %s", settings.data_file, exc)
            st.warning(f"Could not load {settings.data_file}: {exc} Showing sample data instead.")
    return _load_sample_cached(settings.sample_size, settings.sample_seed)


def get_active_dataset(settings: Settings) -> Dataset:
    dataset = st.session_state.get(DATASET_KEY)
    if dataset is None:
        dataset = load_initial_dataset(settings)
        st.session_state[DATASET_KEY] = dataset
    return dataset


def replace_dataset(dataset: Dataset) -> None:
    previous: Optional[Dataset] = st.session_state.get(DATASET_KEY)
    st.session_state[DATASET_KEY] = dataset
    st.session_state.pop(SELECTED_HEXAGON_KEY, None)
    logger.info(
        "Dataset replaced: %s (%d hexagons) -> %s (%d hexagons)",
        previous.source_name if previous else None,
        len(previous.hexagons) if previous else 0,
        dataset.source_name,
        len(dataset.hexagons),
    )


def reset_to_sample(settings: Settings) -> None:
    _load_sample_cached.clear()  # type: ignore[attr-defined]
    replace_dataset(_load_sample_cached(settings.sample_size, settings.sample_seed))


def selected_hexagon_id() -> Optional[int]:
    return st.session_state.get(SELECTED_HEXAGON_KEY)


def select_hexagon(hexagon_id: Optional[int]) -> None:
    st.session_state[SELECTED_HEXAGON_KEY] = hexagon_id
