"""
Upload-to-results flow without the Streamlit layer.
"""

import pytest

from geoh2.data.loader import load_dataset
from geoh2.data.ranking import build_results, top_performers
from geoh2.data.statistics import dashboard_stats
from geoh2.ui.utils.colors import DEFAULT_MAPPER


def test_csv_upload_to_top_performers(three_row_csv):
    dataset = load_dataset(three_row_csv.encode("utf-8"), "csv", source_name="three.csv")

    assert len(dataset.hexagons) == 3
    assert dataset.center_names() == ["X"]

    top = top_performers(build_results(dataset.hexagons, "X"))
    assert [r.hexagon_id for r in top] == [2, 0, 1]
    assert [r.hexagon for r in top] == ["H2", "H0", "H1"]

    stats = dashboard_stats(dataset.hexagons, dataset.demand_centers)
    assert stats.avg_cost == pytest.approx(1.8333, abs=1e-4)
    assert stats.min_cost == 0.9
    assert stats.max_cost == 3.4
    assert stats.total_potential == 2150.0

    assert DEFAULT_MAPPER(top[0].lowest_cost) == "#22c55e"


def test_geojson_upload_replaces_centers(feature_collection_text):
    dataset = load_dataset(feature_collection_text, "geojson", source_name="cells.geojson")
    top = top_performers(build_results(dataset.hexagons, dataset.default_center.name))

    assert [r.hexagon_id for r in top] == [0, 1]
    assert top[0].pipeline_cost == 2.75
    assert top[1].pipeline_cost is None
    assert DEFAULT_MAPPER.label(top[1].lowest_cost) == "Very High"
