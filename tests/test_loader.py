import json
import math

import pytest

from geoh2.data.errors import FormatError, ParseError, ReadError, UnsupportedFormatError
from geoh2.data.loader import (
    CSV_ROW_LIMIT,
    coerce_extra_value,
    detect_format,
    load_dataset,
    load_file,
    parse_or_default,
)
from geoh2.data.models import FIXED_NUMERIC_FIELDS, UNIT_SQUARE, DemandState

CSV_HEADER = "country,theo_pv,theo_wind,ocean_dist,road_dist,waterbody_dist,waterway_dist,grid_dist"


def _assert_fixed_fields_finite(dataset):
    for hexagon in dataset.hexagons:
        assert isinstance(hexagon.properties["country"], str)
        for name in FIXED_NUMERIC_FIELDS:
            value = hexagon.properties[name]
            assert isinstance(value, float)
            assert math.isfinite(value)


# ----------------------------------------------------------------------------
# format detection
# ----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "filename, expected",
    [("cells.geojson", "geojson"), ("cells.JSON", "json"), ("rows.csv", "csv")],
)
def test_detect_format(filename, expected):
    assert detect_format(filename) == expected


def test_detect_format_rejects_unknown_extension():
    with pytest.raises(UnsupportedFormatError) as excinfo:
        detect_format("cells.xlsx")
    assert excinfo.value.extension == ".xlsx"
    assert ".xlsx" in str(excinfo.value)
    assert "GeoJSON or CSV" in str(excinfo.value)


def test_load_dataset_rejects_unknown_declared_format():
    with pytest.raises(UnsupportedFormatError):
        load_dataset("a,b\n1,2\n", "parquet")


# ----------------------------------------------------------------------------
# coercion policies
# ----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [("12.5", 12.5), (" 7 ", 7.0), (3, 3.0), ("", 0.0), (None, 0.0), ("abc", 0.0), ("nan", 0.0), ("inf", 0.0)],
)
def test_parse_or_default(raw, expected):
    assert parse_or_default(raw) == expected


def test_parse_or_default_custom_default():
    assert parse_or_default("n/a", default=-1.0) == -1.0


@pytest.mark.parametrize(
    "raw, expected",
    [("1.25", 1.25), ("shrubland", "shrubland"), ("NA", "NA"), ("", None), ("N/A", None), (float("nan"), None)],
)
def test_coerce_extra_value(raw, expected):
    assert coerce_extra_value(raw) == expected


# ----------------------------------------------------------------------------
# GeoJSON path
# ----------------------------------------------------------------------------

def test_geojson_one_hexagon_per_feature(feature_collection_text, feature_collection):
    dataset = load_dataset(feature_collection_text, "geojson")

    assert len(dataset.hexagons) == len(feature_collection["features"])
    assert [h.id for h in dataset.hexagons] == [0, 1]
    first = dataset.hexagons[0]
    assert first.geometry.coordinates == feature_collection["features"][0]["geometry"]["coordinates"]
    assert first.synthetic_geometry is False
    assert first.properties["Windhoek lowest cost"] == 2.75
    assert first.properties["land_use"] == "shrubland"
    assert dataset.row_count == 2
    _assert_fixed_fields_finite(dataset)


def test_geojson_missing_fixed_fields_default_to_zero(feature_collection_text):
    dataset = load_dataset(feature_collection_text, "json")
    second = dataset.hexagons[1]

    assert second.properties["theo_pv"] == 300.0
    assert second.properties["theo_wind"] == 0.0
    assert second.properties["grid_dist"] == 0.0
    assert dataset.source_format == "json"


def test_geojson_missing_features_is_format_error():
    with pytest.raises(FormatError):
        load_dataset(json.dumps({"type": "FeatureCollection"}), "geojson")


def test_geojson_invalid_json_is_format_error():
    with pytest.raises(FormatError):
        load_dataset("{not json", "geojson")


def test_geojson_feature_without_geometry_gets_placeholder(feature_collection):
    del feature_collection["features"][1]["geometry"]
    dataset = load_dataset(json.dumps(feature_collection), "geojson")

    assert dataset.hexagons[1].synthetic_geometry is True
    assert dataset.hexagons[1].geometry.coordinates == UNIT_SQUARE


@pytest.mark.parametrize("properties", ["abc", 5, [1, 2]])
def test_geojson_non_object_properties_is_format_error(properties):
    payload = {"features": [{"type": "Feature", "geometry": None, "properties": properties}]}
    with pytest.raises(FormatError, match="feature 0 properties"):
        load_dataset(json.dumps(payload), "geojson")


@pytest.mark.parametrize(
    "geometry",
    ["Polygon", 3, [[0, 0], [1, 1]], {"type": "Polygon"}, {"type": "Polygon", "coordinates": "0,0"}],
)
def test_geojson_malformed_geometry_is_format_error(geometry):
    payload = {"features": [{"type": "Feature", "geometry": geometry, "properties": {}}]}
    with pytest.raises(FormatError, match="feature 0 geometry"):
        load_dataset(json.dumps(payload), "geojson")


def test_geojson_null_properties_default_fixed_fields():
    payload = {"features": [{"type": "Feature", "geometry": None, "properties": None}]}
    hexagon = load_dataset(json.dumps(payload), "geojson").hexagons[0]

    assert hexagon.country == "NA"
    assert hexagon.properties["theo_pv"] == 0.0


def test_geojson_non_finite_demand_is_format_error(feature_collection):
    feature_collection["demand_centers"] = [{"name": "A", "annual_demand": "inf", "demand_state": "LH2"}]
    with pytest.raises(FormatError):
        load_dataset(json.dumps(feature_collection), "geojson")


def test_geojson_infers_demand_centers_from_cost_fields(feature_collection_text):
    dataset = load_dataset(feature_collection_text, "geojson")
    assert dataset.center_names() == ["Windhoek"]


def test_geojson_without_cost_fields_uses_placeholder_center():
    payload = {"features": [{"type": "Feature", "geometry": None, "properties": {"theo_pv": 1}}]}
    dataset = load_dataset(json.dumps(payload), "geojson")

    assert len(dataset.demand_centers) == 1
    assert dataset.demand_centers[0].name == "Windhoek"


def test_geojson_explicit_demand_centers(feature_collection):
    feature_collection["demand_centers"] = [
        {"name": "Windhoek", "lat": -22.56, "lon": 17.07, "annualDemand": 1000000, "demandState": "500 bar"},
        {"name": "Walvis Bay", "lat": -22.96, "lon": 14.51, "annual_demand": 2000000, "demand_state": "LH2"},
    ]
    dataset = load_dataset(json.dumps(feature_collection), "geojson")

    assert dataset.center_names() == ["Windhoek", "Walvis Bay"]
    assert dataset.demand_centers[1].demand_state is DemandState.LIQUID_H2
    assert dataset.demand_centers[1].annual_demand == 2_000_000


def test_geojson_duplicate_demand_center_names_rejected(feature_collection):
    feature_collection["demand_centers"] = [
        {"name": "Windhoek", "lat": 0, "lon": 0, "annual_demand": 1, "demand_state": "LH2"},
        {"name": "Windhoek", "lat": 1, "lon": 1, "annual_demand": 2, "demand_state": "NH3"},
    ]
    with pytest.raises(FormatError, match="Duplicate demand center"):
        load_dataset(json.dumps(feature_collection), "geojson")


def test_geojson_invalid_demand_state_rejected(feature_collection):
    feature_collection["demand_centers"] = [{"name": "A", "demand_state": "gas"}]
    with pytest.raises(FormatError):
        load_dataset(json.dumps(feature_collection), "geojson")


# ----------------------------------------------------------------------------
# CSV path
# ----------------------------------------------------------------------------

def test_csv_rows_become_hexagons(three_row_csv):
    dataset = load_dataset(three_row_csv, "csv")

    assert len(dataset.hexagons) == 3
    assert [h.properties["theo_pv"] for h in dataset.hexagons] == [500.0, 800.0, 200.0]
    assert dataset.hexagons[2].properties["X lowest cost"] == 0.9
    assert all(h.synthetic_geometry for h in dataset.hexagons)
    assert dataset.truncated is False
    _assert_fixed_fields_finite(dataset)


def test_csv_is_capped_at_row_limit():
    rows = "\n".join(f"NA,{i},1,1,1,1,1,1" for i in range(CSV_ROW_LIMIT + 50))
    dataset = load_dataset(f"{CSV_HEADER}\n{rows}\n", "csv")

    assert len(dataset.hexagons) == CSV_ROW_LIMIT
    assert dataset.row_count == CSV_ROW_LIMIT + 50
    assert dataset.truncated is True
    assert dataset.hexagons[-1].id == CSV_ROW_LIMIT - 1


def test_csv_short_input_keeps_every_row():
    dataset = load_dataset(f"{CSV_HEADER}\nNA,1,1,1,1,1,1,1\nZA,2,2,2,2,2,2,2\n", "csv")
    assert len(dataset.hexagons) == 2
    assert dataset.hexagons[1].country == "ZA"


def test_csv_non_numeric_and_missing_fixed_fields_become_zero():
    text = "country,theo_pv,theo_wind\n,abc,\n"
    dataset = load_dataset(text, "csv")
    props = dataset.hexagons[0].properties

    assert props["country"] == "NA"
    assert props["theo_pv"] == 0.0
    assert props["theo_wind"] == 0.0
    assert props["grid_dist"] == 0.0
    _assert_fixed_fields_finite(dataset)


def test_csv_extra_columns_are_preserved():
    text = f"{CSV_HEADER},X lowest cost,land_use,X pipeline total cost\nNA,1,1,1,1,1,1,1,2.5,desert,\n"
    props = load_dataset(text, "csv").hexagons[0].properties

    assert props["X lowest cost"] == 2.5
    assert props["land_use"] == "desert"
    assert "X pipeline total cost" not in props


def test_csv_lat_lon_columns_center_the_placeholder_square():
    text = "country,theo_pv,lat,lon\nNA,1,-22.5,17.0\n"
    hexagon = load_dataset(text, "csv").hexagons[0]
    ring = hexagon.geometry.coordinates[0]

    assert ring[0] == ring[-1]
    assert ring[0] == pytest.approx([16.9, -22.6])
    assert hexagon.synthetic_geometry is True


def test_csv_without_coordinates_uses_unit_square():
    hexagon = load_dataset(f"{CSV_HEADER}\nNA,1,1,1,1,1,1,1\n", "csv").hexagons[0]
    assert hexagon.geometry.coordinates == UNIT_SQUARE


def test_csv_unterminated_quote_is_parse_error():
    text = f'{CSV_HEADER}\nNA,"500,1,1,1,1,1,1\n'
    with pytest.raises(ParseError) as excinfo:
        load_dataset(text, "csv")
    assert excinfo.value.detail
    assert "CSV parsing error" in str(excinfo.value)


def test_csv_empty_input_yields_no_hexagons_but_a_center():
    dataset = load_dataset("", "csv")
    assert dataset.hexagons == ()
    assert dataset.center_names() == ["Sample Demand"]


def test_csv_demand_center_inferred_from_cost_columns(three_row_csv):
    dataset = load_dataset(three_row_csv, "csv")
    assert dataset.center_names() == ["X"]


def test_csv_without_cost_columns_uses_placeholder_center():
    dataset = load_dataset(f"{CSV_HEADER}\nNA,1,1,1,1,1,1,1\n", "csv")
    assert dataset.center_names() == ["Sample Demand"]


def test_bytes_with_bom_are_decoded(three_row_csv):
    dataset = load_dataset(b"\xef\xbb\xbf" + three_row_csv.encode("utf-8"), "csv")
    assert dataset.hexagons[0].properties["country"] == "NA"
    assert "country" in dataset.hexagons[0].properties


def test_undecodable_bytes_are_read_error():
    with pytest.raises(ReadError):
        load_dataset(b"\xff\xfe\xfa\x00", "csv")


# ----------------------------------------------------------------------------
# files
# ----------------------------------------------------------------------------

def test_load_file_reads_by_extension(tmp_path, feature_collection_text):
    path = tmp_path / "cells.geojson"
    path.write_text(feature_collection_text, encoding="utf-8")

    dataset = load_file(path)
    assert len(dataset.hexagons) == 2
    assert dataset.source_name == "cells.geojson"


def test_load_file_missing_is_read_error(tmp_path):
    with pytest.raises(ReadError):
        load_file(tmp_path / "missing.csv")


def test_load_file_unsupported_extension_checked_before_reading(tmp_path):
    with pytest.raises(UnsupportedFormatError):
        load_file(tmp_path / "missing.xlsx")
