import io

import pandas as pd

from geoh2.data.export import LEADING_COLUMNS, export_columns, export_filename, export_results_csv
from geoh2.data.scenario import ScenarioConfig


def test_export_columns_follow_first_hexagon(make_hexagon):
    hexagons = [
        make_hexagon(
            0,
            theo_pv=500.0,
            **{
                "A lowest cost": 1.2,
                "land_use": "desert",
                "A pipeline total cost": 1.4,
                "electrolyzer capacity": 50.0,
            },
        ),
        make_hexagon(1, **{"A lowest cost": 2.2, "B lowest cost": 3.0}),
    ]
    columns = export_columns(hexagons)

    assert columns[: len(LEADING_COLUMNS)] == list(LEADING_COLUMNS)
    assert columns[len(LEADING_COLUMNS):] == ["A lowest cost", "A pipeline total cost", "electrolyzer capacity"]


def test_export_csv_content(make_hexagon):
    hexagons = [
        make_hexagon(0, theo_pv=500.0, road_dist=4.0, **{"A lowest cost": 1.2, "A pipeline total cost": 1.4}),
        make_hexagon(1, theo_pv=200.0, **{"A lowest cost": 2.2}),
    ]
    frame = pd.read_csv(io.BytesIO(export_results_csv(hexagons)), keep_default_na=False, na_values=[""])

    assert frame["hexagon_id"].tolist() == [0, 1]
    assert frame["country"].tolist() == ["NA", "NA"]
    assert frame["solar_potential_mw"].tolist() == [500.0, 200.0]
    assert frame["road_distance_km"].tolist() == [4.0, 0.0]
    assert frame["A lowest cost"].tolist() == [1.2, 2.2]
    assert frame["A pipeline total cost"].iloc[0] == 1.4
    assert pd.isna(frame["A pipeline total cost"].iloc[1])


def test_export_empty_dataset_has_header_only():
    text = export_results_csv([]).decode("utf-8")
    assert text.strip() == ",".join(LEADING_COLUMNS)


def test_export_filename():
    assert export_filename(ScenarioConfig(country="ZA", weather_year=2020)) == "geoh2_results_ZA_2020.csv"
