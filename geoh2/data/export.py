"""
CSV export of the loaded hexagons and their cost/capacity fields.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from geoh2.data.models import Hexagon
from geoh2.data.scenario import ScenarioConfig

LEADING_COLUMNS: Dict[str, str] = {
    "hexagon_id": "",
    "country": "country",
    "solar_potential_mw": "theo_pv",
    "wind_potential_mw": "theo_wind",
    "ocean_distance_km": "ocean_dist",
    "road_distance_km": "road_dist",
}
EXPORTED_KEY_MARKERS = ("cost", "capacity")


def export_columns(hexagons: Sequence[Hexagon]) -> List[str]:
    """Fixed columns, then the first hexagon's cost/capacity keys in its own order."""
    columns = list(LEADING_COLUMNS)
    if hexagons:
        columns.extend(
            key
            for key in hexagons[0].properties
            if any(marker in key for marker in EXPORTED_KEY_MARKERS) and key not in LEADING_COLUMNS
        )
    return columns


def export_frame(hexagons: Sequence[Hexagon]) -> pd.DataFrame:
    columns = export_columns(hexagons)
    extra = columns[len(LEADING_COLUMNS):]
    rows = []
    for hexagon in hexagons:
        row = {"hexagon_id": hexagon.id}
        for column, source in LEADING_COLUMNS.items():
            if source:
                row[column] = hexagon.properties.get(source)
        for key in extra:
            row[key] = hexagon.properties.get(key)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def export_results_csv(hexagons: Sequence[Hexagon]) -> bytes:
    return export_frame(hexagons).to_csv(index=False).encode("utf-8")


def export_filename(scenario: ScenarioConfig) -> str:
    return f"geoh2_results_{scenario.country}_{scenario.weather_year}.csv"
