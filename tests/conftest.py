"""
Shared fixtures for the GeoH2 dashboard test-suite.
"""

import json
from typing import Any, Callable, Dict, List

import pytest

from geoh2.data.models import FIXED_NUMERIC_FIELDS, Geometry, Hexagon


# ============================================================================
# HEXAGON FACTORIES
# ============================================================================

@pytest.fixture
def make_hexagon() -> Callable[..., Hexagon]:
    """Build a hexagon with all fixed fields set; extra keyword args become properties."""

    def _make(hexagon_id: int = 0, **properties: Any) -> Hexagon:
        props: Dict[str, Any] = {"country": "NA"}
        props.update({name: 0.0 for name in FIXED_NUMERIC_FIELDS})
        props.update(properties)
        return Hexagon(id=hexagon_id, geometry=Geometry.placeholder(), properties=props)

    return _make


@pytest.fixture
def costed_hexagons(make_hexagon) -> Callable[[str, List[Any]], List[Hexagon]]:
    """One hexagon per value, each carrying ``"<center> lowest cost"``."""

    def _make(center: str, costs: List[Any]) -> List[Hexagon]:
        hexagons = []
        for index, cost in enumerate(costs):
            props = {} if cost is None else {f"{center} lowest cost": cost}
            hexagons.append(make_hexagon(index, theo_pv=100.0 + index, **props))
        return hexagons

    return _make


# ============================================================================
# RAW INPUT FIXTURES
# ============================================================================

@pytest.fixture
def three_row_csv() -> str:
    return (
        "country,theo_pv,theo_wind,ocean_dist,road_dist,waterbody_dist,waterway_dist,grid_dist,X lowest cost\n"
        "NA,500,300,120,5,10,8,40,1.2\n"
        "NA,800,250,200,12,20,15,60,3.4\n"
        "NA,200,100,50,2,5,4,10,0.9\n"
    )


@pytest.fixture
def feature_collection() -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[17.0, -22.0], [17.5, -22.0], [17.5, -22.5], [17.0, -22.0]]],
                },
                "properties": {
                    "country": "NA",
                    "theo_pv": 640.5,
                    "theo_wind": 410.0,
                    "ocean_dist": 120.0,
                    "road_dist": 4.2,
                    "waterbody_dist": 33.0,
                    "waterway_dist": 21.0,
                    "grid_dist": 80.0,
                    "Windhoek lowest cost": 2.75,
                    "Windhoek pipeline total cost": 2.75,
                    "land_use": "shrubland",
                },
            },
            {
                "type": "Feature",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[18.0, -23.0], [18.5, -23.0], [18.5, -23.5], [18.0, -23.0]]],
                },
                "properties": {"country": "NA", "theo_pv": 300, "Windhoek lowest cost": 4.1},
            },
        ],
    }


@pytest.fixture
def feature_collection_text(feature_collection) -> str:
    return json.dumps(feature_collection)
