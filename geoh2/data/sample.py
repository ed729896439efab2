"""
Demo dataset used until the user uploads their own hexagons.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from geoh2.data.costs import CostMetric, cost_key
from geoh2.data.models import Dataset, DemandCenter, DemandState, Geometry, Hexagon, square_ring

# Namibia, approximately
LAT_BOUNDS: Tuple[float, float] = (-28.0, -17.0)
LON_BOUNDS: Tuple[float, float] = (11.0, 25.0)
CELL_SIZE_DEG = 0.5
SAMPLE_CENTER = "Windhoek"


def generate_sample_demand_centers() -> List[DemandCenter]:
    return [
        DemandCenter("Windhoek", -22.5609, 17.0658, 1_000_000, DemandState.COMPRESSED_500_BAR),
        DemandCenter("Walvis Bay", -22.9576, 14.5052, 2_000_000, DemandState.LIQUID_H2),
        DemandCenter("Lüderitz", -26.6484, 15.1594, 500_000, DemandState.AMMONIA),
    ]


def generate_sample_hexagons(count: int = 100, seed: Optional[int] = None) -> List[Hexagon]:
    rng = np.random.default_rng(seed)
    hexagons: List[Hexagon] = []
    for index in range(count):
        lat = float(rng.uniform(*LAT_BOUNDS))
        lon = float(rng.uniform(*LON_BOUNDS))

        solar = float(rng.uniform(200, 1200))  # MW
        wind = float(rng.uniform(100, 900))  # MW
        ocean_dist = float(rng.uniform(10, 510))  # km
        road_dist = float(rng.uniform(0, 50))  # km

        base_cost = 2.0 + ocean_dist / 100 + road_dist / 10 - (solar + wind) / 1000
        pipeline = base_cost * float(rng.uniform(0.8, 1.2))
        trucking = base_cost * float(rng.uniform(1.0, 1.5))
        production = base_cost * 0.6

        properties = {
            "country": "NA",
            "theo_pv": solar,
            "theo_wind": wind,
            "ocean_dist": ocean_dist,
            "road_dist": road_dist,
            "waterbody_dist": float(rng.uniform(0, 100)),
            "waterway_dist": float(rng.uniform(0, 80)),
            "grid_dist": float(rng.uniform(0, 200)),
            cost_key(SAMPLE_CENTER, CostMetric.LOWEST): min(pipeline, trucking),
            cost_key(SAMPLE_CENTER, CostMetric.PIPELINE_TOTAL): pipeline,
            cost_key(SAMPLE_CENTER, CostMetric.TRUCKING_TOTAL): trucking,
            cost_key(SAMPLE_CENTER, CostMetric.PIPELINE_PRODUCTION): production,
            cost_key(SAMPLE_CENTER, CostMetric.TRUCKING_PRODUCTION): production,
            cost_key(SAMPLE_CENTER, CostMetric.PIPELINE_TRANSPORT): pipeline - production,
            cost_key(SAMPLE_CENTER, CostMetric.TRUCKING_TRANSPORT): trucking - production,
        }
        hexagons.append(
            Hexagon(
                id=index,
                geometry=Geometry(type="Polygon", coordinates=square_ring(lon, lat, CELL_SIZE_DEG)),
                properties=properties,
                synthetic_geometry=False,
            )
        )
    return hexagons


def load_sample_dataset(count: int = 100, seed: Optional[int] = None) -> Dataset:
    hexagons = generate_sample_hexagons(count, seed)
    return Dataset(
        hexagons=tuple(hexagons),
        demand_centers=tuple(generate_sample_demand_centers()),
        source_format="sample",
        row_count=len(hexagons),
        source_name="Sample data (Namibia)",
    )
