"""
Canonical entities shared by ingestion, the derived computations and the UI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

PropertyValue = Union[float, int, str]

FIXED_NUMERIC_FIELDS: Tuple[str, ...] = (
    "theo_pv",
    "theo_wind",
    "ocean_dist",
    "road_dist",
    "waterbody_dist",
    "waterway_dist",
    "grid_dist",
)
FIXED_FIELDS: Tuple[str, ...] = ("country",) + FIXED_NUMERIC_FIELDS
DEFAULT_COUNTRY = "NA"

UNIT_SQUARE: List[List[List[float]]] = [
    [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]
]


def square_ring(lon: float, lat: float, size: float) -> List[List[List[float]]]:
    """Closed square ring of half-width ``size`` degrees around a point."""
    return [
        [
            [lon - size, lat - size],
            [lon + size, lat - size],
            [lon + size, lat + size],
            [lon - size, lat + size],
            [lon - size, lat - size],
        ]
    ]


@dataclass(frozen=True)
class Geometry:
    type: str
    coordinates: Any

    @classmethod
    def placeholder(cls) -> "Geometry":
        return cls(type="Polygon", coordinates=[[list(pt) for pt in UNIT_SQUARE[0]]])

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class Hexagon:
    id: int
    geometry: Geometry
    properties: Dict[str, PropertyValue]
    synthetic_geometry: bool = False

    @property
    def label(self) -> str:
        return f"H{self.id}"

    @property
    def country(self) -> str:
        return str(self.properties.get("country", DEFAULT_COUNTRY))

    @property
    def solar_potential(self) -> float:
        return float(self.properties.get("theo_pv", 0.0))

    @property
    def wind_potential(self) -> float:
        return float(self.properties.get("theo_wind", 0.0))

    @property
    def ocean_distance(self) -> float:
        return float(self.properties.get("ocean_dist", 0.0))

    @property
    def road_distance(self) -> float:
        return float(self.properties.get("road_dist", 0.0))

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON feature keyed by the hexagon id (used by the map layer)."""
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": self.geometry.to_dict(),
            "properties": dict(self.properties),
        }


class DemandState(str, Enum):
    COMPRESSED_500_BAR = "500 bar"
    LIQUID_H2 = "LH2"
    AMMONIA = "NH3"

    @classmethod
    def parse(cls, raw: Any) -> "DemandState":
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        for state in cls:
            if state.value.lower() == text.lower():
                return state
        allowed = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown demand state {raw!r}; expected one of: {allowed}")


@dataclass(frozen=True)
class DemandCenter:
    name: str
    lat: float
    lon: float
    annual_demand: float  # kg/year
    demand_state: DemandState = DemandState.COMPRESSED_500_BAR

    def __post_init__(self) -> None:
        if not math.isfinite(self.annual_demand) or self.annual_demand < 0:
            raise ValueError(f"Annual demand for {self.name!r} must be a non-negative finite number")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DemandCenter":
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValueError("Demand center is missing a name")
        annual = data.get("annual_demand", data.get("annualDemand", 0.0))
        state = data.get("demand_state", data.get("demandState", DemandState.COMPRESSED_500_BAR))
        return cls(
            name=name,
            lat=float(data.get("lat", 0.0)),
            lon=float(data.get("lon", 0.0)),
            annual_demand=float(annual),
            demand_state=DemandState.parse(state),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "annual_demand": self.annual_demand,
            "demand_state": self.demand_state.value,
        }


@dataclass(frozen=True)
class Dataset:
    """Immutable snapshot of one load; a new load replaces it as a whole."""

    hexagons: Tuple[Hexagon, ...]
    demand_centers: Tuple[DemandCenter, ...]
    source_format: str = "sample"
    row_count: int = 0
    truncated: bool = False
    source_name: Optional[str] = None

    @property
    def default_center(self) -> Optional[DemandCenter]:
        return self.demand_centers[0] if self.demand_centers else None

    @property
    def has_synthetic_geometry(self) -> bool:
        return any(h.synthetic_geometry for h in self.hexagons)

    def center_names(self) -> List[str]:
        return [c.name for c in self.demand_centers]

    def hexagon_by_id(self, hexagon_id: int) -> Optional[Hexagon]:
        if 0 <= hexagon_id < len(self.hexagons) and self.hexagons[hexagon_id].id == hexagon_id:
            return self.hexagons[hexagon_id]
        return next((h for h in self.hexagons if h.id == hexagon_id), None)
