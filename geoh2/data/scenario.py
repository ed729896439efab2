"""
Scenario configuration selected in the sidebar.

The scenario only describes which view is requested (country, weather year,
generators, transport options); it never changes the loaded hexagons.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

COUNTRIES: Dict[str, str] = {
    "NA": "Namibia",
    "ZA": "South Africa",
    "AU": "Australia",
    "CL": "Chile",
}
WEATHER_YEARS: List[int] = [2023 - offset for offset in range(10)]
GENERATORS: Tuple[str, ...] = ("Solar", "Wind")


@dataclass(frozen=True)
class TransportConfig:
    pipeline_construction: bool = True
    road_construction: bool = True


@dataclass(frozen=True)
class ScenarioConfig:
    country: str = "NA"
    weather_year: int = 2023
    generators: Tuple[str, ...] = GENERATORS
    transport: TransportConfig = field(default_factory=TransportConfig)

    @property
    def country_name(self) -> str:
        return COUNTRIES.get(self.country, self.country)

    def with_generator(self, generator: str, enabled: bool) -> "ScenarioConfig":
        """Toggle a generator while keeping the canonical generator order."""
        current = set(self.generators)
        if enabled:
            current.add(generator)
        else:
            current.discard(generator)
        ordered = tuple(g for g in GENERATORS if g in current)
        ordered += tuple(sorted(g for g in current if g not in GENERATORS))
        return replace(self, generators=ordered)


DEFAULT_SCENARIO = ScenarioConfig()


def serialize_scenario(config: ScenarioConfig) -> Dict[str, Any]:
    """JSON-serialisable form kept in session_state and written to the log."""
    return {
        "country": config.country,
        "weather_year": config.weather_year,
        "generators": list(config.generators),
        "transport": {
            "pipeline_construction": config.transport.pipeline_construction,
            "road_construction": config.transport.road_construction,
        },
    }
