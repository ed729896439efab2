"""
Summary statistics derived from the loaded hexagons.

All functions are pure and recomputed on every render. Empty input yields
zeros instead of NaN so the KPI cards never display "nan".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from geoh2.data.costs import CostMetric, as_cost, resolve_many
from geoh2.data.models import DemandCenter, Hexagon

HISTOGRAM_BUCKET_WIDTH = 0.5
POTENTIAL_SAMPLE_SIZE = 20


@dataclass(frozen=True)
class CostSummary:
    count: int = 0
    mean: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class HistogramBucket:
    lower: float
    upper: float
    count: int
    label: str


@dataclass(frozen=True)
class PotentialSummary:
    """Solar and wind potential (MW).

    ``total`` adds solar and wind capacity into a single headline figure;
    it is not a physically meaningful combined capacity.
    """

    total_solar: float = 0.0
    total_wind: float = 0.0
    total: float = 0.0
    avg_solar: float = 0.0
    avg_wind: float = 0.0


@dataclass(frozen=True)
class DashboardStats:
    avg_cost: float = 0.0
    min_cost: float = 0.0
    max_cost: float = 0.0
    total_potential: float = 0.0
    avg_solar_potential: float = 0.0
    avg_wind_potential: float = 0.0


def _clean(values: Iterable[Optional[float]]) -> pd.Series:
    present = [number for number in (as_cost(v) for v in values) if number is not None]
    return pd.Series(present, dtype="float64")


def aggregate(values: Iterable[Optional[float]]) -> CostSummary:
    cleaned = _clean(values)
    if cleaned.empty:
        return CostSummary()
    return CostSummary(
        count=int(cleaned.size),
        mean=float(cleaned.mean()),
        minimum=float(cleaned.min()),
        maximum=float(cleaned.max()),
        total=float(cleaned.sum()),
    )


def cost_histogram(values: Iterable[Optional[float]], width: float = HISTOGRAM_BUCKET_WIDTH) -> List[HistogramBucket]:
    """Fixed-width buckets ``[lower, lower + width)`` sorted by lower bound."""
    counts = {}
    for value in _clean(values):
        lower = math.floor(value / width) * width
        counts[lower] = counts.get(lower, 0) + 1
    return [
        HistogramBucket(
            lower=lower,
            upper=lower + width,
            count=counts[lower],
            label=f"€{lower:.1f}-{lower + width:.1f}",
        )
        for lower in sorted(counts)
    ]


def potential_summary(hexagons: Sequence[Hexagon]) -> PotentialSummary:
    solar = _clean(h.properties.get("theo_pv") for h in hexagons)
    wind = _clean(h.properties.get("theo_wind") for h in hexagons)
    total_solar = float(solar.sum()) if not solar.empty else 0.0
    total_wind = float(wind.sum()) if not wind.empty else 0.0
    return PotentialSummary(
        total_solar=total_solar,
        total_wind=total_wind,
        total=total_solar + total_wind,
        avg_solar=float(solar.mean()) if not solar.empty else 0.0,
        avg_wind=float(wind.mean()) if not wind.empty else 0.0,
    )


def dashboard_stats(hexagons: Sequence[Hexagon], demand_centers: Sequence[DemandCenter]) -> DashboardStats:
    """Headline numbers for the first (default) demand center."""
    if not hexagons or not demand_centers:
        return DashboardStats()
    costs = aggregate(resolve_many(hexagons, demand_centers[0].name, CostMetric.LOWEST))
    potential = potential_summary(hexagons)
    return DashboardStats(
        avg_cost=costs.mean,
        min_cost=costs.minimum,
        max_cost=costs.maximum,
        total_potential=potential.total,
        avg_solar_potential=potential.avg_solar,
        avg_wind_potential=potential.avg_wind,
    )


def cost_distribution_frame(hexagons: Sequence[Hexagon], center_name: str) -> pd.DataFrame:
    buckets = cost_histogram(resolve_many(hexagons, center_name, CostMetric.LOWEST))
    return pd.DataFrame(
        [{"range": b.label, "lower": b.lower, "count": b.count} for b in buckets],
        columns=["range", "lower", "count"],
    )


def potential_frame(hexagons: Sequence[Hexagon], limit: int = POTENTIAL_SAMPLE_SIZE) -> pd.DataFrame:
    rows = [
        {"hexagon": h.label, "solar": h.solar_potential, "wind": h.wind_potential}
        for h in hexagons[:limit]
    ]
    return pd.DataFrame(rows, columns=["hexagon", "solar", "wind"])


def transport_comparison(hexagons: Sequence[Hexagon], demand_centers: Sequence[DemandCenter]) -> pd.DataFrame:
    """Mean pipeline vs trucking total cost per demand center (0 when no data)."""
    rows = []
    for center in demand_centers:
        pipeline = aggregate(resolve_many(hexagons, center.name, CostMetric.PIPELINE_TOTAL))
        trucking = aggregate(resolve_many(hexagons, center.name, CostMetric.TRUCKING_TOTAL))
        rows.append({"center": center.name, "pipeline": pipeline.mean, "trucking": trucking.mean})
    return pd.DataFrame(rows, columns=["center", "pipeline", "trucking"])
