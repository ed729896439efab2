"""
Per-hexagon result records and the bounded, cost-ordered feeds built from them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from geoh2.data.costs import CostMetric, CostIndex
from geoh2.data.models import Hexagon

TOP_PERFORMERS_LIMIT = 10
RESULTS_FEED_LIMIT = 50
CHART_FEED_LIMIT = 20

RESULT_COLUMNS = [
    "hexagon_id",
    "hexagon",
    "lowest_cost",
    "pipeline_cost",
    "trucking_cost",
    "solar_potential",
    "wind_potential",
    "ocean_distance",
]

_RANK_ATTRIBUTES = {
    CostMetric.LOWEST: "lowest_cost",
    CostMetric.PIPELINE_TOTAL: "pipeline_cost",
    CostMetric.TRUCKING_TOTAL: "trucking_cost",
}


@dataclass(frozen=True)
class ResultRecord:
    hexagon_id: int
    hexagon: str
    lowest_cost: float
    pipeline_cost: Optional[float]
    trucking_cost: Optional[float]
    solar_potential: float
    wind_potential: float
    ocean_distance: float


def build_results(hexagons: Iterable[Hexagon], center_name: str) -> List[ResultRecord]:
    """Records in input order; hexagons without a positive lowest cost are skipped."""
    records: List[ResultRecord] = []
    for hexagon in hexagons:
        index = CostIndex.build(hexagon)
        lowest = index.get(center_name, CostMetric.LOWEST)
        if lowest is None or lowest <= 0:
            continue
        records.append(
            ResultRecord(
                hexagon_id=hexagon.id,
                hexagon=hexagon.label,
                lowest_cost=lowest,
                pipeline_cost=index.get(center_name, CostMetric.PIPELINE_TOTAL),
                trucking_cost=index.get(center_name, CostMetric.TRUCKING_TOTAL),
                solar_potential=hexagon.solar_potential,
                wind_potential=hexagon.wind_potential,
                ocean_distance=hexagon.ocean_distance,
            )
        )
    return records


def rank_results(
    records: Sequence[ResultRecord],
    limit: int,
    metric: CostMetric = CostMetric.LOWEST,
) -> List[ResultRecord]:
    """Stable ascending sort by ``metric`` then truncation to ``limit``.

    Records without a value for ``metric`` keep their relative order at the end.
    """
    attribute = _RANK_ATTRIBUTES.get(metric)
    if attribute is None:
        raise ValueError(f"Results cannot be ranked by {metric.label!r}")

    def _key(record: ResultRecord):
        value = getattr(record, attribute)
        return (value is None, value if value is not None else 0.0)

    return sorted(records, key=_key)[: max(limit, 0)]


def top_performers(records: Sequence[ResultRecord], limit: int = TOP_PERFORMERS_LIMIT) -> List[ResultRecord]:
    return rank_results(records, limit)


def results_feed(records: Sequence[ResultRecord], limit: int = RESULTS_FEED_LIMIT) -> List[ResultRecord]:
    return rank_results(records, limit)


def chart_feed(
    records: Sequence[ResultRecord],
    limit: int = CHART_FEED_LIMIT,
    metric: CostMetric = CostMetric.LOWEST,
) -> List[ResultRecord]:
    return rank_results(records, limit, metric)


def sort_by_potential(records: Sequence[ResultRecord], kind: str) -> List[ResultRecord]:
    if kind not in ("solar", "wind"):
        raise ValueError(f"Unknown potential kind {kind!r}")
    return sorted(records, key=lambda r: getattr(r, f"{kind}_potential"))


def results_frame(records: Sequence[ResultRecord]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in records], columns=RESULT_COLUMNS)
