"""
Resolution of per-demand-center cost fields stored on hexagons.

Cost fields are named ``"<demand center> <metric label>"``. ``cost_key`` is
the only place that builds such a key; everything else goes through
``resolve_cost`` or a ``CostIndex``.

A resolved value is either a finite float or ``None`` ("absent"). Absent is
never coerced to zero: a hexagon without cost data is not a zero-cost site.
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from geoh2.data.models import Hexagon


class CostMetric(Enum):
    LOWEST = "lowest cost"
    PIPELINE_TOTAL = "pipeline total cost"
    TRUCKING_TOTAL = "trucking total cost"
    PIPELINE_PRODUCTION = "pipeline production cost"
    TRUCKING_PRODUCTION = "trucking production cost"
    PIPELINE_TRANSPORT = "pipeline transport and conversion costs"
    TRUCKING_TRANSPORT = "trucking transport and conversion costs"

    @property
    def label(self) -> str:
        return self.value


# Longest labels first so "pipeline total cost" is not mistaken for a
# center named "... pipeline total" with label "cost".
_LABELS_BY_LENGTH: Tuple[CostMetric, ...] = tuple(
    sorted(CostMetric, key=lambda m: len(m.label), reverse=True)
)


def cost_key(center_name: str, metric: CostMetric) -> str:
    return f"{center_name} {metric.label}"


def as_cost(value: Any) -> Optional[float]:
    """Strict numeric check for cost values; anything non-numeric is absent."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def resolve_cost(hexagon: Hexagon, center_name: str, metric: CostMetric) -> Optional[float]:
    return as_cost(hexagon.properties.get(cost_key(center_name, metric)))


def resolve_many(
    hexagons: Iterable[Hexagon],
    center_name: str,
    metric: CostMetric = CostMetric.LOWEST,
) -> List[float]:
    """Present values only, in hexagon order."""
    values: List[float] = []
    for hexagon in hexagons:
        value = resolve_cost(hexagon, center_name, metric)
        if value is not None:
            values.append(value)
    return values


def split_cost_key(key: str) -> Optional[Tuple[str, CostMetric]]:
    """Inverse of ``cost_key``; ``None`` when the key is not a cost field."""
    for metric in _LABELS_BY_LENGTH:
        suffix = " " + metric.label
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)], metric
    return None


def infer_center_names(property_bags: Iterable[Mapping[str, Any]]) -> List[str]:
    """Demand center names referenced by cost-field keys, in first-seen order."""
    seen: Dict[str, None] = {}
    for properties in property_bags:
        for key in properties:
            parsed = split_cost_key(str(key))
            if parsed is not None:
                seen.setdefault(parsed[0], None)
    return list(seen)


class CostIndex:
    """Lookup table of a hexagon's cost fields keyed by ``(center, metric)``.

    Only present values are stored, so ``get`` returning ``None`` always means
    the field is absent or unusable.
    """

    def __init__(self, entries: Mapping[Tuple[str, CostMetric], float]) -> None:
        self._entries: Dict[Tuple[str, CostMetric], float] = dict(entries)

    @classmethod
    def build(cls, hexagon: Hexagon) -> "CostIndex":
        entries: Dict[Tuple[str, CostMetric], float] = {}
        for key, raw in hexagon.properties.items():
            parsed = split_cost_key(str(key))
            if parsed is None:
                continue
            value = as_cost(raw)
            if value is not None:
                entries[parsed] = value
        return cls(entries)

    def get(self, center_name: str, metric: CostMetric) -> Optional[float]:
        return self._entries.get((center_name, metric))

    def centers(self) -> List[str]:
        seen: Dict[str, None] = {}
        for center, _ in self._entries:
            seen.setdefault(center, None)
        return list(seen)

    def metrics_for(self, center_name: str) -> List[CostMetric]:
        return [metric for center, metric in self._entries if center == center_name]

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __len__(self) -> int:
        return len(self._entries)
