"""
Cost-to-color mapping shared by the map, the charts and their legends.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

FALLBACK_COLOR = "#94a3b8"


@dataclass(frozen=True)
class CostBand:
    max_cost: float
    color: str
    label: str
    range_label: str


@dataclass(frozen=True)
class ColorStop:
    position: float
    r: int
    g: int
    b: int

    def css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"


@dataclass(frozen=True)
class LegendEntry:
    range: str
    color: str
    label: str


DEFAULT_COST_BANDS: Sequence[CostBand] = (
    CostBand(1.0, "#22c55e", "Very Low", "€0.0 - €1.0"),
    CostBand(2.0, "#84cc16", "Low", "€1.0 - €2.0"),
    CostBand(3.0, "#eab308", "Moderate", "€2.0 - €3.0"),
    CostBand(4.0, "#f97316", "High", "€3.0 - €4.0"),
    CostBand(5.0, "#ef4444", "Very High", "€4.0 - €5.0"),
    CostBand(math.inf, "#991b1b", "Extreme", "€5.0+"),
)

# green -> light green -> yellow -> orange -> red
DEFAULT_COLOR_STOPS: Sequence[ColorStop] = (
    ColorStop(0.0, 34, 197, 94),
    ColorStop(0.25, 132, 204, 22),
    ColorStop(0.5, 234, 179, 8),
    ColorStop(0.75, 249, 115, 22),
    ColorStop(1.0, 239, 68, 68),
)


def _band_for_cost(cost: float, bands: Sequence[CostBand]) -> Optional[CostBand]:
    for band in bands:
        if cost <= band.max_cost:
            return band
    return None


def color_for_cost(cost: float, bands: Sequence[CostBand] = DEFAULT_COST_BANDS) -> str:
    band = _band_for_cost(cost, bands)
    return band.color if band else FALLBACK_COLOR


def band_label_for_cost(cost: Optional[float], bands: Sequence[CostBand] = DEFAULT_COST_BANDS) -> str:
    if cost is None:
        return "No data"
    band = _band_for_cost(cost, bands)
    return band.label if band else "No data"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def interpolate_color(
    value: float,
    min_value: float,
    max_value: float,
    stops: Sequence[ColorStop] = DEFAULT_COLOR_STOPS,
) -> str:
    """Linear RGB blend between the two stops bracketing the normalized value."""
    span = max_value - min_value
    if span == 0 or not math.isfinite(span):
        return stops[0].css()
    normalized = (value - min_value) / span
    if math.isnan(normalized):
        return stops[0].css()
    normalized = max(0.0, min(1.0, normalized))

    lower, upper = stops[0], stops[-1]
    for current, following in zip(stops, stops[1:]):
        if current.position <= normalized <= following.position:
            lower, upper = current, following
            break

    width = upper.position - lower.position
    factor = 0.0 if width == 0 else (normalized - lower.position) / width
    r = _round_half_up(lower.r + (upper.r - lower.r) * factor)
    g = _round_half_up(lower.g + (upper.g - lower.g) * factor)
    b = _round_half_up(lower.b + (upper.b - lower.b) * factor)
    return f"rgb({r}, {g}, {b})"


def cost_range_legend(bands: Sequence[CostBand] = DEFAULT_COST_BANDS) -> List[LegendEntry]:
    return [LegendEntry(range=b.range_label, color=b.color, label=b.label) for b in bands]


class ColorMapper:
    """Bundles injected band and stop tables for rendering consumers."""

    def __init__(
        self,
        bands: Sequence[CostBand] = DEFAULT_COST_BANDS,
        stops: Sequence[ColorStop] = DEFAULT_COLOR_STOPS,
    ) -> None:
        if not bands or not stops:
            raise ValueError("ColorMapper needs at least one band and one color stop")
        self.bands = tuple(bands)
        self.stops = tuple(stops)

    def __call__(self, cost: float) -> str:
        return color_for_cost(cost, self.bands)

    def interpolate(self, value: float, min_value: float, max_value: float) -> str:
        return interpolate_color(value, min_value, max_value, self.stops)

    def label(self, cost: Optional[float]) -> str:
        return band_label_for_cost(cost, self.bands)

    def legend(self) -> List[LegendEntry]:
        return cost_range_legend(self.bands)

    def discrete_color_map(self) -> dict:
        """Band label -> color, for categorical plotly traces."""
        mapping = {b.label: b.color for b in self.bands}
        mapping["No data"] = FALLBACK_COLOR
        return mapping

    def continuous_scale(self) -> List[List]:
        """Stops as a plotly colorscale."""
        return [[s.position, s.css()] for s in self.stops]


DEFAULT_MAPPER = ColorMapper()
