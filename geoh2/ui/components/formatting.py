"""
Utility helpers for formatting numeric values, costs and capacities.
"""

from __future__ import annotations

from typing import Optional

SCALE_FACTORS = [
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]
COST_SYMBOL = "€"


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None or value != value:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def _scale_value(value: float):
    for factor, suffix in SCALE_FACTORS:
        if abs(value) >= factor:
            return value / factor, suffix
    return value, ""


def format_cost(value: Optional[float], decimals: int = 2, symbol: str = COST_SYMBOL) -> str:
    """LCOH style cost, e.g. ``€1.83``."""
    if value is None:
        return "–"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return "–"
    if numeric != numeric:  # NaN
        return "–"
    return f"{symbol}{numeric:,.{decimals}f}"


def format_compact(value: Optional[float], decimals: int = 1, unit: str = "") -> str:
    if value is None:
        return "–"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return "–"
    display_value, suffix = _scale_value(numeric)
    formatted = f"{display_value:,.{decimals}f}{suffix}"
    return f"{formatted} {unit}".strip()


def format_coordinates(lat: float, lon: float, decimals: int = 3) -> str:
    return f"{lat:.{decimals}f}°, {lon:.{decimals}f}°"
