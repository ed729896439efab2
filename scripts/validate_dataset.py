"""Quick validation script for hexagon datasets.

Run with `python scripts/validate_dataset.py [path]` to load a GeoJSON/CSV
file (or the sample data when no path is given) and check the invariants the
dashboard relies on.
"""

from __future__ import annotations

import math
import sys

from geoh2.data.costs import CostMetric, resolve_many
from geoh2.data.errors import IngestionError
from geoh2.data.loader import load_file
from geoh2.data.models import FIXED_NUMERIC_FIELDS
from geoh2.data.sample import load_sample_dataset
from geoh2.data.statistics import aggregate, potential_summary


def main() -> None:
    if len(sys.argv) > 1:
        try:
            dataset = load_file(sys.argv[1])
        except IngestionError as exc:
            raise SystemExit(f"Failed to load {sys.argv[1]}: {exc}")
    else:
        dataset = load_sample_dataset(seed=42)

    if not dataset.demand_centers:
        raise SystemExit("Dataset has no demand centers")

    bad_ids = [h.id for i, h in enumerate(dataset.hexagons) if h.id != i]
    if bad_ids:
        raise SystemExit(f"Hexagon ids do not follow input order: {bad_ids[:10]}")

    for hexagon in dataset.hexagons:
        for field_name in FIXED_NUMERIC_FIELDS:
            value = hexagon.properties.get(field_name)
            if not isinstance(value, float) or not math.isfinite(value):
                raise SystemExit(f"{hexagon.label}: fixed field {field_name} is {value!r}")

    print(f"Source: {dataset.source_name or dataset.source_format}")
    print(f"Hexagons: {len(dataset.hexagons)} (rows seen: {dataset.row_count}, truncated: {dataset.truncated})")
    potential = potential_summary(dataset.hexagons)
    print(f"Total RE potential: {potential.total / 1000:.1f} GW")
    for center in dataset.demand_centers:
        summary = aggregate(resolve_many(dataset.hexagons, center.name, CostMetric.LOWEST))
        print(
            f"{center.name}: {summary.count} hexagons with cost data, "
            f"LCOH avg {summary.mean:.2f} min {summary.minimum:.2f} max {summary.maximum:.2f}"
        )
    print("Dataset validation passed.")


if __name__ == "__main__":
    main()
