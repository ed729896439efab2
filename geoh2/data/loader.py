"""
Ingestion of external hexagon data (GeoJSON feature collections or CSV rows)
into the canonical ``Dataset`` snapshot.
"""

from __future__ import annotations

import io
import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import pandas as pd

from geoh2.data.costs import infer_center_names
from geoh2.data.errors import (
    SUPPORTED_EXTENSIONS,
    FormatError,
    ParseError,
    ReadError,
    UnsupportedFormatError,
)
from geoh2.data.models import (
    DEFAULT_COUNTRY,
    FIXED_FIELDS,
    FIXED_NUMERIC_FIELDS,
    Dataset,
    DemandCenter,
    DemandState,
    Geometry,
    Hexagon,
    square_ring,
)

logger = logging.getLogger(__name__)

CSV_ROW_LIMIT = 100
CSV_CELL_SIZE_DEG = 0.1

FORMAT_BY_EXTENSION = {
    ".geojson": "geojson",
    ".json": "json",
    ".csv": "csv",
}

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "null", "Null", "-"}

GEOJSON_FALLBACK_CENTER = DemandCenter(
    name="Windhoek",
    lat=-22.5609,
    lon=17.0658,
    annual_demand=1_000_000,
    demand_state=DemandState.COMPRESSED_500_BAR,
)
CSV_FALLBACK_CENTER = DemandCenter(
    name="Sample Demand",
    lat=-22.5,
    lon=17.0,
    annual_demand=1_000_000,
    demand_state=DemandState.COMPRESSED_500_BAR,
)

_PARSER_ROW_PATTERN = re.compile(r"(?:row|line)\s+(\d+)", re.IGNORECASE)

Content = Union[str, bytes]


def parse_or_default(raw: Any, default: float = 0.0) -> float:
    """Lenient numeric parse for the fixed hexagon fields.

    Absent, blank, non-numeric and non-finite input all yield ``default``.
    Not to be used for cost fields, where a missing value must stay missing.
    """
    if raw is None or isinstance(raw, bool):
        return default
    try:
        number = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def coerce_extra_value(raw: Any) -> Optional[Union[float, str]]:
    """Extra CSV columns: numbers become floats, text is kept, blanks are dropped."""
    if raw is None or (isinstance(raw, float) and math.isnan(raw)):
        return None
    text = str(raw).strip()
    if text in SENTINELS:
        return None
    try:
        number = float(text)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def detect_format(filename: str) -> str:
    suffix = Path(filename).suffix.lower()
    fmt = FORMAT_BY_EXTENSION.get(suffix)
    if fmt is None:
        raise UnsupportedFormatError(suffix, SUPPORTED_EXTENSIONS)
    return fmt


def _decode(content: Content) -> str:
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ReadError(f"Failed to read file: not valid UTF-8 text ({exc.reason}).") from exc
    return content.lstrip("\ufeff")


def _normalize_fixed_fields(properties: Dict[str, Any]) -> Dict[str, Any]:
    country = properties.get("country")
    if country is None or (isinstance(country, float) and math.isnan(country)):
        country = ""
    properties["country"] = str(country).strip() or DEFAULT_COUNTRY
    for field_name in FIXED_NUMERIC_FIELDS:
        properties[field_name] = parse_or_default(properties.get(field_name))
    return properties


def _parse_demand_centers(raw_centers: Any) -> List[DemandCenter]:
    if raw_centers is None:
        return []
    if not isinstance(raw_centers, list):
        raise FormatError("Invalid GeoJSON: 'demand_centers' must be an array.")
    centers: List[DemandCenter] = []
    for index, entry in enumerate(raw_centers):
        if not isinstance(entry, Mapping):
            raise FormatError(f"Invalid demand center at position {index}: expected an object.")
        try:
            centers.append(DemandCenter.from_mapping(entry))
        except (TypeError, ValueError) as exc:
            raise FormatError(f"Invalid demand center at position {index}: {exc}") from exc
    return centers


def _resolve_demand_centers(
    explicit: Sequence[DemandCenter],
    hexagons: Sequence[Hexagon],
    fallback: DemandCenter,
) -> Tuple[DemandCenter, ...]:
    if explicit:
        seen: Set[str] = set()
        for center in explicit:
            if center.name in seen:
                raise FormatError(
                    f"Duplicate demand center name {center.name!r}: cost fields "
                    "cannot be attributed to either center."
                )
            seen.add(center.name)
        return tuple(explicit)

    inferred = infer_center_names(h.properties for h in hexagons)
    if inferred:
        logger.info("Inferred demand centers from cost fields: %s", inferred)
        return tuple(
            DemandCenter(
                name=name,
                lat=CSV_FALLBACK_CENTER.lat,
                lon=CSV_FALLBACK_CENTER.lon,
                annual_demand=CSV_FALLBACK_CENTER.annual_demand,
                demand_state=CSV_FALLBACK_CENTER.demand_state,
            )
            for name in inferred
        )
    logger.info("No demand centers in input; using placeholder %r", fallback.name)
    return (fallback,)


def parse_geojson(text: str, source_name: Optional[str] = None, fmt: str = "geojson") -> Dataset:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid GeoJSON: {exc.msg} (line {exc.lineno}, column {exc.colno}).") from exc

    if not isinstance(payload, dict) or "features" not in payload:
        raise FormatError("Invalid GeoJSON: expected a FeatureCollection with a 'features' array.")
    features = payload["features"]
    if not isinstance(features, list):
        raise FormatError("Invalid GeoJSON: 'features' must be an array.")

    hexagons: List[Hexagon] = []
    for index, feature in enumerate(features):
        if not isinstance(feature, Mapping):
            raise FormatError(f"Invalid GeoJSON: feature {index} is not an object.")
        raw_properties = feature.get("properties")
        if raw_properties is not None and not isinstance(raw_properties, Mapping):
            raise FormatError(f"Invalid GeoJSON: feature {index} properties must be an object.")
        properties = dict(raw_properties or {})
        raw_geometry = feature.get("geometry")
        if raw_geometry is not None and not isinstance(raw_geometry, Mapping):
            raise FormatError(f"Invalid GeoJSON: feature {index} geometry must be an object or null.")
        if isinstance(raw_geometry, Mapping):
            if not isinstance(raw_geometry.get("coordinates"), list):
                raise FormatError(f"Invalid GeoJSON: feature {index} geometry has no coordinates array.")
            geometry = Geometry(
                type=str(raw_geometry.get("type", "Polygon")),
                coordinates=raw_geometry.get("coordinates"),
            )
            synthetic = False
        else:
            geometry = Geometry.placeholder()
            synthetic = True
        hexagons.append(
            Hexagon(
                id=index,
                geometry=geometry,
                properties=_normalize_fixed_fields(properties),
                synthetic_geometry=synthetic,
            )
        )

    explicit = _parse_demand_centers(payload.get("demand_centers"))
    centers = _resolve_demand_centers(explicit, hexagons, GEOJSON_FALLBACK_CENTER)
    logger.info("Loaded %d hexagons and %d demand centers from %s", len(hexagons), len(centers), source_name or fmt)
    return Dataset(
        hexagons=tuple(hexagons),
        demand_centers=centers,
        source_format=fmt,
        row_count=len(features),
        truncated=False,
        source_name=source_name,
    )


def _row_geometry(row: Mapping[str, Any]) -> Geometry:
    lat = coerce_extra_value(row.get("lat"))
    lon = coerce_extra_value(row.get("lon"))
    if isinstance(lat, float) and isinstance(lon, float):
        return Geometry(type="Polygon", coordinates=square_ring(lon, lat, CSV_CELL_SIZE_DEG))
    return Geometry.placeholder()


def _row_to_hexagon(index: int, row: Mapping[str, Any]) -> Hexagon:
    properties: Dict[str, Any] = {field_name: row.get(field_name) for field_name in FIXED_FIELDS}
    _normalize_fixed_fields(properties)
    for key, raw in row.items():
        if key in FIXED_FIELDS:
            continue
        value = coerce_extra_value(raw)
        if value is not None:
            properties[str(key)] = value
    return Hexagon(
        id=index,
        geometry=_row_geometry(row),
        properties=properties,
        synthetic_geometry=True,
    )


def parse_csv(text: str, source_name: Optional[str] = None, row_limit: int = CSV_ROW_LIMIT) -> Dataset:
    if not text.strip():
        frame = pd.DataFrame()
    else:
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        except pd.errors.ParserError as exc:
            detail = str(exc).strip()
            match = _PARSER_ROW_PATTERN.search(detail)
            logger.warning("CSV parse failure in %s: %s", source_name or "upload", detail)
            raise ParseError(detail, row=int(match.group(1)) if match else None) from exc

    row_count = int(len(frame))
    materialised = frame.head(row_limit)
    truncated = row_count > len(materialised)
    if truncated:
        logger.info("CSV has %d rows; keeping the first %d", row_count, row_limit)

    hexagons = [
        _row_to_hexagon(index, row)
        for index, row in enumerate(materialised.to_dict(orient="records"))
    ]
    centers = _resolve_demand_centers([], hexagons, CSV_FALLBACK_CENTER)
    logger.info("Loaded %d hexagons and %d demand centers from %s", len(hexagons), len(centers), source_name or "csv")
    return Dataset(
        hexagons=tuple(hexagons),
        demand_centers=centers,
        source_format="csv",
        row_count=row_count,
        truncated=truncated,
        source_name=source_name,
    )


def load_dataset(content: Content, fmt: str, source_name: Optional[str] = None) -> Dataset:
    """Parse raw input in a declared format into a ``Dataset``."""
    normalized = fmt.lower().lstrip(".")
    if normalized not in ("geojson", "json", "csv"):
        raise UnsupportedFormatError(f".{normalized}", SUPPORTED_EXTENSIONS)
    text = _decode(content)
    if normalized == "csv":
        return parse_csv(text, source_name=source_name)
    return parse_geojson(text, source_name=source_name, fmt=normalized)


def load_file(path: Union[str, Path]) -> Dataset:
    """Read a file from disk; the extension decides the parser."""
    file_path = Path(path)
    fmt = detect_format(file_path.name)
    try:
        content = file_path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read %s: %s", file_path, exc)
        raise ReadError(f"Failed to read file {file_path.name}: {exc.strerror or exc}") from exc
    return load_dataset(content, fmt, source_name=file_path.name)
