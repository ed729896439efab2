"""
Errors raised while ingesting external hexagon data.

Every error carries a message that is safe to show to the user as-is. None of
them is retryable: the same input fails the same way, so the UI reports the
error and waits for a new file.
"""

from __future__ import annotations

from typing import Iterable, Optional

SUPPORTED_EXTENSIONS = (".geojson", ".json", ".csv")


class IngestionError(Exception):
    """Base class for failures while turning input into hexagons."""


class UnsupportedFormatError(IngestionError):
    def __init__(self, extension: str, supported: Iterable[str] = SUPPORTED_EXTENSIONS) -> None:
        self.extension = extension
        self.supported = tuple(supported)
        shown = extension or "(none)"
        super().__init__(
            f"Unsupported file format {shown}. Please upload GeoJSON or CSV files "
            f"({', '.join(self.supported)})."
        )


class FormatError(IngestionError):
    """Structurally invalid GeoJSON (e.g. no ``features`` array)."""


class ParseError(IngestionError):
    def __init__(self, detail: str, row: Optional[int] = None) -> None:
        self.detail = detail
        self.row = row
        super().__init__(f"CSV parsing error: {detail}")


class ReadError(IngestionError):
    """The input source could not be read or decoded."""
