# =============================================================================
# Geometry Resolver Module
# =============================================================================
# Derives one optional geometry and a property map from a decoded row.
# WKT takes precedence; otherwise an X/Y pair yields a Point; otherwise
# the row has no geometry. Malformed WKT or coordinate cells are counted,
# never raised.
# =============================================================================

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from .models import GeoCSVOptions, RowDiagnostics

__all__ = ["RowResolution", "resolve_row", "parse_wkt", "parse_coordinate"]

log = logging.getLogger(__name__)

# Plain ASCII decimal or exponent notation; no underscores, no non-ASCII digits
_COORDINATE_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class RowResolution:
    """Outcome of resolving one row."""

    geometry: Optional[BaseGeometry]
    properties: Dict[str, str]
    diagnostics: RowDiagnostics


def parse_wkt(text: str) -> Optional[BaseGeometry]:
    """
    Parse WKT text, returning None if shapely rejects it.

    EMPTY geometries (e.g. ``POINT EMPTY``) are treated as unparsed so the
    row can still fall back to its X/Y pair.
    """
    try:
        geometry = wkt.loads(text)
    except (ShapelyError, ValueError, TypeError):
        return None
    if geometry.is_empty:
        return None
    return geometry


def parse_coordinate(text: str) -> Optional[float]:
    """Parse a finite ASCII decimal number, returning None for anything else."""
    if not _COORDINATE_PATTERN.fullmatch(text):
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def resolve_row(
    headers: Sequence[str],
    row: Sequence[str],
    options: GeoCSVOptions,
    row_index: int = 0,
) -> RowResolution:
    """
    Resolve a row into an optional geometry and its properties.

    Columns are scanned in order. For each column the first matching role
    applies: WKT, then X, then Y. Every column is also recorded as a string
    property. With duplicate header names the last column wins, both for
    properties and for each geometry role; a later cell that fails to parse
    leaves the earlier parsed value in place.

    Args:
        headers: Header names (same length as row)
        row: Decoded cells
        options: Geometry field roles
        row_index: Index of the row, used for diagnostics

    Returns:
        RowResolution with geometry None if neither WKT nor a full X/Y
        pair could be parsed
    """
    x: Optional[float] = None
    y: Optional[float] = None
    geometry: Optional[BaseGeometry] = None
    properties: Dict[str, str] = {}
    wkt_failures = x_failures = y_failures = 0

    for name, cell in zip(headers, row):
        if options.has_wkt and name == options.wkt_field:
            parsed = parse_wkt(cell)
            if parsed is not None:
                geometry = parsed
            else:
                wkt_failures += 1
        elif options.x_field is not None and name == options.x_field:
            value = parse_coordinate(cell)
            if value is not None:
                x = value
            else:
                x_failures += 1
        elif options.y_field is not None and name == options.y_field:
            value = parse_coordinate(cell)
            if value is not None:
                y = value
            else:
                y_failures += 1
        properties[name] = cell

    if geometry is None and x is not None and y is not None:
        geometry = Point(x, y)

    if wkt_failures or x_failures or y_failures:
        log.debug(
            f"Row {row_index}: absorbed {wkt_failures} WKT, {x_failures} X, "
            f"{y_failures} Y parse failures"
        )

    diagnostics = RowDiagnostics(
        row_index=row_index,
        wkt_parse_failures=wkt_failures,
        x_parse_failures=x_failures,
        y_parse_failures=y_failures,
        has_geometry=geometry is not None,
    )
    return RowResolution(geometry=geometry, properties=properties, diagnostics=diagnostics)
