# =============================================================================
# geocsv
# =============================================================================
# Converts CSV tables of unknown byte encoding (UTF-8 or GBK) into
# geospatial features, using either a WKT column or an X/Y column pair.
# =============================================================================

"""
CSV to geospatial feature conversion.

Sub-modules:
- encoding: per-cell UTF-8/GBK classification and decoding
- table: CSV tokenizing into an immutable header/row table
- resolver: row -> (geometry, properties) resolution
- collection: GeoCSV facade and feature collection assembly
- models: Pydantic options and feature models
"""

from .collection import GeoCSV, read
from .encoding import CellEncoding, classify_encoding, decode_cell
from .errors import EncodingError, GeoCSVError, ReadError, ResourceError
from .models import Feature, FeatureCollection, GeoCSVOptions, RowDiagnostics
from .resolver import RowResolution, resolve_row
from .table import GeoCSVTable, read_table

__version__ = "0.1.0"

__all__ = [
    "GeoCSV",
    "read",
    "CellEncoding",
    "classify_encoding",
    "decode_cell",
    "GeoCSVError",
    "EncodingError",
    "ReadError",
    "ResourceError",
    "Feature",
    "FeatureCollection",
    "GeoCSVOptions",
    "RowDiagnostics",
    "RowResolution",
    "resolve_row",
    "GeoCSVTable",
    "read_table",
]
