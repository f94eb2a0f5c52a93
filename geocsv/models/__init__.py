# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models for conversion options and derived features.
# =============================================================================

"""
Data models for CSV to feature conversion.

This library provides:
- GeoCSVOptions: which columns carry geometry
- Feature / FeatureCollection: derived geometries with string properties
- RowDiagnostics: per-row counts of silently absorbed parse failures
"""

from .options import GeoCSVOptions
from .feature import Feature, FeatureCollection, RowDiagnostics

__all__ = [
    "GeoCSVOptions",
    "Feature",
    "FeatureCollection",
    "RowDiagnostics",
]
