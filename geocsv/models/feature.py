# =============================================================================
# Feature Models Module
# =============================================================================
# Provides the derived output types:
# - Feature: one shapely geometry plus string-valued properties
# - FeatureCollection: ordered features, geometry-less rows omitted
# - RowDiagnostics: silently absorbed parse failures for one row
# =============================================================================

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry

__all__ = ["Feature", "FeatureCollection", "RowDiagnostics"]


class RowDiagnostics(BaseModel):
    """
    Parse failures absorbed while resolving a single row.

    These never abort a conversion; they only make the leniency observable.

    Attributes:
        row_index: Zero-based index of the data row
        wkt_parse_failures: WKT cells that failed to parse
        x_parse_failures: X cells that were not finite numbers
        y_parse_failures: Y cells that were not finite numbers
        has_geometry: Whether the row produced a geometry
    """

    row_index: int = Field(..., ge=0, description="Zero-based data row index")
    wkt_parse_failures: int = Field(0, ge=0)
    x_parse_failures: int = Field(0, ge=0)
    y_parse_failures: int = Field(0, ge=0)
    has_geometry: bool = False

    @property
    def total_failures(self) -> int:
        return self.wkt_parse_failures + self.x_parse_failures + self.y_parse_failures


class Feature(BaseModel):
    """
    A geometry derived from one CSV row plus that row's cells as properties.

    Property values are always the decoded cell strings, including the
    columns the geometry was derived from.

    Attributes:
        geometry: Shapely geometry (WKT-derived or a Point from X/Y)
        properties: Header name -> cell text
        row_index: Zero-based index of the source data row
    """

    geometry: BaseGeometry
    properties: dict[str, str] = Field(default_factory=dict)
    row_index: int = Field(..., ge=0)

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": mapping(self.geometry),
            "properties": dict(self.properties),
        }


class FeatureCollection(BaseModel):
    """
    Features in source row order.

    Attributes:
        features: Features for rows that produced a geometry
        skipped_rows: Indexes of rows that produced no geometry
    """

    features: list[Feature] = Field(default_factory=list)
    skipped_rows: list[int] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __len__(self) -> int:
        return len(self.features)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [feature.__geo_interface__ for feature in self.features],
        }

    def to_geojson(self, indent: Optional[int] = None) -> str:
        """
        Serialize as a GeoJSON FeatureCollection string.

        Args:
            indent: Optional JSON indentation

        Returns:
            GeoJSON text (non-ASCII property values are kept as-is)
        """
        return json.dumps(self.__geo_interface__, indent=indent, ensure_ascii=False)
