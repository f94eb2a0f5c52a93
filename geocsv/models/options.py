# =============================================================================
# Options Module
# =============================================================================
# Field-role configuration: which header names supply X, Y or WKT geometry.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["GeoCSVOptions"]


class GeoCSVOptions(BaseModel):
    """
    Geometry field roles for a CSV table.

    A WKT column takes precedence over the X/Y pair. Field names are matched
    against decoded headers by exact, case-sensitive equality. Blank names
    are treated as not configured.

    Accepts both snake_case names and the CamelCase aliases
    (``XField``, ``YField``, ``WKTField``, ``Fields``).

    Attributes:
        x_field: Header supplying longitude/X
        y_field: Header supplying latitude/Y
        wkt_field: Header supplying a WKT geometry string
        fields: Reserved; has no effect on geometry resolution
    """

    x_field: Optional[str] = Field(None, alias="XField", description="Header supplying longitude/X")
    y_field: Optional[str] = Field(None, alias="YField", description="Header supplying latitude/Y")
    wkt_field: Optional[str] = Field(None, alias="WKTField", description="Header supplying WKT geometry")
    fields: list[str] = Field(default_factory=list, alias="Fields", description="Reserved")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {"XField": "x", "YField": "y"},
        },
    )

    @field_validator("x_field", "y_field", "wkt_field")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty field names as not configured."""
        if v is None or v == "":
            return None
        return v

    @property
    def has_wkt(self) -> bool:
        return self.wkt_field is not None

    @property
    def has_xy(self) -> bool:
        return self.x_field is not None and self.y_field is not None
