# =============================================================================
# Errors
# =============================================================================
# Exceptions that abort a read. Malformed WKT or coordinate cells are never
# raised; they are counted in RowDiagnostics instead.
# =============================================================================

from typing import Optional

__all__ = ["GeoCSVError", "EncodingError", "ReadError", "ResourceError"]


class GeoCSVError(Exception):
    """Base class for all errors raised while reading a CSV table."""


class EncodingError(GeoCSVError):
    """
    A cell's bytes are neither valid UTF-8 nor decodable as GBK.

    Attributes:
        raw: The undecodable cell bytes (if known)
    """

    def __init__(self, message: str, raw: Optional[bytes] = None):
        super().__init__(message)
        self.raw = raw


class ReadError(GeoCSVError):
    """The CSV tokenizer reported malformed framing or the stream failed."""


class ResourceError(GeoCSVError):
    """The input file could not be opened."""
