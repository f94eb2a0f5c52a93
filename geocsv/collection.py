# =============================================================================
# Collection Assembler Module
# =============================================================================
# GeoCSV facade: reads a CSV source once into an immutable table and
# derives features from it on demand, in source row order.
# =============================================================================

import logging
import os
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

from .errors import ResourceError
from .models import Feature, FeatureCollection, GeoCSVOptions, RowDiagnostics
from .resolver import RowResolution, resolve_row
from .table import GeoCSVTable, read_table

__all__ = ["GeoCSV", "read", "CSVSource"]

log = logging.getLogger(__name__)

CSVSource = Union[str, os.PathLike, BinaryIO]


class GeoCSV:
    """
    A decoded CSV table paired with its geometry field roles.

    Features are recomputed on every call; nothing is cached, so a GeoCSV
    can be converted repeatedly once read.
    """

    def __init__(self, table: GeoCSVTable, options: Optional[GeoCSVOptions] = None):
        self.table = table
        self.options = options or GeoCSVOptions()

    @classmethod
    def read(
        cls,
        source: CSVSource,
        options: Optional[GeoCSVOptions] = None,
    ) -> "GeoCSV":
        """
        Read a CSV file or stream.

        A path is opened here and closed before returning, whether the read
        succeeds or fails. A stream supplied by the caller is read to the end
        but left open.

        Args:
            source: File path, or a readable binary stream
            options: Geometry field roles (default: none configured)

        Returns:
            GeoCSV over the decoded table

        Raises:
            ResourceError: If the file cannot be opened
            ReadError: If the CSV framing is malformed
            EncodingError: If a cell is neither UTF-8 nor GBK
        """
        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            try:
                handle = open(path, "rb")
            except OSError as e:
                raise ResourceError(f"Cannot open CSV file '{path}': {e}") from e
            log.info(f"Reading CSV file: {path}")
            with handle:
                table = read_table(handle)
        else:
            table = read_table(source)
        return cls(table, options)

    @property
    def headers(self) -> Tuple[str, ...]:
        return self.table.headers

    @property
    def rows(self) -> Tuple[Tuple[str, ...], ...]:
        return self.table.rows

    @property
    def header_count(self) -> int:
        return self.table.header_count

    @property
    def row_count(self) -> int:
        return self.table.row_count

    def is_valid(self) -> bool:
        """Whether the table has rows and the configured geometry columns."""
        return self.table.is_valid(self.options)

    def _resolve(self, index: int) -> RowResolution:
        return resolve_row(self.table.headers, self.table.rows[index], self.options, index)

    def feature(self, index: int) -> Optional[Feature]:
        """
        Derive the feature for a single data row.

        Args:
            index: Zero-based data row index

        Returns:
            Feature, or None if the index is out of range (negative indexes
            included) or the row has no geometry
        """
        if index < 0 or index >= self.row_count:
            return None
        resolution = self._resolve(index)
        if resolution.geometry is None:
            return None
        return Feature(
            geometry=resolution.geometry,
            properties=resolution.properties,
            row_index=index,
        )

    def to_feature_collection(self) -> FeatureCollection:
        """
        Derive features for every row, in row order.

        Rows without a geometry are left out of ``features`` and their
        indexes listed in ``skipped_rows``.
        """
        features: List[Feature] = []
        skipped: List[int] = []
        for index in range(self.row_count):
            resolution = self._resolve(index)
            if resolution.geometry is None:
                skipped.append(index)
                continue
            features.append(
                Feature(
                    geometry=resolution.geometry,
                    properties=resolution.properties,
                    row_index=index,
                )
            )

        if skipped:
            log.warning(f"Skipped {len(skipped)} of {self.row_count} rows without geometry")
        log.info(f"Converted {len(features)} features from {self.row_count} rows")
        return FeatureCollection(features=features, skipped_rows=skipped)

    def diagnostics(self) -> List[RowDiagnostics]:
        """Per-row counts of absorbed WKT and coordinate parse failures."""
        return [self._resolve(index).diagnostics for index in range(self.row_count)]


def read(source: CSVSource, options: Optional[GeoCSVOptions] = None) -> GeoCSV:
    """Shortcut for ``GeoCSV.read``."""
    return GeoCSV.read(source, options)
