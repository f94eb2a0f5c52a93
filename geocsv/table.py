# =============================================================================
# Table Reader Module
# =============================================================================
# Tokenizes CSV bytes with pyarrow and decodes every cell individually.
# Cells are read as raw binary so each one can be classified as UTF-8 or
# GBK on its own; no type inference is applied.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, List, Sequence, Tuple

import pyarrow as pa
import pyarrow.csv as pa_csv

from .encoding import decode_cell
from .errors import ReadError
from .models import GeoCSVOptions

__all__ = ["GeoCSVTable", "read_table", "tokenize_csv"]

log = logging.getLogger(__name__)

_MIN_BLOCK_SIZE = 1 << 20
_MAX_BLOCK_SIZE = (1 << 31) - 1


@dataclass(frozen=True)
class GeoCSVTable:
    """
    Decoded CSV content: one header record and the data rows after it.

    Header names need not be unique. Every row has exactly as many cells
    as there are headers; the tokenizer rejects ragged input.

    Attributes:
        headers: Decoded header names in column order
        rows: Decoded data rows in source order
    """

    headers: Tuple[str, ...] = field(default_factory=tuple)
    rows: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)

    @property
    def header_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def is_valid(self, options: GeoCSVOptions) -> bool:
        """
        Check whether the table can yield features for the given options.

        Only headers and the row count are inspected; a valid table may
        still contain rows that resolve to no geometry.

        Args:
            options: Geometry field roles

        Returns:
            True if there is at least one row and the configured WKT column,
            or both configured X and Y columns, are present in the headers
        """
        if not self.headers or not self.rows:
            return False
        if options.has_wkt and options.wkt_field in self.headers:
            return True
        return (
            options.has_xy
            and options.x_field in self.headers
            and options.y_field in self.headers
        )


def tokenize_csv(data: bytes) -> List[List[bytes]]:
    """
    Split CSV bytes into records of raw cell bytes.

    The first record is returned like any other; pyarrow is told to
    autogenerate column names so it does not consume the header.

    Args:
        data: Complete CSV content

    Returns:
        Records in source order, each a list of undecoded cell bytes

    Raises:
        ReadError: If pyarrow reports malformed framing (ragged rows etc.)
    """
    if not data.strip(b"\r\n"):
        return []

    # The first block must hold the whole header record, however long it is
    block_size = min(max(len(data), _MIN_BLOCK_SIZE), _MAX_BLOCK_SIZE)
    read_options = pa_csv.ReadOptions(
        autogenerate_column_names=True,
        use_threads=False,
        block_size=block_size,
    )
    parse_options = pa_csv.ParseOptions(delimiter=",", newlines_in_values=True)

    try:
        # The column count comes from the first block; every column is then
        # re-read as binary so no cell is coerced or UTF-8 validated.
        reader = pa_csv.open_csv(
            pa.BufferReader(data),
            read_options=read_options,
            parse_options=parse_options,
        )
        column_names = reader.schema.names
        reader.close()

        convert_options = pa_csv.ConvertOptions(
            column_types={name: pa.binary() for name in column_names},
            check_utf8=False,
            strings_can_be_null=False,
            quoted_strings_can_be_null=False,
        )
        table = pa_csv.read_csv(
            pa.BufferReader(data),
            read_options=read_options,
            parse_options=parse_options,
            convert_options=convert_options,
        )
    except pa.ArrowException as e:
        raise ReadError(f"Malformed CSV input: {e}") from e

    columns = [table.column(name).to_pylist() for name in column_names]
    return [list(record) for record in zip(*columns)]


def _decode_record(record: Sequence[bytes]) -> Tuple[str, ...]:
    return tuple(decode_cell(cell) for cell in record)


def read_table(stream: BinaryIO) -> GeoCSVTable:
    """
    Read a CSV byte stream into a decoded table.

    The stream is read once, to the end, and is not closed here.
    The first record becomes the headers and every later record a row.

    Args:
        stream: Readable binary stream of CSV bytes

    Returns:
        Immutable GeoCSVTable (empty if the stream is empty)

    Raises:
        ReadError: If the stream fails or the CSV framing is malformed
        EncodingError: If any cell is neither UTF-8 nor GBK
    """
    try:
        data = stream.read()
    except OSError as e:
        raise ReadError(f"Failed to read CSV stream: {e}") from e

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ReadError(
            f"CSV stream must be opened in binary mode, got {type(data).__name__}"
        )

    records = tokenize_csv(bytes(data))
    if not records:
        log.info("CSV input is empty")
        return GeoCSVTable()

    headers = _decode_record(records[0])
    rows = tuple(_decode_record(record) for record in records[1:])

    log.info(f"Read {len(headers)} columns, {len(rows)} rows")
    return GeoCSVTable(headers=headers, rows=rows)
