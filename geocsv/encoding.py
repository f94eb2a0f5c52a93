# =============================================================================
# Cell Encoding Module
# =============================================================================
# Classifies raw CSV cell bytes as UTF-8, GBK or unknown and decodes them
# to normalized text. Classification is a byte-pattern heuristic; decoding
# is fail-closed and raises EncodingError instead of emitting mojibake.
# =============================================================================

import logging
from enum import Enum

from .errors import EncodingError

__all__ = [
    "CellEncoding",
    "classify_encoding",
    "decode_cell",
    "normalize_text",
    "BYTE_ORDER_MARK",
]

log = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"

# GBK double-byte ranges: lead 0x81-0xFE, trail 0x40-0xFE excluding 0x7F
_GBK_LEAD_MIN, _GBK_LEAD_MAX = 0x81, 0xFE
_GBK_TRAIL_MIN, _GBK_TRAIL_MAX = 0x40, 0xFE
_GBK_TRAIL_EXCLUDED = 0x7F


class CellEncoding(str, Enum):
    """Result of classifying a cell's raw bytes."""
    UTF8 = "utf-8"
    GBK = "gbk"
    UNKNOWN = "unknown"


def _utf8_sequence_length(lead: int) -> int:
    """
    Number of bytes announced by a UTF-8 lead byte, or 0 if it cannot lead.

    Counts the leading 1-bits: 0 -> ASCII (1 byte), 2-4 -> multi-byte.
    A single leading 1-bit is a continuation byte and cannot start a sequence.
    """
    if lead < 0x80:
        return 1
    ones = 0
    mask = 0x80
    while lead & mask:
        ones += 1
        mask >>= 1
    if ones < 2 or ones > 4:
        return 0
    return ones


def _looks_like_utf8(data: bytes) -> bool:
    i = 0
    length = len(data)
    while i < length:
        size = _utf8_sequence_length(data[i])
        if size == 0 or i + size > length:
            return False
        for continuation in data[i + 1:i + size]:
            if continuation & 0xC0 != 0x80:
                return False
        i += size
    return True


def _looks_like_gbk(data: bytes) -> bool:
    i = 0
    length = len(data)
    while i < length:
        if data[i] <= 0x7F:
            i += 1
            continue
        if i + 1 >= length:
            return False
        lead, trail = data[i], data[i + 1]
        if not (_GBK_LEAD_MIN <= lead <= _GBK_LEAD_MAX):
            return False
        if not (_GBK_TRAIL_MIN <= trail <= _GBK_TRAIL_MAX) or trail == _GBK_TRAIL_EXCLUDED:
            return False
        i += 2
    return True


def classify_encoding(data: bytes) -> CellEncoding:
    """
    Classify raw cell bytes as UTF-8, GBK or unknown.

    UTF-8 structure is checked first, so pure ASCII (and the empty cell)
    classifies as UTF8. The check is structural only: overlong forms such
    as the classic GBK "联通" bytes still look like UTF-8 here and are
    handled by the decode fallback.

    Args:
        data: Raw bytes of a single CSV cell

    Returns:
        CellEncoding classification

    Examples:
        >>> classify_encoding(b"abc")
        <CellEncoding.UTF8: 'utf-8'>
        >>> classify_encoding("中文".encode("gbk"))
        <CellEncoding.GBK: 'gbk'>
    """
    if _looks_like_utf8(data):
        return CellEncoding.UTF8
    if _looks_like_gbk(data):
        return CellEncoding.GBK
    return CellEncoding.UNKNOWN


def normalize_text(text: str) -> str:
    """
    Trim whitespace, drop byte-order marks, then trim again.

    Removing the BOM can expose whitespace that sat behind it, hence the
    second trim.
    """
    text = text.strip()
    text = text.replace(BYTE_ORDER_MARK, "")
    return text.strip()


def _decode_gbk(data: bytes) -> str:
    try:
        return data.decode(CellEncoding.GBK.value)
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Cell bytes are neither UTF-8 nor GBK: {data[:32]!r}", raw=data
        ) from e


def decode_cell(data: bytes) -> str:
    """
    Decode one cell's raw bytes into normalized text.

    - UTF8: decoded as UTF-8. If strict decoding rejects bytes that merely
      looked like UTF-8, GBK is tried instead.
    - GBK: decoded with the GBK codec.
    - UNKNOWN: GBK is attempted as a fallback.

    Args:
        data: Raw bytes of a single CSV cell

    Returns:
        Decoded text with surrounding whitespace and BOMs removed

    Raises:
        EncodingError: If the bytes cannot be decoded as UTF-8 or GBK
    """
    encoding = classify_encoding(data)

    if encoding is CellEncoding.UTF8:
        try:
            text = data.decode(CellEncoding.UTF8.value)
        except UnicodeDecodeError:
            log.debug(f"Cell {data[:32]!r} is not strict UTF-8, retrying as GBK")
            text = _decode_gbk(data)
    else:
        if encoding is CellEncoding.UNKNOWN:
            log.debug(f"Cell {data[:32]!r} has unknown encoding, attempting GBK")
        text = _decode_gbk(data)

    return normalize_text(text)
