"""
Unit tests for cell encoding classification and decoding.

Tests the UTF-8/GBK heuristic, the GBK fallback, BOM stripping and
fail-closed behavior on undecodable bytes.
"""

import pytest

from geocsv.encoding import (
    CellEncoding,
    classify_encoding,
    decode_cell,
    normalize_text,
)
from geocsv.errors import EncodingError


class TestClassifyEncoding:
    """Test the byte-pattern classifier."""

    def test_ascii_is_utf8(self):
        """Pure ASCII classifies as UTF8."""
        assert classify_encoding(b"Paris") is CellEncoding.UTF8

    def test_empty_is_utf8(self):
        """The empty cell classifies as UTF8."""
        assert classify_encoding(b"") is CellEncoding.UTF8

    def test_multibyte_utf8(self):
        """Chinese text encoded as UTF-8 classifies as UTF8."""
        assert classify_encoding("中文名称".encode("utf-8")) is CellEncoding.UTF8

    def test_four_byte_utf8(self):
        """Four-byte sequences are accepted."""
        assert classify_encoding("\U0001F30D".encode("utf-8")) is CellEncoding.UTF8

    def test_gbk(self):
        """Chinese text encoded as GBK classifies as GBK."""
        assert classify_encoding("中文".encode("gbk")) is CellEncoding.GBK
        assert classify_encoding("测试,abc".encode("gbk")) is CellEncoding.GBK

    def test_truncated_gbk_is_unknown(self):
        """A lone GBK lead byte at the end is neither UTF8 nor GBK."""
        assert classify_encoding(b"ab\xd6") is CellEncoding.UNKNOWN

    def test_invalid_bytes_are_unknown(self):
        """0xFF can neither start UTF-8 nor GBK sequences."""
        assert classify_encoding(b"\xff\xff") is CellEncoding.UNKNOWN

    def test_gbk_excluded_trail_byte(self):
        """0x7F is not a valid GBK trail byte."""
        assert classify_encoding(b"\x81\x7f") is CellEncoding.UNKNOWN


class TestNormalizeText:
    """Test whitespace and BOM normalization."""

    def test_strip_whitespace(self):
        assert normalize_text("  name \t") == "name"

    def test_bom_then_whitespace(self):
        """Whitespace behind a BOM is trimmed after the BOM is removed."""
        assert normalize_text("\ufeff  name ") == "name"

    def test_inner_bom_removed(self):
        assert normalize_text("na\ufeffme") == "name"


class TestDecodeCell:
    """Test decode_cell."""

    def test_utf8_passthrough(self):
        assert decode_cell("北京".encode("utf-8")) == "北京"

    def test_gbk_decoded(self):
        assert decode_cell("北京".encode("gbk")) == "北京"

    @pytest.mark.parametrize("text", ["中文", "名称 name", "上海市浦东新区"])
    def test_gbk_and_utf8_decode_to_same_text(self, text):
        """GBK bytes and UTF-8 bytes for the same string decode identically."""
        assert decode_cell(text.encode("gbk")) == decode_cell(text.encode("utf-8")) == text

    def test_bom_prefixed_header(self):
        """A UTF-8 BOM prefix decodes to the same name as the bare cell."""
        assert decode_cell(b"\xef\xbb\xbfid") == decode_cell(b"id") == "id"

    def test_bom_with_padding(self):
        assert decode_cell(b"\xef\xbb\xbf  id ") == "id"

    def test_overlong_utf8_lookalike_falls_back_to_gbk(self):
        """GBK bytes for "联通" look like UTF-8 but strict decoding rejects them."""
        raw = "联通".encode("gbk")
        assert classify_encoding(raw) is CellEncoding.UTF8
        assert decode_cell(raw) == "联通"

    def test_undecodable_raises(self):
        """Bytes neither UTF-8 nor GBK abort with EncodingError."""
        with pytest.raises(EncodingError) as exc_info:
            decode_cell(b"\xff\xfe\xff")
        assert exc_info.value.raw == b"\xff\xfe\xff"
