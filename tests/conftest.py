"""
Shared pytest fixtures for geocsv tests.

Provides reusable CSV inputs and options to avoid duplication across test files.
"""

import io
from pathlib import Path

import pytest

from geocsv import GeoCSVOptions


DATA_DIR = Path(__file__).parent / "data"


# =============================================================================
# CSV File Fixtures
# =============================================================================

@pytest.fixture
def points_csv_path():
    """CSV with headers id,name,x,y and four rows of coordinates."""
    return DATA_DIR / "points.csv"


@pytest.fixture
def wkt_csv_path():
    """CSV with headers id,name,wkt and four rows of WKT geometries."""
    return DATA_DIR / "wkt.csv"


@pytest.fixture
def make_stream():
    """Build a binary stream from text (UTF-8 by default) or raw bytes."""
    def _make(content, encoding="utf-8"):
        if isinstance(content, str):
            content = content.encode(encoding)
        return io.BytesIO(content)
    return _make


# =============================================================================
# Options Fixtures
# =============================================================================

@pytest.fixture
def xy_options():
    """Options selecting the x/y column pair."""
    return GeoCSVOptions(XField="x", YField="y")


@pytest.fixture
def wkt_options():
    """Options selecting the wkt column."""
    return GeoCSVOptions(WKTField="wkt")


@pytest.fixture
def all_options():
    """Options configuring both the WKT column and the x/y pair."""
    return GeoCSVOptions(XField="x", YField="y", WKTField="wkt")
