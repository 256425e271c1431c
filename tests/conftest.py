"""
DataLens - Pytest Configuration
Shared fixtures and configuration for all tests
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("TEST_MODE", "True")

# Add project root to path
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from config.settings import settings  # noqa: E402
from core.data_model import RawGrid, build_records  # noqa: E402


# ==================== GRID FIXTURES ====================

def make_records(rows):
    """Header + data rows (lists of strings) → (headers, records)."""
    grid = RawGrid.from_rows(rows)
    return grid.headers, build_records(grid)


@pytest.fixture
def records_from():
    """Factory fixture: rows → (headers, records)"""
    return make_records


@pytest.fixture
def scores_rows():
    """name/score with one blank score"""
    return [
        ["name", "score"],
        ["Alice", "10"],
        ["Bob", "20"],
        ["Carol", ""],
    ]


@pytest.fixture
def scores(scores_rows):
    return make_records(scores_rows)


@pytest.fixture
def sales_rows():
    """Mixed numeric/categorical table"""
    return [
        ["region", "product", "units", "price"],
        ["North", "Widget", "10", "2.5"],
        ["South", "Gadget", "5", "10"],
        ["North", "Gadget", "7", "10"],
        ["East", "Widget", "", "2.5"],
        ["South", "Widget", "3", "n/a"],
    ]


@pytest.fixture
def sales(sales_rows):
    return make_records(sales_rows)


@pytest.fixture
def twelve_categories():
    """12 distinct categories, the first one twice"""
    rows = [["cat", "n"]]
    rows.append(["c0", "1"])
    for i in range(12):
        rows.append([f"c{i}", str(i)])
    return make_records(rows)


# ==================== FILE FIXTURES ====================

@pytest.fixture
def write_csv(tmp_path):
    """Write text to a temporary file and return its path"""
    def _write(text, name="data.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture
def sales_csv(write_csv):
    return write_csv(
        "region,product,units,price\n"
        "North,Widget,10,2.5\n"
        "South,Gadget,5,10\n"
        "\n"
        "North,Gadget,7,10\n"
        "East,Widget,,2.5\n"
        "South,Widget,3,n/a\n",
        name="sales.csv",
    )


# ==================== CONFIGURATION FIXTURES ====================

@pytest.fixture
def test_settings(tmp_path):
    """Settings copy pointing reports at a temporary directory"""
    return settings.model_copy(update={"REPORTS_PATH": tmp_path / "reports", "TEST_MODE": True})


# ==================== PYTEST CONFIGURATION ====================

def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
