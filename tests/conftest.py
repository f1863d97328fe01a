"""
Pytest configuration and fixtures for the analysis tests.

This file is automatically discovered by pytest and provides
shared fixtures and configuration for all test modules.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from retail_analysis.etl.extract_csv import coerce_sales

SALES_HEADER = [
    "transaction_id", "sale_date", "sale_time", "customer_id", "gender", "age",
    "category", "quantity", "price_per_unit", "cogs", "total_sale",
]

# Eight complete transactions over three months and four known customers.
# Row 6 has no age and row 7 no customer_id; both are still valid rows.
SAMPLE_ROWS = [
    ["1", "2022-11-05", "10:08:00", "1", "Male", "34", "Clothing", "5", "100", "40", "500"],
    ["2", "2022-11-06", "13:30:00", "2", "Female", "22", "Clothing", "1", "100", "30", "100"],
    ["3", "2022-11-05", "18:45:00", "3", "Female", "41", "Beauty", "2", "50", "20", "100"],
    ["4", "2022-12-01", "09:00:00", "1", "Male", "34", "Beauty", "3", "300", "100", "900"],
    ["5", "2022-12-15", "16:59:00", "2", "Female", "22", "Electronics", "4", "300", "400", "1200"],
    ["6", "2023-01-10", "20:15:00", "4", "Male", None, "Electronics", "1", "500", "150", "500"],
    ["7", "2023-01-11", "11:00:00", None, "Female", "60", "Clothing", "2", "50", "25", "100"],
    ["8", "2022-12-20", "14:00:00", "3", "Female", "41", "Clothing", "4", "25", "10", "100"],
]


def rows_to_frame(rows):
    return pd.DataFrame(rows, columns=SALES_HEADER)


@pytest.fixture
def build_sales():
    """
    Build a typed sales table from rows of raw (string) values.
    """
    def _build(rows):
        return coerce_sales(rows_to_frame(rows))
    return _build


@pytest.fixture
def sample_rows():
    """Raw sample rows; each test gets its own copy to modify."""
    return [list(row) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_sales_df(build_sales):
    """Cleaned sample sales table."""
    return build_sales(SAMPLE_ROWS)


@pytest.fixture
def sample_csv(tmp_path):
    """
    Write the sample rows to a CSV file and return its path.
    """
    path = tmp_path / "retail_sales.csv"
    rows_to_frame(SAMPLE_ROWS).to_csv(path, index=False)
    return path


@pytest.fixture
def sample_config(sample_csv, tmp_path):
    """
    Provide a pipeline configuration pointing at the sample CSV.
    """
    return {
        "source": {"path": str(sample_csv), "date_format": "%Y-%m-%d", "column_aliases": {}},
        "output": {"folder": str(tmp_path / "reports")},
        "logging": {"level": "INFO"},
        "analytics": {"max_workers": 1, "queries": {}},
    }


# Add pytest CLI options
def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests (requires Apache Airflow)"
    )


def pytest_collection_modifyitems(config, items):
    """Mark integration tests for conditional execution."""
    if config.getoption("--integration"):
        # Run all tests
        return

    # Skip integration tests if flag not provided
    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
