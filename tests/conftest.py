"""
Pytest configuration and shared fixtures
"""

import pytest

from csvq.readers.base import Table


@pytest.fixture
def sample_csv_content():
    """Sample CSV content"""
    return """name,age,city,status
Alice,30,NYC,active
Bob,25,LA,inactive
Charlie,35,SF,active
Diana,abc,NYC,pending"""


@pytest.fixture
def sample_csv(tmp_path, sample_csv_content):
    """Sample CSV file on disk"""
    csv_file = tmp_path / "data.csv"
    csv_file.write_text(sample_csv_content + "\n")
    return csv_file


@pytest.fixture
def sample_table():
    """Sample table already loaded in memory"""
    return Table(
        header=["name", "age", "city", "status"],
        rows=[
            ["Alice", "30", "NYC", "active"],
            ["Bob", "25", "LA", "inactive"],
            ["Charlie", "35", "SF", "active"],
            ["Diana", "abc", "NYC", "pending"],
        ],
    )
