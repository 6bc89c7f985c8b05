from __future__ import annotations

from pathlib import Path

import matplotlib
import pytest

from table_insights.table import Table

matplotlib.use("Agg")

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def mixed_csv() -> Path:
    return FIXTURES / "mixed.csv"


@pytest.fixture
def grouped_table() -> Table:
    return Table.from_records(
        ["A", "B"],
        [{"A": 1, "B": "x"}, {"A": 2, "B": "x"}, {"A": 3, "B": "y"}],
    )
