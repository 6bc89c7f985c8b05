from __future__ import annotations

import pytest

from table_insights.ingest import parse_table
from table_insights.models import HistogramBin
from table_insights.stats.histogram import column_histogram, histogram
from table_insights.table import Table


def test_counts_sum_to_valid_values_and_max_lands_in_last_bin() -> None:
    values = list(range(101))
    bins = histogram(values)
    assert len(bins) == 20
    assert sum(b.count for b in bins) == 101
    assert bins[0].count == 5
    assert bins[-1].count == 6
    assert bins[0].start == 0.0
    assert bins[-1].end == pytest.approx(100.0)


def test_column_histogram_skips_non_numeric_cells() -> None:
    t = Table.from_records(["v"], [{"v": 1}, {"v": "x"}, {"v": None}, {"v": 9}, {"v": 4.5}])
    bins = column_histogram(t, "v", bins=4)
    assert sum(b.count for b in bins) == 3


def test_degenerate_range_puts_everything_in_first_bin() -> None:
    bins = histogram([3, 3, 3])
    assert len(bins) == 20
    assert bins[0].count == 3
    assert all(b.count == 0 for b in bins[1:])


def test_no_values_gives_no_bins() -> None:
    assert histogram([]) == []


def test_invalid_bin_count() -> None:
    with pytest.raises(ValueError):
        histogram([1, 2], bins=0)


def test_bin_label() -> None:
    assert HistogramBin(start=0, end=5, count=1).label == "0-5"


def test_infinite_values_are_left_out() -> None:
    t = parse_table("v\n1\n2\ninf\n-inf\n")
    bins = column_histogram(t, "v", bins=2)
    assert [b.count for b in bins] == [1, 1]
    assert bins[0].start == 1.0 and bins[-1].end == 2.0
