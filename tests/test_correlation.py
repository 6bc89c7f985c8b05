from __future__ import annotations

import math

import pytest

from table_insights.errors import ColumnNotFoundError, InsufficientDataError
from table_insights.stats.correlation import column_correlation, correlation_color, correlation_matrix, pearson
from table_insights.table import Table


def test_perfect_linear_relationships() -> None:
    assert pearson([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert pearson([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)


def test_self_correlation_is_one() -> None:
    values = [3.2, 1.1, 8.7, 4.4, 0.5, 9.9]
    assert pearson(values, values) == pytest.approx(1.0)


def test_zero_variance_and_short_inputs_are_nan() -> None:
    assert math.isnan(pearson([1, 1, 1], [1, 2, 3]))
    assert math.isnan(pearson([1], [2]))
    assert math.isnan(pearson([], []))


def test_pairs_stay_row_aligned_when_missingness_differs() -> None:
    t = Table.from_records(
        ["a", "b"],
        [
            {"a": 1, "b": 2},
            {"a": 2, "b": None},
            {"a": None, "b": 100},
            {"a": 4, "b": 8},
        ],
    )
    # only rows 0 and 3 have both values; they lie on b = 2a
    assert column_correlation(t, "a", "b") == pytest.approx(1.0)


def test_matrix_is_symmetric_with_unit_diagonal() -> None:
    t = Table.from_records(
        ["x", "y", "z", "label"],
        [
            {"x": 1, "y": 5, "z": 2, "label": "a"},
            {"x": 2, "y": 3, "z": 9, "label": "b"},
            {"x": 3, "y": 4, "z": 1, "label": "a"},
            {"x": 4, "y": 1, "z": 7, "label": "c"},
        ],
    )
    m = correlation_matrix(t)
    assert m.columns == ["x", "y", "z"]
    for i in range(3):
        assert m.values[i][i] == pytest.approx(1.0)
        for j in range(3):
            assert m.values[i][j] == m.values[j][i]
            assert -1.0 <= m.values[i][j] <= 1.0
    assert m.get("x", "y") == m.values[0][1]


def test_matrix_needs_two_numeric_columns(grouped_table: Table) -> None:
    with pytest.raises(InsufficientDataError):
        correlation_matrix(grouped_table)
    with pytest.raises(ColumnNotFoundError):
        correlation_matrix(grouped_table, ["A", "nope"])


def test_heatmap_colours() -> None:
    assert correlation_color(1.0) == "rgb(0, 72, 72)"
    assert correlation_color(-1.0) == "rgb(72, 72, 0)"
    assert correlation_color(float("nan")) == "rgb(200, 200, 200)"


def test_large_magnitudes_do_not_overflow() -> None:
    assert pearson([1e200, 2e200, 3e200], [3, 1, 2]) == pytest.approx(-0.5)
