from __future__ import annotations

import math

import pandas as pd
import pytest

from table_insights.errors import ColumnNotFoundError
from table_insights.models import ColumnKind
from table_insights.table import (
    Table,
    categorical_columns,
    classify_by_first_row,
    classify_column,
    distinct_count,
    is_number,
    numeric_columns,
)


def test_missing_keys_are_filled_and_extra_keys_rejected() -> None:
    t = Table.from_records(["a", "b"], [{"a": 1}])
    assert dict(t.rows[0]) == {"a": 1, "b": None}

    with pytest.raises(ValueError):
        Table.from_records(["a"], [{"a": 1, "z": 2}])


def test_duplicate_headers_are_rejected() -> None:
    with pytest.raises(ValueError):
        Table.from_records(["a", "a"], [])


def test_rows_are_read_only() -> None:
    t = Table.from_records(["a"], [{"a": 1}])
    with pytest.raises(TypeError):
        t.rows[0]["a"] = 5  # type: ignore[index]


def test_unknown_column_raises_column_not_found() -> None:
    t = Table.from_records(["a"], [{"a": 1}])
    with pytest.raises(ColumnNotFoundError) as ei:
        t.column("b")
    assert isinstance(ei.value, KeyError)
    assert "Unknown column 'b'" in str(ei.value)


def test_from_dataframe_maps_nan_and_numpy_scalars() -> None:
    df = pd.DataFrame({"n": [1.5, float("nan")], "s": ["x", None], "i": [1, 2]})
    t = Table.from_dataframe(df, file_name="f.csv")
    assert t.shape == (2, 3)
    assert t.column("n") == [1.5, None]
    assert t.column("s") == ["x", None]
    assert t.column("i") == [1, 2]
    assert type(t.column("i")[0]) is int
    assert t.file_name == "f.csv"


def test_is_number_excludes_bool_and_nan() -> None:
    assert is_number(3)
    assert is_number(2.5)
    assert not is_number(True)
    assert not is_number(math.nan)
    assert not is_number("3")
    assert not is_number(None)


def test_full_scan_classification_differs_from_first_row_heuristic() -> None:
    t = Table.from_records(
        ["mixed", "num", "cat", "empty"],
        [
            {"mixed": 1, "num": None, "cat": "a", "empty": None},
            {"mixed": "x", "num": 2.0, "cat": "b", "empty": None},
        ],
    )
    assert classify_by_first_row(t, "mixed") == ColumnKind.NUMERIC
    assert classify_column(t, "mixed") == ColumnKind.CATEGORICAL

    # first row is null, so the heuristic cannot tell; the scan can
    assert classify_by_first_row(t, "num") == ColumnKind.EMPTY
    assert classify_column(t, "num") == ColumnKind.NUMERIC

    assert classify_column(t, "empty") == ColumnKind.EMPTY
    assert numeric_columns(t) == ["num"]
    assert categorical_columns(t) == ["mixed", "cat"]
    assert numeric_columns(t, first_row_only=True) == ["mixed"]


def test_numeric_values_skip_text_and_nulls() -> None:
    t = Table.from_records(["v"], [{"v": 1}, {"v": "2"}, {"v": None}, {"v": 3.5}])
    assert t.numeric_values("v") == [1, 3.5]


def test_distinct_count_does_not_coerce_types() -> None:
    assert distinct_count([1, "1", 1, None, "a"]) == 3
