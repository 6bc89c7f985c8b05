from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from .errors import ColumnNotFoundError
from .models import ColumnKind, Value


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def is_number(value: Any) -> bool:
    """True for real numbers. Booleans and NaN do not count."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not is_missing(value)
    return False


def _to_python(value: Any) -> Value:
    """Normalize pandas/numpy scalars to plain int/float/str/None."""
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


@dataclass(frozen=True)
class Table:
    """
    Immutable in-memory table: ordered unique headers plus rows.

    Every row maps every header to a number, a string or None. Rows are
    exposed as read-only mappings so panels cannot mutate them.
    """

    headers: tuple[str, ...]
    rows: tuple[Mapping[str, Value], ...]
    file_name: str = ""
    _index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(set(self.headers)) != len(self.headers):
            dupes = sorted({h for h in self.headers if self.headers.count(h) > 1})
            raise ValueError(f"Duplicate column names: {dupes}")
        object.__setattr__(self, "_index", {h: i for i, h in enumerate(self.headers)})

    @classmethod
    def from_records(
        cls,
        headers: Iterable[str],
        records: Iterable[Mapping[str, Any]],
        file_name: str = "",
    ) -> "Table":
        """
        Build a table from row mappings.

        Keys missing from a record are filled with None; keys that are not
        headers are rejected so every row carries the same header set.
        """
        hdrs = tuple(str(h) for h in headers)
        known = set(hdrs)
        rows = []
        for i, rec in enumerate(records):
            extra = [k for k in rec.keys() if k not in known]
            if extra:
                raise ValueError(f"row[{i}] has keys that are not headers: {extra}")
            rows.append(MappingProxyType({h: _to_python(rec.get(h)) for h in hdrs}))
        return cls(headers=hdrs, rows=tuple(rows), file_name=file_name)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, file_name: str = "") -> "Table":
        headers = [str(c) for c in df.columns]
        frame = df.copy()
        frame.columns = headers
        records = frame.astype(object).to_dict(orient="records")
        return cls.from_records(headers, records, file_name=file_name)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([dict(r) for r in self.rows], columns=list(self.headers))

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.rows), len(self.headers)

    def require(self, column: str) -> str:
        if column not in self._index:
            raise ColumnNotFoundError(column, list(self.headers))
        return column

    def column(self, column: str) -> list[Value]:
        self.require(column)
        return [row[column] for row in self.rows]

    def numeric_values(self, column: str) -> list[float]:
        return [v for v in self.column(column) if is_number(v)]  # type: ignore[misc]


def classify_column(table: Table, column: str) -> ColumnKind:
    """Classify a column by scanning all of its values."""
    seen_number = False
    for v in table.column(column):
        if is_missing(v):
            continue
        if isinstance(v, str):
            return ColumnKind.CATEGORICAL
        if is_number(v):
            seen_number = True
    return ColumnKind.NUMERIC if seen_number else ColumnKind.EMPTY


def classify_by_first_row(table: Table, column: str) -> ColumnKind:
    """Legacy heuristic: trust the type of the first row's value."""
    table.require(column)
    if not table.rows:
        return ColumnKind.EMPTY
    first = table.rows[0][column]
    if is_number(first):
        return ColumnKind.NUMERIC
    if isinstance(first, str):
        return ColumnKind.CATEGORICAL
    return ColumnKind.EMPTY


def numeric_columns(table: Table, first_row_only: bool = False) -> list[str]:
    classify = classify_by_first_row if first_row_only else classify_column
    return [h for h in table.headers if classify(table, h) == ColumnKind.NUMERIC]


def categorical_columns(table: Table, first_row_only: bool = False) -> list[str]:
    classify = classify_by_first_row if first_row_only else classify_column
    return [h for h in table.headers if classify(table, h) == ColumnKind.CATEGORICAL]


def value_key(value: Value) -> tuple[str, Value]:
    """Hashable identity for a cell value. Strings never equal numbers (1 != "1")."""
    return ("str" if isinstance(value, str) else "num", value)


def distinct_count(values: Iterable[Value]) -> int:
    return len({value_key(v) for v in values if not is_missing(v)})
