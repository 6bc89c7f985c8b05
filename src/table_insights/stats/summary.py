from __future__ import annotations

from ..models import ColumnKind, ColumnStats, MissingValues
from ..table import Table, classify_column, distinct_count, is_missing, is_number
from .frequency import SUMMARY_TOP_N, top_values


def column_stats(table: Table, column: str) -> ColumnStats:
    """Summary statistics for one column.

    Numeric columns report mean/min/max/median, where median is the element
    at index n // 2 of the sorted values (upper middle for even n). Other
    columns report the number of distinct non-null values and the most
    frequent ones.
    """
    values = [v for v in table.column(column) if not is_missing(v)]
    missing = len(table) - len(values)
    kind = classify_column(table, column)

    if kind == ColumnKind.NUMERIC:
        nums = sorted(float(v) for v in values if is_number(v))
        return ColumnStats(
            column=column,
            kind=kind,
            count=len(values),
            missing=missing,
            mean=sum(nums) / len(nums),
            min=nums[0],
            max=nums[-1],
            median=nums[len(nums) // 2],
        )

    return ColumnStats(
        column=column,
        kind=kind,
        count=len(values),
        missing=missing,
        unique=distinct_count(values),
        top=top_values(values, n=SUMMARY_TOP_N),
    )


def stats_details(s: ColumnStats) -> str:
    """One-line details shown beside a column in the statistics panel."""
    if s.mean is not None:
        return f"Mean: {s.mean:.2f} | Min: {s.min:g} | Max: {s.max:g} | Median: {s.median:g}"
    details = f"Unique values: {s.unique}"
    if s.top:
        details += " | Top: " + ", ".join(f"{i.name} ({i.count})" for i in s.top)
    return details


def summarize(table: Table) -> list[ColumnStats]:
    return [column_stats(table, h) for h in table.headers]


def missing_values(table: Table) -> list[MissingValues]:
    n = len(table)
    out = []
    for h in table.headers:
        missing = sum(1 for v in table.column(h) if is_missing(v))
        pct = (missing / n * 100.0) if n else 0.0
        out.append(MissingValues(column=h, missing=missing, percentage=pct))
    return out
