from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..config import QuartileMethod
from ..errors import InsufficientDataError
from ..models import FiveNumberSummary, Value
from ..table import Table, categorical_columns, is_missing, is_number, numeric_columns, value_key
from ._util import save_matplotlib

logger = logging.getLogger(__name__)

_QUARTILES = (0.25, 0.5, 0.75)


def _nearest_index_quartiles(ordered: list[float]) -> tuple[float, float, float]:
    n = len(ordered)
    picks = [ordered[min(int(math.floor(n * p)), n - 1)] for p in _QUARTILES]
    return picks[0], picks[1], picks[2]


def _pandas_quartiles(ordered: list[float], interpolation: str) -> tuple[float, float, float]:
    qs = pd.Series(ordered, dtype="float64").quantile(list(_QUARTILES), interpolation=interpolation)
    return float(qs.loc[0.25]), float(qs.loc[0.5]), float(qs.loc[0.75])


def five_number_summary(
    values: Iterable[float],
    category: str = "",
    method: QuartileMethod = QuartileMethod.LOWER,
) -> FiveNumberSummary:
    """Min, Q1, median, Q3 and max of a group of numbers.

    Raises InsufficientDataError for an empty group.
    """
    ordered = sorted(float(v) for v in values)
    if not ordered:
        raise InsufficientDataError(f"No numeric values in group '{category}'.")

    if method == QuartileMethod.NEAREST_INDEX:
        q1, median, q3 = _nearest_index_quartiles(ordered)
    else:
        q1, median, q3 = _pandas_quartiles(ordered, QuartileMethod(method).value)

    return FiveNumberSummary(
        category=category,
        count=len(ordered),
        min=ordered[0],
        q1=q1,
        median=median,
        q3=q3,
        max=ordered[-1],
    )


def group_values(table: Table, value_column: str, group_column: str) -> dict[tuple[str, Value], list[float]]:
    """Numeric values of value_column keyed by group, in first-seen group order."""
    table.require(value_column)
    table.require(group_column)
    groups: dict[tuple[str, Value], list[float]] = {}
    skipped = 0
    for row in table.rows:
        value = row[value_column]
        key = row[group_column]
        if not is_number(value) or is_missing(key):
            skipped += 1
            continue
        groups.setdefault(value_key(key), []).append(value)  # type: ignore[arg-type]
    if skipped:
        logger.debug("Skipped %d rows without a number in %r or a key in %r.", skipped, value_column, group_column)
    return groups


def grouped_five_number(
    table: Table,
    value_column: str,
    group_column: str,
    method: QuartileMethod = QuartileMethod.LOWER,
) -> list[FiveNumberSummary]:
    """Five-number summary of value_column for each category of group_column."""
    groups = group_values(table, value_column, group_column)
    return [five_number_summary(vals, category=str(key[1]), method=method) for key, vals in groups.items()]


def default_box_plot_columns(table: Table) -> tuple[str, str]:
    """First numeric and first categorical column, the panel's initial selection."""
    nums = numeric_columns(table)
    cats = categorical_columns(table)
    if not nums or not cats:
        raise InsufficientDataError("Need both numeric and categorical columns for box plots.")
    return nums[0], cats[0]


def plot_box_summaries(summaries: list[FiveNumberSummary], value_column: str, group_column: str, out: Path) -> Path:
    import matplotlib.pyplot as plt

    fig = plt.figure()
    ax = fig.add_subplot(111)
    stats = [
        {"label": s.category, "whislo": s.min, "q1": s.q1, "med": s.median, "q3": s.q3, "whishi": s.max, "fliers": []}
        for s in summaries
    ]
    ax.bxp(stats, showfliers=False)
    ax.set_title(f"{value_column} by {group_column}")
    ax.set_xlabel(group_column)
    ax.set_ylabel(value_column)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    save_matplotlib(fig, out)
    return out
