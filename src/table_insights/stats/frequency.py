from __future__ import annotations

from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Iterable

from ..models import FrequencyItem, Value
from ..table import Table, is_missing, value_key
from ._util import save_matplotlib

PANEL_TOP_N = 10
SUMMARY_TOP_N = 5


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


def top_values(values: Iterable[Value], n: int = PANEL_TOP_N) -> list[FrequencyItem]:
    """Most frequent non-null values, highest count first.

    Values are compared without coercion, so 1 and "1" are counted apart.
    Ties keep the order in which the values were first seen.
    """
    counts: Counter = Counter()
    first: dict[tuple[str, Value], Value] = {}
    for v in values:
        if is_missing(v):
            continue
        key = value_key(v)
        first.setdefault(key, v)
        counts[key] += 1

    # stable sort: ties keep first-seen order
    return [
        FrequencyItem(name=str(first[key]), value=first[key], count=c)
        for key, c in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:n]
    ]


def column_frequencies(table: Table, column: str, n: int = PANEL_TOP_N) -> list[FrequencyItem]:
    return top_values(table.column(column), n=n)


def plot_frequencies(items: list[FrequencyItem], column: str, out: Path, chart: ChartType = ChartType.BAR) -> Path:
    import matplotlib.pyplot as plt

    names = [i.name for i in items]
    counts = [i.count for i in items]
    fig = plt.figure()
    ax = fig.add_subplot(111)
    if chart == ChartType.PIE:
        ax.pie(counts, labels=names)
    else:
        if chart == ChartType.LINE:
            ax.plot(names, counts, marker="o")
        else:
            ax.bar(names, counts)
        ax.set_xlabel(column)
        ax.set_ylabel("Count")
        plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    ax.set_title(f"Top {len(items)} values: {column}")
    save_matplotlib(fig, out)
    return out
