from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable

from ..models import HistogramBin
from ..table import Table, is_number
from ._util import save_matplotlib

logger = logging.getLogger(__name__)

DEFAULT_BINS = 20


def histogram(values: Iterable[float], bins: int = DEFAULT_BINS) -> list[HistogramBin]:
    """Equal-width histogram spanning [min, max].

    Infinite values are left out. The maximum lands in the last bin. When
    every value is the same the width is zero and all values are counted in
    the first bin.
    """
    if bins < 1:
        raise ValueError("bins must be >= 1")
    nums = [float(v) for v in values if is_number(v) and math.isfinite(v)]
    if not nums:
        return []

    lo, hi = min(nums), max(nums)
    width = (hi - lo) / bins
    counts = [0] * bins
    if width == 0:
        logger.debug("Histogram range is degenerate (min == max == %s).", lo)
        counts[0] = len(nums)
    else:
        for v in nums:
            idx = min(int(math.floor((v - lo) / width)), bins - 1)
            counts[idx] += 1

    return [
        HistogramBin(start=lo + i * width, end=lo + (i + 1) * width, count=c)
        for i, c in enumerate(counts)
    ]


def column_histogram(table: Table, column: str, bins: int = DEFAULT_BINS) -> list[HistogramBin]:
    return histogram(table.numeric_values(column), bins=bins)


def plot_histogram(hist: list[HistogramBin], column: str, out: Path) -> Path:
    import matplotlib.pyplot as plt

    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.bar([b.label for b in hist], [b.count for b in hist])
    ax.set_title(f"Distribution: {column}")
    ax.set_xlabel(column)
    ax.set_ylabel("Count")
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    save_matplotlib(fig, out)
    return out
