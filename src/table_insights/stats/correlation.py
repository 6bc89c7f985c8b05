from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from ..errors import InsufficientDataError
from ..models import CorrelationMatrix, Value
from ..table import Table, is_number, numeric_columns
from ._util import save_matplotlib


def pearson(x: Sequence[Value], y: Sequence[Value]) -> float:
    """Pearson correlation of two sequences paired by position.

    A pair is dropped when either side is not a number, so the remaining
    pairs stay aligned. Extra trailing values of the longer sequence are
    ignored. Returns NaN for fewer than two pairs or zero variance.
    """
    pairs = [(a, b) for a, b in zip(x, y) if is_number(a) and is_number(b)]
    if len(pairs) < 2:
        return float("nan")

    arr = np.asarray(pairs, dtype="float64")
    # rescale each side to [-1, 1] so squaring cannot overflow
    scale = np.abs(arr).max(axis=0)
    scale[scale == 0] = 1.0
    arr = arr / scale
    dx = arr[:, 0] - arr[:, 0].mean()
    dy = arr[:, 1] - arr[:, 1].mean()
    var_x = float((dx * dx).sum())
    var_y = float((dy * dy).sum())
    if var_x == 0.0 or var_y == 0.0:
        return float("nan")

    r = float((dx * dy).sum()) / math.sqrt(var_x * var_y)
    # rounding can push |r| a hair past 1
    return max(-1.0, min(1.0, r))


def column_correlation(table: Table, a: str, b: str) -> float:
    """Correlation of two columns over the rows where both hold numbers."""
    return pearson(table.column(a), table.column(b))


def correlation_matrix(table: Table, columns: Optional[Sequence[str]] = None) -> CorrelationMatrix:
    cols = list(columns) if columns is not None else numeric_columns(table)
    for c in cols:
        table.require(c)
    if len(cols) < 2:
        raise InsufficientDataError("Need at least 2 numeric columns for correlation analysis.")

    values = [[0.0] * len(cols) for _ in cols]
    for i, a in enumerate(cols):
        for j in range(i, len(cols)):
            r = column_correlation(table, a, cols[j])
            values[i][j] = r
            values[j][i] = r
    return CorrelationMatrix(columns=cols, values=values)


def correlation_color(value: float) -> str:
    """CSS colour for a heat-map cell: red for positive, blue for negative."""
    if math.isnan(value):
        return "rgb(200, 200, 200)"
    intensity = round(abs(value) * 255)
    fade = round(200 - intensity * 0.5)
    if value > 0:
        return f"rgb({255 - intensity}, {fade}, {fade})"
    return f"rgb({fade}, {fade}, {255 - intensity})"


def plot_correlation_heatmap(matrix: CorrelationMatrix, out: Path) -> Path:
    import matplotlib.pyplot as plt

    n = len(matrix.columns)
    fig = plt.figure(figsize=(max(4, n * 0.8), max(3, n * 0.7)))
    ax = fig.add_subplot(111)
    im = ax.imshow(np.asarray(matrix.values, dtype="float64"), cmap="coolwarm", vmin=-1, vmax=1)
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(matrix.columns, rotation=45, ha="right")
    ax.set_yticklabels(matrix.columns)
    for i in range(n):
        for j in range(n):
            v = matrix.values[i][j]
            ax.text(j, i, "nan" if math.isnan(v) else f"{v:.2f}", ha="center", va="center", fontsize=8)
    fig.colorbar(im, ax=ax)
    ax.set_title("Correlation Matrix")
    save_matplotlib(fig, out)
    return out
