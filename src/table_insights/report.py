from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import Settings
from .errors import InsufficientDataError
from .models import ColumnKind
from .stats import boxplot, correlation, frequency, summary
from .stats.histogram import column_histogram, plot_histogram
from .stats._util import safe_filename
from .table import Table, numeric_columns
from .utils import new_id, now_iso, write_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutcome:
    """Paths written by build_report."""

    run_dir: Path
    summary_json: Path
    metrics_csv: Path
    plots: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _metric_rows(stats: list[Any]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for s in stats:
        for stat in ("count", "missing", "mean", "min", "max", "median", "unique"):
            v = getattr(s, stat)
            if v is None:
                continue
            value = f"{v:.6f}" if isinstance(v, float) else str(v)
            rows.append({"metric": s.column, "stat": stat, "value": value})
    return rows


def _write_metrics_csv(path: Path, rows: list[dict[str, str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["metric", "stat", "value"])
        writer.writeheader()
        writer.writerows(rows)


def build_report(
    table: Table,
    run_dir: Path,
    settings: Optional[Settings] = None,
    plots: bool = True,
) -> ReportOutcome:
    """Run every panel over the table and write summary.json, metrics.csv and plots/.

    Panels without enough data are listed under "skipped" instead of failing
    the report.
    """
    cfg = settings or Settings()
    plots_dir = run_dir / "plots"
    written: list[Path] = []
    skipped: list[str] = []

    stats = summary.summarize(table)
    payload: dict[str, Any] = {
        "report_id": new_id(),
        "created_at": now_iso(),
        "file_name": table.file_name,
        "rows": len(table),
        "columns": len(table.headers),
        "quartile_method": cfg.quartile_method.value,
        "statistics": [s.model_dump(mode="json") for s in stats],
        "missing_values": [m.model_dump(mode="json") for m in summary.missing_values(table)],
        "frequencies": {},
        "histograms": {},
    }

    for s in stats:
        if s.kind == ColumnKind.EMPTY:
            continue
        items = frequency.column_frequencies(table, s.column, n=cfg.top_n)
        payload["frequencies"][s.column] = [i.model_dump(mode="json") for i in items]

    for col in numeric_columns(table):
        hist = column_histogram(table, col, bins=cfg.histogram_bins)
        payload["histograms"][col] = [b.model_dump(mode="json") for b in hist]
        if plots and hist:
            out = plots_dir / (safe_filename(f"distribution_{col}_hist") + ".png")
            written.append(plot_histogram(hist, col, out))

    try:
        matrix = correlation.correlation_matrix(table)
        payload["correlation"] = matrix.model_dump(mode="json")
        if plots:
            written.append(correlation.plot_correlation_heatmap(matrix, plots_dir / "correlation_heatmap.png"))
    except InsufficientDataError as e:
        skipped.append(f"correlation: {e}")

    try:
        value_col, group_col = boxplot.default_box_plot_columns(table)
        groups = boxplot.grouped_five_number(table, value_col, group_col, method=cfg.quartile_method)
        payload["box_plot"] = {
            "value_column": value_col,
            "group_column": group_col,
            "groups": [g.model_dump(mode="json") for g in groups],
        }
        if plots and groups:
            out = plots_dir / (safe_filename(f"boxplot_{value_col}_by_{group_col}") + ".png")
            written.append(boxplot.plot_box_summaries(groups, value_col, group_col, out))
    except InsufficientDataError as e:
        skipped.append(f"box_plot: {e}")

    payload["skipped"] = skipped
    summary_json = run_dir / "summary.json"
    metrics_csv = run_dir / "metrics.csv"
    write_json(summary_json, payload)
    _write_metrics_csv(metrics_csv, _metric_rows(stats))
    logger.info("Report written to %s (%d plots, %d panels skipped).", run_dir, len(written), len(skipped))

    return ReportOutcome(
        run_dir=run_dir,
        summary_json=summary_json,
        metrics_csv=metrics_csv,
        plots=written,
        skipped=skipped,
    )
