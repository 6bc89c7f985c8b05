from __future__ import annotations

import json
import random
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import pandas as pd
import typer

from . import preview as preview_mod
from .config import QuartileMethod, configure_logging, load_settings
from .errors import ColumnNotFoundError, InsufficientDataError, TableInsightsError, TableParseError
from .export import write_csv
from .ingest import load_table
from .models import TrainingTask
from .report import build_report
from .stats import boxplot, correlation, frequency, summary
from .stats.histogram import column_histogram, plot_histogram
from .table import Table, numeric_columns
from .training import SimulatedTrainer, eligible_targets

app = typer.Typer(add_completion=False, help="Table Insights: descriptive statistics for delimited text files")

DATA_ARG = typer.Argument(..., exists=True, dir_okay=False, help="Path to a CSV/TSV file")
DELIMITER_OPT = typer.Option(None, "--delimiter", help="Field delimiter (default: tab for .tsv, comma otherwise)")
JSON_OPT = typer.Option(False, "--json", help="Print machine-readable JSON")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level")) -> None:
    settings = load_settings()
    if verbose:
        settings.log_level = "INFO"
    configure_logging(settings)


@contextmanager
def _cli_errors() -> Iterator[None]:
    """Map library errors to an ERROR line and an exit code."""
    try:
        yield
    except (TableParseError, ColumnNotFoundError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2)
    except InsufficientDataError as e:
        typer.echo(f"Not enough data: {e}", err=True)
        raise typer.Exit(code=1)
    except TableInsightsError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, sort_keys=True))


def _echo_frame(rows: list[dict[str, Any]]) -> None:
    typer.echo(pd.DataFrame(rows).to_string(index=False))


def _first_numeric(table: Table, message: str) -> str:
    cols = numeric_columns(table)
    if not cols:
        raise InsufficientDataError(message)
    return cols[0]


@app.command()
def preview(
    data: Path = DATA_ARG,
    page: int = typer.Option(1, "--page", help="1-based page number (10 rows per page)"),
    delimiter: Optional[str] = DELIMITER_OPT,
):
    """
    Show one page of rows. Missing values are shown as '-'.
    """
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        p = preview_mod.page(table, page - 1)
        typer.echo(f"{table.file_name}: {len(table)} rows x {len(table.headers)} columns")
        typer.echo(pd.DataFrame(p.rows, columns=p.headers).to_string(index=False))
        typer.echo(f"Page {p.page + 1} of {p.total_pages}")


@app.command()
def stats(data: Path = DATA_ARG, delimiter: Optional[str] = DELIMITER_OPT, as_json: bool = JSON_OPT):
    """
    Summary statistics per column: type, count, missing, and either
    mean/min/max/median (numeric) or the number of unique values.
    """
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        result = summary.summarize(table)
        if as_json:
            _echo_json([s.model_dump(mode="json") for s in result])
            return
        rows = []
        for s in result:
            rows.append({"column": s.column, "type": s.kind.value, "count": s.count, "missing": s.missing, "details": summary.stats_details(s)})
        _echo_frame(rows)


@app.command()
def missing(data: Path = DATA_ARG, delimiter: Optional[str] = DELIMITER_OPT, as_json: bool = JSON_OPT):
    """
    Missing value count and percentage per column.
    """
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        result = summary.missing_values(table)
        if as_json:
            _echo_json([m.model_dump(mode="json") for m in result])
            return
        _echo_frame([{"column": m.column, "missing": m.missing, "percentage": f"{m.percentage:.1f}%"} for m in result])


@app.command("frequency")
def frequency_cmd(
    data: Path = DATA_ARG,
    column: Optional[str] = typer.Option(None, "--column", help="Column to count (default: first numeric column)"),
    top: Optional[int] = typer.Option(None, "--top", min=1, help="Number of values to keep (default: TABLE_INSIGHTS_TOP_N)"),
    chart: frequency.ChartType = typer.Option(frequency.ChartType.BAR, "--chart", case_sensitive=False, help="bar|line|pie"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a chart PNG to this path"),
    delimiter: Optional[str] = DELIMITER_OPT,
    as_json: bool = JSON_OPT,
):
    """
    Most frequent values of a column, highest count first.
    """
    settings = load_settings()
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        col = column or _first_numeric(table, "No numeric columns found for visualization.")
        items = frequency.column_frequencies(table, col, n=top or settings.top_n)
        if not items:
            raise InsufficientDataError(f"Column '{col}' has no values.")
        if as_json:
            _echo_json([i.model_dump(mode="json") for i in items])
        else:
            _echo_frame([{"value": i.name, "count": i.count} for i in items])
        if plot:
            frequency.plot_frequencies(items, col, plot, chart=chart)
            typer.echo(f"Plot: {plot}")


@app.command("histogram")
def histogram_cmd(
    data: Path = DATA_ARG,
    column: Optional[str] = typer.Option(None, "--column", help="Numeric column (default: first numeric column)"),
    bins: Optional[int] = typer.Option(None, "--bins", min=1, help="Number of bins (default: TABLE_INSIGHTS_HISTOGRAM_BINS)"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a chart PNG to this path"),
    delimiter: Optional[str] = DELIMITER_OPT,
    as_json: bool = JSON_OPT,
):
    """
    Equal-width histogram of a numeric column.
    """
    settings = load_settings()
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        col = column or _first_numeric(table, "No numeric columns found for distribution analysis.")
        hist = column_histogram(table, col, bins=bins or settings.histogram_bins)
        if not hist:
            raise InsufficientDataError(f"Column '{col}' has no numeric values.")
        if as_json:
            _echo_json([b.model_dump(mode="json") for b in hist])
        else:
            _echo_frame([{"range": b.label, "count": b.count} for b in hist])
        if plot:
            plot_histogram(hist, col, plot)
            typer.echo(f"Plot: {plot}")


@app.command("boxplot")
def boxplot_cmd(
    data: Path = DATA_ARG,
    value: Optional[str] = typer.Option(None, "--value", help="Numeric column (default: first numeric column)"),
    by: Optional[str] = typer.Option(None, "--by", help="Categorical column (default: first categorical column)"),
    method: Optional[QuartileMethod] = typer.Option(None, "--method", case_sensitive=False, help="lower|nearest_index|linear"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a chart PNG to this path"),
    delimiter: Optional[str] = DELIMITER_OPT,
    as_json: bool = JSON_OPT,
):
    """
    Five-number summary (min, Q1, median, Q3, max) of a numeric column per category.
    """
    settings = load_settings()
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        if value is None or by is None:
            default_value, default_by = boxplot.default_box_plot_columns(table)
            value = value or default_value
            by = by or default_by
        groups = boxplot.grouped_five_number(table, value, by, method=method or settings.quartile_method)
        if not groups:
            raise InsufficientDataError(f"No rows hold both a number in '{value}' and a value in '{by}'.")
        if as_json:
            _echo_json([g.model_dump(mode="json") for g in groups])
        else:
            _echo_frame([g.model_dump() for g in groups])
        if plot:
            boxplot.plot_box_summaries(groups, value, by, plot)
            typer.echo(f"Plot: {plot}")


@app.command("correlation")
def correlation_cmd(
    data: Path = DATA_ARG,
    column: list[str] = typer.Option([], "--column", help="Numeric column to include (repeatable; default: all numeric)"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a heat-map PNG to this path"),
    delimiter: Optional[str] = DELIMITER_OPT,
    as_json: bool = JSON_OPT,
):
    """
    Pearson correlation matrix over numeric columns.
    """
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        matrix = correlation.correlation_matrix(table, column or None)
        if as_json:
            _echo_json(matrix.model_dump(mode="json"))
        else:
            frame = pd.DataFrame(matrix.values, index=matrix.columns, columns=matrix.columns)
            typer.echo(frame.to_string(float_format=lambda v: f"{v:.2f}"))
        if plot:
            correlation.plot_correlation_heatmap(matrix, plot)
            typer.echo(f"Plot: {plot}")


@app.command()
def train(
    data: Path = DATA_ARG,
    target: Optional[str] = typer.Option(None, "--target", help="Target column (default: first eligible target)"),
    task: TrainingTask = typer.Option(TrainingTask.CLASSIFICATION, "--task", case_sensitive=False),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible simulated scores"),
    delay: Optional[float] = typer.Option(None, "--delay", min=0.0, help="Seconds to wait (default: TABLE_INSIGHTS_TRAINING_DELAY)"),
    delimiter: Optional[str] = DELIMITER_OPT,
    as_json: bool = JSON_OPT,
):
    """
    Simulated model training. Scores are random draws, not a fitted model.
    """
    settings = load_settings()
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        if target is None:
            targets = eligible_targets(table)
            if not targets:
                raise InsufficientDataError(
                    "No suitable categorical columns found for classification. "
                    "Target column should have fewer than 20 unique values."
                )
            target = targets[0]
        trainer = SimulatedTrainer(
            rng=random.Random(seed),
            delay=settings.training_delay if delay is None else delay,
        )
        result = trainer.train(table, target, task)
        if as_json:
            _echo_json(result.model_dump(mode="json"))
            return
        if result.accuracy is not None:
            typer.echo(f"Accuracy: {result.accuracy * 100:.1f}%")
        if result.r2 is not None:
            typer.echo(f"R2: {result.r2:.3f}  MSE: {result.mse:.4f}")
        typer.echo(f"Simulated {result.task.value} on {result.samples} samples (target={result.target})")
        if result.feature_importance:
            typer.echo("Feature importance:")
            _echo_frame([f.model_dump() for f in result.feature_importance])


@app.command()
def export(
    data: Path = DATA_ARG,
    out: Path = typer.Option(..., "--out", help="Destination CSV path"),
    delimiter: Optional[str] = DELIMITER_OPT,
    out_delimiter: str = typer.Option(",", "--out-delimiter", help="Delimiter for the written file"),
):
    """
    Re-serialize the table to delimited text with minimal quoting.
    """
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        write_csv(table, out, delimiter=out_delimiter)
        typer.echo(f"Exported {len(table)} rows to {out}")


@app.command()
def report(
    data: Path = DATA_ARG,
    out: Path = typer.Option(..., "--out", help="Directory for summary.json, metrics.csv and plots/"),
    plots: str = typer.Option("on", "--plots", help="on|off"),
    delimiter: Optional[str] = DELIMITER_OPT,
):
    """
    Run every panel and write the results to a folder.
    """
    settings = load_settings()
    with _cli_errors():
        table = load_table(data, delimiter=delimiter)
        outcome = build_report(table, out, settings=settings, plots=plots.strip().lower() == "on")
        typer.echo("Report complete.")
        typer.echo(f"Summary: {outcome.summary_json}")
        typer.echo(f"Metrics: {outcome.metrics_csv}")
        if outcome.plots:
            typer.echo(f"Plots: {len(outcome.plots)} in {out / 'plots'}")
        for s in outcome.skipped:
            typer.echo(f"Skipped {s}")
