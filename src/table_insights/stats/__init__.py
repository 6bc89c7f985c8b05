"""Statistical routines. Each is a pure function of a Table and a column selection."""

from .boxplot import default_box_plot_columns, five_number_summary, grouped_five_number
from .correlation import column_correlation, correlation_color, correlation_matrix, pearson
from .frequency import ChartType, column_frequencies, top_values
from .histogram import column_histogram, histogram
from .summary import column_stats, missing_values, stats_details, summarize

__all__ = [
    "ChartType",
    "column_correlation",
    "column_frequencies",
    "column_histogram",
    "column_stats",
    "correlation_color",
    "correlation_matrix",
    "default_box_plot_columns",
    "five_number_summary",
    "grouped_five_number",
    "histogram",
    "missing_values",
    "pearson",
    "stats_details",
    "summarize",
    "top_values",
]
