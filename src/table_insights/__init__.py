"""Descriptive statistics, correlation, distributions and a simulated training
panel over an immutable in-memory table."""

from .errors import ColumnNotFoundError, InsufficientDataError, TableInsightsError, TableParseError
from .ingest import load_table, parse_table
from .models import ColumnKind
from .table import Table, categorical_columns, classify_by_first_row, classify_column, numeric_columns

__version__ = "0.1.0"

__all__ = [
    "ColumnKind",
    "ColumnNotFoundError",
    "InsufficientDataError",
    "Table",
    "TableInsightsError",
    "TableParseError",
    "categorical_columns",
    "classify_by_first_row",
    "classify_column",
    "load_table",
    "numeric_columns",
    "parse_table",
]
