from __future__ import annotations


class TableInsightsError(Exception):
    """Base class for errors raised by table_insights."""


class TableParseError(TableInsightsError, ValueError):
    """Raised when an input file cannot be turned into a table."""


class ColumnNotFoundError(TableInsightsError, KeyError):
    """Raised when a column name is not one of the table headers."""

    def __init__(self, column: str, headers: list[str] | None = None) -> None:
        self.column = column
        self.headers = list(headers or [])
        super().__init__(column)

    def __str__(self) -> str:
        if self.headers:
            return f"Unknown column '{self.column}'. Available: {self.headers}"
        return f"Unknown column '{self.column}'."


class InsufficientDataError(TableInsightsError, ValueError):
    """Raised when a panel has no qualifying columns or values to work with."""
