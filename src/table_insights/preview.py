from __future__ import annotations

import math

from .models import PreviewPage
from .table import Table, is_missing

ROWS_PER_PAGE = 10


def total_pages(table: Table, rows_per_page: int = ROWS_PER_PAGE) -> int:
    return max(1, math.ceil(len(table) / rows_per_page))


def page(table: Table, index: int = 0, rows_per_page: int = ROWS_PER_PAGE) -> PreviewPage:
    """One page of rows formatted for display; index is clamped to the valid range."""
    pages = total_pages(table, rows_per_page)
    index = max(0, min(index, pages - 1))
    start = index * rows_per_page
    rows = [
        ["-" if is_missing(row[h]) else str(row[h]) for h in table.headers]
        for row in table.rows[start:start + rows_per_page]
    ]
    return PreviewPage(page=index, total_pages=pages, headers=list(table.headers), rows=rows)
