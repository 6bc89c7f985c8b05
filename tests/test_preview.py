from __future__ import annotations

from table_insights.preview import page, total_pages
from table_insights.table import Table


def _table(n: int) -> Table:
    return Table.from_records(["i", "v"], [{"i": i, "v": None if i % 2 else "x"} for i in range(n)])


def test_paging_and_clamping() -> None:
    t = _table(25)
    assert total_pages(t) == 3
    last = page(t, 2)
    assert len(last.rows) == 5
    assert page(t, 99).page == 2
    assert page(t, -3).page == 0


def test_missing_values_render_as_dash() -> None:
    p = page(_table(2))
    assert p.headers == ["i", "v"]
    assert p.rows == [["0", "x"], ["1", "-"]]


def test_empty_table_has_one_empty_page() -> None:
    p = page(_table(0))
    assert p.total_pages == 1
    assert p.rows == []
