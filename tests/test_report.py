from __future__ import annotations

import csv
from pathlib import Path

from table_insights.ingest import load_table
from table_insights.report import build_report
from table_insights.table import Table
from table_insights.utils import read_json


def test_report_writes_summary_metrics_and_plots(mixed_csv: Path, tmp_path: Path) -> None:
    table = load_table(mixed_csv)
    outcome = build_report(table, tmp_path / "run")

    summary = read_json(outcome.summary_json)
    assert summary["rows"] == 4
    assert summary["columns"] == 5
    assert [s["column"] for s in summary["statistics"]] == list(table.headers)
    assert set(summary["histograms"]) == {"age", "score"}
    assert summary["correlation"]["columns"] == ["age", "score"]
    assert summary["box_plot"]["value_column"] == "age"
    assert summary["box_plot"]["group_column"] == "name"
    assert summary["skipped"] == []

    with outcome.metrics_csv.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert {"metric": "age", "stat": "missing", "value": "1"} in rows

    assert outcome.plots
    assert all(p.exists() for p in outcome.plots)


def test_report_lists_skipped_panels(tmp_path: Path) -> None:
    table = Table.from_records(["only"], [{"only": "a"}, {"only": "b"}])
    outcome = build_report(table, tmp_path / "run", plots=False)
    summary = read_json(outcome.summary_json)
    assert len(summary["skipped"]) == 2
    assert outcome.plots == []
    assert not (tmp_path / "run" / "plots").exists()
