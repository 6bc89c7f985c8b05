from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from .table import Table, is_missing

logger = logging.getLogger(__name__)


def to_csv_text(table: Table, delimiter: str = ",") -> str:
    """Serialize a table back to delimited text.

    Fields holding the delimiter, a quote or a line break are quoted with
    embedded quotes doubled. Missing values are written as empty fields.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, quotechar='"', quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(table.headers)
    for row in table.rows:
        writer.writerow(["" if is_missing(row[h]) else row[h] for h in table.headers])
    return buf.getvalue()


def write_csv(table: Table, path: Path, delimiter: str = ",") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv_text(table, delimiter=delimiter), encoding="utf-8")
    logger.info("Exported %d rows to %s", len(table), path)
    return path
