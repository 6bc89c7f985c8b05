from __future__ import annotations

import csv
import io
import logging
import warnings
from pathlib import Path
from typing import Optional

import pandas as pd

from .errors import TableParseError
from .table import Table

logger = logging.getLogger(__name__)


def _default_delimiter(file_name: str) -> str:
    return "\t" if file_name.lower().endswith((".tsv", ".tab")) else ","


def _type_mixed_cells(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-cell dynamic typing for text columns.

    pandas types whole columns, so a column holding "1", "2", "x" stays text.
    Cells that read as numbers are turned into numbers individually; the rest
    stay strings. Booleans are kept as their text spelling, also when the
    column has gaps.
    """
    df = df.copy()
    for c in df.columns:
        s = df[c]
        if pd.api.types.is_bool_dtype(s):
            df[c] = s.astype(str)
            continue
        if s.dtype != object:
            continue
        # a bool column with gaps arrives as object dtype
        s = s.map(lambda v: str(v) if isinstance(v, bool) else v)
        df[c] = s
        nums = pd.to_numeric(s, errors="coerce")
        mask = nums.notna() & s.notna()
        if mask.any() and not mask.all():
            logger.debug("Column %r mixes numbers and text; typing cells individually.", c)
        if mask.any():
            cells = [n if m else v for v, n, m in zip(s, nums, mask)]
            df[c] = pd.Series(cells, index=s.index, dtype=object)
    return df


def parse_table(text: str, file_name: str = "", delimiter: Optional[str] = None) -> Table:
    """
    Parse delimited text (header row first) into a Table.

    Blank lines are skipped, empty fields become None, and numeric-looking
    cells become numbers. Raises TableParseError when nothing usable is found.
    """
    sep = delimiter or _default_delimiter(file_name)
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            # rows longer than the header keep their leading fields
            df = pd.read_csv(
                io.StringIO(text), sep=sep, skip_blank_lines=True, quoting=csv.QUOTE_MINIMAL, index_col=False
            )
    except pd.errors.EmptyDataError as e:
        raise TableParseError(f"{file_name or 'input'} is empty.") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise TableParseError(f"Could not parse {file_name or 'input'}: {e}") from e

    for w in caught:
        logger.warning("%s: %s", file_name or "input", w.message)

    if df.shape[0] == 0:
        raise TableParseError(f"{file_name or 'input'} has a header row but no data rows.")

    table = Table.from_dataframe(_type_mixed_cells(df), file_name=file_name)
    logger.info("Loaded %s: %d rows x %d columns", file_name or "input", *table.shape)
    return table


def load_table(path: Path, delimiter: Optional[str] = None) -> Table:
    if not path.exists():
        raise TableParseError(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise TableParseError(f"{path.name} is not UTF-8 text: {e}") from e
    return parse_table(text, file_name=path.name, delimiter=delimiter)
