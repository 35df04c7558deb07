from __future__ import annotations

import io
import logging
import math
import warnings
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from ..errors import FormatError, ParseError

logger = logging.getLogger(__name__)

RawRow = Dict[str, Any]

CSV = "csv"
SPREADSHEET = "spreadsheet"

_EXTENSIONS: dict[str, str] = {
    ".csv": CSV,
    ".xlsx": SPREADSHEET,
    ".xls": SPREADSHEET,
}


def detect_format(filename: str) -> str:
    """
    Map a file name to its format tag by extension (case-insensitive).

    Raises FormatError for anything other than .csv, .xlsx or .xls, before any
    bytes are looked at.
    """
    suffix = PurePath(filename).suffix.lower()
    fmt = _EXTENSIONS.get(suffix)
    if fmt is None:
        raise FormatError(f"Unsupported file format: {filename!r} (expected .csv, .xlsx or .xls)")
    return fmt


def read_table(data: bytes, fmt: str) -> List[RawRow]:
    """
    Parse raw file bytes into header -> value rows, in source order.
    """
    if fmt == CSV:
        return _read_csv(data)
    if fmt == SPREADSHEET:
        return _read_spreadsheet(data)
    raise FormatError(f"Unsupported format tag: {fmt!r}")


def _read_csv(data: bytes) -> List[RawRow]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("CSV is not valid UTF-8: %s", e)
        raise ParseError(f"Failed to decode CSV as UTF-8: {e}") from e

    try:
        # Every cell stays text; numeric interpretation happens in one place
        # (profile.coerce) rather than in the parser. index_col=False keeps the
        # header aligned when a row is wider than it: extra trailing fields are
        # dropped and short rows are padded with None.
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                engine="python",
                dtype=object,
                index_col=False,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
            )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, ValueError) as e:
        logger.warning("CSV parse failed: %s", e)
        raise ParseError(f"Failed to parse CSV file: {e}") from e

    for w in caught:
        if issubclass(w.category, pd.errors.ParserWarning):
            logger.warning("CSV rows wider than the header were truncated: %s", w.message)
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

    return _frame_to_rows(df)


def _read_spreadsheet(data: bytes) -> List[RawRow]:
    try:
        workbook = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:  # noqa: BLE001 - engines raise assorted zip/xml/OLE errors
        logger.warning("Workbook could not be opened: %s", e)
        raise ParseError(f"Failed to parse spreadsheet: {e}") from e

    try:
        if not workbook.sheet_names:
            raise ParseError("Spreadsheet has no sheets.")

        first = workbook.sheet_names[0]
        try:
            df = workbook.parse(sheet_name=first, dtype=object)
        except Exception as e:  # noqa: BLE001
            logger.warning("Sheet %r could not be read: %s", first, e)
            raise ParseError(f"Failed to read sheet {first!r}: {e}") from e
    finally:
        workbook.close()

    logger.info("Using sheet %r with %d rows", first, len(df))
    return _frame_to_rows(df)


def _frame_to_rows(df: pd.DataFrame) -> List[RawRow]:
    headers = [str(c) for c in df.columns]
    rows: List[RawRow] = []
    for record in df.itertuples(index=False, name=None):
        rows.append({h: _to_scalar(v) for h, v in zip(headers, record)})
    return rows


def _to_scalar(value: Any) -> Any:
    """
    Convert a cell to a plain JSON-friendly Python scalar.

    NaN/NaT become None; numpy scalars become Python numbers; date and time
    cells become ISO-8601 strings.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value
