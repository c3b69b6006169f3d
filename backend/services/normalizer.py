"""Workbook -> header list + field-keyed records.

Only the first sheet is read. Rows where every cell is blank are dropped
wherever they occur; the first surviving row is the header row. Records
are zipped positionally against the headers: short rows are padded with
"", cells past the last header are dropped. Duplicate headers are not
de-duplicated, so the right-most column wins for that key.
"""

import logging
import math
from datetime import date, datetime, time
from io import BytesIO
from typing import Any

import pandas as pd

from errors import ParseError

logger = logging.getLogger(__name__)


def cell_text(value: Any) -> str:
    """Render a parsed cell the way the sheet displays it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if value is pd.NaT:
        return ""
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _is_blank(text: str) -> bool:
    return not text.strip()


def _trim_trailing_blanks(row: list[str]) -> list[str]:
    end = len(row)
    while end and _is_blank(row[end - 1]):
        end -= 1
    return row[:end]


def read_first_sheet(raw: bytes) -> list[list[str]]:
    """Parse ``raw`` as a workbook and return sheet 0 as a grid of cell text."""
    try:
        with pd.ExcelFile(BytesIO(raw), engine="openpyxl") as xl:
            if not xl.sheet_names:
                raise ParseError("Workbook contains no sheets")
            df = xl.parse(0, header=None, dtype=object, keep_default_na=False)
    except ParseError:
        raise
    except Exception as e:
        logger.warning("Workbook parse failed: %s", e)
        raise ParseError(f"Failed to parse spreadsheet: {e}") from e

    # pandas pads every row to the widest one; trim back to each row's own extent
    return [_trim_trailing_blanks([cell_text(v) for v in row]) for row in df.itertuples(index=False)]


def rows_to_records(rows: list[list[Any]]) -> tuple[list[str], list[dict[str, str]]]:
    """Apply blank-row filtering, header selection and positional zipping."""
    grid = [[cell_text(v) for v in row] for row in rows]
    surviving = [row for row in grid if any(not _is_blank(c) for c in row)]
    if not surviving:
        raise ParseError("Sheet has no header row")

    headers = _trim_trailing_blanks(surviving[0])
    records = []
    for row in surviving[1:]:
        record = {}
        for i, header in enumerate(headers):
            value = row[i] if i < len(row) else ""
            record[header] = "" if _is_blank(value) else value
        records.append(record)
    return headers, records


def normalize(raw: bytes) -> tuple[list[str], list[dict[str, str]]]:
    headers, records = rows_to_records(read_first_sheet(raw))
    logger.debug("Normalized %d records across %d fields", len(records), len(headers))
    return headers, records
