"""Spreadsheet extraction for .xlsx (openpyxl) and .xls (xlrd) workbooks.

Only the first sheet, in the workbook's declared order, is read. Its used
range is flattened to comma-separated text: one line per row, cells joined
with commas, quoting only where a value holds a comma, a quote or a newline.
"""

import datetime as dt
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException

from src.exceptions import ExtractionError

logger = logging.getLogger(__name__)

_NEEDS_QUOTING = (",", '"', "\n", "\r")


def format_cell(value: Any) -> str:
    """Render a single cell value as CSV field text (unquoted)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dt.datetime):
        # Date-only cells come back as midnight datetimes
        if value.time() == dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    return str(value)


def _quote(field: str) -> str:
    if any(ch in field for ch in _NEEDS_QUOTING):
        return '"' + field.replace('"', '""') + '"'
    return field


def rows_to_csv(rows: Iterable[Sequence[Any]]) -> str:
    """Flatten rows of cell values into comma-separated text.

    Args:
        rows: Row-major cell values.

    Returns:
        Rows joined by newlines, without a trailing newline.
    """
    return "\n".join(",".join(_quote(format_cell(v)) for v in row) for row in rows)


def _read_xlsx_rows(path: Path) -> list[tuple[Any, ...]]:
    # openpyxl rejects paths without an .xlsx suffix, so hand it a file object
    with path.open("rb") as fh:
        workbook = openpyxl.load_workbook(fh, data_only=True)
    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        logger.debug(f"Reading sheet '{sheet.title}' ({sheet.dimensions})")
        return list(
            sheet.iter_rows(
                min_row=sheet.min_row,
                max_row=sheet.max_row,
                min_col=sheet.min_column,
                max_col=sheet.max_column,
                values_only=True,
            )
        )
    finally:
        workbook.close()


def _xls_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    return cell.value


def _read_xls_rows(path: Path) -> list[list[Any]]:
    book = xlrd.open_workbook(str(path))
    if book.nsheets == 0:
        return []
    sheet = book.sheet_by_index(0)
    logger.debug(f"Reading sheet '{sheet.name}' ({sheet.nrows}x{sheet.ncols})")
    return [
        [_xls_cell_value(cell, book.datemode) for cell in sheet.row(r)]
        for r in range(sheet.nrows)
    ]


def extract_spreadsheet_csv(path: Path, extension: str) -> str:
    """Extract the first sheet of a workbook as comma-separated text.

    Args:
        path: Location of the workbook.
        extension: ".xlsx" or ".xls", selecting the reader.

    Returns:
        The CSV rendering of the first sheet.

    Raises:
        ExtractionError: If the workbook cannot be read or the sheet is empty.
    """
    try:
        if extension == ".xls":
            rows = _read_xls_rows(path)
        else:
            rows = _read_xlsx_rows(path)
    except (InvalidFileException, xlrd.XLRDError) as e:
        raise ExtractionError(f"Corrupt or invalid spreadsheet: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read spreadsheet: {e}") from e

    if not any(format_cell(v) for row in rows for v in row):
        raise ExtractionError("No data found in spreadsheet")

    return rows_to_csv(rows)
