"""
Loader for the 13 Week Report workbook.

Every sheet is one cost center or rollup and shares the same layout:
    Rows 9-21:  weekly rows, most recent first, column C = "Week N"
    Row 23:     13 Week Average (column C contains "13 Week Average")
    Row 24:     YTD (column C contains "YTD" or column B is exactly "YTD")
    Columns A-AU: identity, trend deltas, workforce, rates, revenue, fees
                  (see config.TEXT_COLUMNS / config.NUMERIC_COLUMNS)
"""

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Sequence

import openpyxl
import xlrd

from ..config import (
    NUMERIC_COLUMNS,
    PERIOD_TYPE_COL,
    TEXT_COLUMNS,
    THIRTEEN_WEEK_AVG_LABEL,
    THIRTEEN_WEEK_AVG_ROW,
    WEEK_LABEL_COL,
    WEEK_LABEL_PREFIX,
    WEEKLY_ROW_END,
    WEEKLY_ROW_START,
    YTD_LABEL,
    YTD_ROW,
)
from ..models import ParsedReport, SheetData, WeekRecord
from .utils import extract_week_number, safe_number, safe_text

logger = logging.getLogger(__name__)

Row = Sequence[Any]

# Compound File header of BIFF (.xls) workbooks
OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class ParseError(Exception):
    """Raised when workbook bytes cannot be decoded as a spreadsheet."""


# ---------------------------------------------------------------------------
# Workbook entry point
# ---------------------------------------------------------------------------

def extract_report(data: bytes, file_name: str) -> ParsedReport:
    """Extract every sheet of a 13 Week Report workbook.

    Parameters
    ----------
    data : Raw workbook bytes (.xlsx / .xlsm, or legacy .xls).
    file_name : Original upload name, used for the week-number label.

    Returns
    -------
    ParsedReport with one SheetData per workbook sheet, in workbook order.
    Sheets with an unexpected layout are kept with zero weekly records.

    Raises
    ------
    ParseError if the bytes are not a readable workbook.
    """
    try:
        if data[:len(OLE2_SIGNATURE)] == OLE2_SIGNATURE:
            grids = _read_xls_grids(data)
        else:
            grids = _read_xlsx_grids(data)
    except Exception as exc:
        logger.exception("Failed to open workbook: %s", file_name)
        raise ParseError(f"Could not read '{file_name}' as a spreadsheet") from exc

    sheets = [parse_sheet(sheet_name, grid) for sheet_name, grid in grids]

    report = ParsedReport(
        file_name=file_name,
        week_number=extract_week_number(file_name),
        upload_date=datetime.now(timezone.utc),
        sheets=sheets,
    )
    logger.info(
        "Extracted %d sheets (%d weekly rows) from %s",
        len(sheets),
        sum(len(s.weekly_data) for s in sheets),
        file_name,
    )
    return report


def _read_xlsx_grids(data: bytes) -> list[tuple[str, list[tuple]]]:
    wb = openpyxl.load_workbook(BytesIO(data), data_only=True)
    try:
        return [(name, _read_grid(wb[name])) for name in wb.sheetnames]
    finally:
        wb.close()


def _read_grid(ws) -> list[tuple]:
    """Read a worksheet as rows of raw values, starting at row 1."""
    if not hasattr(ws, "iter_rows"):
        # Chart sheets carry no cells
        return []
    return list(ws.iter_rows(min_row=1, values_only=True))


def _read_xls_grids(data: bytes) -> list[tuple[str, list[list]]]:
    """Read a legacy BIFF workbook into the same raw grids openpyxl yields.

    Empty cells become None, booleans stay bool and error cells carry their
    display text (e.g. "#DIV/0!"). Dates stay Excel serial numbers.
    """
    book = xlrd.open_workbook(file_contents=data)
    try:
        grids = []
        for sh in book.sheets():
            grid = [[_xls_value(cell) for cell in sh.row(rx)] for rx in range(sh.nrows)]
            grids.append((sh.name, grid))
        return grids
    finally:
        book.release_resources()


def _xls_value(cell) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value)
    return cell.value


# ---------------------------------------------------------------------------
# Row classification
# ---------------------------------------------------------------------------

def parse_sheet(sheet_name: str, grid: Sequence[Row]) -> SheetData:
    """Classify the rows of one sheet grid into weekly / average / YTD records.

    Grid rows are 0-based, so spreadsheet row N is grid[N - 1].
    """
    weekly_data = []
    for row_idx in range(WEEKLY_ROW_START - 1, WEEKLY_ROW_END):
        row = _row_at(grid, row_idx)
        if row is not None and is_weekly_row(row):
            weekly_data.append(parse_row(row))

    thirteen_week_average = None
    avg_row = _row_at(grid, THIRTEEN_WEEK_AVG_ROW - 1)
    if avg_row is not None and is_thirteen_week_average_row(avg_row):
        thirteen_week_average = parse_row(avg_row)

    ytd_data = None
    ytd_row = _row_at(grid, YTD_ROW - 1)
    if ytd_row is not None and is_ytd_row(ytd_row):
        ytd_data = parse_row(ytd_row)

    logger.debug(
        "Sheet '%s': %d weekly rows, 13wk avg=%s, ytd=%s",
        sheet_name,
        len(weekly_data),
        thirteen_week_average is not None,
        ytd_data is not None,
    )
    return SheetData(
        sheet_name=sheet_name,
        weekly_data=weekly_data,
        thirteen_week_average=thirteen_week_average,
        ytd_data=ytd_data,
    )


def is_weekly_row(row: Row) -> bool:
    return safe_text(_cell(row, WEEK_LABEL_COL)).startswith(WEEK_LABEL_PREFIX)


def is_thirteen_week_average_row(row: Row) -> bool:
    return THIRTEEN_WEEK_AVG_LABEL in safe_text(_cell(row, WEEK_LABEL_COL))


def is_ytd_row(row: Row) -> bool:
    return (
        YTD_LABEL in safe_text(_cell(row, WEEK_LABEL_COL))
        or _cell(row, PERIOD_TYPE_COL) == YTD_LABEL
    )


# ---------------------------------------------------------------------------
# Row decoding
# ---------------------------------------------------------------------------

def parse_row(row: Row) -> WeekRecord:
    """Decode one layout row into a WeekRecord. Never raises on bad cells."""
    values: dict[str, Any] = {}
    for name, col_idx in TEXT_COLUMNS.items():
        values[name] = safe_text(_cell(row, col_idx))
    for name, col_idx in NUMERIC_COLUMNS.items():
        values[name] = safe_number(_cell(row, col_idx))
    return WeekRecord(**values)


def _row_at(grid: Sequence[Row], row_idx: int) -> Row | None:
    if row_idx < len(grid):
        return grid[row_idx]
    return None


def _cell(row: Row, col_idx: int) -> Any:
    if col_idx < len(row):
        return row[col_idx]
    return None
