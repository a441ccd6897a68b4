from io import BytesIO

import openpyxl
import pytest
import xlwt

from weekly_report_analytics.config import NUMERIC_COLUMNS, TEXT_COLUMNS
from weekly_report_analytics.models import SheetData, WeekRecord


def layout_row(**values) -> dict[int, object]:
    """Map WeekRecord field names to 0-based layout columns."""
    row = {}
    for name, value in values.items():
        if name in TEXT_COLUMNS:
            row[TEXT_COLUMNS[name]] = value
        else:
            row[NUMERIC_COLUMNS[name]] = value
    return row


def make_workbook(sheets: dict[str, dict[int, dict[int, object]]]) -> bytes:
    """Build workbook bytes from {sheet: {1-based row: {0-based col: value}}}."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row_num, cells in rows.items():
            for col_idx, value in cells.items():
                ws.cell(row=row_num, column=col_idx + 1, value=value)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_xls_workbook(sheets: dict[str, dict[int, dict[int, object]]]) -> bytes:
    """Same as make_workbook, written as a legacy BIFF .xls file."""
    wb = xlwt.Workbook()
    for name, rows in sheets.items():
        ws = wb.add_sheet(name)
        for row_num, cells in rows.items():
            for col_idx, value in cells.items():
                ws.write(row_num - 1, col_idx, value)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_sheet(*weeks: WeekRecord, average: WeekRecord | None = None) -> SheetData:
    return SheetData(sheet_name="Des Moines", weekly_data=list(weeks), thirteen_week_average=average)


def standard_sheets() -> dict[str, dict[int, dict[int, object]]]:
    """Two sheets: a populated branch and a cover sheet with no weekly rows."""
    branch = {
        8: {2: "Week"},
        9: layout_row(fiscal_year=2026, period_type="Weekly", week="Week 37", status="Final",
                      associates_on_assignment=420, total_sales=140000, gross_profit_percent=0.357,
                      revenue_change_prior_year=0.12, full_time_equivalent=8),
        10: layout_row(fiscal_year=2026, period_type="Weekly", week="Week 36", status="Final",
                       associates_on_assignment=410, total_sales=100000, gross_profit_percent=0.30),
        11: layout_row(week="Week 35", total_sales=98000),
        23: layout_row(period_type="Average", week="13 Week Average", total_sales=110000,
                       gross_profit_percent=0.32),
        24: layout_row(period_type="YTD", week="YTD Total", total_sales=3_800_000),
    }
    cover = {1: {0: "Midstates 13 Week Report"}, 3: {2: "Prepared weekly"}}
    return {"Des Moines": branch, "Cover": cover}


@pytest.fixture
def standard_workbook() -> bytes:
    return make_workbook(standard_sheets())
