"""
Dashboard-ready output functions.

These are the entry points a front end calls. The viewing principal's
permissions are passed in explicitly; each function returns plain dicts,
records, or DataFrames suitable for cards, charts, and tables.
"""

import logging

from .insights import compute_derived_metrics, generate_insights, week_over_week_changes
from .models import ParsedReport, SheetData, UserPermissions
from .transforms import build_weekly_trend

logger = logging.getLogger(__name__)


def filter_sheets_by_permission(
    report: ParsedReport,
    permissions: UserPermissions | None,
) -> list[SheetData]:
    """Sheets the principal may view, in report order.

    Admins see everything; users see only their allowed sheets; no
    permissions means no sheets.
    """
    if permissions is None:
        return []
    return [s for s in report.sheets if permissions.can_view(s.sheet_name)]


def get_available_sheets(
    report: ParsedReport,
    permissions: UserPermissions | None,
) -> list[str]:
    """Sheet names for UI dropdowns."""
    return [s.sheet_name for s in filter_sheets_by_permission(report, permissions)]


def get_sheet(report: ParsedReport, sheet_name: str) -> SheetData | None:
    for sheet in report.sheets:
        if sheet.sheet_name == sheet_name:
            return sheet
    return None


def get_sheet_overview(
    report: ParsedReport,
    sheet_name: str,
    permissions: UserPermissions | None,
) -> dict:
    """Single entry point to populate cards, trend charts, and insights.

    Raises
    ------
    KeyError if the sheet is not in the report.
    PermissionError if the principal may not view the sheet.

    Returns
    -------
    {
        "sheet_name": ...,
        "latest_week": WeekRecord | None,
        "previous_week": WeekRecord | None,
        "changes": week_over_week_changes(...),
        "metrics": compute_derived_metrics(...),
        "insights": [InsightFinding, ...],
        "trend": weekly trend DataFrame,
        "thirteen_week_average": WeekRecord | None,
        "ytd": WeekRecord | None,
    }
    """
    sheet = get_sheet(report, sheet_name)
    if sheet is None:
        raise KeyError(f"Sheet '{sheet_name}' not found in {report.file_name}")
    if permissions is None or not permissions.can_view(sheet_name):
        email = permissions.email if permissions is not None else "anonymous"
        logger.warning("Denied sheet '%s' to %s", sheet_name, email)
        raise PermissionError(f"Not permitted to view sheet '{sheet_name}'")

    return {
        "sheet_name": sheet.sheet_name,
        "latest_week": sheet.latest_week,
        "previous_week": sheet.previous_week,
        "changes": week_over_week_changes(sheet),
        "metrics": compute_derived_metrics(sheet),
        "insights": generate_insights(sheet),
        "trend": build_weekly_trend(sheet),
        "thirteen_week_average": sheet.thirteen_week_average,
        "ytd": sheet.ytd_data,
    }
