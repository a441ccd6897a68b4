"""
Data transforms: flatten extracted reports into pandas frames for charts,
tables, and upload metadata.
"""

import logging

import pandas as pd

from .config import TREND_WINDOW
from .models import ParsedReport, SheetData, WeekRecord

logger = logging.getLogger(__name__)

_TREND_COLUMNS = ["week", "revenue", "gross_profit", "aoa", "gp_percent"]
_SUMMARY_COLUMNS = ["sheet_name", "week_count", "has_ytd", "has_13_week_avg"]


def build_weekly_trend(sheet: SheetData, n_weeks: int = TREND_WINDOW) -> pd.DataFrame:
    """Chronological trend frame for the most recent n_weeks of a sheet.

    Weekly rows arrive most-recent-first, so the slice is reversed to put the
    oldest week on the left of a chart.

    Returns
    -------
    DataFrame with columns:
        week ("W12"), revenue, gross_profit, aoa, gp_percent (GP% x 100)
    """
    rows = []
    for record in reversed(sheet.weekly_data[:n_weeks]):
        rows.append({
            "week": record.week.replace("Week ", "W"),
            "revenue": record.total_sales,
            "gross_profit": record.gross_profit,
            "aoa": record.associates_on_assignment,
            "gp_percent": record.gross_profit_percent * 100,
        })

    if not rows:
        return pd.DataFrame(columns=_TREND_COLUMNS)
    return pd.DataFrame(rows, columns=_TREND_COLUMNS)


def build_fact_weekly(report: ParsedReport) -> pd.DataFrame:
    """Long fact table: one row per weekly record per sheet.

    Returns
    -------
    fact_weekly DataFrame with columns:
        week_number, sheet_name, position (0 = latest), then every
        WeekRecord field
    """
    rows = []
    for sheet in report.sheets:
        for position, record in enumerate(sheet.weekly_data):
            row = {
                "week_number": report.week_number,
                "sheet_name": sheet.sheet_name,
                "position": position,
            }
            row.update(record.to_dict())
            rows.append(row)

    if not rows:
        columns = ["week_number", "sheet_name", "position"] + list(WeekRecord().to_dict())
        logger.warning("No weekly rows in %s. Returning empty fact_weekly.", report.file_name)
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    logger.info("Built fact_weekly with %d rows", len(df))
    return df


def build_sheet_summary(report: ParsedReport) -> pd.DataFrame:
    """Per-sheet upload metadata stored alongside the parsed report.

    Returns
    -------
    DataFrame with columns: sheet_name, week_count, has_ytd, has_13_week_avg
    """
    rows = [
        {
            "sheet_name": sheet.sheet_name,
            "week_count": len(sheet.weekly_data),
            "has_ytd": sheet.ytd_data is not None,
            "has_13_week_avg": sheet.thirteen_week_average is not None,
        }
        for sheet in report.sheets
    ]
    return pd.DataFrame(rows, columns=_SUMMARY_COLUMNS)


def build_period_comparison(sheet: SheetData) -> pd.DataFrame:
    """Latest week beside the 13-week average and YTD records.

    Returns
    -------
    DataFrame indexed by metric with columns: latest, thirteen_week_average, ytd.
    Missing records show as NaN.
    """
    metrics = [
        "associates_on_assignment",
        "customers_billed",
        "total_sales",
        "gross_profit",
        "gross_profit_percent",
        "bill_rate_per_hour",
        "avg_hourly_pay_rate",
        "hours_billed",
    ]
    sources = {
        "latest": sheet.latest_week,
        "thirteen_week_average": sheet.thirteen_week_average,
        "ytd": sheet.ytd_data,
    }
    data = {
        label: [getattr(record, m) if record is not None else None for m in metrics]
        for label, record in sources.items()
    }
    df = pd.DataFrame(data, index=pd.Index(metrics, name="metric"), dtype="float64")
    return df
