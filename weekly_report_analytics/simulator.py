"""
Simulated data generator for the 13 Week Report.

Writes a workbook in the real report layout so the extractor, insight engine,
and dashboard can be exercised without production files. All values are
synthetic.
"""

from io import BytesIO

import numpy as np
import openpyxl

from .config import (
    NUMERIC_COLUMNS,
    TEXT_COLUMNS,
    THIRTEEN_WEEK_AVG_LABEL,
    THIRTEEN_WEEK_AVG_ROW,
    WEEKLY_ROW_END,
    WEEKLY_ROW_START,
    YTD_LABEL,
    YTD_ROW,
)
from .models import WeekRecord

# ---------------------------------------------------------------------------
# Typical branch parameters (realistic ranges)
# ---------------------------------------------------------------------------
_BRANCH_PARAMS = {
    "associates_on_assignment": {"base": 420, "std": 18},
    "customers_billed": {"base": 65, "std": 4},
    "avg_hourly_pay_rate": {"base": 18.5, "std": 0.4},
    "hours_per_associate": {"base": 34.0, "std": 1.5},
    "markup_percent": {"base": 0.42, "std": 0.015},
    "fees_revenue": {"base": 6_500, "std": 2_000},
    "full_time_equivalent": {"base": 9.0, "std": 0.0},
}

DEFAULT_SHEETS = ["Midstates Total", "Des Moines", "Cedar Rapids", "Omaha"]


def generate_week_records(
    n_weeks: int = 13,
    last_week: int = 37,
    fiscal_year: str = "FY2026",
    scale: float = 1.0,
    seed: int = 42,
) -> list[WeekRecord]:
    """Generate n_weeks of consistent weekly records, most recent first."""
    rng = np.random.default_rng(seed)
    p = _BRANCH_PARAMS
    records = []

    for i in range(n_weeks):
        aoa = float(round(max(
            p["associates_on_assignment"]["base"] * scale
            + rng.normal(0, p["associates_on_assignment"]["std"]),
            1,
        )))
        customers = float(round(max(
            p["customers_billed"]["base"] * scale + rng.normal(0, p["customers_billed"]["std"]),
            1,
        )))
        pay_rate = round(p["avg_hourly_pay_rate"]["base"] + rng.normal(0, p["avg_hourly_pay_rate"]["std"]), 2)
        markup = round(p["markup_percent"]["base"] + rng.normal(0, p["markup_percent"]["std"]), 4)
        bill_rate = round(pay_rate * (1 + markup), 2)
        hours_per = round(p["hours_per_associate"]["base"] + rng.normal(0, p["hours_per_associate"]["std"]), 1)
        hours = round(aoa * hours_per, 1)
        wages = round(hours * pay_rate, 2)
        billing = round(hours * bill_rate, 2)
        assoc_gp = round(billing - wages, 2)
        fees = round(max(p["fees_revenue"]["base"] * scale + rng.normal(0, p["fees_revenue"]["std"]), 0), 2)
        total_sales = round(billing + fees, 2)
        gross_profit = round(assoc_gp + fees, 2)
        fte = p["full_time_equivalent"]["base"] * scale

        records.append(WeekRecord(
            fiscal_year=fiscal_year,
            period_type="Weekly",
            week=f"Week {last_week - i}",
            status="Final",
            aoa_change_prior_year=round(rng.normal(0.03, 0.05), 4),
            customer_change_prior_year=round(rng.normal(0.02, 0.04), 4),
            revenue_change_prior_year=round(rng.normal(0.04, 0.06), 4),
            gp_change_prior_year=round(rng.normal(0.03, 0.06), 4),
            associates_on_assignment=aoa,
            customers_billed=customers,
            markup_percent=markup,
            avg_hourly_pay_rate=pay_rate,
            bill_rate_per_hour=bill_rate,
            profit_per_hour=round(bill_rate - pay_rate, 2),
            hours_per_associate=hours_per,
            associate_billing=billing,
            associate_gross_profit=assoc_gp,
            associate_gross_profit_percent=round(assoc_gp / billing, 4),
            fees_revenue=fees,
            total_sales=total_sales,
            gross_profit=gross_profit,
            gross_profit_percent=round(gross_profit / total_sales, 4),
            full_time_equivalent=fte,
            staff_excluding_bdm=fte - 1,
            associate_gp_per_fte=round(assoc_gp / fte, 2),
            aoas_per_fte=round(aoa / fte, 2),
            hours_billed=hours,
            revenue_per_client=round(total_sales / customers, 2),
            associate_wages=wages,
            conversion_fees=round(fees * 0.5, 2),
            permanent_placement_fees=round(fees * 0.3, 2),
            quick_hire=round(fees * 0.2, 2),
        ))

    # Prior-week deltas, comparing each week with the one after it in the list
    for current, prior in zip(records, records[1:]):
        current.aoa_change_prior_week = current.associates_on_assignment - prior.associates_on_assignment
        current.customer_change_prior_week = current.customers_billed - prior.customers_billed
        current.revenue_change_prior_week = round(
            (current.total_sales - prior.total_sales) / prior.total_sales, 4
        )
        current.gp_change_prior_week = round(
            (current.gross_profit - prior.gross_profit) / prior.gross_profit, 4
        )

    return records


def average_record(records: list[WeekRecord], label: str = THIRTEEN_WEEK_AVG_LABEL) -> WeekRecord:
    """Mean of every numeric field, as the report's 13 Week Average row."""
    values = {
        name: round(float(np.mean([getattr(r, name) for r in records])), 4)
        for name in NUMERIC_COLUMNS
    }
    first = records[0] if records else WeekRecord()
    return WeekRecord(
        fiscal_year=first.fiscal_year,
        period_type="Average",
        week=label,
        status=first.status,
        **values,
    )


def write_row(ws, row_idx: int, record: WeekRecord) -> None:
    """Write a record into a 1-based worksheet row using the layout columns."""
    for name, col_idx in TEXT_COLUMNS.items():
        value = getattr(record, name)
        if value:
            ws.cell(row=row_idx, column=col_idx + 1, value=value)
    for name, col_idx in NUMERIC_COLUMNS.items():
        ws.cell(row=row_idx, column=col_idx + 1, value=float(getattr(record, name)))


def build_report_workbook(
    sheet_names: list[str] | None = None,
    n_weeks: int = 13,
    last_week: int = 37,
    seed: int = 42,
) -> bytes:
    """Build a simulated 13 Week Report workbook and return its bytes.

    Each sheet gets n_weeks weekly rows (capped at the window size), a
    13 Week Average row, and a YTD row.
    """
    if sheet_names is None:
        sheet_names = DEFAULT_SHEETS
    n_weeks = min(n_weeks, WEEKLY_ROW_END - WEEKLY_ROW_START + 1)

    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for i, name in enumerate(sheet_names):
        ws = wb.create_sheet(title=name)
        ws.cell(row=1, column=1, value=f"13 Week Report - {name}")
        ws.cell(row=8, column=3, value="Week")

        scale = 1.0 if i == 0 else 0.3
        records = generate_week_records(n_weeks, last_week, scale=scale, seed=seed + i)
        for offset, record in enumerate(records):
            write_row(ws, WEEKLY_ROW_START + offset, record)

        write_row(ws, THIRTEEN_WEEK_AVG_ROW, average_record(records))

        ytd = average_record(records, label=YTD_LABEL)
        ytd.period_type = YTD_LABEL
        write_row(ws, YTD_ROW, ytd)

    buf = BytesIO()
    wb.save(buf)
    wb.close()
    return buf.getvalue()
