"""
Insight engine: pure functions with no side effects.

Provides week-over-week change calculation, automatic insight findings,
and the derived scalar metrics shown beside the charts.
"""

import logging

import numpy as np

from .config import INSIGHT_THRESHOLDS, VOLATILITY_WINDOW
from .formatting import format_currency, format_number, format_percent
from .models import InsightFinding, SheetData, WeekRecord

logger = logging.getLogger(__name__)


def pct_change(current: float, previous: float) -> float:
    """Return percent change from previous to current, 0.0 if previous == 0."""
    if previous == 0:
        return 0.0
    return (current - previous) * 100 / previous


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, 0.0 if denominator == 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def week_over_week_changes(sheet: SheetData) -> dict[str, float]:
    """Latest-vs-previous deltas used by the dashboard metric cards.

    Returns
    -------
    {
        "aoa_change": absolute AOA difference,
        "revenue_change_pct": percent change in total sales,
        "gross_profit_change_pct": percent change in gross profit,
        "gp_percent_change_pp": GP% movement in percentage points,
    }
    All zero when fewer than two weeks are available.
    """
    latest, previous = sheet.latest_week, sheet.previous_week
    if latest is None or previous is None:
        return {
            "aoa_change": 0.0,
            "revenue_change_pct": 0.0,
            "gross_profit_change_pct": 0.0,
            "gp_percent_change_pp": 0.0,
        }
    return {
        "aoa_change": latest.associates_on_assignment - previous.associates_on_assignment,
        "revenue_change_pct": pct_change(latest.total_sales, previous.total_sales),
        "gross_profit_change_pct": pct_change(latest.gross_profit, previous.gross_profit),
        "gp_percent_change_pp": (
            latest.gross_profit_percent - previous.gross_profit_percent
        ) * 100,
    }


# ---------------------------------------------------------------------------
# Automatic findings
# ---------------------------------------------------------------------------

def generate_insights(sheet: SheetData) -> list[InsightFinding]:
    """Return findings for the latest week versus the previous week.

    Order is fixed: revenue, margin, staffing, productivity. A finding is
    emitted only when the absolute change is strictly above its threshold.
    """
    latest, previous = sheet.latest_week, sheet.previous_week
    if latest is None or previous is None:
        return []

    findings = []
    for rule in (_revenue_finding, _margin_finding, _staffing_finding, _productivity_finding):
        finding = rule(latest, previous)
        if finding is not None:
            findings.append(finding)

    logger.debug("Sheet '%s': %d insight findings", sheet.sheet_name, len(findings))
    return findings


def _revenue_finding(latest: WeekRecord, previous: WeekRecord) -> InsightFinding | None:
    change = pct_change(latest.total_sales, previous.total_sales)
    if abs(change) <= INSIGHT_THRESHOLDS["revenue_pct"]:
        return None
    up = change > 0
    return InsightFinding(
        type="positive" if up else "negative",
        title="Revenue Growth" if up else "Revenue Decline",
        description=(
            f"Total sales {'increased' if up else 'decreased'} by "
            f"{abs(change):.1f}% week over week"
        ),
        metric="Revenue",
        value=format_currency(latest.total_sales),
    )


def _margin_finding(latest: WeekRecord, previous: WeekRecord) -> InsightFinding | None:
    change = (latest.gross_profit_percent - previous.gross_profit_percent) * 100
    if abs(change) <= INSIGHT_THRESHOLDS["margin_pp"]:
        return None
    up = change > 0
    return InsightFinding(
        type="positive" if up else "negative",
        title="Margin Movement",
        description=(
            f"Gross profit margin {'improved' if up else 'declined'} by "
            f"{abs(change):.2f} percentage points"
        ),
        metric="GP%",
        value=format_percent(latest.gross_profit_percent),
    )


def _staffing_finding(latest: WeekRecord, previous: WeekRecord) -> InsightFinding | None:
    change = latest.associates_on_assignment - previous.associates_on_assignment
    if abs(change) <= INSIGHT_THRESHOLDS["staffing_aoa"]:
        return None
    up = change > 0
    return InsightFinding(
        type="positive" if up else "negative",
        title="Staffing Changes",
        description=(
            f"Associates on assignment {'increased' if up else 'decreased'} by "
            f"{format_number(abs(change))} positions"
        ),
        metric="AOA",
        value=format_number(latest.associates_on_assignment),
    )


def _productivity_finding(latest: WeekRecord, previous: WeekRecord) -> InsightFinding | None:
    revenue_per_aoa = safe_ratio(latest.total_sales, latest.associates_on_assignment)
    prev_revenue_per_aoa = safe_ratio(previous.total_sales, previous.associates_on_assignment)
    change = pct_change(revenue_per_aoa, prev_revenue_per_aoa)
    if abs(change) <= INSIGHT_THRESHOLDS["productivity_pct"]:
        return None
    up = change > 0
    # A drop in revenue per associate is reported, not flagged
    return InsightFinding(
        type="positive" if up else "neutral",
        title="Productivity Shift",
        description=(
            f"Revenue per associate {'improved' if up else 'declined'} by "
            f"{abs(change):.1f}%"
        ),
        metric="Rev/AOA",
        value=format_currency(revenue_per_aoa),
    )


# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------

def calc_volatility(values: list[float]) -> float:
    """Coefficient of variation in percent (population std / mean * 100).

    Returns 0.0 for an empty series or a zero mean.
    """
    if not values:
        return 0.0
    arr = np.asarray(values, dtype=float)
    mean = float(np.mean(arr))
    if mean == 0:
        return 0.0
    return float(np.std(arr)) / mean * 100


def compute_derived_metrics(sheet: SheetData) -> dict[str, float]:
    """Return the derived scalar metrics for a sheet.

    Prior-year changes are passed through from the latest record, not
    recomputed. Every metric degrades to 0.0 when its input is missing or
    its denominator is zero.

    Returns
    -------
    Dict with keys:
        revenue_growth_rate, yoy_revenue_change, yoy_gp_change,
        yoy_aoa_change, revenue_per_fte, vs_avg_revenue, vs_avg_gp, volatility
    """
    metrics = {
        "revenue_growth_rate": 0.0,
        "yoy_revenue_change": 0.0,
        "yoy_gp_change": 0.0,
        "yoy_aoa_change": 0.0,
        "revenue_per_fte": 0.0,
        "vs_avg_revenue": 0.0,
        "vs_avg_gp": 0.0,
        "volatility": 0.0,
    }

    latest, previous = sheet.latest_week, sheet.previous_week
    if latest is None:
        return metrics

    if previous is not None:
        metrics["revenue_growth_rate"] = pct_change(latest.total_sales, previous.total_sales)

    metrics["yoy_revenue_change"] = latest.revenue_change_prior_year
    metrics["yoy_gp_change"] = latest.gp_change_prior_year
    metrics["yoy_aoa_change"] = latest.aoa_change_prior_year

    metrics["revenue_per_fte"] = safe_ratio(latest.total_sales, latest.full_time_equivalent)

    avg = sheet.thirteen_week_average
    if avg is not None:
        metrics["vs_avg_revenue"] = pct_change(latest.total_sales, avg.total_sales)
        metrics["vs_avg_gp"] = (latest.gross_profit_percent - avg.gross_profit_percent) * 100

    recent_sales = [w.total_sales for w in sheet.weekly_data[:VOLATILITY_WINDOW]]
    metrics["volatility"] = calc_volatility(recent_sales)

    return metrics
