"""
Configuration: spreadsheet layout contract, insight thresholds, Q&A settings.

The 13 Week Report layout is a fixed external contract. Row numbers below are
1-based to match what a user sees in Excel; column indices are 0-based
(A=0, B=1, C=2, ...).
"""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

# ---------------------------------------------------------------------------
# Row layout
# ---------------------------------------------------------------------------
WEEKLY_ROW_START = 9
WEEKLY_ROW_END = 21
THIRTEEN_WEEK_AVG_ROW = 23
YTD_ROW = 24

PERIOD_TYPE_COL = 1
WEEK_LABEL_COL = 2

WEEK_LABEL_PREFIX = "Week"
THIRTEEN_WEEK_AVG_LABEL = "13 Week Average"
YTD_LABEL = "YTD"

UNKNOWN_WEEK_NUMBER = "Unknown"
WEEK_NUMBER_PATTERN = r"Week[_\s](\d+)"

# ---------------------------------------------------------------------------
# Column layout, single source of truth for row decoding
# ---------------------------------------------------------------------------
TEXT_COLUMNS: dict[str, int] = {
    "fiscal_year": 0,
    "period_type": 1,
    "week": 2,
    "status": 3,
}

NUMERIC_COLUMNS: dict[str, int] = {
    # Trend deltas
    "aoa_change_prior_week": 5,
    "aoa_change_prior_year": 6,
    "customer_change_prior_week": 7,
    "customer_change_prior_year": 8,
    "revenue_change_prior_week": 9,
    "revenue_change_prior_year": 10,
    "gp_change_prior_week": 11,
    "gp_change_prior_year": 12,
    # Workforce
    "associates_on_assignment": 14,
    "customers_billed": 15,
    # Rates
    "markup_percent": 16,
    "avg_hourly_pay_rate": 17,
    "bill_rate_per_hour": 18,
    "profit_per_hour": 19,
    "hours_per_associate": 20,
    # Revenue / profit
    "associate_billing": 22,
    "associate_gross_profit": 23,
    "associate_gross_profit_percent": 24,
    "fees_revenue": 25,
    "total_sales": 26,
    "gross_profit": 27,
    "gross_profit_percent": 28,
    # Staffing efficiency
    "full_time_equivalent": 30,
    "staff_excluding_bdm": 31,
    "associate_gp_per_fte": 34,
    "aoas_per_fte": 36,
    # Volume
    "hours_billed": 40,
    "revenue_per_client": 41,
    "associate_wages": 42,
    # Fee breakdown
    "conversion_fees": 44,
    "permanent_placement_fees": 45,
    "quick_hire": 46,
}

# ---------------------------------------------------------------------------
# Insight Engine
# ---------------------------------------------------------------------------
# Findings fire only when |change| is strictly greater than the threshold.
# revenue / productivity: percent; margin: percentage points; staffing: AOA count
INSIGHT_THRESHOLDS: dict[str, float] = {
    "revenue_pct": 5.0,
    "margin_pp": 0.5,
    "staffing_aoa": 20.0,
    "productivity_pct": 5.0,
}

VOLATILITY_WINDOW = 13
TREND_WINDOW = 13

# ---------------------------------------------------------------------------
# Q&A (OpenAI)
# ---------------------------------------------------------------------------
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_MAX_TOKENS = 1000
OPENAI_TEMPERATURE = 0.7

ANALYST_SYSTEM_PROMPT = (
    "You are an expert business analyst specializing in staffing industry "
    "metrics and financial analysis. Provide clear, actionable insights based "
    "on the data provided. Focus on trends, comparisons, and recommendations."
)

EMPTY_ANSWER = "Unable to generate response"

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------
REPORT_BLOB_PREFIX = "reports"
DEFAULT_REPORT_LIMIT = 20
