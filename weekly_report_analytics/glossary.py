"""
Metric glossary for the 13 Week Report.

One entry per WeekRecord metric, keyed by field name. Used for tooltips,
glossary search, and formatting values by metric.
"""

from dataclasses import dataclass, field

from .formatting import format_currency, format_number

GLOSSARY_CATEGORIES: dict[str, dict[str, str]] = {
    "workforce": {
        "name": "Workforce & Staffing",
        "description": "Metrics related to associates, employees, and headcount",
    },
    "revenue": {"name": "Revenue", "description": "Sales and billing metrics"},
    "profitability": {"name": "Profitability", "description": "Gross profit and margin metrics"},
    "efficiency": {
        "name": "Efficiency & Productivity",
        "description": "Operational efficiency and productivity ratios",
    },
    "billing": {"name": "Billing & Rates", "description": "Hourly rates, hours, and wage metrics"},
    "fees": {"name": "Fee Revenue", "description": "Placement fees and conversion revenue"},
    "trends": {
        "name": "Trends & Comparisons",
        "description": "Week-over-week and year-over-year changes",
    },
}


@dataclass
class GlossaryEntry:
    key: str
    name: str
    abbreviation: str
    short_description: str
    category: str
    format: str  # currency | percentage | number | decimal | hours
    related_metrics: list[str] = field(default_factory=list)
    search_keywords: list[str] = field(default_factory=list)


# (key, name, abbreviation, short description, category, format, related, keywords)
_ENTRIES = [
    ("associates_on_assignment", "Associates on Assignment", "AOA",
     "Number of associates that were paid during the week", "workforce", "number",
     ["customers_billed", "full_time_equivalent", "aoas_per_fte"],
     ["associates", "paid", "workforce", "headcount"]),
    ("customers_billed", "Customers Billed", "Customers",
     "Number of clients that were billed during the week", "revenue", "number",
     ["associates_on_assignment", "revenue_per_client", "total_sales"],
     ["customers", "clients", "billed", "accounts"]),
    ("markup_percent", "Mark Up %", "MU%",
     "The percentage that pay rates are marked up to equal bill rates", "profitability",
     "percentage", ["bill_rate_per_hour", "avg_hourly_pay_rate", "gross_profit_percent"],
     ["markup", "margin", "pricing", "spread"]),
    ("avg_hourly_pay_rate", "Average Hourly Pay Rate", "Hourly Pay",
     "Average hourly pay rate of AOAs during the week", "billing", "currency",
     ["bill_rate_per_hour", "markup_percent", "associate_wages"],
     ["pay rate", "wages", "compensation", "hourly"]),
    ("bill_rate_per_hour", "Bill Rate per Hour", "Hourly Bill",
     "Average hourly bill rate of AOAs during the week", "billing", "currency",
     ["avg_hourly_pay_rate", "markup_percent", "associate_billing"],
     ["bill rate", "billing", "charge rate", "hourly"]),
    ("profit_per_hour", "Profit per Hour", "Hourly GP$",
     "Average hourly gross profit of AOAs during the week", "profitability", "currency",
     ["bill_rate_per_hour", "avg_hourly_pay_rate", "gross_profit"],
     ["profit per hour", "hourly profit", "margin per hour"]),
    ("hours_per_associate", "Hours per Associate", "Avg Hours",
     "Average number of hours worked by AOAs during the week", "efficiency", "hours",
     ["hours_billed", "associates_on_assignment"],
     ["hours", "utilization", "average hours"]),
    ("associate_billing", "Associate Billing", "Associate Bill",
     "Total amount billed for the week", "revenue", "currency",
     ["total_sales", "associate_gross_profit", "bill_rate_per_hour"],
     ["billing", "revenue", "staffing revenue"]),
    ("associate_gross_profit", "Associate Gross Profit", "Associate GP$",
     "Total amount of gross profit for the week", "profitability", "currency",
     ["associate_billing", "gross_profit", "associate_gross_profit_percent"],
     ["gross profit", "profit", "associate profit"]),
    ("associate_gross_profit_percent", "Associate Gross Profit %", "Associate GP%",
     "Share of associate billing that converted to associate GP$", "profitability",
     "percentage", ["associate_gross_profit", "gross_profit_percent", "markup_percent"],
     ["margin", "gross profit percent", "profit margin"]),
    ("fees_revenue", "Fees Revenue", "Fee Rev",
     "Total amount of fees billed for the week", "fees", "currency",
     ["conversion_fees", "permanent_placement_fees", "quick_hire", "total_sales"],
     ["fees", "placement fees", "conversion", "direct hire"]),
    ("total_sales", "Total Sales (Revenue)", "Total Sales",
     "Total combined revenue: associate billing plus fees", "revenue", "currency",
     ["associate_billing", "fees_revenue", "gross_profit"],
     ["revenue", "total sales", "total revenue", "top line"]),
    ("gross_profit", "Gross Profit", "GP$",
     "Total gross profit on combined revenue", "profitability", "currency",
     ["gross_profit_percent", "associate_gross_profit", "total_sales"],
     ["gross profit", "profit", "earnings"]),
    ("gross_profit_percent", "Gross Profit %", "GP%",
     "Share of revenue that converted to GP$", "profitability", "percentage",
     ["gross_profit", "total_sales", "associate_gross_profit_percent"],
     ["margin", "profit margin", "profitability"]),
    ("full_time_equivalent", "Full Time Equivalent", "FTE",
     "Number of internal personnel during the week", "workforce", "number",
     ["staff_excluding_bdm", "associate_gp_per_fte", "aoas_per_fte"],
     ["staff", "employees", "headcount", "internal"]),
    ("staff_excluding_bdm", "Staff Excluding BDM", "FTE No BDM",
     "FTE with BDM headcount subtracted", "workforce", "number",
     ["full_time_equivalent", "associate_gp_per_fte"],
     ["staff", "excluding bdm", "operational staff"]),
    ("associate_gp_per_fte", "Associate GP per FTE", "AA GP$/FTE",
     "Associate GP divided by number of FTEs", "efficiency", "currency",
     ["associate_gross_profit", "full_time_equivalent", "aoas_per_fte"],
     ["productivity", "efficiency", "gp per fte"]),
    ("aoas_per_fte", "AOAs per FTE", "AOA/FTE",
     "Number of AOAs divided by FTE", "efficiency", "decimal",
     ["associates_on_assignment", "full_time_equivalent"],
     ["ratio", "aoa per fte", "span of control"]),
    ("hours_billed", "Hours Billed", "Hours Bill",
     "Total number of hours worked by AOAs for the week", "billing", "hours",
     ["hours_per_associate", "associate_billing", "bill_rate_per_hour"],
     ["hours", "billable hours", "timesheets", "volume"]),
    ("revenue_per_client", "Revenue per Client", "Per Client Rev",
     "Total revenue divided by number of customers billed", "efficiency", "currency",
     ["total_sales", "customers_billed"],
     ["revenue per client", "account size", "average revenue"]),
    ("associate_wages", "Associate Wages", "AOA Wage",
     "Total amount paid to associates for the week", "billing", "currency",
     ["avg_hourly_pay_rate", "associate_billing", "associate_gross_profit"],
     ["wages", "payroll", "labor cost"]),
    ("conversion_fees", "Conversion Fees", "Conv. Fee",
     "Amount billed for associates that converted to client FTE", "fees", "currency",
     ["fees_revenue", "permanent_placement_fees", "quick_hire"],
     ["conversion", "temp to perm", "hire fees"]),
    ("permanent_placement_fees", "Permanent Placement Fees", "DH Fee",
     "Amount billed for direct hire FTE placements", "fees", "currency",
     ["fees_revenue", "conversion_fees", "quick_hire"],
     ["permanent placement", "direct hire", "search fees"]),
    ("quick_hire", "Quick Hire", "QH Fee",
     "Amount billed for quick hire placements", "fees", "currency",
     ["fees_revenue", "conversion_fees", "permanent_placement_fees"],
     ["quick hire", "expedited placement"]),
    ("aoa_change_prior_week", "AOA Change vs Prior Week", "AOA WoW",
     "Week-over-week change in Associates on Assignment", "trends", "percentage",
     ["associates_on_assignment", "aoa_change_prior_year"],
     ["week over week", "wow", "trend", "change"]),
    ("aoa_change_prior_year", "AOA Change vs Prior Year", "AOA YoY",
     "Year-over-year change in Associates on Assignment", "trends", "percentage",
     ["associates_on_assignment", "aoa_change_prior_week"],
     ["year over year", "yoy", "annual growth"]),
    ("customer_change_prior_week", "Customer Change vs Prior Week", "Cust WoW",
     "Week-over-week change in Customers Billed", "trends", "percentage",
     ["customers_billed", "customer_change_prior_year"],
     ["customer change", "wow", "client trend"]),
    ("customer_change_prior_year", "Customer Change vs Prior Year", "Cust YoY",
     "Year-over-year change in Customers Billed", "trends", "percentage",
     ["customers_billed", "customer_change_prior_week"],
     ["customer yoy", "annual customer growth"]),
    ("revenue_change_prior_week", "Revenue Change vs Prior Week", "Rev WoW",
     "Week-over-week change in Total Sales", "trends", "percentage",
     ["total_sales", "revenue_change_prior_year"],
     ["revenue change", "sales trend", "wow"]),
    ("revenue_change_prior_year", "Revenue Change vs Prior Year", "Rev YoY",
     "Year-over-year change in Total Sales", "trends", "percentage",
     ["total_sales", "revenue_change_prior_week"],
     ["revenue yoy", "annual growth", "sales growth"]),
    ("gp_change_prior_week", "GP Change vs Prior Week", "GP WoW",
     "Week-over-week change in Gross Profit", "trends", "percentage",
     ["gross_profit", "gp_change_prior_year"],
     ["profit change", "gp trend", "wow"]),
    ("gp_change_prior_year", "GP Change vs Prior Year", "GP YoY",
     "Year-over-year change in Gross Profit", "trends", "percentage",
     ["gross_profit", "gp_change_prior_week"],
     ["profit yoy", "annual profit growth"]),
]

GLOSSARY_ENTRIES: dict[str, GlossaryEntry] = {
    key: GlossaryEntry(key, name, abbr, desc, category, fmt, related, keywords)
    for key, name, abbr, desc, category, fmt, related, keywords in _ENTRIES
}

# Display labels used on dashboard cards -> glossary keys
LABEL_TO_KEY: dict[str, str] = {
    "Associates on Assignment": "associates_on_assignment",
    "Associates": "associates_on_assignment",
    "AOA": "associates_on_assignment",
    "Customers Billed": "customers_billed",
    "Customers": "customers_billed",
    "Mark Up %": "markup_percent",
    "Markup %": "markup_percent",
    "Avg Pay Rate": "avg_hourly_pay_rate",
    "Bill Rate/Hour": "bill_rate_per_hour",
    "Profit/Hour": "profit_per_hour",
    "Hours/Associate": "hours_per_associate",
    "Hours Billed": "hours_billed",
    "Total Sales": "total_sales",
    "Revenue": "total_sales",
    "Associate Billing": "associate_billing",
    "Fee Revenue": "fees_revenue",
    "Revenue/Client": "revenue_per_client",
    "Associate Wages": "associate_wages",
    "Gross Profit": "gross_profit",
    "GP": "gross_profit",
    "GP %": "gross_profit_percent",
    "GP%": "gross_profit_percent",
    "Associate GP": "associate_gross_profit",
    "Associate GP %": "associate_gross_profit_percent",
    "FTE": "full_time_equivalent",
    "Staff Excluding BDM": "staff_excluding_bdm",
    "Associate GP per FTE": "associate_gp_per_fte",
    "AOAs per FTE": "aoas_per_fte",
    "Conversion Fees": "conversion_fees",
    "Permanent Placement Fees": "permanent_placement_fees",
    "QuickHire": "quick_hire",
    "YTD Revenue": "total_sales",
    "YTD Gross Profit": "gross_profit",
    "YTD GP %": "gross_profit_percent",
    "Revenue Growth WoW": "revenue_change_prior_week",
}


def get_glossary_entry(key: str) -> GlossaryEntry | None:
    return GLOSSARY_ENTRIES.get(key)


def search_glossary(query: str) -> list[GlossaryEntry]:
    """Case-insensitive substring search; a blank query returns every entry."""
    q = query.strip().lower()
    if not q:
        return list(GLOSSARY_ENTRIES.values())
    return [
        entry
        for entry in GLOSSARY_ENTRIES.values()
        if q in entry.name.lower()
        or q in entry.abbreviation.lower()
        or q in entry.short_description.lower()
        or any(q in kw.lower() for kw in entry.search_keywords)
    ]


def get_entries_by_category(category: str) -> list[GlossaryEntry]:
    return [e for e in GLOSSARY_ENTRIES.values() if e.category == category]


def get_key_from_label(label: str) -> str | None:
    return LABEL_TO_KEY.get(label)


def format_glossary_value(key: str, value: float) -> str:
    """Format a value according to its metric's glossary format."""
    entry = GLOSSARY_ENTRIES.get(key)
    if entry is None:
        return str(value)
    if entry.format == "currency":
        return format_currency(value)
    if entry.format == "percentage":
        return f"{value:.1f}%"
    if entry.format == "hours":
        return f"{format_number(value)} hrs"
    if entry.format == "decimal":
        return f"{value:.1f}"
    return format_number(value)
