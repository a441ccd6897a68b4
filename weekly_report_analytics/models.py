"""
Typed records produced by the extractor and consumed by the insight engine.

All records round-trip through plain dicts so a persistence layer can store
them as documents and hand them back unchanged.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any


@dataclass
class WeekRecord:
    """One row of weekly metrics for a single sheet.

    Numeric fields keep the scale of the source cell: gross_profit_percent is
    a fraction (0.357), the change fields are whatever the report stores.
    """

    # Identity
    fiscal_year: str = ""
    period_type: str = ""
    week: str = ""
    status: str = ""

    # Trend deltas
    aoa_change_prior_week: float = 0.0
    aoa_change_prior_year: float = 0.0
    customer_change_prior_week: float = 0.0
    customer_change_prior_year: float = 0.0
    revenue_change_prior_week: float = 0.0
    revenue_change_prior_year: float = 0.0
    gp_change_prior_week: float = 0.0
    gp_change_prior_year: float = 0.0

    # Workforce
    associates_on_assignment: float = 0.0
    customers_billed: float = 0.0

    # Rates
    markup_percent: float = 0.0
    avg_hourly_pay_rate: float = 0.0
    bill_rate_per_hour: float = 0.0
    profit_per_hour: float = 0.0
    hours_per_associate: float = 0.0

    # Revenue / profit
    associate_billing: float = 0.0
    associate_gross_profit: float = 0.0
    associate_gross_profit_percent: float = 0.0
    fees_revenue: float = 0.0
    total_sales: float = 0.0
    gross_profit: float = 0.0
    gross_profit_percent: float = 0.0

    # Staffing efficiency
    full_time_equivalent: float = 0.0
    staff_excluding_bdm: float = 0.0
    associate_gp_per_fte: float = 0.0
    aoas_per_fte: float = 0.0

    # Volume
    hours_billed: float = 0.0
    revenue_per_client: float = 0.0
    associate_wages: float = 0.0

    # Fee breakdown
    conversion_fees: float = 0.0
    permanent_placement_fees: float = 0.0
    quick_hire: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeekRecord":
        # loaders imports this module
        from .loaders.utils import safe_number

        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if f.type is str:
                values[f.name] = "" if raw is None else str(raw)
            else:
                values[f.name] = safe_number(raw)
        return cls(**values)


@dataclass
class SheetData:
    """Extracted content of one cost-center or rollup sheet."""

    sheet_name: str
    weekly_data: list[WeekRecord] = field(default_factory=list)
    thirteen_week_average: WeekRecord | None = None
    ytd_data: WeekRecord | None = None

    @property
    def latest_week(self) -> WeekRecord | None:
        return self.weekly_data[0] if self.weekly_data else None

    @property
    def previous_week(self) -> WeekRecord | None:
        return self.weekly_data[1] if len(self.weekly_data) > 1 else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_name": self.sheet_name,
            "weekly_data": [w.to_dict() for w in self.weekly_data],
            "thirteen_week_average": (
                self.thirteen_week_average.to_dict()
                if self.thirteen_week_average is not None else None
            ),
            "ytd_data": self.ytd_data.to_dict() if self.ytd_data is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SheetData":
        avg = data.get("thirteen_week_average")
        ytd = data.get("ytd_data")
        return cls(
            sheet_name=data["sheet_name"],
            weekly_data=[WeekRecord.from_dict(w) for w in data.get("weekly_data") or []],
            thirteen_week_average=WeekRecord.from_dict(avg) if avg is not None else None,
            ytd_data=WeekRecord.from_dict(ytd) if ytd is not None else None,
        )


@dataclass
class ParsedReport:
    """Extraction result for one uploaded workbook."""

    file_name: str
    week_number: str
    upload_date: datetime
    sheets: list[SheetData] = field(default_factory=list)

    @property
    def sheet_names(self) -> list[str]:
        return [s.sheet_name for s in self.sheets]

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "week_number": self.week_number,
            "upload_date": self.upload_date.isoformat(),
            "sheets": [s.to_dict() for s in self.sheets],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedReport":
        upload_date = data["upload_date"]
        if isinstance(upload_date, str):
            upload_date = datetime.fromisoformat(upload_date)
        return cls(
            file_name=data["file_name"],
            week_number=data.get("week_number", ""),
            upload_date=upload_date,
            sheets=[SheetData.from_dict(s) for s in data.get("sheets") or []],
        )


@dataclass
class InsightFinding:
    """A qualitative finding emitted by the insight engine. Not persisted."""

    type: str  # "positive" | "negative" | "neutral"
    title: str
    description: str
    metric: str | None = None
    value: str | None = None


@dataclass
class UserPermissions:
    """Access context for the principal viewing reports.

    Passed explicitly into anything that filters sheets; nothing in this
    package keeps a current user.
    """

    role: str = "user"  # "admin" | "user"
    allowed_sheets: list[str] = field(default_factory=list)
    email: str = ""
    display_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def can_view(self, sheet_name: str) -> bool:
        return self.is_admin or sheet_name in self.allowed_sheets
