import pytest

from weekly_report_analytics.dashboard import (
    filter_sheets_by_permission,
    get_available_sheets,
    get_sheet,
    get_sheet_overview,
)
from weekly_report_analytics.loaders import extract_report
from weekly_report_analytics.models import UserPermissions


@pytest.fixture
def report(standard_workbook):
    return extract_report(standard_workbook, "13WeekReport_Week_37.xlsx")


def test_admin_sees_all_sheets(report):
    admin = UserPermissions(role="admin")
    assert get_available_sheets(report, admin) == ["Des Moines", "Cover"]


def test_user_sees_allowed_sheets_only(report):
    user = UserPermissions(role="user", allowed_sheets=["Cover", "Omaha"])
    sheets = filter_sheets_by_permission(report, user)
    assert [s.sheet_name for s in sheets] == ["Cover"]


def test_no_permissions_sees_nothing(report):
    assert filter_sheets_by_permission(report, None) == []


def test_get_sheet(report):
    assert get_sheet(report, "Cover").sheet_name == "Cover"
    assert get_sheet(report, "Missing") is None


def test_overview(report):
    user = UserPermissions(role="user", allowed_sheets=["Des Moines"], email="branch@example.com")
    overview = get_sheet_overview(report, "Des Moines", user)

    assert overview["sheet_name"] == "Des Moines"
    assert overview["latest_week"].week == "Week 37"
    assert overview["previous_week"].week == "Week 36"
    assert [f.title for f in overview["insights"]] == [
        "Revenue Growth",
        "Margin Movement",
        "Productivity Shift",
    ]
    assert overview["metrics"]["revenue_growth_rate"] == pytest.approx(40.0)
    assert overview["metrics"]["revenue_per_fte"] == pytest.approx(17500.0)
    assert overview["changes"]["aoa_change"] == 10
    assert overview["trend"]["week"].tolist() == ["W35", "W36", "W37"]
    assert overview["thirteen_week_average"].total_sales == 110000.0
    assert overview["ytd"].total_sales == 3_800_000.0


def test_overview_of_empty_sheet(report):
    overview = get_sheet_overview(report, "Cover", UserPermissions(role="admin"))

    assert overview["latest_week"] is None
    assert overview["insights"] == []
    assert overview["trend"].empty
    assert all(v == 0.0 for v in overview["metrics"].values())


def test_overview_denied(report):
    user = UserPermissions(role="user", allowed_sheets=["Cover"])
    with pytest.raises(PermissionError):
        get_sheet_overview(report, "Des Moines", user)
    with pytest.raises(PermissionError):
        get_sheet_overview(report, "Des Moines", None)


def test_overview_unknown_sheet(report):
    with pytest.raises(KeyError):
        get_sheet_overview(report, "Nowhere", UserPermissions(role="admin"))
