import pytest

from weekly_report_analytics.insights import compute_derived_metrics
from weekly_report_analytics.loaders import extract_report
from weekly_report_analytics.simulator import (
    DEFAULT_SHEETS,
    build_report_workbook,
    generate_week_records,
)


def test_generated_records_most_recent_first():
    records = generate_week_records(n_weeks=5, last_week=20)
    assert [r.week for r in records] == ["Week 20", "Week 19", "Week 18", "Week 17", "Week 16"]
    assert all(r.total_sales > 0 for r in records)
    assert all(0 < r.gross_profit_percent < 1 for r in records)


def test_generation_is_seeded():
    assert generate_week_records(seed=7) == generate_week_records(seed=7)


def test_simulated_workbook_extracts():
    data = build_report_workbook(n_weeks=13, last_week=37)
    report = extract_report(data, "13WeekReport_Week_37.xlsx")

    assert report.sheet_names == DEFAULT_SHEETS
    for sheet in report.sheets:
        assert len(sheet.weekly_data) == 13
        assert sheet.latest_week.week == "Week 37"
        assert sheet.thirteen_week_average is not None
        assert sheet.ytd_data is not None
        assert sheet.ytd_data.period_type == "YTD"


def test_simulated_average_matches_weeks():
    report = extract_report(build_report_workbook(["Branch"]), "report.xlsx")
    sheet = report.sheets[0]
    mean_sales = sum(w.total_sales for w in sheet.weekly_data) / len(sheet.weekly_data)

    assert sheet.thirteen_week_average.total_sales == pytest.approx(mean_sales, abs=0.01)
    # Latest week sits near its own 13-week average
    assert abs(compute_derived_metrics(sheet)["vs_avg_revenue"]) < 50


def test_weeks_capped_to_window():
    report = extract_report(build_report_workbook(["Branch"], n_weeks=20), "report.xlsx")
    assert len(report.sheets[0].weekly_data) == 13
