import math

import pytest

from weekly_report_analytics.insights import (
    calc_volatility,
    compute_derived_metrics,
    generate_insights,
    pct_change,
    week_over_week_changes,
)
from weekly_report_analytics.models import SheetData, WeekRecord

from .conftest import make_sheet


def _week(**kwargs) -> WeekRecord:
    return WeekRecord(**kwargs)


class TestGenerateInsights:
    def test_needs_two_weeks(self):
        assert generate_insights(SheetData("Empty")) == []
        assert generate_insights(make_sheet(_week(total_sales=100))) == []

    def test_revenue_and_margin_scenario(self):
        sheet = make_sheet(
            _week(total_sales=140000, gross_profit_percent=0.357),
            _week(total_sales=100000, gross_profit_percent=0.30),
        )
        findings = generate_insights(sheet)

        assert [f.title for f in findings] == ["Revenue Growth", "Margin Movement"]
        assert [f.type for f in findings] == ["positive", "positive"]
        assert findings[0].description == "Total sales increased by 40.0% week over week"
        assert findings[0].metric == "Revenue"
        assert findings[0].value == "$140,000"
        assert findings[1].description == "Gross profit margin improved by 5.70 percentage points"
        assert findings[1].metric == "GP%"
        assert findings[1].value == "35.70%"

    @pytest.mark.parametrize("latest, expected", [
        (105000, []),
        (105010, ["positive"]),
        (94990, ["negative"]),
        (95000, []),
    ])
    def test_revenue_threshold(self, latest, expected):
        sheet = make_sheet(_week(total_sales=latest), _week(total_sales=100000))
        findings = generate_insights(sheet)
        assert [f.type for f in findings] == expected

    def test_revenue_decline_wording(self):
        sheet = make_sheet(_week(total_sales=80000), _week(total_sales=100000))
        finding = generate_insights(sheet)[0]

        assert finding.title == "Revenue Decline"
        assert finding.description == "Total sales decreased by 20.0% week over week"

    def test_zero_previous_revenue_gives_no_finding(self):
        sheet = make_sheet(_week(total_sales=50000), _week(total_sales=0))
        assert generate_insights(sheet) == []

    def test_margin_threshold(self):
        flat = make_sheet(_week(gross_profit_percent=0.304), _week(gross_profit_percent=0.30))
        assert generate_insights(flat) == []

        down = make_sheet(_week(gross_profit_percent=0.29), _week(gross_profit_percent=0.30))
        finding = generate_insights(down)[0]
        assert finding.type == "negative"
        assert "declined by 1.00 percentage points" in finding.description

    def test_staffing_threshold(self):
        twenty = make_sheet(_week(associates_on_assignment=120), _week(associates_on_assignment=100))
        assert generate_insights(twenty) == []

        sheet = make_sheet(_week(associates_on_assignment=75), _week(associates_on_assignment=100))
        finding = generate_insights(sheet)[0]
        assert finding.title == "Staffing Changes"
        assert finding.type == "negative"
        assert finding.description == "Associates on assignment decreased by 25 positions"
        assert finding.value == "75"

    def test_productivity_decline_is_neutral(self):
        # Same revenue spread over more associates: rev/AOA down 20%
        sheet = make_sheet(
            _week(total_sales=100000, associates_on_assignment=115),
            _week(total_sales=100000, associates_on_assignment=100),
        )
        findings = generate_insights(sheet)
        assert [f.title for f in findings] == ["Productivity Shift"]
        assert findings[0].type == "neutral"
        assert findings[0].metric == "Rev/AOA"
        assert findings[0].description.startswith("Revenue per associate declined by")

    def test_productivity_improvement_is_positive(self):
        sheet = make_sheet(
            _week(total_sales=100000, associates_on_assignment=90),
            _week(total_sales=100000, associates_on_assignment=100),
        )
        finding = generate_insights(sheet)[0]
        assert finding.type == "positive"
        assert finding.value == "$1,111"

    def test_productivity_zero_aoa_guarded(self):
        sheet = make_sheet(
            _week(total_sales=100000, associates_on_assignment=100),
            _week(total_sales=100000, associates_on_assignment=0),
        )
        assert all(f.title != "Productivity Shift" for f in generate_insights(sheet))

    def test_fixed_order(self):
        sheet = make_sheet(
            _week(total_sales=90000, gross_profit_percent=0.40, associates_on_assignment=200),
            _week(total_sales=100000, gross_profit_percent=0.30, associates_on_assignment=100),
        )
        findings = generate_insights(sheet)
        assert [f.title for f in findings] == [
            "Revenue Decline",
            "Margin Movement",
            "Staffing Changes",
            "Productivity Shift",
        ]

    def test_only_latest_two_weeks_used(self):
        sheet = make_sheet(
            _week(total_sales=100000),
            _week(total_sales=100000),
            _week(total_sales=10000),
        )
        assert generate_insights(sheet) == []


class TestVolatility:
    def test_constant_series(self):
        assert calc_volatility([250000.0] * 13) == 0.0

    def test_zero_mean(self):
        assert calc_volatility([0.0] * 13) == 0.0
        assert calc_volatility([-5.0, 5.0]) == 0.0

    def test_empty(self):
        assert calc_volatility([]) == 0.0

    def test_population_std(self):
        # mean 100, population std 10
        assert calc_volatility([90.0, 110.0]) == pytest.approx(10.0)


class TestDerivedMetrics:
    def test_empty_sheet_is_all_zero(self):
        metrics = compute_derived_metrics(SheetData("Empty"))
        assert set(metrics) == {
            "revenue_growth_rate",
            "yoy_revenue_change",
            "yoy_gp_change",
            "yoy_aoa_change",
            "revenue_per_fte",
            "vs_avg_revenue",
            "vs_avg_gp",
            "volatility",
        }
        assert all(v == 0.0 for v in metrics.values())

    def test_full_metrics(self):
        latest = _week(
            total_sales=120000,
            gross_profit_percent=0.33,
            full_time_equivalent=8,
            revenue_change_prior_year=0.15,
            gp_change_prior_year=-0.02,
            aoa_change_prior_year=12,
        )
        previous = _week(total_sales=100000)
        average = _week(total_sales=96000, gross_profit_percent=0.30)
        metrics = compute_derived_metrics(make_sheet(latest, previous, average=average))

        assert metrics["revenue_growth_rate"] == pytest.approx(20.0)
        assert metrics["yoy_revenue_change"] == 0.15
        assert metrics["yoy_gp_change"] == -0.02
        assert metrics["yoy_aoa_change"] == 12
        assert metrics["revenue_per_fte"] == pytest.approx(15000.0)
        assert metrics["vs_avg_revenue"] == pytest.approx(25.0)
        assert metrics["vs_avg_gp"] == pytest.approx(3.0)
        assert metrics["volatility"] == pytest.approx(100 * 10000 / 110000)

    def test_single_week_and_no_average(self):
        metrics = compute_derived_metrics(make_sheet(_week(total_sales=5000)))

        assert metrics["revenue_growth_rate"] == 0.0
        assert metrics["revenue_per_fte"] == 0.0
        assert metrics["vs_avg_revenue"] == 0.0
        assert metrics["vs_avg_gp"] == 0.0
        assert metrics["volatility"] == 0.0

    def test_volatility_window_is_latest_thirteen(self):
        weeks = [_week(total_sales=1000) for _ in range(13)] + [_week(total_sales=999999)]
        metrics = compute_derived_metrics(make_sheet(*weeks))
        assert metrics["volatility"] == 0.0

    def test_no_nan(self):
        metrics = compute_derived_metrics(make_sheet(_week(), _week(), average=_week()))
        assert not any(math.isnan(v) for v in metrics.values())


class TestWeekOverWeek:
    def test_changes(self):
        sheet = make_sheet(
            _week(associates_on_assignment=130, total_sales=110000, gross_profit=33000,
                  gross_profit_percent=0.30),
            _week(associates_on_assignment=100, total_sales=100000, gross_profit=30000,
                  gross_profit_percent=0.28),
        )
        changes = week_over_week_changes(sheet)

        assert changes["aoa_change"] == 30
        assert changes["revenue_change_pct"] == pytest.approx(10.0)
        assert changes["gross_profit_change_pct"] == pytest.approx(10.0)
        assert changes["gp_percent_change_pp"] == pytest.approx(2.0)

    def test_single_week(self):
        changes = week_over_week_changes(make_sheet(_week(total_sales=1)))
        assert all(v == 0.0 for v in changes.values())


def test_pct_change_zero_base():
    assert pct_change(10, 0) == 0.0
    assert pct_change(110, 100) == pytest.approx(10.0)
