"""
Weekly Report Analytics: End-to-end analytics pipeline.

Extracts a 13 Week Report workbook, stores it, and prints per-sheet
metrics and insight findings as a smoke test. Without a path argument a
simulated workbook is used.

Usage:
    python main.py [path/to/13WeekReport_Week_37.xlsx]
"""

import logging
import sys
from pathlib import Path

from weekly_report_analytics.dashboard import get_available_sheets, get_sheet_overview
from weekly_report_analytics.formatting import format_signed
from weekly_report_analytics.loaders import ParseError
from weekly_report_analytics.models import UserPermissions
from weekly_report_analytics.simulator import build_report_workbook
from weekly_report_analytics.storage import InMemoryReportStore, ingest_upload
from weekly_report_analytics.transforms import build_fact_weekly, build_sheet_summary

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print("  WEEKLY REPORT ANALYTICS - 13 Week Report")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Extract and store
    # ------------------------------------------------------------------
    print("[ 1 ] EXTRACTING WORKBOOK")
    print("-" * 40)

    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
        data = path.read_bytes()
        file_name = path.name
    else:
        data = build_report_workbook()
        file_name = "13WeekReport_Week_37.xlsx"
        print("No workbook given; using simulated data.")

    store = InMemoryReportStore()
    try:
        report_id, report = ingest_upload(store, data, file_name)
    except ParseError as e:
        logger.error("Upload failed: %s", e)
        return 1

    print(f"\nReport {report_id}: {report.file_name} (week {report.week_number})")
    print(build_sheet_summary(report).to_string(index=False))

    fact = build_fact_weekly(report)
    print(f"\nfact_weekly: {len(fact)} rows")
    if not fact.empty:
        print(fact[["sheet_name", "week", "total_sales", "gross_profit_percent"]]
              .head(10).to_string(index=False))

    # ------------------------------------------------------------------
    # 2. Per-sheet insights
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] SHEET INSIGHTS")
    print("-" * 40)

    admin = UserPermissions(role="admin", email="admin@example.com")
    stored = store.get_report(report_id)

    for sheet_name in get_available_sheets(stored, admin):
        overview = get_sheet_overview(stored, sheet_name, admin)
        changes = overview["changes"]
        print(f"\n{sheet_name}")
        print(f"  WoW: AOA {format_signed(changes['aoa_change'], decimals=0)}, "
              f"revenue {format_signed(changes['revenue_change_pct'], suffix='%')}, "
              f"GP% {format_signed(changes['gp_percent_change_pp'], suffix=' pp')}")
        for key, value in overview["metrics"].items():
            print(f"  {key:22s} | {value:,.2f}")
        if not overview["insights"]:
            print("  (no findings)")
        for finding in overview["insights"]:
            print(f"  [{finding.type:8s}] {finding.title}: {finding.description}")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
