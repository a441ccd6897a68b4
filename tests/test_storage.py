from datetime import datetime, timedelta, timezone

import pytest

from weekly_report_analytics.loaders import ParseError, extract_report
from weekly_report_analytics.storage import InMemoryReportStore, ingest_upload


def test_ingest_round_trip(standard_workbook):
    store = InMemoryReportStore()
    report_id, report = ingest_upload(store, standard_workbook, "13WeekReport_Week_37.xlsx")

    stored = store.get_report(report_id)
    assert stored == report
    assert stored.upload_date == report.upload_date


def test_document_layout(standard_workbook):
    store = InMemoryReportStore()
    report_id, report = ingest_upload(store, standard_workbook, "13WeekReport_Week_37.xlsx")
    doc = store.get_document(report_id)

    assert doc["file_name"] == "13WeekReport_Week_37.xlsx"
    assert doc["week_number"] == "37"
    assert doc["file_url"].startswith("reports/")
    assert doc["file_url"].endswith("_13WeekReport_Week_37.xlsx")
    assert store.get_blob(doc["file_url"]) == standard_workbook
    assert [s["sheet_name"] for s in doc["sheets"]] == ["Des Moines", "Cover"]
    assert doc["sheets"][0]["week_count"] == 3
    assert len(doc["parsed_data"]) == 2


def test_parse_error_stores_nothing():
    store = InMemoryReportStore()
    with pytest.raises(ParseError):
        ingest_upload(store, b"garbage", "bad.xlsx")
    assert store.list_reports() == []


def test_list_reports_newest_first(standard_workbook):
    store = InMemoryReportStore()
    ids = []
    for i in range(3):
        report = extract_report(standard_workbook, f"Week {i}.xlsx")
        report.upload_date = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(days=i)
        ids.append(store.save_report(report, standard_workbook))

    listed = store.list_reports(limit=2)
    assert [rid for rid, _ in listed] == [ids[2], ids[1]]
    assert listed[0][1].week_number == "2"


def test_unknown_ids():
    store = InMemoryReportStore()
    with pytest.raises(KeyError):
        store.get_report("missing")
    with pytest.raises(KeyError):
        store.get_blob("reports/missing.xlsx")
