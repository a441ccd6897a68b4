"""
Persistence boundary for uploaded reports.

The production deployment keeps workbook blobs in object storage and parsed
reports in a document store. ReportStore describes what the rest of the
package needs from that collaborator; InMemoryReportStore is a complete
implementation used by the pipeline script and the tests.
"""

import logging
import uuid
from datetime import datetime
from typing import Protocol

from .config import DEFAULT_REPORT_LIMIT, REPORT_BLOB_PREFIX
from .loaders import extract_report
from .models import ParsedReport
from .transforms import build_sheet_summary

logger = logging.getLogger(__name__)


class ReportStore(Protocol):
    def save_report(self, report: ParsedReport, data: bytes) -> str: ...

    def get_report(self, report_id: str) -> ParsedReport: ...

    def list_reports(self, limit: int = DEFAULT_REPORT_LIMIT) -> list[tuple[str, ParsedReport]]: ...

    def get_blob(self, path: str) -> bytes: ...


class InMemoryReportStore:
    """Dict-backed blob + document store."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._documents: dict[str, dict] = {}

    def save_report(self, report: ParsedReport, data: bytes) -> str:
        """Store the workbook blob and the parsed report document.

        Returns the new document id.
        """
        stamp = int(report.upload_date.timestamp() * 1000)
        path = f"{REPORT_BLOB_PREFIX}/{stamp}_{report.file_name}"
        self._blobs[path] = bytes(data)

        summary = build_sheet_summary(report)
        report_dict = report.to_dict()
        document = {
            "file_name": report.file_name,
            "week_number": report.week_number,
            "upload_date": report_dict["upload_date"],
            "file_url": path,
            "sheets": summary.to_dict(orient="records"),
            "parsed_data": report_dict["sheets"],
        }

        report_id = uuid.uuid4().hex
        self._documents[report_id] = document
        logger.info(
            "Stored report %s (%s, %d sheets)", report_id, report.file_name, len(report.sheets)
        )
        return report_id

    def get_report(self, report_id: str) -> ParsedReport:
        if report_id not in self._documents:
            raise KeyError(f"Unknown report id: {report_id}")
        return _document_to_report(self._documents[report_id])

    def list_reports(self, limit: int = DEFAULT_REPORT_LIMIT) -> list[tuple[str, ParsedReport]]:
        """Most recent uploads first."""
        ordered = sorted(
            self._documents.items(),
            key=lambda item: datetime.fromisoformat(item[1]["upload_date"]),
            reverse=True,
        )
        return [(rid, _document_to_report(doc)) for rid, doc in ordered[:limit]]

    def get_blob(self, path: str) -> bytes:
        if path not in self._blobs:
            raise KeyError(f"Unknown blob path: {path}")
        return self._blobs[path]

    def get_document(self, report_id: str) -> dict:
        if report_id not in self._documents:
            raise KeyError(f"Unknown report id: {report_id}")
        return self._documents[report_id]


def _document_to_report(document: dict) -> ParsedReport:
    return ParsedReport.from_dict({
        "file_name": document["file_name"],
        "week_number": document["week_number"],
        "upload_date": document["upload_date"],
        "sheets": document["parsed_data"],
    })


def ingest_upload(store: ReportStore, data: bytes, file_name: str) -> tuple[str, ParsedReport]:
    """Extract an uploaded workbook and persist it.

    A ParseError propagates and nothing is stored.
    """
    report = extract_report(data, file_name)
    report_id = store.save_report(report, data)
    return report_id, report
