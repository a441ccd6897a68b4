"""Data ingestion loaders for 13 Week Report workbooks."""

from .utils import extract_week_number, safe_number, safe_text
from .weekly_report import ParseError, extract_report, parse_row, parse_sheet

__all__ = [
    "ParseError",
    "extract_report",
    "parse_sheet",
    "parse_row",
    "extract_week_number",
    "safe_number",
    "safe_text",
]
