"""
Shared utilities for data ingestion: defensive cell coercion and file-name
metadata.
"""

import logging
import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

from openpyxl.utils.datetime import to_excel

from ..config import UNKNOWN_WEEK_NUMBER, WEEK_NUMBER_PATTERN

logger = logging.getLogger(__name__)

_WEEK_NUMBER_RE = re.compile(WEEK_NUMBER_PATTERN, re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def safe_number(val: Any) -> float:
    """Coerce a cell value to float, returning 0.0 for anything non-numeric.

    Text is read up to its leading decimal literal, so " 1250.5 " -> 1250.5,
    "78%" -> 78.0, "12 hrs" -> 12.0 and "1,250" -> 1.0. Date and time cells
    become their Excel serial number. Blank cells, formula strings, text with
    no leading number, booleans and NaN/inf all degrade to 0.0.
    """
    if val is None or isinstance(val, bool):
        return 0.0
    if isinstance(val, (datetime, date, time, timedelta)):
        return float(to_excel(val))
    if isinstance(val, str):
        val = val.strip()
        # Skip formula strings and empty cells
        if val.startswith("=") or not val:
            return 0.0
        match = _LEADING_NUMBER_RE.match(val)
        if match is None:
            return 0.0
        num = float(match.group(0))
    else:
        try:
            num = float(val)
        except (ValueError, TypeError):
            return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


def safe_text(val: Any) -> str:
    """Stringify a cell value; None becomes the empty string.

    Whole-number floats drop their trailing ".0" so a fiscal year stored as
    2024.0 reads back as "2024".
    """
    if val is None:
        return ""
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


def extract_week_number(file_name: str) -> str:
    """Return the digit run following "Week" plus a space or underscore.

    "13WeekReport_Week_37.xlsx" -> "37"; no match -> "Unknown".
    """
    match = _WEEK_NUMBER_RE.search(file_name or "")
    if match is None:
        logger.warning("No week number found in file name '%s'", file_name)
        return UNKNOWN_WEEK_NUMBER
    return match.group(1)
