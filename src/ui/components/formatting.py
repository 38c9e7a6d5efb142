"""
Utility helpers for formatting dates, counts and statuses for display.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

MISSING = "N/A"
INVALID_DATE = "Invalid Date"
# relative keywords pandas resolves against the current clock
RELATIVE_DATE_WORDS = frozenset({"now", "today"})


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_date(value: Optional[str]) -> str:
    """Render a stored calendar date as ``YYYY-MM-DD``.

    The string is read as UTC (date-only values become UTC midnight) and the
    day is taken in UTC, so the displayed day is the stored day whatever the
    viewer's local timezone is. Unparseable input falls back to the raw text.
    """
    if _is_missing(value) or value == "":
        return MISSING
    raw = str(value)
    try:
        if raw.strip().lower() in RELATIVE_DATE_WORDS:
            raise ValueError("relative date keyword")
        parsed = pd.to_datetime(raw.strip(), utc=True)
        if pd.isna(parsed):
            raise ValueError("parsed to NaT")
        # four-digit year even below 1000
        return parsed.date().isoformat()
    except (ValueError, TypeError, OverflowError) as exc:
        logger.warning("Error formatting date string %r: %s", raw, exc)
        return raw if raw.strip() else INVALID_DATE


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if _is_missing(value):
        return MISSING
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return MISSING


def format_text(value: Optional[str]) -> str:
    return MISSING if _is_missing(value) else str(value)


def format_status(value: Optional[bool]) -> str:
    return "Success" if not _is_missing(value) and bool(value) else "Failed"
