from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from dateutil.parser import isoparse


def coerce_date(value: Any) -> Optional[date]:
    """
    Accepts a date, a datetime or an ISO-8601 string.
    Anything else (including unparseable strings) becomes None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return isoparse(text).date()
        except (ValueError, OverflowError):
            return None
    return None


def is_valid_range(start: Optional[date], end: Optional[date]) -> bool:
    return start is not None and end is not None and end >= start


__all__ = ["coerce_date", "is_valid_range"]
