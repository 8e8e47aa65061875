from __future__ import annotations
from typing import Any, Iterable, Optional
from datetime import date, datetime
import re
import warnings
import pandas as pd
import pytz

DEFAULT_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")

_HAS_DIGIT = re.compile(r"\d")
# free-form text reaches pandas only with a date separator or a month name
_DATE_SEPARATOR = re.compile(r"[-/.:]")
_MONTH_NAME = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\b", re.IGNORECASE)

def parse_any_datetime(
    s: Any,
    formats: Iterable[str] = DEFAULT_FORMATS,
) -> Optional[datetime]:
    """
    Parse a date-like scalar into a naive or aware datetime, or None.
    Strings must contain a digit; bare month or weekday names are not dates,
    and neither are ordinals like "1st" (no separator, no month name).
    """
    if isinstance(s, pd.Timestamp):
        return None if pd.isna(s) else s.to_pydatetime()
    if isinstance(s, datetime):
        return s
    if isinstance(s, date):
        return datetime(s.year, s.month, s.day)
    if not isinstance(s, str):
        return None
    text = s.strip()
    if not text or not _HAS_DIGIT.search(text):
        return None
    for f in formats:
        try:
            return datetime.strptime(text, f)
        except ValueError:
            continue
    if not (_DATE_SEPARATOR.search(text) or _MONTH_NAME.search(text)):
        return None
    # pandas as fallback
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            dt = pd.to_datetime(text, errors="raise")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(dt):
        return None
    return dt.to_pydatetime()

def to_timezone(dt: datetime, tz: str) -> datetime:
    tzinfo = pytz.timezone(tz)
    if dt.tzinfo is None:
        return tzinfo.localize(dt)
    return dt.astimezone(tzinfo)

def sort_instant(dt: datetime) -> float:
    """Comparable number for a datetime; naive values are read as UTC."""
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.timestamp()

def local_now(tz: Optional[str] = None) -> datetime:
    if tz:
        return datetime.now(pytz.timezone(tz))
    return datetime.now()
