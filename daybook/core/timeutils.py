"""Date and clock-time helpers."""

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo

from .exceptions import ValidationError

IST = "Asia/Kolkata"

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_in(tz_name: str = IST, now: Optional[dt.datetime] = None) -> str:
    """Calendar date (YYYY-MM-DD) in the given zone."""
    now = now or dt.datetime.now(dt.timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    return now.astimezone(ZoneInfo(tz_name)).strftime("%Y-%m-%d")


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def parse_hhmm(s: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string."""
    m = _HHMM_RE.match(s.strip()) if isinstance(s, str) else None
    if not m:
        raise ValidationError(f"Invalid time {s!r}, expected HH:MM")
    hh, mm = int(m.group(1)), int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValidationError(f"Invalid time {s!r}, expected HH:MM")
    return hh * 60 + mm


def validate_date(s: str) -> str:
    if not isinstance(s, str) or not _DATE_RE.match(s):
        raise ValidationError("Date must be in YYYY-MM-DD format")
    try:
        dt.datetime.strptime(s, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format") from None
    return s


def span_minutes(start_time: str, end_time: str) -> int:
    """Same-day difference ``end - start`` in minutes."""
    start = parse_hhmm(start_time)
    end = parse_hhmm(end_time)
    if end <= start:
        raise ValidationError("End time must be after start time")
    return end - start
