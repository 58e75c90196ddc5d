"""Date formatting helpers for stored RFC 3339 timestamps."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

INVALID_DATE = "Invalid date"

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:(?P<utc>[Zz])|(?P<sign>[+-])(?P<oh>\d{2}):(?P<om>\d{2}))"
)


def _parse_rfc3339(ts: str) -> datetime:
    match = _RFC3339.fullmatch(ts)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {ts!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int((fraction + "000000")[:6])
    if second == 60:
        # Leap second: keep it within the same minute.
        second = 59
    if match.group("utc"):
        offset = timedelta(0)
    else:
        hours, minutes = int(match.group("oh")), int(match.group("om"))
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid UTC offset in {ts!r}")
        offset = timedelta(hours=hours, minutes=minutes)
        if match.group("sign") == "-":
            offset = -offset
    return datetime(
        year, month, day, hour, minute, second, microsecond, tzinfo=timezone(offset)
    )


def _format_date(day: date) -> str:
    return f"{day.day:02d}/{day.month:02d}/{day.year:04d}"


def format_timestamp_ddmmyyyy(ts: str) -> str:
    """Return the UTC date of an RFC 3339 timestamp as DD/MM/YYYY, or "Invalid date"."""
    try:
        moment = _parse_rfc3339(ts)
        utc_date = moment.astimezone(timezone.utc).date()
    except (ValueError, OverflowError):
        return INVALID_DATE
    return _format_date(utc_date)