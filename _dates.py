# _dates.py
from __future__ import annotations
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from _logging import log as root_log

NOT_SET_MSG = "NEXT_DT environment variable not set."
INVALID_MSG = "Invalid date format in environment variable."

def resolve_tz(name: Optional[str]) -> Optional[tzinfo]:
    """IANA zone name -> tzinfo; None or unknown -> None (system local time)."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        root_log.child("DATES").warn(f"Unknown DISPLAY_TZ {name!r}; using local time.")
        return None

def parse_iso(value: str) -> datetime:
    """A bare YYYY-MM-DD is midnight UTC; date-times without an offset are local."""
    s = value.strip()
    if len(s) == 10 and "T" not in s:
        d = date.fromisoformat(s)
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)

def format_next_dt(value: Optional[str], tz: Optional[tzinfo] = None) -> str:
    """
    '2025-09-13T22:00' -> '09 / 13 - 2200'
    '2025-09-13T22:05' -> '09 / 13 - 22:05'
    Aware values are shown in `tz` (or local time); naive values are already local.
    """
    if not value or not value.strip():
        return NOT_SET_MSG
    try:
        dt = parse_iso(value)
        if dt.tzinfo is not None:
            dt = dt.astimezone(tz)
    except (ValueError, TypeError, OverflowError) as e:
        root_log.child("DATES").error(f"Error formatting date from NEXT_DT: {e}")
        return INVALID_MSG
    if dt.minute == 0:
        time_str = f"{dt.hour}00"
    else:
        time_str = f"{dt.hour}:{dt.minute:02d}"
    return f"{dt.month:02d} / {dt.day:02d} - {time_str}"
