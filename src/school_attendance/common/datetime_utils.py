from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError

_CLOCK_RE = re.compile(r"^(0?[1-9]|1[0-2]):([0-5][0-9])\s(AM|PM)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_request_date(value: str | None) -> date:
    """Accept YYYY-MM-DD or a full ISO timestamp; default to today.

    Timestamps carrying an offset are bucketed by the local server day.
    """
    if not value:
        return now_local().date()
    value = str(value).strip()
    if len(value) > 10:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid date {value!r}")
        if dt.tzinfo is not None:
            dt = dt.astimezone().replace(tzinfo=None)
        return dt.date()
    return parse_iso_date(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_window(day: date) -> tuple[datetime, datetime]:
    """First and last instant of a calendar day in local server time."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1) - timedelta(milliseconds=1)


def parse_clock_time(value: str) -> time:
    """Parse schedule times like '9:30 AM'."""
    m = _CLOCK_RE.match(str(value or "").strip())
    if not m:
        raise ValidationError("Time must be in format: HH:MM AM/PM (e.g., 9:30 AM)")
    hours, minutes, period = int(m.group(1)), int(m.group(2)), m.group(3)
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    return time(hour=hours, minute=minutes)


def format_clock_time(value: time) -> str:
    hours = value.hour % 12 or 12
    period = "PM" if value.hour >= 12 else "AM"
    return f"{hours}:{value.minute:02d} {period}"


def weekday_name(day: date) -> str:
    return day.strftime("%A")
