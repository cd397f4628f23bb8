from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def coerce_date(value: DateLike) -> date:
    """Accept a date (or datetime) or an ISO day string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def coerce_datetime(value) -> Optional[datetime]:
    """Normalize timestamp columns across store backends.

    Rows can carry:
    - datetime.datetime (mysql-connector)
    - ISO-8601 strings, optionally with a 'Z' or offset suffix
    - None
    Aware values are converted to local naive time so all arithmetic in the
    core happens on one clock.
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported timestamp value type: {type(value)!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def date_range(days: int, *, today: Optional[date] = None) -> list[str]:
    """Last ``days`` calendar days as YYYY-MM-DD, oldest first, ending today."""

    if days <= 0:
        return []
    end = today or today_local()
    return [to_iso_date(end - timedelta(days=offset)) for offset in range(days - 1, -1, -1)]


def date_span(start: DateLike, end: DateLike) -> list[str]:
    """Every day from start to end inclusive; empty when start > end."""

    first = coerce_date(start)
    last = coerce_date(end)
    if first > last:
        return []
    return [to_iso_date(first + timedelta(days=i)) for i in range((last - first).days + 1)]


def span_days(start: DateLike, end: DateLike) -> int:
    return max((coerce_date(end) - coerce_date(start)).days + 1, 0)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def format_minutes(minutes: int) -> str:
    """Render minutes as H:MM (hours are not zero padded)."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}:{minutes % 60:02d}"
