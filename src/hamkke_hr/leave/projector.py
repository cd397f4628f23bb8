from __future__ import annotations

from typing import Iterable, Protocol

from ..common.datetime_utils import date_span
from .model import LeaveCalendarEntry


class CalendarLeave(Protocol):
    start_date: object
    end_date: object
    user_id: int
    employee_name: object


def project_leave_calendar(requests: Iterable[CalendarLeave]) -> dict[str, list[LeaveCalendarEntry]]:
    """Map each day of every request span to the employees on leave that day.

    The whole span is enumerated; restricting to a display window is up to
    the caller's query. Per-day order follows the order of ``requests``.
    """

    by_day: dict[str, list[LeaveCalendarEntry]] = {}
    for req in requests:
        entry = LeaveCalendarEntry(user_id=int(req.user_id), name=str(req.employee_name or req.user_id))
        for day in date_span(req.start_date, req.end_date):
            by_day.setdefault(day, []).append(entry)
    return by_day
