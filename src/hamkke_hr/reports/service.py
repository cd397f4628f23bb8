from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.calculator.base import WorkDurationCalculator
from ..attendance.calculator.cutoff_calculator import CutoffWorkCalculator, cap_clock_out
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.status import classify
from ..common.datetime_utils import coerce_date, date_range, date_span, format_minutes, to_iso_date
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from ..users.search import REPORT_FIELDS, matches_query


@dataclass(frozen=True)
class ReportWindow:
    dates: list[str]

    @property
    def start(self) -> Optional[str]:
        return self.dates[0] if self.dates else None

    @property
    def end(self) -> Optional[str]:
        return self.dates[-1] if self.dates else None


@dataclass(frozen=True)
class AttendanceMatrix:
    dates: list[str]
    rows: list[dict]


@dataclass(frozen=True)
class WorkHoursMatrix:
    dates: list[str]
    rows: list[dict]


class WorkHoursReportService:
    """Admin read-models: per-day attendance status and worked time per employee."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[WorkDurationCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or CutoffWorkCalculator()

    def resolve_window(
        self,
        *,
        days: Optional[int] = DEFAULT_REPORT_DAYS,
        start=None,
        end=None,
        today: Optional[date] = None,
    ) -> tuple[ReportWindow, list[AttendanceRecord]]:
        """Pick the report days and load the records inside them.

        - explicit ``start``/``end`` wins;
        - ``days == 0`` means the whole recorded period;
        - otherwise the last ``days`` days ending today.
        """

        if start is not None or end is not None:
            if start is None or end is None:
                raise ValidationError("Both start and end dates are required")
            try:
                first, last = coerce_date(start), coerce_date(end)
            except ValueError:
                raise ValidationError("Dates must be YYYY-MM-DD")
            window = ReportWindow(date_span(first, last))
            if not window.dates:
                return window, []
            return window, list(self._attendance.list_between(start_date=first, end_date=last))

        if days == 0:
            records = list(self._attendance.list_between())
            if not records:
                return ReportWindow([]), []
            work_dates = sorted(r.work_date for r in records)
            return ReportWindow(date_span(work_dates[0], work_dates[-1])), records

        window = ReportWindow(date_range(int(days if days is not None else DEFAULT_REPORT_DAYS), today=today))
        if not window.dates:
            return window, []
        records = self._attendance.list_between(start_date=coerce_date(window.start), end_date=coerce_date(window.end))
        return window, list(records)

    def _employees_matching(self, search: str) -> list[Employee]:
        return [e for e in self._employees.list_active() if matches_query(e, search, fields=REPORT_FIELDS)]

    @staticmethod
    def _index(records: list[AttendanceRecord]) -> dict[int, dict[str, AttendanceRecord]]:
        by_user: dict[int, dict[str, AttendanceRecord]] = {}
        for r in records:
            by_user.setdefault(r.user_id, {})[to_iso_date(r.work_date)] = r
        return by_user

    def build_attendance_matrix(self, *, search: str = "", **window_args) -> AttendanceMatrix:
        window, records = self.resolve_window(**window_args)
        by_user = self._index(records)

        rows = []
        for emp in self._employees_matching(search):
            mine = by_user.get(emp.user_id, {})
            statuses: list[AttendanceStatus] = [classify(mine.get(d)) for d in window.dates]
            rows.append(
                {
                    "user_id": emp.user_id,
                    "name": emp.display_name,
                    "department": emp.department or "",
                    "cells": [s.value for s in statuses],
                }
            )
        return AttendanceMatrix(dates=window.dates, rows=rows)

    def build_work_hours_matrix(self, *, search: str = "", **window_args) -> WorkHoursMatrix:
        window, records = self.resolve_window(**window_args)
        by_user = self._index(records)

        rows = []
        for emp in self._employees_matching(search):
            mine = by_user.get(emp.user_id, {})
            total_minutes = 0
            daily: list[str] = []
            for d in window.dates:
                rec = mine.get(d)
                minutes = self._calculator.worked_minutes(rec.clock_in, rec.clock_out) if rec else 0
                total_minutes += minutes
                daily.append(format_minutes(minutes) if minutes > 0 else "")

            rows.append(
                {
                    "user_id": emp.user_id,
                    "name": emp.display_name,
                    "department": emp.department or "",
                    "work_days": sum(1 for cell in daily if cell),
                    "total_minutes": total_minutes,
                    "total_hours": format_minutes(total_minutes),
                    "daily": daily,
                }
            )
        return WorkHoursMatrix(dates=window.dates, rows=rows)

    def build_employee_detail(self, user_id: int, **window_args) -> list[dict]:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise ValidationError("Employee not found")

        window, records = self.resolve_window(**window_args)
        mine = self._index(records).get(employee.user_id, {})

        detail = []
        for d in window.dates:
            rec = mine.get(d)
            clock_in = rec.clock_in if rec else None
            clock_out = cap_clock_out(clock_in, rec.clock_out) if rec else None
            minutes = self._calculator.worked_minutes(clock_in, rec.clock_out) if rec else 0
            detail.append(
                {
                    "date": d,
                    "clock_in": clock_in.strftime("%H:%M") if clock_in else "-",
                    "clock_out": clock_out.strftime("%H:%M") if clock_out else "-",
                    "worked": format_minutes(minutes) if minutes > 0 else "",
                }
            )
        return detail
