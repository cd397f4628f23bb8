from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_minutes, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, MISSED_CLOCK_OUT_THRESHOLD, WORKDAY_CUTOFF
from ..core.enums import ClockAction, Role
from ..core.exceptions import ValidationError
from ..notifications.service import NotificationService
from .calculator.base import WorkDurationCalculator
from .calculator.standard_calculator import StandardWorkCalculator
from .factory import ClockInStrategyFactory
from .model import AttendanceRecord, ClockResult
from .reconcile import reconcile_missed_clock_out
from .repository import AttendanceRepository
from .status import STATUS_LABELS, classify

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        notifications: Optional[NotificationService] = None,
        *,
        strategy_factory: ClockInStrategyFactory | None = None,
        calculator: WorkDurationCalculator | None = None,
        reconcile_threshold=MISSED_CLOCK_OUT_THRESHOLD,
        cutoff=WORKDAY_CUTOFF,
    ):
        self._attendance = attendance
        self._notifications = notifications
        self._factory = strategy_factory or ClockInStrategyFactory()
        self._calculator = calculator or StandardWorkCalculator()
        self._reconcile_threshold = reconcile_threshold
        self._cutoff = cutoff

    def reconcile_prior_day(self, user_id: int, *, role: Role, now: datetime) -> Optional[datetime]:
        """Close yesterday's open record before a new clock action (not for admins)."""

        if role == Role.ADMIN:
            return None

        prior = self._attendance.get_latest_before(user_id, now.date())
        corrected = reconcile_missed_clock_out(
            prior,
            now,
            threshold=self._reconcile_threshold,
            cutoff=self._cutoff,
        )
        if corrected is None or prior is None:
            return None

        if not self._attendance.set_clock_out(attendance_id=prior.attendance_id, clock_out=corrected):
            # Closed concurrently; nothing left to correct.
            return None

        if self._notifications:
            self._notifications.notify(
                user_id=user_id,
                message=(
                    f"Your clock-out for {prior.work_date:%Y-%m-%d} was missing "
                    f"and has been recorded as {corrected:%H:%M}."
                ),
                type="attendance",
                now=now,
            )
        return corrected

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing:
            raise ValidationError("You have already clocked in today")

        strategy = self._factory.for_clock_in(now=now)
        decision = strategy.decide_clock_in(now=now)

        record = self._attendance.create_clock_in(user_id=user_id, work_date=today, clock_in=decision.clock_in)
        logger.info("clock-in user=%s at %s%s", user_id, decision.clock_in.isoformat(), f" ({decision.note})" if decision.note else "")
        return record

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise ValidationError("You have not clocked in today")
        if record.clock_out is not None:
            raise ValidationError("You have already clocked out today")

        if not self._attendance.set_clock_out(attendance_id=record.attendance_id, clock_out=now):
            raise ValidationError("Clock-out failed")
        logger.info("clock-out user=%s at %s", user_id, now.isoformat())
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            clock_in=record.clock_in,
            clock_out=now,
        )

    def clock_action(self, user_id: int, *, role: Role, now: datetime | None = None) -> ClockResult:
        """Single button: clock in if today has no record, otherwise clock out."""

        now = now or now_local()
        corrected = self.reconcile_prior_day(user_id, role=role, now=now)

        today_record = self._attendance.get_for_user_and_date(user_id, now.date())
        if today_record is None:
            record = self.check_in(user_id, now=now)
            return ClockResult(action=ClockAction.CLOCK_IN.value, record=record, corrected_clock_out=corrected)

        if today_record.clock_out is None:
            record = self.check_out(user_id, now=now)
            return ClockResult(action=ClockAction.CLOCK_OUT.value, record=record, corrected_clock_out=corrected)

        raise ValidationError("Today's attendance is already complete")

    def get_history_ui(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_user(user_id, limit)
        return [self._to_ui(r) for r in rows]

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a user"""
        return self._attendance.get_for_user_and_date(user_id, today)

    def _to_ui(self, r: AttendanceRecord) -> dict:
        status = classify(r)
        minutes = self._calculator.worked_minutes(r.clock_in, r.clock_out)
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "clock_in": r.clock_in.strftime("%H:%M") if r.clock_in else "-",
            "clock_out": r.clock_out.strftime("%H:%M") if r.clock_out else "-",
            "worked": format_minutes(minutes) if r.clock_in and r.clock_out else "",
            "status": status.value,
            "status_label": STATUS_LABELS[status],
        }
