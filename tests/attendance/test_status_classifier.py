from __future__ import annotations

from datetime import date, datetime

from hamkke_hr.attendance.model import AttendanceRecord
from hamkke_hr.attendance.status import STATUS_LABELS, classify
from hamkke_hr.core.enums import AttendanceStatus


def _record(clock_in=None, clock_out=None) -> AttendanceRecord:
    return AttendanceRecord(attendance_id=1, user_id=2, work_date=date(2025, 1, 6), clock_in=clock_in, clock_out=clock_out)


def test_no_record_is_absent():
    assert classify(None) == AttendanceStatus.ABSENT


def test_record_without_clock_in_is_absent():
    assert classify(_record()) == AttendanceStatus.ABSENT
    assert classify(_record(clock_out=datetime(2025, 1, 6, 18, 0))) == AttendanceStatus.ABSENT


def test_open_record_is_in_progress():
    rec = _record(clock_in=datetime(2025, 1, 6, 9, 0))
    assert rec.is_open
    assert classify(rec) == AttendanceStatus.IN_PROGRESS


def test_closed_record_is_complete():
    rec = _record(clock_in=datetime(2025, 1, 6, 9, 0), clock_out=datetime(2025, 1, 6, 18, 0))
    assert not rec.is_open
    assert classify(rec) == AttendanceStatus.COMPLETE


def test_every_status_has_a_label():
    assert set(STATUS_LABELS) == set(AttendanceStatus)
    assert STATUS_LABELS[AttendanceStatus.ABSENT] == "X"
    assert STATUS_LABELS[AttendanceStatus.COMPLETE] == "O"
