from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pytest

from hamkke_hr.attendance.store_repository import StoreAttendanceRepository
from hamkke_hr.core.exceptions import ValidationError
from hamkke_hr.reports.export import attendance_matrix_csv, work_hours_csv
from hamkke_hr.reports.service import WorkHoursReportService
from hamkke_hr.users.store_repository import StoreEmployeeRepository

TODAY = date(2025, 1, 7)


@pytest.fixture
def service(store):
    store.insert(
        "attendance",
        [
            {"user_id": 3, "date": "2025-01-05", "clock_in": datetime(2025, 1, 5, 9, 0), "clock_out": datetime(2025, 1, 5, 12, 30)},
            {"user_id": 2, "date": "2025-01-06", "clock_in": datetime(2025, 1, 6, 9, 0), "clock_out": datetime(2025, 1, 6, 20, 0)},
            {"user_id": 2, "date": "2025-01-07", "clock_in": datetime(2025, 1, 7, 9, 0), "clock_out": None},
            {"user_id": 4, "date": "2025-01-07", "clock_in": datetime(2025, 1, 7, 9, 0), "clock_out": None},
        ],
    )
    return WorkHoursReportService(StoreAttendanceRepository(store), StoreEmployeeRepository(store))


def _row(matrix, user_id):
    return next(r for r in matrix.rows if r["user_id"] == user_id)


def test_attendance_matrix_cells(service):
    matrix = service.build_attendance_matrix(days=3, today=TODAY)

    assert matrix.dates == ["2025-01-05", "2025-01-06", "2025-01-07"]
    assert [r["name"] for r in matrix.rows] == ["Admin Park", "Kim Minji", "Lee Joon"]
    assert _row(matrix, 2)["cells"] == ["ABSENT", "COMPLETE", "IN_PROGRESS"]
    assert _row(matrix, 3)["cells"] == ["COMPLETE", "ABSENT", "ABSENT"]
    assert _row(matrix, 1)["cells"] == ["ABSENT", "ABSENT", "ABSENT"]


def test_attendance_matrix_search(service):
    matrix = service.build_attendance_matrix(search="sales", days=3, today=TODAY)
    assert [r["user_id"] for r in matrix.rows] == [2]


def test_work_hours_are_capped_at_cutoff(service):
    matrix = service.build_work_hours_matrix(days=3, today=TODAY)

    kim = _row(matrix, 2)
    assert kim["daily"] == ["", "9:00", ""]
    assert kim["total_minutes"] == 540
    assert kim["total_hours"] == "9:00"
    assert kim["work_days"] == 1

    lee = _row(matrix, 3)
    assert lee["total_hours"] == "3:30"
    assert lee["daily"] == ["3:30", "", ""]


def test_explicit_window(service):
    matrix = service.build_work_hours_matrix(start="2025-01-06", end="2025-01-06")
    assert matrix.dates == ["2025-01-06"]
    assert _row(matrix, 3)["total_minutes"] == 0

    empty = service.build_attendance_matrix(start="2025-01-07", end="2025-01-05")
    assert empty.dates == []
    assert all(r["cells"] == [] for r in empty.rows)


def test_window_validation(service):
    with pytest.raises(ValidationError):
        service.build_attendance_matrix(start="2025-01-06")
    with pytest.raises(ValidationError):
        service.build_attendance_matrix(start="yesterday", end="2025-01-06")


def test_zero_days_means_whole_recorded_period(service):
    matrix = service.build_attendance_matrix(days=0)
    assert matrix.dates == ["2025-01-05", "2025-01-06", "2025-01-07"]


def test_zero_days_without_records(store):
    service = WorkHoursReportService(StoreAttendanceRepository(store), StoreEmployeeRepository(store))
    assert service.build_attendance_matrix(days=0).dates == []


def test_employee_detail(service):
    detail = service.build_employee_detail(2, days=3, today=TODAY)

    assert detail[0] == {"date": "2025-01-05", "clock_in": "-", "clock_out": "-", "worked": ""}
    assert detail[1] == {"date": "2025-01-06", "clock_in": "09:00", "clock_out": "18:00", "worked": "9:00"}
    assert detail[2] == {"date": "2025-01-07", "clock_in": "09:00", "clock_out": "-", "worked": ""}

    with pytest.raises(ValidationError):
        service.build_employee_detail(4, days=3, today=TODAY)


def _read_csv(payload: bytes) -> list[list[str]]:
    assert payload.startswith(b"\xef\xbb\xbf")
    return list(csv.reader(io.StringIO(payload.decode("utf-8-sig"))))


def test_attendance_csv_uses_labels(service):
    rows = _read_csv(attendance_matrix_csv(service.build_attendance_matrix(days=3, today=TODAY)))

    assert rows[0] == ["name", "department", "2025-01-05", "2025-01-06", "2025-01-07"]
    assert rows[2] == ["Kim Minji", "Sales", "X", "O", "No clock-out"]


def test_work_hours_csv(service):
    rows = _read_csv(work_hours_csv(service.build_work_hours_matrix(days=3, today=TODAY)))

    assert rows[0][:4] == ["name", "department", "work_days", "total_hours"]
    assert rows[3] == ["Lee Joon", "Dev", "1", "3:30", "3:30", "", ""]
