from datetime import date, datetime

from hamkke_hr.attendance.store_repository import StoreAttendanceRepository
from hamkke_hr.core.enums import Role
from hamkke_hr.leave.store_repository import StoreLeaveRequestRepository
from hamkke_hr.notifications.store_repository import StoreNotificationRepository
from hamkke_hr.reports.dashboard import DashboardService
from hamkke_hr.users.store_repository import StoreEmployeeRepository


def _service(store) -> DashboardService:
    return DashboardService(
        StoreEmployeeRepository(store),
        StoreAttendanceRepository(store),
        StoreLeaveRequestRepository(store),
        StoreNotificationRepository(store),
    )


def _seed(store):
    store.insert(
        "attendance",
        [
            {"user_id": 2, "date": "2025-01-07", "clock_in": datetime(2025, 1, 7, 9, 0), "clock_out": None},
            {"user_id": 3, "date": "2025-01-07", "clock_in": datetime(2025, 1, 7, 9, 5), "clock_out": None},
            {"user_id": 3, "date": "2025-01-06", "clock_in": datetime(2025, 1, 6, 9, 5), "clock_out": None},
        ],
    )
    store.insert(
        "leave_requests",
        [
            {"user_id": 2, "start_date": "2025-02-01", "end_date": "2025-02-01", "status": "pending", "reason": "a"},
            {"user_id": 3, "start_date": "2025-02-01", "end_date": "2025-02-01", "status": "pending", "reason": "b"},
            {"user_id": 3, "start_date": "2025-01-02", "end_date": "2025-01-02", "status": "approved", "reason": "c"},
        ],
    )
    store.insert(
        "notifications",
        [
            {"user_id": 1, "message": "m1", "type": None, "read": False, "created_at": datetime(2025, 1, 7, 8, 0)},
            {"user_id": 2, "message": "m2", "type": None, "read": True, "created_at": datetime(2025, 1, 7, 8, 0)},
        ],
    )


def test_admin_dashboard(store):
    _seed(store)
    stats = _service(store).stats(user_id=1, role=Role.ADMIN, today=date(2025, 1, 7))

    assert stats.to_dict() == {
        "total_employees": 3,
        "today_attendance": 2,
        "pending_leaves": 2,
        "unread_notifications": 1,
    }


def test_employee_dashboard_only_shows_own_numbers(store):
    _seed(store)
    stats = _service(store).stats(user_id=2, role=Role.EMPLOYEE, today=date(2025, 1, 7))

    assert stats.total_employees == 0
    assert stats.today_attendance == 0
    assert stats.pending_leaves == 1
    assert stats.unread_notifications == 0
