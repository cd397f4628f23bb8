from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import ClockInStrategyFactory
from .attendance.service import AttendanceService
from .attendance.store_repository import StoreAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import InMemoryRowStore
from .database.mysql_store import MySQLRowStore
from .database.store import RowStore
from .leave.service import LeaveService
from .leave.store_repository import StoreLeaveBalanceReader, StoreLeaveLedgerWriter, StoreLeaveRequestRepository
from .notifications.service import NotificationService
from .notifications.store_repository import StoreNotificationRepository
from .reports.dashboard import DashboardService
from .reports.service import WorkHoursReportService
from .users.service import EmployeeService
from .users.store_repository import StoreEmployeeRepository


@dataclass(frozen=True)
class Container:
    store: RowStore

    employees_repo: StoreEmployeeRepository
    attendance_repo: StoreAttendanceRepository
    leave_requests_repo: StoreLeaveRequestRepository
    leave_balances: StoreLeaveBalanceReader
    leave_ledger: StoreLeaveLedgerWriter
    notifications_repo: StoreNotificationRepository

    employee_service: EmployeeService
    notification_service: NotificationService
    attendance_service: AttendanceService
    leave_service: LeaveService
    report_service: WorkHoursReportService
    dashboard_service: DashboardService


def build_store(*, backend: str, db_config: Optional[dict] = None) -> RowStore:
    if backend == "memory":
        return InMemoryRowStore()

    if backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND: {backend}")

    return MySQLRowStore(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)))


def build_container(*, store: RowStore) -> Container:
    employees_repo = StoreEmployeeRepository(store)
    attendance_repo = StoreAttendanceRepository(store)
    leave_requests_repo = StoreLeaveRequestRepository(store)
    leave_balances = StoreLeaveBalanceReader(store)
    leave_ledger = StoreLeaveLedgerWriter(store)
    notifications_repo = StoreNotificationRepository(store)

    employee_service = EmployeeService(employees_repo)
    notification_service = NotificationService(notifications_repo, employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        notification_service,
        strategy_factory=ClockInStrategyFactory(),
    )
    leave_service = LeaveService(leave_requests_repo, leave_balances, leave_ledger)
    report_service = WorkHoursReportService(attendance_repo, employees_repo)
    dashboard_service = DashboardService(employees_repo, attendance_repo, leave_requests_repo, notifications_repo)

    return Container(
        store=store,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_requests_repo=leave_requests_repo,
        leave_balances=leave_balances,
        leave_ledger=leave_ledger,
        notifications_repo=notifications_repo,
        employee_service=employee_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        report_service=report_service,
        dashboard_service=dashboard_service,
    )
