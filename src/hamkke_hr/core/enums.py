from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Per-day attendance state, recomputed on every read."""

    ABSENT = "ABSENT"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class LeaveStatus(str, Enum):
    """Leave request workflow state."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class EmployeeState(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class ClockAction(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
