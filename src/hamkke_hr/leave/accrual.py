from __future__ import annotations

from .model import LeaveBalance


def total_earned(balance: LeaveBalance) -> int:
    return balance.total_months + balance.earned_days + balance.bonus_days


def remaining(balance: LeaveBalance) -> int:
    """total_months + earned_days + bonus_days - used_days."""
    return total_earned(balance) - balance.used_days


def back_solve_earned_days(requested_total: int, *, total_months: int, bonus_days: int) -> int:
    """The stored earned_days that makes the total come out as ``requested_total``.

    May be negative when the admin asks for less than tenure plus bonus.
    """

    return int(requested_total) - int(total_months) - int(bonus_days)
