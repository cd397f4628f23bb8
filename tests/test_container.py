from __future__ import annotations

from datetime import date, datetime

import pytest

from hamkke_hr.container import build_container, build_store
from hamkke_hr.core.enums import Role

from conftest import seed_users


@pytest.fixture
def container(monkeypatch):
    monkeypatch.setattr("hamkke_hr.database.memory_views.today_local", lambda: date(2025, 1, 20))
    store = build_store(backend="memory")
    store.insert("users", seed_users())
    return build_container(store=store)


def test_memory_backend_balances_follow_ledger_and_approvals(container):
    leave = container.leave_service
    leave.set_bonus_days(current_role=Role.ADMIN, user_id=2, bonus_days=3)
    rid = leave.submit_request(user_id=2, start_date="2025-02-03", end_date="2025-02-04", reason="trip")
    leave.approve(current_role=Role.ADMIN, admin_user_id=1, request_id=rid, now=datetime(2025, 1, 20, 10, 0))

    balance = leave.get_balance(2)

    assert (balance.bonus_days, balance.used_days) == (3, 2)
    assert balance.total_months == 10


def test_memory_backend_total_then_bonus(container):
    leave = container.leave_service
    leave.set_bonus_days(current_role=Role.ADMIN, user_id=3, bonus_days=1)
    earned = leave.set_total_earned_days(current_role=Role.ADMIN, user_id=3, requested_total=20)

    balance = leave.get_balance(3)

    assert earned == 20 - 18 - 1
    assert (balance.total_months, balance.earned_days, balance.bonus_days) == (18, 1, 1)


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        build_store(backend="sqlite")
