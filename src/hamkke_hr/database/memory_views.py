from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import coerce_date, span_days, today_local


def tenure_months(hire_date, today: date) -> int:
    """Whole months from hire_date to today, like MySQL TIMESTAMPDIFF(MONTH, ...)."""

    if not hire_date:
        return 0
    hired = coerce_date(hire_date)
    months = (today.year - hired.year) * 12 + (today.month - hired.month)
    if today.day < hired.day:
        months -= 1
    return months


def remaining_leaves(store, today: Optional[date] = None) -> list[dict]:
    """Rows of the ``remaining_leaves`` view, derived the way schema.sql does."""

    today = today or today_local()
    ledger = {int(r["user_id"]): r for r in store.rows("leave_days")}

    used: dict[int, int] = {}
    for req in store.rows("leave_requests"):
        if req.get("status") == "approved":
            uid = int(req["user_id"])
            used[uid] = used.get(uid, 0) + span_days(req["start_date"], req["end_date"])

    rows = []
    for user in store.rows("users"):
        if user.get("deleted"):
            continue
        uid = int(user["id"])
        entry = ledger.get(uid, {})
        rows.append(
            {
                "user_id": uid,
                "name": user.get("name"),
                "hire_date": user.get("hire_date"),
                "total_months": tenure_months(user.get("hire_date"), today),
                "earned_days": int(entry.get("earned_days") or 0),
                "bonus_days": int(entry.get("bonus_days") or 0),
                "used_days": used.get(uid, 0),
            }
        )
    return rows


DEFAULT_VIEWS: dict[str, Callable] = {"remaining_leaves": remaining_leaves}
