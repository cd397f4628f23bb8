from __future__ import annotations

from datetime import date, datetime

import pytest

from hamkke_hr.database.memory_store import InMemoryRowStore
from hamkke_hr.database.memory_views import remaining_leaves, tenure_months
from hamkke_hr.database.store import any_of, eq, gte, is_null, lte, matches


def test_insert_assigns_ids_after_seeded_rows():
    store = InMemoryRowStore({"users": [{"id": 5, "name": "A"}]})

    saved = store.insert("users", [{"name": "B"}, {"name": "C"}])

    assert [r["id"] for r in saved] == [6, 7]
    assert len(store.rows("users")) == 3


def test_select_filters_order_and_limit():
    store = InMemoryRowStore()
    store.insert(
        "attendance",
        [
            {"user_id": 1, "date": "2025-01-03"},
            {"user_id": 1, "date": "2025-01-01"},
            {"user_id": 2, "date": "2025-01-02"},
        ],
    )

    rows = store.select("attendance", [eq("user_id", 1)], order_by="date", descending=True, limit=1)
    assert [r["date"] for r in rows] == ["2025-01-03"]

    ranged = store.select("attendance", [gte("date", "2025-01-02"), lte("date", date(2025, 1, 3))], order_by="date")
    assert [r["date"] for r in ranged] == ["2025-01-02", "2025-01-03"]


def test_select_returns_copies():
    store = InMemoryRowStore({"users": [{"id": 1, "name": "A"}]})
    store.select("users")[0]["name"] = "changed"
    assert store.rows("users")[0]["name"] == "A"


def test_nulls_sort_first_ascending():
    store = InMemoryRowStore({"t": [{"id": 1, "v": "b"}, {"id": 2, "v": None}, {"id": 3, "v": "a"}]})
    assert [r["id"] for r in store.select("t", order_by="v")] == [2, 3, 1]


def test_update_counts_matches_and_requires_filters():
    store = InMemoryRowStore({"attendance": [{"id": 1, "clock_out": None}, {"id": 2, "clock_out": None}]})

    assert store.update("attendance", [eq("id", 1), is_null("clock_out")], {"clock_out": datetime(2025, 1, 1, 18, 0)}) == 1
    assert store.update("attendance", [eq("id", 1), is_null("clock_out")], {"clock_out": datetime(2025, 1, 1, 19, 0)}) == 0

    with pytest.raises(ValueError):
        store.update("attendance", [], {"clock_out": None})


def test_predicates():
    row = {"user_id": None, "deleted": 0, "date": date(2025, 1, 2)}

    assert matches(row, any_of(eq("user_id", 2), is_null("user_id")))
    assert matches(row, eq("deleted", False))
    assert matches(row, eq("date", "2025-01-02"))
    assert not matches(row, gte("user_id", 1))
    assert not matches({"user_id": 3}, any_of(eq("user_id", 2), is_null("user_id")))


@pytest.mark.parametrize(
    "hire_date, today, months",
    [
        (date(2024, 3, 15), date(2025, 3, 14), 11),
        (date(2024, 3, 15), date(2025, 3, 15), 12),
        ("2024-01-31", date(2024, 2, 29), 0),
        (None, date(2025, 1, 1), 0),
    ],
)
def test_tenure_months_counts_whole_months(hire_date, today, months):
    assert tenure_months(hire_date, today) == months


def test_remaining_leaves_view_is_derived_from_tables():
    store = InMemoryRowStore(
        {
            "users": [
                {"id": 1, "name": "A", "hire_date": date(2024, 1, 10)},
                {"id": 2, "name": "B", "hire_date": None},
                {"id": 3, "name": "Gone", "hire_date": date(2020, 1, 1), "deleted": True},
            ],
            "leave_days": [{"user_id": 1, "earned_days": -2, "bonus_days": 3}],
            "leave_requests": [
                {"user_id": 1, "start_date": "2024-05-01", "end_date": "2024-05-03", "status": "approved"},
                {"user_id": 1, "start_date": "2024-06-01", "end_date": "2024-06-01", "status": "approved"},
                {"user_id": 1, "start_date": "2024-07-01", "end_date": "2024-07-05", "status": "pending"},
                {"user_id": 2, "start_date": "2024-07-01", "end_date": "2024-07-02", "status": "denied"},
            ],
        }
    )

    rows = remaining_leaves(store, today=date(2024, 12, 10))

    assert rows == [
        {"user_id": 1, "name": "A", "hire_date": date(2024, 1, 10), "total_months": 11, "earned_days": -2, "bonus_days": 3, "used_days": 4},
        {"user_id": 2, "name": "B", "hire_date": None, "total_months": 0, "earned_days": 0, "bonus_days": 0, "used_days": 0},
    ]


def test_views_are_read_only():
    store = InMemoryRowStore()

    with pytest.raises(ValueError):
        store.insert("remaining_leaves", [{"user_id": 1}])
    with pytest.raises(ValueError):
        store.update("remaining_leaves", [eq("user_id", 1)], {"earned_days": 1})


def test_select_reads_views_with_filters():
    store = InMemoryRowStore({"users": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]})

    [row] = store.select("remaining_leaves", [eq("user_id", 2)])

    assert row["name"] == "B"
