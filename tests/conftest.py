from __future__ import annotations

from datetime import date

import pytest

from hamkke_hr.database.memory_store import InMemoryRowStore


def seed_users() -> list[dict]:
    return [
        {"id": 1, "name": "Admin Park", "email": "admin@hamkke.kr", "department": "HQ", "role": "admin", "hire_date": date(2020, 1, 1)},
        {"id": 2, "name": "Kim Minji", "email": "minji@hamkke.kr", "department": "Sales", "role": "employee", "position": "Associate", "hire_date": date(2024, 3, 1)},
        {"id": 3, "name": "Lee Joon", "email": "joon@hamkke.kr", "department": "Dev", "role": "manager", "position": "Lead", "hire_date": date(2023, 7, 15)},
        {"id": 4, "name": "Choi Gone", "email": "gone@hamkke.kr", "department": "Dev", "role": "employee", "deleted": True},
    ]


@pytest.fixture
def store() -> InMemoryRowStore:
    return InMemoryRowStore({"users": seed_users()})
