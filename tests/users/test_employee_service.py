from __future__ import annotations

import pytest

from hamkke_hr.core.enums import EmployeeState, Role
from hamkke_hr.core.exceptions import AuthorizationError, ValidationError
from hamkke_hr.users.service import EmployeeService
from hamkke_hr.users.store_repository import StoreEmployeeRepository


@pytest.fixture
def service(store):
    return EmployeeService(StoreEmployeeRepository(store))


def test_deleted_employees_never_surface(service):
    names = [e.name for e in service.roster()]

    assert names == ["Admin Park", "Kim Minji", "Lee Joon"]
    assert all(e.state == EmployeeState.ACTIVE for e in service.roster())
    with pytest.raises(ValidationError):
        service.get_profile(4)


def test_roster_search_is_case_insensitive(service):
    assert [e.user_id for e in service.roster(search="DEV")] == [3]
    assert [e.user_id for e in service.roster(search="associate")] == [2]
    assert [e.user_id for e in service.roster(search="minji@")] == [2]


def test_unknown_role_reads_as_employee(store, service):
    store.insert("users", [{"id": 9, "name": "Odd Role", "email": "odd@hamkke.kr", "role": "intern"}])
    assert service.get_profile(9).role == Role.EMPLOYEE


def test_change_role(service, store):
    service.change_role(current_role=Role.ADMIN, user_id=2, new_role="manager")
    assert service.get_profile(2).role == Role.MANAGER

    with pytest.raises(ValidationError):
        service.change_role(current_role=Role.ADMIN, user_id=2, new_role="owner")
    with pytest.raises(AuthorizationError):
        service.change_role(current_role=Role.MANAGER, user_id=2, new_role="admin")


def test_delete_employee_is_soft(service, store):
    service.delete_employee(current_role=Role.ADMIN, user_id=2, acting_user_id=1)

    row = next(r for r in store.rows("users") if r["id"] == 2)
    assert row["deleted"] is True
    assert [e.user_id for e in service.roster()] == [1, 3]


def test_admin_cannot_be_deleted(service):
    with pytest.raises(ValidationError):
        service.delete_employee(current_role=Role.ADMIN, user_id=1, acting_user_id=1)


def test_only_admin_deletes(service):
    with pytest.raises(AuthorizationError):
        service.delete_employee(current_role=Role.MANAGER, user_id=2, acting_user_id=3)
