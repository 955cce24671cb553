from __future__ import annotations

from decimal import Decimal

import pytest

from src.workforce.workforce.core.enums import Role
from src.workforce.workforce.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def _create(container, actor, **overrides):
    fields = dict(name="New Hire", email="new.hire@example.com", password="secret123", hourly_wage="18.5")
    fields.update(overrides)
    return container.employee_service.create_employee(
        current_role=actor.role, current_employee_id=actor.employee_id, **fields
    )


def test_authenticate_with_valid_credentials(container, staff):
    principal = container.auth_service.authenticate("Eli.Employee@example.com ", "secret123")

    assert principal.employee_id == staff.employee.employee_id
    assert principal.role == Role.EMPLOYEE


@pytest.mark.parametrize(
    "email, password",
    [
        ("eli.employee@example.com", "wrong"),
        ("nobody@example.com", "secret123"),
        (None, "secret123"),
        (5, "secret123"),
        ("eli.employee@example.com", 12345678),
    ],
)
def test_authenticate_rejects_bad_credentials(container, staff, email, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(email, password)


def test_hr_creates_unassigned_employee(container, staff):
    employee = _create(container, staff.hr)

    assert employee.role == Role.EMPLOYEE
    assert employee.hourly_wage == Decimal("18.50")
    assert employee.manager_id is None
    assert employee.password_hash != "secret123"


def test_manager_created_employee_joins_their_team(container, staff):
    employee = _create(container, staff.manager)

    assert employee.manager_id == staff.manager.employee_id
    assert employee.employee_id in container.team_service.team_member_ids(staff.manager.employee_id)


def test_hr_can_create_a_manager(container, staff):
    manager = _create(container, staff.hr, role="manager", email="boss@example.com")
    assert manager.role == Role.MANAGER


def test_employee_cannot_create_accounts(container, staff):
    with pytest.raises(AuthorizationError):
        _create(container, staff.employee)


def test_duplicate_email_conflicts(container, staff):
    with pytest.raises(ConflictError):
        _create(container, staff.hr, email=staff.employee.email.upper())


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": " "},
        {"email": "not-an-email"},
        {"password": "123"},
        {"hourly_wage": "-1"},
        {"hourly_wage": "abc"},
        {"role": "owner"},
        {"name": "x" * 121},
        {"name": 42},
        {"email": "x" * 180 + "@example.com"},
        {"hourly_wage": "100000000"},
        {"hourly_wage": True},
    ],
)
def test_invalid_account_fields(container, staff, overrides):
    with pytest.raises(ValidationError):
        _create(container, staff.hr, **overrides)


def test_hr_updates_wage_and_password(container, staff):
    updated = container.employee_service.update_employee(
        current_role=Role.HR, employee_id=staff.employee.employee_id, hourly_wage="22", password="newpass1"
    )

    assert updated.hourly_wage == Decimal("22.00")
    assert updated.name == staff.employee.name
    assert container.auth_service.authenticate(staff.employee.email, "newpass1").employee_id == staff.employee.employee_id


def test_update_rejects_values_that_do_not_fit(container, staff):
    service = container.employee_service
    for changes in ({"hourly_wage": "100000000"}, {"name": ""}, {"name": "x" * 121}):
        with pytest.raises(ValidationError):
            service.update_employee(current_role=Role.HR, employee_id=staff.employee.employee_id, **changes)
    assert service.get(staff.employee.employee_id).hourly_wage == Decimal("20.00")


def test_only_hr_updates(container, staff):
    with pytest.raises(AuthorizationError):
        container.employee_service.update_employee(
            current_role=Role.MANAGER, employee_id=staff.employee.employee_id, hourly_wage="99"
        )


def test_update_unknown_employee(container, staff):
    with pytest.raises(NotFoundError):
        container.employee_service.update_employee(current_role=Role.HR, employee_id=999, name="X")


def test_list_employees_excludes_managers_and_hr(container, staff):
    listed = {e.employee_id for e in container.employee_service.list_employees()}
    assert listed == {staff.employee.employee_id, staff.outsider.employee_id, staff.salaried.employee_id}


def test_add_unassigned_employee_to_team(container, staff):
    employee = container.team_service.add_to_team(
        manager_id=staff.manager.employee_id, employee_id=staff.salaried.employee_id
    )
    assert employee.manager_id == staff.manager.employee_id


def test_cannot_take_employee_from_another_manager(container, staff):
    with pytest.raises(ConflictError):
        container.team_service.add_to_team(manager_id=staff.manager.employee_id, employee_id=staff.outsider.employee_id)


def test_only_employees_join_teams(container, staff):
    with pytest.raises(ValidationError):
        container.team_service.add_to_team(manager_id=staff.manager.employee_id, employee_id=staff.hr.employee_id)


def test_non_manager_cannot_manage_team(container, staff):
    with pytest.raises(AuthorizationError):
        container.team_service.add_to_team(manager_id=staff.hr.employee_id, employee_id=staff.salaried.employee_id)


def test_remove_requires_own_team_member(container, staff):
    with pytest.raises(AuthorizationError):
        container.team_service.remove_from_team(
            manager_id=staff.manager.employee_id, employee_id=staff.outsider.employee_id
        )

    removed = container.team_service.remove_from_team(
        manager_id=staff.manager.employee_id, employee_id=staff.employee.employee_id
    )
    assert removed.manager_id is None


def test_available_employees_are_unassigned_or_own(container, staff):
    available = {e.employee_id for e in container.team_service.list_available_employees(staff.manager.employee_id)}
    assert available == {staff.employee.employee_id, staff.salaried.employee_id}
