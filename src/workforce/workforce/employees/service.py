from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.numbers import round_money
from ..common.validators import (
    require_email,
    require_min_length,
    require_non_empty,
    require_non_negative_amount,
)
from ..core.constants import MAX_EMAIL_LENGTH, MAX_HOURLY_WAGE, MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionPrincipal:
    """What we store into Flask session after login."""

    employee_id: int
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionPrincipal:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid credentials")
        employee = self._employees.get_by_email(email.strip().lower())
        if not employee:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionPrincipal(
            employee_id=employee.employee_id,
            name=employee.name,
            email=employee.email,
            role=employee.role,
        )

    def get_principal(self, employee_id: int) -> SessionPrincipal:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("User not found")
        return SessionPrincipal(
            employee_id=employee.employee_id,
            name=employee.name,
            email=employee.email,
            role=employee.role,
        )


class EmployeeService:
    """Use case: manage accounts (HR, and managers creating accounts)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(
        self,
        *,
        current_role: Role,
        current_employee_id: int,
        name: str,
        email: str,
        password: str,
        role: Any = Role.EMPLOYEE,
        hourly_wage: Any = 0,
    ) -> Employee:
        if current_role not in {Role.HR, Role.MANAGER}:
            raise AuthorizationError("Only HR or managers can create accounts")

        name = require_non_empty(name, "Name", MAX_NAME_LENGTH)
        email = require_email(email, max_len=MAX_EMAIL_LENGTH)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        wage = round_money(
            require_non_negative_amount(hourly_wage if hourly_wage is not None else 0, "Hourly wage", MAX_HOURLY_WAGE)
        )
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Role must be one of employee, manager, hr")

        if self._employees.get_by_email(email):
            raise ConflictError("Employee with this email already exists")

        # A manager-created employee joins the creating manager's team.
        manager_id: Optional[int] = None
        if current_role == Role.MANAGER and role == Role.EMPLOYEE:
            manager_id = int(current_employee_id)

        employee_id = self._employees.create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            hourly_wage=wage,
            manager_id=manager_id,
        )
        logger.info("Created %s account %s (id=%s) by %s", role.value, email, employee_id, current_role.value)
        return self.get(employee_id)

    def update_employee(
        self,
        *,
        current_role: Role,
        employee_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        hourly_wage: Any = None,
        password: Optional[str] = None,
    ) -> Employee:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can update employee details")

        employee = self.get(employee_id)

        new_name = require_non_empty(name, "Name", MAX_NAME_LENGTH) if name is not None else employee.name
        new_email = employee.email
        if email is not None:
            candidate = require_email(email, max_len=MAX_EMAIL_LENGTH)
            if candidate != employee.email:
                if self._employees.get_by_email(candidate):
                    raise ConflictError("Employee with this email already exists")
                new_email = candidate

        new_wage = employee.hourly_wage
        if hourly_wage is not None:
            new_wage = round_money(require_non_negative_amount(hourly_wage, "Hourly wage", MAX_HOURLY_WAGE))

        new_hash = employee.password_hash
        if password is not None:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            new_hash = generate_password_hash(password)

        if not self._employees.update_profile(
            employee_id=employee.employee_id,
            name=new_name,
            email=new_email,
            password_hash=new_hash,
            hourly_wage=new_wage,
        ):
            raise NotFoundError("Employee not found")

        logger.info("Updated employee id=%s", employee.employee_id)
        return self.get(employee.employee_id)

    def list_employees(self) -> Sequence[Employee]:
        """Accounts with role=employee (managers and HR are not listed)."""
        return self._employees.list_by_role(Role.EMPLOYEE)


class TeamService:
    """Use case: a manager's team, derived from ``manager_id`` on each employee."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def _require_manager(self, manager_id: int) -> Employee:
        manager = self._employees.get_by_id(int(manager_id))
        if not manager or manager.role != Role.MANAGER:
            raise AuthorizationError("Only managers can manage a team")
        return manager

    def list_team(self, manager_id: int) -> Sequence[Employee]:
        return self._employees.list_team(int(manager_id))

    def team_member_ids(self, manager_id: int) -> list[int]:
        return [e.employee_id for e in self._employees.list_team(int(manager_id))]

    def list_available_employees(self, manager_id: int) -> Sequence[Employee]:
        return self._employees.list_assignable(int(manager_id))

    def add_to_team(self, *, manager_id: int, employee_id: int) -> Employee:
        manager = self._require_manager(manager_id)

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.role != Role.EMPLOYEE:
            raise ValidationError("Only employees can be added to a team")
        if employee.manager_id is not None and employee.manager_id != manager.employee_id:
            raise ConflictError("Employee is already assigned to another manager")

        self._employees.set_manager(employee_id=employee.employee_id, manager_id=manager.employee_id)
        logger.info("Employee id=%s added to team of manager id=%s", employee.employee_id, manager.employee_id)
        return self._employees.get_by_id(employee.employee_id)

    def remove_from_team(self, *, manager_id: int, employee_id: int) -> Employee:
        manager = self._require_manager(manager_id)

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.manager_id != manager.employee_id:
            raise AuthorizationError("Employee is not in your team")

        self._employees.set_manager(employee_id=employee.employee_id, manager_id=None)
        logger.info("Employee id=%s removed from team of manager id=%s", employee.employee_id, manager.employee_id)
        return self._employees.get_by_id(employee.employee_id)
