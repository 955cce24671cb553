from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Implemented by MySQLEmployeeRepository; services only see this interface.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_ids(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_wage: Decimal,
        manager_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update_profile(
        self,
        *,
        employee_id: int,
        name: str,
        email: str,
        password_hash: str,
        hourly_wage: Decimal,
    ) -> bool:
        raise NotImplementedError

    def set_manager(self, *, employee_id: int, manager_id: Optional[int]) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def list_team(self, manager_id: int) -> Sequence[Employee]:
        """Employees whose manager_id equals ``manager_id``, ordered by name."""

        raise NotImplementedError

    def list_assignable(self, manager_id: int) -> Sequence[Employee]:
        """Role=employee with no manager or already managed by ``manager_id``, ordered by name."""

        raise NotImplementedError
