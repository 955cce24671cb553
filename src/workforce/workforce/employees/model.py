from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object, no DB access. Team membership is not stored here;
    it is derived by querying employees whose ``manager_id`` points back.
    """

    employee_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    hourly_wage: Decimal
    manager_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_salaried(self) -> bool:
        return self.hourly_wage == 0
