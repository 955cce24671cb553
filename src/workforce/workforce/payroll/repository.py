from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    """Create and read payroll snapshots; there is no update or delete."""

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_employee_period(self, employee_id: int, period: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        period: str,
        base_pay: Decimal,
        overtime_pay: Decimal,
        deductions: Decimal,
        total_pay: Decimal,
        status: PayrollStatus = PayrollStatus.PROCESSED,
    ) -> int:
        """Raises ConflictError when a record for (employee_id, period) already exists."""

        raise NotImplementedError

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollRecord]:
        """Newest first."""

        raise NotImplementedError

    def sum_total_for_period(self, period: str) -> Decimal:
        raise NotImplementedError
