from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRecord:
    """Immutable payroll snapshot for one (employee, period)."""

    payroll_id: int
    employee_id: int
    period: str
    base_pay: Decimal
    overtime_pay: Decimal
    deductions: Decimal
    total_pay: Decimal
    status: PayrollStatus = PayrollStatus.PROCESSED
    created_at: Optional[datetime] = None
