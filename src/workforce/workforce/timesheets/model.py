from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock session of an employee (a timesheet row)."""

    entry_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    total_hours: Decimal
    overtime_hours: Decimal
    status: ApprovalStatus
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def regular_hours(self) -> Decimal:
        return self.total_hours - self.overtime_hours
