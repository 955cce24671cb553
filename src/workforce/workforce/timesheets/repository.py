from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def find_open_session(self, employee_id: int) -> Optional[TimeEntry]:
        """Most recently created entry of the employee with clock_out unset."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        location: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def record_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        total_hours: Decimal,
        overtime_hours: Decimal,
    ) -> bool:
        """Close an open session; returns False when it was already closed."""

        raise NotImplementedError

    def transition_status(self, *, entry_id: int, from_status: ApprovalStatus, to_status: ApprovalStatus) -> bool:
        """Conditional status update; returns False when the stored status is not ``from_status``."""

        raise NotImplementedError

    def list_for_employees(self, employee_ids: Sequence[int]) -> Sequence[TimeEntry]:
        """Ordered by work_date descending."""

        raise NotImplementedError

    def list_by_status(self, status: ApprovalStatus) -> Sequence[TimeEntry]:
        """Ordered by work_date descending."""

        raise NotImplementedError

    def list_approved_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimeEntry]:
        """Approved entries with start_date <= work_date <= end_date."""

        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError
