from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def transition_status(self, *, request_id: int, from_status: ApprovalStatus, to_status: ApprovalStatus) -> bool:
        """Conditional status update; returns False when the stored status is not ``from_status``."""

        raise NotImplementedError

    def list_for_employees(self, employee_ids: Sequence[int]) -> Sequence[LeaveRequest]:
        """Ordered by start_date descending."""

        raise NotImplementedError

    def list_by_status(self, status: ApprovalStatus) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError
