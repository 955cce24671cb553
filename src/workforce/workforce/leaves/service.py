from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.constants import MAX_LEAVE_TYPE_LENGTH, MAX_REASON_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leave_requests: LeaveRequestRepository, employees: EmployeeRepository):
        self._leaves = leave_requests
        self._employees = employees

    def request_leave(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        leave_type = require_non_empty(leave_type, "Leave type", MAX_LEAVE_TYPE_LENGTH)
        reason = optional_text(reason, "Reason", MAX_REASON_LENGTH)
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        request_id = self._leaves.create(
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        logger.info("Employee id=%s requested %s leave %s..%s", employee_id, leave_type, start_date, end_date)
        return self._leaves.get_by_id(request_id)

    def list_my_leave_requests(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_employees([int(employee_id)])

    def team_leave_requests(self, manager_id: int) -> Sequence[LeaveRequest]:
        member_ids = [e.employee_id for e in self._employees.list_team(int(manager_id))]
        if not member_ids:
            return []
        return self._leaves.list_for_employees(member_ids)
