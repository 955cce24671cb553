from __future__ import annotations

import logging

from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRequestRepository
from ..timesheets.model import TimeEntry
from ..timesheets.repository import TimeEntryRepository
from .state_machine import ApprovalStateMachine

logger = logging.getLogger(__name__)


class ApprovalService:
    """Approve/reject timesheets and leave requests.

    HR may decide any record; a manager only records of employees whose
    ``manager_id`` is the manager; employees never.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        time_entries: TimeEntryRepository,
        leave_requests: LeaveRequestRepository,
    ):
        self._employees = employees
        self._entries = time_entries
        self._leaves = leave_requests

    def _authorize(self, *, approver_id: int, owner_id: int, subject: str) -> Employee:
        approver = self._employees.get_by_id(int(approver_id))
        if not approver:
            raise NotFoundError("Approver not found")

        if approver.role == Role.HR:
            return approver

        if approver.role == Role.MANAGER:
            owner = self._employees.get_by_id(int(owner_id))
            if owner and owner.manager_id == approver.employee_id:
                return approver

        logger.warning("Approver id=%s (%s) refused on %s of employee id=%s", approver_id, approver.role.value, subject, owner_id)
        raise AuthorizationError(f"You are not authorized to approve this {subject}")

    def decide_timesheet(self, *, timesheet_id: int, approver_id: int, approved: bool) -> TimeEntry:
        entry = self._entries.get_by_id(int(timesheet_id))
        if not entry:
            raise NotFoundError("Timesheet not found")

        approver = self._authorize(approver_id=approver_id, owner_id=entry.employee_id, subject="timesheet")

        if entry.is_open:
            raise ValidationError("Timesheet is still open; clock out before it can be decided")

        target = ApprovalStateMachine.target_for(bool(approved))
        ApprovalStateMachine.validate_transition(entry.status, target)
        if not self._entries.transition_status(
            entry_id=entry.entry_id,
            from_status=ApprovalStatus.PENDING,
            to_status=target,
        ):
            raise ConflictError("Timesheet was already decided")

        logger.info("Timesheet id=%s %s by %s id=%s", entry.entry_id, target.value, approver.role.value, approver.employee_id)
        return self._entries.get_by_id(entry.entry_id)

    def decide_leave_request(self, *, leave_request_id: int, approver_id: int, approved: bool) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_request_id))
        if not leave:
            raise NotFoundError("Leave request not found")

        approver = self._authorize(approver_id=approver_id, owner_id=leave.employee_id, subject="leave request")

        target = ApprovalStateMachine.target_for(bool(approved))
        ApprovalStateMachine.validate_transition(leave.status, target)
        if not self._leaves.transition_status(
            request_id=leave.request_id,
            from_status=ApprovalStatus.PENDING,
            to_status=target,
        ):
            raise ConflictError("Leave request was already decided")

        logger.info("Leave request id=%s %s by %s id=%s", leave.request_id, target.value, approver.role.value, approver.employee_id)
        return self._leaves.get_by_id(leave.request_id)
