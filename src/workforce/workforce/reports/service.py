from __future__ import annotations

from dataclasses import asdict
from typing import Any, Sequence

from ..core.enums import ApprovalStatus
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRequestRepository
from ..payroll.service import PayrollService
from ..timesheets.repository import TimeEntryRepository


class ReportService:
    """HR read models: records joined with the owning employee's name and email."""

    def __init__(
        self,
        employees: EmployeeRepository,
        time_entries: TimeEntryRepository,
        leave_requests: LeaveRequestRepository,
        payroll_service: PayrollService,
    ):
        self._employees = employees
        self._entries = time_entries
        self._leaves = leave_requests
        self._payroll = payroll_service

    def with_employee(self, records: Sequence[Any]) -> list[dict]:
        people = {e.employee_id: e for e in self._employees.list_by_ids([r.employee_id for r in records])}
        rows: list[dict] = []
        for r in records:
            row = asdict(r)
            who = people.get(r.employee_id)
            row["employee"] = (
                {"employee_id": who.employee_id, "name": who.name, "email": who.email} if who else None
            )
            rows.append(row)
        return rows

    def pending_requests(self) -> dict:
        return {
            "leave_requests": self.with_employee(self._leaves.list_by_status(ApprovalStatus.PENDING)),
            "timesheets": self.with_employee(self._entries.list_by_status(ApprovalStatus.PENDING)),
        }

    def payroll_report(self, period: str) -> list[dict]:
        return self.with_employee(self._payroll.get_payroll_report(period))

    def payroll_list(self) -> list[dict]:
        return self.with_employee(self._payroll.list_payrolls())

    def attendance_report(self, employee_id: int) -> list[dict]:
        return self.with_employee(self._entries.list_for_employees([int(employee_id)]))

    def leaves_report(self) -> list[dict]:
        return self.with_employee(self._leaves.list_all())

