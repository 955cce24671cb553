from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import period_bounds, period_of, today_utc
from ..common.numbers import round_money
from ..core.constants import ACTIVE_REPORTS_PLACEHOLDER
from ..core.enums import ApprovalStatus, Role
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRequestRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.repository import PayrollRepository
from ..payroll.service import sum_hours_by_employee
from ..timesheets.repository import TimeEntryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    pending_requests: int
    total_payroll: Decimal
    active_reports: int = ACTIVE_REPORTS_PLACEHOLDER
    payroll_estimated: bool = False


class DashboardService:
    def __init__(
        self,
        employees: EmployeeRepository,
        time_entries: TimeEntryRepository,
        leave_requests: LeaveRequestRepository,
        payrolls: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._entries = time_entries
        self._leaves = leave_requests
        self._payrolls = payrolls
        self._calculator = calculator or StandardPayrollCalculator()

    def get_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        today = today or today_utc()
        period = period_of(today)

        total_employees = self._employees.count_by_role(Role.EMPLOYEE)
        pending = self._leaves.count_by_status(ApprovalStatus.PENDING) + self._entries.count_by_status(
            ApprovalStatus.PENDING
        )

        total_payroll = Decimal(self._payrolls.sum_total_for_period(period))
        estimated = False
        if total_payroll == 0:
            total_payroll = self.estimate_payroll(period)
            estimated = True

        return DashboardStats(
            total_employees=total_employees,
            pending_requests=pending,
            total_payroll=round_money(total_payroll),
            payroll_estimated=estimated,
        )

    def estimate_payroll(self, period: str) -> Decimal:
        """Pay implied by approved hours of ``period``; reads only, creates no payroll records.

        Employees with an hourly wage of 0 are salaried and contribute nothing.
        """
        start, end = period_bounds(period)
        totals = sum_hours_by_employee(self._entries.list_approved_between(start_date=start, end_date=end))
        if not totals:
            return Decimal("0")

        wages = {e.employee_id: e.hourly_wage for e in self._employees.list_by_ids(list(totals))}
        estimate = Decimal("0")
        for employee_id, hours in totals.items():
            wage = wages.get(employee_id, Decimal("0"))
            if wage == 0:
                continue
            pay = self._calculator.pay(
                regular_hours=hours.regular_hours,
                overtime_hours=hours.overtime_hours,
                hourly_wage=wage,
            )
            estimate += pay.base_pay + pay.overtime_pay

        logger.debug("Estimated payroll for %s from %d employees: %s", period, len(totals), estimate)
        return estimate
