from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import period_bounds, validate_period
from ..common.locks import KeyedLock
from ..common.numbers import round_money
from ..core.constants import MAX_PAY_AMOUNT
from ..core.enums import PayrollStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..timesheets.model import TimeEntry
from ..timesheets.repository import TimeEntryRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass
class HoursTotals:
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")


def sum_hours_by_employee(entries: Iterable[TimeEntry]) -> dict[int, HoursTotals]:
    """Regular/overtime hour totals per employee (regular = total - overtime per entry)."""
    totals: dict[int, HoursTotals] = {}
    for entry in entries:
        t = totals.setdefault(entry.employee_id, HoursTotals())
        t.regular_hours += entry.regular_hours
        t.overtime_hours += entry.overtime_hours
    return totals


class PayrollService:
    """Turns approved hours of one calendar month into an immutable payroll record."""

    def __init__(
        self,
        payrolls: PayrollRepository,
        time_entries: TimeEntryRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        locks: Optional[KeyedLock] = None,
    ):
        self._payrolls = payrolls
        self._entries = time_entries
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._locks = locks or KeyedLock()

    def process_payroll(self, *, employee_id: int, period: str) -> PayrollRecord:
        period = validate_period(period)

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        with self._locks.hold(("payroll", employee.employee_id, period)):
            if self._payrolls.get_for_employee_period(employee.employee_id, period):
                logger.warning("Payroll for employee id=%s period=%s already processed", employee.employee_id, period)
                raise ConflictError("Payroll already processed for this employee and period")

            start, end = period_bounds(period)
            entries = self._entries.list_approved_between(
                start_date=start,
                end_date=end,
                employee_id=employee.employee_id,
            )
            totals = sum_hours_by_employee(entries).get(employee.employee_id, HoursTotals())
            pay = self._calculator.pay(
                regular_hours=totals.regular_hours,
                overtime_hours=totals.overtime_hours,
                hourly_wage=employee.hourly_wage,
            )
            figures = {
                "base_pay": round_money(pay.base_pay),
                "overtime_pay": round_money(pay.overtime_pay),
                "deductions": round_money(pay.deductions),
                "total_pay": round_money(pay.total_pay),
            }
            if any(value > MAX_PAY_AMOUNT for value in figures.values()):
                raise ValidationError(f"Payroll amount exceeds {MAX_PAY_AMOUNT}")

            payroll_id = self._payrolls.create(
                employee_id=employee.employee_id,
                period=period,
                **figures,
                status=PayrollStatus.PROCESSED,
            )

        record = self._payrolls.get_by_id(payroll_id)
        logger.info(
            "Processed payroll id=%s for employee id=%s period=%s (%d entries, total=%s)",
            payroll_id,
            employee.employee_id,
            period,
            len(entries),
            record.total_pay if record else None,
        )
        return record

    def get_payroll_report(self, period: str) -> Sequence[PayrollRecord]:
        return self._payrolls.list_for_period(validate_period(period))

    def list_payrolls(self) -> Sequence[PayrollRecord]:
        return self._payrolls.list_all()
