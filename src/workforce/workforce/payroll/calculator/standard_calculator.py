from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from ...common.numbers import round_hours
from ...core.constants import DEFAULT_DEDUCTIONS, MAX_SESSION_HOURS, OVERTIME_MULTIPLIER, STANDARD_WORKDAY_HOURS
from ...core.exceptions import ValidationError
from .base import HoursBreakdown, PayBreakdown, PayrollCalculator

_MICROSECONDS_PER_HOUR = Decimal(3600 * 1_000_000)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: 8-hour day, anything above is overtime paid at 1.5x, no deductions."""

    def __init__(
        self,
        *,
        workday_hours: Decimal = STANDARD_WORKDAY_HOURS,
        overtime_multiplier: Decimal = OVERTIME_MULTIPLIER,
    ):
        self._workday_hours = Decimal(workday_hours)
        self._overtime_multiplier = Decimal(overtime_multiplier)

    def session_hours(self, clock_in: datetime, clock_out: datetime) -> HoursBreakdown:
        if clock_out < clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")
        micros = (clock_out - clock_in) // timedelta(microseconds=1)
        total = round_hours(Decimal(micros) / _MICROSECONDS_PER_HOUR)
        if total > MAX_SESSION_HOURS:
            raise ValidationError(f"Session of {total} hours exceeds the {MAX_SESSION_HOURS} hour limit")
        overtime = max(total - self._workday_hours, Decimal("0"))
        return HoursBreakdown(total_hours=total, overtime_hours=round_hours(overtime))

    def pay(self, *, regular_hours: Decimal, overtime_hours: Decimal, hourly_wage: Decimal) -> PayBreakdown:
        wage = Decimal(hourly_wage)
        return PayBreakdown(
            base_pay=Decimal(regular_hours) * wage,
            overtime_pay=Decimal(overtime_hours) * wage * self._overtime_multiplier,
            deductions=DEFAULT_DEDUCTIONS,
        )
