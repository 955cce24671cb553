from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class HoursBreakdown:
    total_hours: Decimal
    overtime_hours: Decimal

    @property
    def regular_hours(self) -> Decimal:
        return self.total_hours - self.overtime_hours


@dataclass(frozen=True)
class PayBreakdown:
    base_pay: Decimal
    overtime_pay: Decimal
    deductions: Decimal

    @property
    def total_pay(self) -> Decimal:
        return self.base_pay + self.overtime_pay - self.deductions


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def session_hours(self, clock_in: datetime, clock_out: datetime) -> HoursBreakdown:
        """Worked hours of one clock session split into total and overtime."""

        raise NotImplementedError

    @abstractmethod
    def pay(self, *, regular_hours: Decimal, overtime_hours: Decimal, hourly_wage: Decimal) -> PayBreakdown:
        """Unrounded pay figures for the given hours."""

        raise NotImplementedError
