from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.locks import KeyedLock
from ..common.validators import optional_text
from ..core.constants import MAX_LOCATION_LENGTH
from ..core.exceptions import ConflictError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class TimeEntryService:
    """Time entry ledger: clock sessions and the hours derived from them."""

    def __init__(
        self,
        time_entries: TimeEntryRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        locks: Optional[KeyedLock] = None,
    ):
        self._entries = time_entries
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._locks = locks or KeyedLock()

    def clock_in(
        self,
        employee_id: int,
        *,
        work_date: Optional[date] = None,
        location: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        now = (now or now_utc()).replace(microsecond=0)
        work_date = work_date or now.date()
        location = optional_text(location, "Location", MAX_LOCATION_LENGTH)

        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        with self._locks.hold(("ledger", int(employee_id))):
            # One open session per employee, whatever date it was opened for.
            if self._entries.find_open_session(int(employee_id)):
                logger.warning("Rejected clock-in for employee id=%s: session already open", employee_id)
                raise ConflictError("Already clocked in")

            entry_id = self._entries.create_clock_in(
                employee_id=int(employee_id),
                work_date=work_date,
                clock_in=now,
                location=location,
            )

        logger.info("Employee id=%s clocked in (entry id=%s, date=%s)", employee_id, entry_id, work_date)
        return self._entries.get_by_id(entry_id)

    def clock_out(self, employee_id: int, *, now: Optional[datetime] = None) -> TimeEntry:
        now = (now or now_utc()).replace(microsecond=0)

        with self._locks.hold(("ledger", int(employee_id))):
            session = self._entries.find_open_session(int(employee_id))
            if not session:
                raise NotFoundError("No active clock-in")

            hours = self._calculator.session_hours(session.clock_in, now)
            if not self._entries.record_clock_out(
                entry_id=session.entry_id,
                clock_out=now,
                total_hours=hours.total_hours,
                overtime_hours=hours.overtime_hours,
            ):
                raise NotFoundError("No active clock-in")

        logger.info(
            "Employee id=%s clocked out (entry id=%s, hours=%s, overtime=%s)",
            employee_id,
            session.entry_id,
            hours.total_hours,
            hours.overtime_hours,
        )
        return self._entries.get_by_id(session.entry_id)

    def list_time_entries(self, employee_id: int) -> Sequence[TimeEntry]:
        """Entries of one employee, newest date first. Unknown employees yield an empty list."""
        return self._entries.list_for_employees([int(employee_id)])

    def team_timesheets(self, manager_id: int) -> Sequence[TimeEntry]:
        member_ids = [e.employee_id for e in self._employees.list_team(int(manager_id))]
        if not member_ids:
            return []
        return self._entries.list_for_employees(member_ids)
