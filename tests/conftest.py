from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.workforce.workforce.container import assemble
from src.workforce.workforce.core.enums import ApprovalStatus, PayrollStatus, Role
from src.workforce.workforce.core.exceptions import ConflictError
from src.workforce.workforce.employees.model import Employee
from src.workforce.workforce.leaves.model import LeaveRequest
from src.workforce.workforce.payroll.model import PayrollRecord
from src.workforce.workforce.timesheets.model import TimeEntry

# Cheap hash so seeding many accounts stays fast.
FAST_HASH = "pbkdf2:sha256:1000"
T0 = datetime(2024, 3, 1, 9, 0, 0)


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[int, Employee] = {}
        self._next_id = 1

    def get_by_id(self, employee_id):
        return self._rows.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self._rows.values() if e.email == email), None)

    def list_by_ids(self, employee_ids):
        wanted = {int(i) for i in employee_ids}
        return [e for e in self._rows.values() if e.employee_id in wanted]

    def create(self, *, name, email, password_hash, role, hourly_wage, manager_id=None):
        if self.get_by_email(email):
            raise ConflictError("Employee with this email already exists")
        employee_id = self._next_id
        self._next_id += 1
        self._rows[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role(role),
            hourly_wage=Decimal(hourly_wage),
            manager_id=manager_id,
            created_at=T0 + timedelta(minutes=employee_id),
        )
        return employee_id

    def update_profile(self, *, employee_id, name, email, password_hash, hourly_wage):
        row = self._rows.get(int(employee_id))
        if not row:
            return False
        self._rows[row.employee_id] = replace(
            row, name=name, email=email, password_hash=password_hash, hourly_wage=Decimal(hourly_wage)
        )
        return True

    def set_manager(self, *, employee_id, manager_id):
        row = self._rows.get(int(employee_id))
        if not row:
            return False
        self._rows[row.employee_id] = replace(row, manager_id=manager_id)
        return True

    def list_by_role(self, role):
        rows = [e for e in self._rows.values() if e.role == role]
        return sorted(rows, key=lambda e: e.created_at, reverse=True)

    def count_by_role(self, role):
        return len(self.list_by_role(role))

    def list_team(self, manager_id):
        rows = [e for e in self._rows.values() if e.manager_id == int(manager_id)]
        return sorted(rows, key=lambda e: e.name)

    def list_assignable(self, manager_id):
        rows = [
            e
            for e in self._rows.values()
            if e.role == Role.EMPLOYEE and e.manager_id in (None, int(manager_id))
        ]
        return sorted(rows, key=lambda e: e.name)


class InMemoryTimeEntries:
    def __init__(self):
        self._rows: dict[int, TimeEntry] = {}
        self._next_id = 1

    def _insert(self, **fields) -> int:
        entry_id = self._next_id
        self._next_id += 1
        self._rows[entry_id] = TimeEntry(entry_id=entry_id, created_at=T0 + timedelta(seconds=entry_id), **fields)
        return entry_id

    def add_closed(self, *, employee_id, work_date, total_hours, overtime_hours, status=ApprovalStatus.PENDING):
        """Insert a finished session directly, bypassing clock-in/clock-out."""
        clock_in = datetime.combine(work_date, datetime.min.time()).replace(hour=9)
        return self._insert(
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_in + timedelta(hours=float(total_hours)),
            total_hours=Decimal(str(total_hours)),
            overtime_hours=Decimal(str(overtime_hours)),
            status=ApprovalStatus(status),
        )

    def get_by_id(self, entry_id):
        return self._rows.get(int(entry_id))

    def find_open_session(self, employee_id):
        open_rows = [e for e in self._rows.values() if e.employee_id == int(employee_id) and e.is_open]
        return max(open_rows, key=lambda e: e.entry_id, default=None)

    def create_clock_in(self, *, employee_id, work_date, clock_in, location=None):
        if self.find_open_session(employee_id):
            raise ConflictError("Already clocked in")
        return self._insert(
            employee_id=int(employee_id),
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            total_hours=Decimal("0"),
            overtime_hours=Decimal("0"),
            status=ApprovalStatus.PENDING,
            location=location,
        )

    def record_clock_out(self, *, entry_id, clock_out, total_hours, overtime_hours):
        row = self._rows.get(int(entry_id))
        if not row or not row.is_open:
            return False
        self._rows[row.entry_id] = replace(
            row, clock_out=clock_out, total_hours=total_hours, overtime_hours=overtime_hours
        )
        return True

    def transition_status(self, *, entry_id, from_status, to_status):
        row = self._rows.get(int(entry_id))
        if not row or row.status != from_status:
            return False
        self._rows[row.entry_id] = replace(row, status=to_status)
        return True

    def _newest_date_first(self, rows):
        return sorted(rows, key=lambda e: (e.work_date, e.entry_id), reverse=True)

    def list_for_employees(self, employee_ids):
        wanted = {int(i) for i in employee_ids}
        return self._newest_date_first(e for e in self._rows.values() if e.employee_id in wanted)

    def list_by_status(self, status):
        return self._newest_date_first(e for e in self._rows.values() if e.status == status)

    def list_approved_between(self, *, start_date, end_date, employee_id=None):
        return [
            e
            for e in self._rows.values()
            if e.status == ApprovalStatus.APPROVED
            and start_date <= e.work_date <= end_date
            and (employee_id is None or e.employee_id == int(employee_id))
        ]

    def count_by_status(self, status):
        return len(self.list_by_status(status))


class InMemoryLeaveRequests:
    def __init__(self):
        self._rows: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def get_by_id(self, request_id):
        return self._rows.get(int(request_id))

    def create(self, *, employee_id, leave_type, start_date, end_date, reason=None):
        request_id = self._next_id
        self._next_id += 1
        self._rows[request_id] = LeaveRequest(
            request_id=request_id,
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=ApprovalStatus.PENDING,
            reason=reason,
            created_at=T0 + timedelta(seconds=request_id),
        )
        return request_id

    def transition_status(self, *, request_id, from_status, to_status):
        row = self._rows.get(int(request_id))
        if not row or row.status != from_status:
            return False
        self._rows[row.request_id] = replace(row, status=to_status)
        return True

    def list_for_employees(self, employee_ids):
        wanted = {int(i) for i in employee_ids}
        rows = [r for r in self._rows.values() if r.employee_id in wanted]
        return sorted(rows, key=lambda r: (r.start_date, r.request_id), reverse=True)

    def list_by_status(self, status):
        return [r for r in self.list_all() if r.status == status]

    def list_all(self):
        return sorted(self._rows.values(), key=lambda r: r.created_at, reverse=True)

    def count_by_status(self, status):
        return len(self.list_by_status(status))


class InMemoryPayrolls:
    def __init__(self):
        self._rows: dict[int, PayrollRecord] = {}
        self._next_id = 1

    def get_by_id(self, payroll_id):
        return self._rows.get(int(payroll_id))

    def get_for_employee_period(self, employee_id, period):
        return next(
            (p for p in self._rows.values() if p.employee_id == int(employee_id) and p.period == period),
            None,
        )

    def create(self, *, employee_id, period, base_pay, overtime_pay, deductions, total_pay, status=PayrollStatus.PROCESSED):
        if self.get_for_employee_period(employee_id, period):
            raise ConflictError("Payroll already processed for this employee and period")
        payroll_id = self._next_id
        self._next_id += 1
        self._rows[payroll_id] = PayrollRecord(
            payroll_id=payroll_id,
            employee_id=int(employee_id),
            period=period,
            base_pay=base_pay,
            overtime_pay=overtime_pay,
            deductions=deductions,
            total_pay=total_pay,
            status=status,
            created_at=T0 + timedelta(seconds=payroll_id),
        )
        return payroll_id

    def list_for_period(self, period):
        return [p for p in self.list_all() if p.period == period]

    def list_all(self):
        return sorted(self._rows.values(), key=lambda p: p.created_at, reverse=True)

    def sum_total_for_period(self, period):
        return sum((p.total_pay for p in self.list_for_period(period)), Decimal("0"))


@dataclass
class Staff:
    hr: Employee
    manager: Employee
    other_manager: Employee
    employee: Employee
    outsider: Employee
    salaried: Employee


def add_employee(repo: InMemoryEmployees, name: str, role: Role, wage: str, manager_id: Optional[int] = None) -> Employee:
    employee_id = repo.create(
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        password_hash=generate_password_hash("secret123", method=FAST_HASH),
        role=role,
        hourly_wage=Decimal(wage),
        manager_id=manager_id,
    )
    return repo.get_by_id(employee_id)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def time_entries_repo():
    return InMemoryTimeEntries()


@pytest.fixture
def leave_requests_repo():
    return InMemoryLeaveRequests()


@pytest.fixture
def payrolls_repo():
    return InMemoryPayrolls()


@pytest.fixture
def staff(employees_repo) -> Staff:
    """Every account has the password ``secret123``."""
    hr = add_employee(employees_repo, "Hana HR", Role.HR, "0")
    manager = add_employee(employees_repo, "Mai Manager", Role.MANAGER, "35.00")
    other_manager = add_employee(employees_repo, "Omar Manager", Role.MANAGER, "35.00")
    employee = add_employee(employees_repo, "Eli Employee", Role.EMPLOYEE, "20.00", manager.employee_id)
    outsider = add_employee(employees_repo, "Olga Outsider", Role.EMPLOYEE, "25.00", other_manager.employee_id)
    salaried = add_employee(employees_repo, "Sam Salaried", Role.EMPLOYEE, "0")
    return Staff(hr, manager, other_manager, employee, outsider, salaried)


@pytest.fixture
def container(employees_repo, time_entries_repo, leave_requests_repo, payrolls_repo):
    return assemble(
        employees_repo=employees_repo,
        time_entries_repo=time_entries_repo,
        leave_requests_repo=leave_requests_repo,
        payrolls_repo=payrolls_repo,
    )


@pytest.fixture
def march_day():
    return date(2024, 3, 5)
