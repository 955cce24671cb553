from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .approvals.service import ApprovalService
from .common.locks import KeyedLock
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService, TeamService
from .leaves.mysql_leave_request_repository import MySQLLeaveRequestRepository
from .leaves.repository import LeaveRequestRepository
from .leaves.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import ReportService
from .timesheets.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timesheets.repository import TimeEntryRepository
from .timesheets.service import TimeEntryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    time_entries_repo: TimeEntryRepository
    leave_requests_repo: LeaveRequestRepository
    payrolls_repo: PayrollRepository

    auth_service: AuthService
    employee_service: EmployeeService
    team_service: TeamService
    time_entry_service: TimeEntryService
    leave_service: LeaveService
    approval_service: ApprovalService
    payroll_service: PayrollService
    dashboard_service: DashboardService
    report_service: ReportService


def assemble(
    *,
    employees_repo: EmployeeRepository,
    time_entries_repo: TimeEntryRepository,
    leave_requests_repo: LeaveRequestRepository,
    payrolls_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    calculator = StandardPayrollCalculator()
    locks = KeyedLock()

    payroll_service = PayrollService(
        payrolls_repo,
        time_entries_repo,
        employees_repo,
        calculator=calculator,
        locks=locks,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        time_entries_repo=time_entries_repo,
        leave_requests_repo=leave_requests_repo,
        payrolls_repo=payrolls_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        team_service=TeamService(employees_repo),
        time_entry_service=TimeEntryService(time_entries_repo, employees_repo, calculator=calculator, locks=locks),
        leave_service=LeaveService(leave_requests_repo, employees_repo),
        approval_service=ApprovalService(employees_repo, time_entries_repo, leave_requests_repo),
        payroll_service=payroll_service,
        dashboard_service=DashboardService(
            employees_repo,
            time_entries_repo,
            leave_requests_repo,
            payrolls_repo,
            calculator=calculator,
        ),
        report_service=ReportService(employees_repo, time_entries_repo, leave_requests_repo, payroll_service),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        leave_requests_repo=MySQLLeaveRequestRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        conn=conn,
    )
