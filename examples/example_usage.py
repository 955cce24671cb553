"""Drive the service layer directly, without Flask.

Clocks the demo employee in and out, approves the entry as the demo manager
and processes payroll for the current month.
"""

import importlib

from config import get_settings_module

from src.workforce.workforce.common.datetime_utils import period_of, today_utc
from src.workforce.workforce.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    employee = container.employees_repo.get_by_email("employee@example.com")
    manager = container.employees_repo.get_by_email("manager@example.com")

    container.time_entry_service.clock_in(employee.employee_id)
    entry = container.time_entry_service.clock_out(employee.employee_id)
    container.approval_service.decide_timesheet(
        timesheet_id=entry.entry_id, approver_id=manager.employee_id, approved=True
    )

    record = container.payroll_service.process_payroll(
        employee_id=employee.employee_id, period=period_of(today_utc())
    )
    print(record)


if __name__ == "__main__":
    main()
