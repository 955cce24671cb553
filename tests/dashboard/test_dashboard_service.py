from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.workforce.workforce.core.enums import ApprovalStatus, Role

APPROVED = ApprovalStatus.APPROVED
MID_MARCH = date(2024, 3, 15)


@pytest.fixture
def fifteen_an_hour(container, staff):
    return container.employee_service.create_employee(
        current_role=Role.HR,
        current_employee_id=staff.hr.employee_id,
        name="Fay Fifteen",
        email="fay@example.com",
        password="secret123",
        hourly_wage="15",
    )


def test_counts_employees_and_pending_requests(container, staff, time_entries_repo, leave_requests_repo):
    time_entries_repo.add_closed(employee_id=staff.employee.employee_id, work_date=date(2024, 3, 4), total_hours=8, overtime_hours=0)
    time_entries_repo.add_closed(
        employee_id=staff.employee.employee_id, work_date=date(2024, 3, 5), total_hours=8, overtime_hours=0, status=APPROVED
    )
    leave_requests_repo.create(
        employee_id=staff.outsider.employee_id, leave_type="sick", start_date=date(2024, 3, 6), end_date=date(2024, 3, 6)
    )

    stats = container.dashboard_service.get_stats(today=MID_MARCH)

    assert stats.total_employees == 3
    assert stats.pending_requests == 2
    assert stats.active_reports == 0


def test_uses_processed_payroll_when_present(container, staff, time_entries_repo):
    time_entries_repo.add_closed(
        employee_id=staff.employee.employee_id, work_date=date(2024, 3, 4), total_hours=10, overtime_hours=2, status=APPROVED
    )
    container.payroll_service.process_payroll(employee_id=staff.employee.employee_id, period="2024-03")

    stats = container.dashboard_service.get_stats(today=MID_MARCH)

    assert stats.total_payroll == Decimal("220.00")
    assert not stats.payroll_estimated


def test_estimates_from_approved_hours_without_writing(container, staff, fifteen_an_hour, time_entries_repo, payrolls_repo):
    time_entries_repo.add_closed(
        employee_id=fifteen_an_hour.employee_id, work_date=date(2024, 3, 4), total_hours=9, overtime_hours=1, status=APPROVED
    )

    stats = container.dashboard_service.get_stats(today=MID_MARCH)

    assert stats.total_payroll == Decimal("142.50")
    assert stats.payroll_estimated
    assert payrolls_repo.list_all() == []


def test_estimate_skips_salaried_and_other_months(container, staff, fifteen_an_hour, time_entries_repo):
    time_entries_repo.add_closed(
        employee_id=fifteen_an_hour.employee_id, work_date=date(2024, 3, 4), total_hours=9, overtime_hours=1, status=APPROVED
    )
    time_entries_repo.add_closed(
        employee_id=staff.salaried.employee_id, work_date=date(2024, 3, 4), total_hours=12, overtime_hours=4, status=APPROVED
    )
    time_entries_repo.add_closed(
        employee_id=fifteen_an_hour.employee_id, work_date=date(2024, 2, 29), total_hours=8, overtime_hours=0, status=APPROVED
    )
    time_entries_repo.add_closed(employee_id=fifteen_an_hour.employee_id, work_date=date(2024, 3, 5), total_hours=8, overtime_hours=0)

    assert container.dashboard_service.get_stats(today=MID_MARCH).total_payroll == Decimal("142.50")


def test_empty_month_is_zero(container, staff):
    stats = container.dashboard_service.get_stats(today=MID_MARCH)

    assert stats.total_payroll == Decimal("0.00")
    assert stats.pending_requests == 0
