from __future__ import annotations

from datetime import date, datetime

import pytest

from src.workforce.workforce.core.enums import ApprovalStatus
from src.workforce.workforce.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def timesheet(staff, time_entries_repo):
    return time_entries_repo.add_closed(
        employee_id=staff.employee.employee_id, work_date=date(2024, 3, 4), total_hours=8, overtime_hours=0
    )


@pytest.fixture
def leave(staff, leave_requests_repo):
    return leave_requests_repo.create(
        employee_id=staff.employee.employee_id,
        leave_type="vacation",
        start_date=date(2024, 4, 1),
        end_date=date(2024, 4, 3),
    )


def test_manager_approves_own_team_member_timesheet(container, staff, timesheet):
    entry = container.approval_service.decide_timesheet(
        timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=True
    )
    assert entry.status == ApprovalStatus.APPROVED


def test_manager_rejects_own_team_member_timesheet(container, staff, timesheet):
    entry = container.approval_service.decide_timesheet(
        timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=False
    )
    assert entry.status == ApprovalStatus.REJECTED


def test_other_manager_is_refused(container, staff, timesheet, time_entries_repo):
    with pytest.raises(AuthorizationError):
        container.approval_service.decide_timesheet(
            timesheet_id=timesheet, approver_id=staff.other_manager.employee_id, approved=True
        )
    assert time_entries_repo.get_by_id(timesheet).status == ApprovalStatus.PENDING


def test_hr_decides_regardless_of_team(container, staff, time_entries_repo):
    entry_id = time_entries_repo.add_closed(
        employee_id=staff.salaried.employee_id, work_date=date(2024, 3, 4), total_hours=8, overtime_hours=0
    )
    entry = container.approval_service.decide_timesheet(
        timesheet_id=entry_id, approver_id=staff.hr.employee_id, approved=True
    )
    assert entry.status == ApprovalStatus.APPROVED


def test_employee_cannot_decide_even_own_timesheet(container, staff, timesheet):
    with pytest.raises(AuthorizationError):
        container.approval_service.decide_timesheet(
            timesheet_id=timesheet, approver_id=staff.employee.employee_id, approved=True
        )


def test_decided_timesheet_is_terminal(container, staff, timesheet):
    service = container.approval_service
    service.decide_timesheet(timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=False)

    with pytest.raises(ConflictError):
        service.decide_timesheet(timesheet_id=timesheet, approver_id=staff.hr.employee_id, approved=True)
    with pytest.raises(ConflictError):
        service.decide_timesheet(timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=False)


def test_open_timesheet_cannot_be_decided(container, staff):
    open_entry = container.time_entry_service.clock_in(staff.employee.employee_id, now=datetime(2024, 3, 4, 8, 0))

    with pytest.raises(ValidationError):
        container.approval_service.decide_timesheet(
            timesheet_id=open_entry.entry_id, approver_id=staff.manager.employee_id, approved=True
        )


def test_unknown_timesheet(container, staff):
    with pytest.raises(NotFoundError):
        container.approval_service.decide_timesheet(
            timesheet_id=404, approver_id=staff.hr.employee_id, approved=True
        )


def test_unknown_approver(container, staff, timesheet):
    with pytest.raises(NotFoundError):
        container.approval_service.decide_timesheet(timesheet_id=timesheet, approver_id=999, approved=True)


def test_lost_race_reports_conflict(container, staff, timesheet, time_entries_repo):
    # Another worker decides between our read and our conditional update.
    real_transition = time_entries_repo.transition_status

    def decided_elsewhere(**kwargs):
        real_transition(entry_id=kwargs["entry_id"], from_status=ApprovalStatus.PENDING, to_status=ApprovalStatus.REJECTED)
        return real_transition(**kwargs)

    time_entries_repo.transition_status = decided_elsewhere

    with pytest.raises(ConflictError):
        container.approval_service.decide_timesheet(
            timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=True
        )
    assert time_entries_repo.get_by_id(timesheet).status == ApprovalStatus.REJECTED


def test_manager_approves_team_leave(container, staff, leave):
    decided = container.approval_service.decide_leave_request(
        leave_request_id=leave, approver_id=staff.manager.employee_id, approved=True
    )
    assert decided.status == ApprovalStatus.APPROVED


def test_leave_authorization_follows_team(container, staff, leave):
    with pytest.raises(AuthorizationError):
        container.approval_service.decide_leave_request(
            leave_request_id=leave, approver_id=staff.other_manager.employee_id, approved=True
        )
    decided = container.approval_service.decide_leave_request(
        leave_request_id=leave, approver_id=staff.hr.employee_id, approved=False
    )
    assert decided.status == ApprovalStatus.REJECTED


def test_decided_leave_is_terminal(container, staff, leave):
    service = container.approval_service
    service.decide_leave_request(leave_request_id=leave, approver_id=staff.hr.employee_id, approved=True)

    with pytest.raises(ConflictError):
        service.decide_leave_request(leave_request_id=leave, approver_id=staff.hr.employee_id, approved=False)


def test_unknown_leave_request(container, staff):
    with pytest.raises(NotFoundError):
        container.approval_service.decide_leave_request(
            leave_request_id=404, approver_id=staff.hr.employee_id, approved=True
        )


def test_team_change_moves_approval_rights(container, staff, timesheet):
    container.team_service.remove_from_team(
        manager_id=staff.manager.employee_id, employee_id=staff.employee.employee_id
    )

    with pytest.raises(AuthorizationError):
        container.approval_service.decide_timesheet(
            timesheet_id=timesheet, approver_id=staff.manager.employee_id, approved=True
        )
