"""Approval state machine shared by timesheets and leave requests.

pending -> approved and pending -> rejected; approved and rejected are terminal.
"""

from __future__ import annotations

from ..core.enums import ApprovalStatus
from ..core.exceptions import ConflictError

_TRANSITIONS: dict[ApprovalStatus, frozenset[ApprovalStatus]] = {
    ApprovalStatus.PENDING: frozenset({ApprovalStatus.PENDING, ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}),
    ApprovalStatus.APPROVED: frozenset(),
    ApprovalStatus.REJECTED: frozenset(),
}


class ApprovalStateMachine:
    @staticmethod
    def target_for(approved: bool) -> ApprovalStatus:
        return ApprovalStatus.APPROVED if approved else ApprovalStatus.REJECTED

    @staticmethod
    def is_terminal(status: ApprovalStatus) -> bool:
        return not _TRANSITIONS[ApprovalStatus(status)]

    @staticmethod
    def can_transition(from_status: ApprovalStatus, to_status: ApprovalStatus) -> bool:
        return ApprovalStatus(to_status) in _TRANSITIONS[ApprovalStatus(from_status)]

    @classmethod
    def validate_transition(cls, from_status: ApprovalStatus, to_status: ApprovalStatus) -> None:
        if not cls.can_transition(from_status, to_status):
            raise ConflictError(f"Already {ApprovalStatus(from_status).value}, cannot change to {ApprovalStatus(to_status).value}")
