from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    HR = "hr"


class ApprovalStatus(str, Enum):
    """Approval state shared by timesheets and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    PROCESSED = "processed"
