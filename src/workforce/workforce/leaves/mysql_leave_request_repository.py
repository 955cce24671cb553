from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_COLUMNS = "request_id, employee_id, leave_type, start_date, end_date, reason, status, created_at"


def _to_request(row: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(row["request_id"]),
        employee_id=int(row["employee_id"]),
        leave_type=row["leave_type"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        status=ApprovalStatus(row["status"]),
        reason=row.get("reason"),
        created_at=row.get("created_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            row = fetchone(cur)
            return _to_request(row) if row else None

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type, start_date, end_date, reason, ApprovalStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def transition_status(self, *, request_id: int, from_status: ApprovalStatus, to_status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s WHERE request_id=%s AND status=%s",
                (to_status.value, int(request_id), from_status.value),
            )
            return cur.rowcount > 0

    def list_for_employees(self, employee_ids: Sequence[int]) -> Sequence[LeaveRequest]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id IN ({in_clause(ids)})
                ORDER BY start_date DESC, request_id DESC
                """,
                tuple(ids),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_by_status(self, status: ApprovalStatus) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE status=%s ORDER BY created_at DESC, request_id DESC",
                (status.value,),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests ORDER BY created_at DESC, request_id DESC")
            return [_to_request(r) for r in fetchall(cur)]

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (status.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
