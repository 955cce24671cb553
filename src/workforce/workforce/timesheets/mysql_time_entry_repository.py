from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ApprovalStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = (
    "entry_id, employee_id, work_date, clock_in, clock_out, total_hours, overtime_hours, status, location, created_at"
)


def _to_entry(row: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(row["entry_id"]),
        employee_id=int(row["employee_id"]),
        work_date=row["work_date"],
        clock_in=row.get("clock_in"),
        clock_out=row.get("clock_out"),
        total_hours=as_decimal(row["total_hours"]),
        overtime_hours=as_decimal(row["overtime_hours"]),
        status=ApprovalStatus(row["status"]),
        location=row.get("location"),
        created_at=row.get("created_at"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def find_open_session(self, employee_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND clock_out IS NULL
                ORDER BY created_at DESC, entry_id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        location: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_entries(employee_id, work_date, clock_in, status, location)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, clock_in, ApprovalStatus.PENDING.value, location),
                )
                return int(cur.lastrowid)
        except Exception as e:
            # uq_time_entries_open_session: another open session won the race.
            if is_duplicate_key(e):
                raise ConflictError("Already clocked in") from e
            raise

    def record_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        total_hours: Decimal,
        overtime_hours: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s, total_hours=%s, overtime_hours=%s
                WHERE entry_id=%s AND clock_out IS NULL
                """,
                (clock_out, total_hours, overtime_hours, int(entry_id)),
            )
            return cur.rowcount > 0

    def transition_status(self, *, entry_id: int, from_status: ApprovalStatus, to_status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE time_entries SET status=%s WHERE entry_id=%s AND status=%s",
                (to_status.value, int(entry_id), from_status.value),
            )
            return cur.rowcount > 0

    def list_for_employees(self, employee_ids: Sequence[int]) -> Sequence[TimeEntry]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id IN ({in_clause(ids)})
                ORDER BY work_date DESC, entry_id DESC
                """,
                tuple(ids),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_by_status(self, status: ApprovalStatus) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_entries WHERE status=%s ORDER BY work_date DESC, entry_id DESC",
                (status.value,),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_approved_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimeEntry]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM time_entries
            WHERE status=%s AND work_date BETWEEN %s AND %s
        """
        params: list = [ApprovalStatus.APPROVED.value, start_date, end_date]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(int(employee_id))
        sql += " ORDER BY work_date, entry_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM time_entries WHERE status=%s", (status.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
