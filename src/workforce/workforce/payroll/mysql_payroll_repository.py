from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = "payroll_id, employee_id, period, base_pay, overtime_pay, deductions, total_pay, status, created_at"


def _to_record(row: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(row["payroll_id"]),
        employee_id=int(row["employee_id"]),
        period=row["period"],
        base_pay=as_decimal(row["base_pay"]),
        overtime_pay=as_decimal(row["overtime_pay"]),
        deductions=as_decimal(row["deductions"]),
        total_pay=as_decimal(row["total_pay"]),
        status=PayrollStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_employee_period(self, employee_id: int, period: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE employee_id=%s AND period=%s",
                (int(employee_id), period),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(
        self,
        *,
        employee_id: int,
        period: str,
        base_pay: Decimal,
        overtime_pay: Decimal,
        deductions: Decimal,
        total_pay: Decimal,
        status: PayrollStatus = PayrollStatus.PROCESSED,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll_records(employee_id, period, base_pay, overtime_pay, deductions, total_pay, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), period, base_pay, overtime_pay, deductions, total_pay, status.value),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Payroll already processed for this employee and period") from e
            raise

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE period=%s ORDER BY created_at DESC, payroll_id DESC",
                (period,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records ORDER BY created_at DESC, payroll_id DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def sum_total_for_period(self, period: str) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(SUM(total_pay), 0) AS total FROM payroll_records WHERE period=%s", (period,))
            row = fetchone(cur)
            return as_decimal(row["total"] if row else None)
