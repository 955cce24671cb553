from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, password_hash, role, hourly_wage, manager_id, created_at"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        hourly_wage=as_decimal(row["hourly_wage"]),
        manager_id=int(row["manager_id"]) if row.get("manager_id") is not None else None,
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_by_ids(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({in_clause(ids)})", tuple(ids))
            return [_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_wage: Decimal,
        manager_id: Optional[int] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(name, email, password_hash, role, hourly_wage, manager_id)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, role.value, hourly_wage, manager_id),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Employee with this email already exists") from e
            raise

    def update_profile(
        self,
        *,
        employee_id: int,
        name: str,
        email: str,
        password_hash: str,
        hourly_wage: Decimal,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, email=%s, password_hash=%s, hourly_wage=%s
                    WHERE employee_id=%s
                    """,
                    (name, email, password_hash, hourly_wage, int(employee_id)),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Employee with this email already exists") from e
            raise

    def set_manager(self, *, employee_id: int, manager_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET manager_id=%s WHERE employee_id=%s",
                (manager_id, int(employee_id)),
            )
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE role=%s ORDER BY created_at DESC, employee_id DESC",
                (role.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_team(self, manager_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE manager_id=%s ORDER BY name",
                (int(manager_id),),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_assignable(self, manager_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE role=%s AND (manager_id IS NULL OR manager_id=%s)
                ORDER BY name
                """,
                (Role.EMPLOYEE.value, int(manager_id)),
            )
            return [_to_employee(r) for r in fetchall(cur)]
