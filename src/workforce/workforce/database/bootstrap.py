from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # name, email, password, role, hourly wage, managed by (email)
    ("HR Demo", "hr@example.com", "hr12345", "hr", "0.00", None),
    ("Manager Demo", "manager@example.com", "manager123", "manager", "35.00", None),
    ("Employee Demo", "employee@example.com", "employee123", "employee", "20.00", "manager@example.com"),
)


_DATABASE_DIRECTIVE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$", re.IGNORECASE | re.MULTILINE)


def _split_statements(sql: str) -> Iterator[str]:
    """Yield ``;``-terminated statements, ignoring ``--`` comment lines and ``;`` inside quotes."""
    quote: Optional[str] = None
    current: list[str] = []
    for line in sql.splitlines():
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line + "\n":
            if quote:
                quote = None if ch == quote else quote
            elif ch in "'\"`":
                quote = ch
            elif ch == ";":
                statement = "".join(current).strip()
                current = []
                if statement:
                    yield statement
                continue
            current.append(ch)
    rest = "".join(current).strip()
    if rest:
        yield rest


def _server_connection(target: DBConfig, *, select_database: bool = True):
    # Plain connection (not the app pool): the database may not exist yet.
    options = target.connect_args()
    if not select_database:
        options.pop("database")
    return mysql.connector.connect(use_pure=True, **options)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _server_connection(target, select_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the configured database if needed and run every statement of ``schema_path``.

    ``CREATE DATABASE``/``USE`` lines in the file are ignored so the schema lands
    in whatever database ``DB_CONFIG`` names.
    """
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _DATABASE_DIRECTIVE.sub("", Path(schema_path).read_text(encoding="utf-8"))
    statements = list(_split_statements(sql))

    conn = _server_connection(target)
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d statements from %s to %s", len(statements), schema_path, target.database)


def ensure_demo_accounts(db_config: dict) -> None:
    """Insert or refresh one login per role; re-running resets their passwords."""
    target = DBConfig.from_dict(db_config)
    conn = _server_connection(target)
    ids_by_email: dict[str, int] = {}
    try:
        cur = conn.cursor(dictionary=True)
        for name, email, password, role, wage, manager_email in DEMO_ACCOUNTS:
            values = (name, generate_password_hash(password), role, wage, ids_by_email.get(manager_email))
            cur.execute(
                """
                INSERT INTO employees (name, password_hash, role, hourly_wage, manager_id, email)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash), role=VALUES(role),
                    hourly_wage=VALUES(hourly_wage), manager_id=VALUES(manager_id)
                """,
                values + (email,),
            )
            cur.execute("SELECT employee_id FROM employees WHERE email=%s", (email,))
            ids_by_email[email] = int(cur.fetchone()["employee_id"])
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready in %s: %s", target.database, ", ".join(ids_by_email))


def list_tables(db_config: dict) -> list[str]:
    conn = _server_connection(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
