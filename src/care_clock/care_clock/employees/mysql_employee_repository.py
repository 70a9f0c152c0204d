from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_pk, employee_code, name, email, role, department, position, password_hash, is_active, hired_at"


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_pk=int(r["employee_pk"]),
        employee_code=r["employee_code"],
        name=r["name"],
        email=r["email"],
        role=Role(r["role"]),
        department=r.get("department"),
        position=r.get("position"),
        password_hash=r["password_hash"],
        is_active=bool(r.get("is_active", 1)),
        hired_at=from_db_datetime(r.get("hired_at")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_code=%s", (employee_code,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        role: Role,
        department: Optional[str],
        position: Optional[str],
        password_hash: str,
        hired_at: Optional[datetime] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_code, name, email, role, department, position, password_hash, hired_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_code, name, email, role.value, department, position, password_hash, to_db_datetime(hired_at)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_code: str,
        name: str,
        department: Optional[str],
        position: Optional[str],
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, department=%s, position=%s, is_active=%s
                WHERE employee_code=%s
                """,
                (name, department, position, 1 if is_active else 0, employee_code),
            )
            return cur.rowcount > 0

    def delete_by_code(self, employee_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_code=%s", (employee_code,))
            return cur.rowcount > 0
