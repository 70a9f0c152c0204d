from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import SignupStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import SignupRequest
from .repository import SignupRepository

_COLUMNS = """
    request_id, name, email, phone, experience, preferred_department, message,
    status, submitted_at, reviewed_at, review_notes, employee_code
"""


def _to_request(r: Dict[str, Any]) -> SignupRequest:
    return SignupRequest(
        request_id=int(r["request_id"]),
        name=r["name"],
        email=r["email"],
        phone=r["phone"],
        experience=r["experience"],
        preferred_department=r.get("preferred_department"),
        message=r.get("message"),
        status=SignupStatus(r["status"]),
        submitted_at=from_db_datetime(r["submitted_at"]),
        reviewed_at=from_db_datetime(r.get("reviewed_at")),
        review_notes=r.get("review_notes"),
        employee_code=r.get("employee_code"),
    )


class MySQLSignupRepository(SignupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        experience: str,
        preferred_department: Optional[str],
        message: Optional[str],
        submitted_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO signup_requests(name, email, phone, experience, preferred_department, message, status, submitted_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    name,
                    email,
                    phone,
                    experience,
                    preferred_department,
                    message,
                    SignupStatus.PENDING.value,
                    to_db_datetime(submitted_at),
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[SignupRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM signup_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def get_by_email(self, email: str) -> Optional[SignupRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM signup_requests WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(self, *, status: Optional[SignupStatus] = None) -> Sequence[SignupRequest]:
        sql = f"SELECT {_COLUMNS} FROM signup_requests"
        params: tuple = ()
        if status is not None:
            sql += " WHERE status=%s"
            params = (status.value,)
        sql += " ORDER BY submitted_at DESC, request_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: SignupStatus,
        reviewed_at: datetime,
        review_notes: Optional[str] = None,
        employee_code: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE signup_requests
                SET status=%s, reviewed_at=%s, review_notes=%s, employee_code=COALESCE(%s, employee_code)
                WHERE request_id=%s AND status <> %s
                """,
                (
                    status.value,
                    to_db_datetime(reviewed_at),
                    review_notes,
                    employee_code,
                    int(request_id),
                    SignupStatus.APPROVED.value,
                ),
            )
            return cur.rowcount > 0
