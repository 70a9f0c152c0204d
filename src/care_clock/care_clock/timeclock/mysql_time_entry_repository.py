from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from ..geofence.model import GeoPoint
from .model import AttendanceEvent
from .repository import EventGuard, TimeEntryRepository

_SELECT = """
    SELECT entry_id, employee_pk, entry_type, recorded_at, latitude, longitude, note
    FROM time_entries
"""


def _entry_type(value: str):
    # Unknown stored kinds are passed through; the reconstructor reports them.
    try:
        return EntryType(value)
    except ValueError:
        return value


def _to_event(r: Dict[str, Any]) -> AttendanceEvent:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(float(r["latitude"]), float(r["longitude"]))
    return AttendanceEvent(
        employee_id=int(r["employee_pk"]),
        kind=_entry_type(r["entry_type"]),
        timestamp=from_db_datetime(r["recorded_at"]),
        location=location,
        note=r.get("note"),
        entry_id=int(r["entry_id"]),
    )


def _range_clause(start: Optional[datetime], end: Optional[datetime]) -> tuple[str, list]:
    clauses, params = [], []
    if start is not None:
        clauses.append("recorded_at >= %s")
        params.append(to_db_datetime(start))
    if end is not None:
        clauses.append("recorded_at <= %s")
        params.append(to_db_datetime(end))
    return " AND ".join(clauses), params


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_events(
        self,
        employee_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        where, params = _range_clause(start, end)
        sql = _SELECT + " WHERE employee_pk=%s"
        if where:
            sql += " AND " + where
        sql += " ORDER BY recorded_at, entry_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(employee_id), *params))
            return [_to_event(r) for r in fetchall(cur)]

    def fetch_all_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        where, params = _range_clause(start, end)
        sql = _SELECT
        if where:
            sql += " WHERE " + where
        sql += " ORDER BY recorded_at, entry_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_event(r) for r in fetchall(cur)]

    def last_event_before(self, employee_id: int, kind: EntryType, at: datetime) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + " WHERE employee_pk=%s AND entry_type=%s AND recorded_at <= %s"
                + " ORDER BY recorded_at DESC, entry_id DESC LIMIT 1",
                (int(employee_id), kind.value, to_db_datetime(at)),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def first_event_after(self, employee_id: int, kind: EntryType, at: datetime) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + " WHERE employee_pk=%s AND entry_type=%s AND recorded_at >= %s"
                + " ORDER BY recorded_at, entry_id LIMIT 1",
                (int(employee_id), kind.value, to_db_datetime(at)),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def record_event(
        self,
        *,
        employee_id: int,
        kind: EntryType,
        timestamp: datetime,
        location: Optional[GeoPoint] = None,
        note: Optional[str] = None,
        guard: Optional[EventGuard] = None,
    ) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            if guard is not None:
                # Row lock on the employee serializes guarded writes across workers
                # until this transaction commits or rolls back.
                cur.execute("SELECT employee_pk FROM employees WHERE employee_pk=%s FOR UPDATE", (int(employee_id),))
                fetchall(cur)
                cur.execute(
                    _SELECT + " WHERE employee_pk=%s AND recorded_at <= %s ORDER BY recorded_at, entry_id",
                    (int(employee_id), to_db_datetime(timestamp)),
                )
                guard([_to_event(r) for r in fetchall(cur)])

            cur.execute(
                """
                INSERT INTO time_entries(employee_pk, entry_type, recorded_at, latitude, longitude, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    kind.value,
                    to_db_datetime(timestamp),
                    location.latitude if location else None,
                    location.longitude if location else None,
                    note,
                ),
            )
            entry_id = int(cur.lastrowid)

        return AttendanceEvent(
            employee_id=int(employee_id),
            kind=kind,
            timestamp=timestamp,
            location=location,
            note=note,
            entry_id=entry_id,
        )
