from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import FacilitySettings
from .repository import FacilityRepository

_SELECT = """
    SELECT f.facility_id, f.facility_name, f.latitude, f.longitude, f.radius_meters, e.name AS manager_name
    FROM facility_settings f
    LEFT JOIN employees e ON e.employee_pk = f.manager_pk
"""


def _to_settings(r: Dict[str, Any]) -> FacilitySettings:
    return FacilitySettings(
        facility_id=int(r["facility_id"]),
        name=r["facility_name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius_meters=float(r["radius_meters"]),
        manager_name=r.get("manager_name"),
    )


class MySQLFacilityRepository(FacilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current(self) -> Optional[FacilitySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY f.facility_id LIMIT 1")
            r = fetchone(cur)
            return _to_settings(r) if r else None

    def get_by_id(self, facility_id: int) -> Optional[FacilitySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE f.facility_id=%s", (int(facility_id),))
            r = fetchone(cur)
            return _to_settings(r) if r else None

    def update(
        self,
        *,
        facility_id: int,
        name: str,
        latitude: float,
        longitude: float,
        radius_meters: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE facility_settings
                SET facility_name=%s, latitude=%s, longitude=%s, radius_meters=%s
                WHERE facility_id=%s
                """,
                (name, latitude, longitude, radius_meters, int(facility_id)),
            )
            if cur.rowcount:
                return True
            # rowcount is 0 for an unchanged row as well as a missing one.
            cur.execute("SELECT facility_id FROM facility_settings WHERE facility_id=%s", (int(facility_id),))
            return fetchone(cur) is not None
