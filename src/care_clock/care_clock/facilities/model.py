from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geofence.model import FacilityPerimeter, GeoPoint


@dataclass(frozen=True)
class FacilitySettings:
    """Domain entity: a facility and its clock-in perimeter."""

    facility_id: Optional[int]
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    manager_name: Optional[str] = None

    @property
    def perimeter(self) -> FacilityPerimeter:
        return FacilityPerimeter(center=GeoPoint(self.latitude, self.longitude), radius_meters=self.radius_meters)

    def to_dict(self) -> dict:
        return {
            "id": self.facility_id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius_meters,
            "manager": self.manager_name or "Unknown",
        }
