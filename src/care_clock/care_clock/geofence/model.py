from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_latitude, require_longitude, require_radius


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        object.__setattr__(self, "latitude", require_latitude(self.latitude))
        object.__setattr__(self, "longitude", require_longitude(self.longitude))


@dataclass(frozen=True)
class FacilityPerimeter:
    """Circular geofence around a facility."""

    center: GeoPoint
    radius_meters: float

    def __post_init__(self):
        object.__setattr__(self, "radius_meters", require_radius(self.radius_meters))


@dataclass(frozen=True)
class GeofenceCheck:
    distance_meters: float
    radius_meters: float
    within: bool
