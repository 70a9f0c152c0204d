"""Great-circle distance and perimeter containment.

All functions are pure. Coordinates are validated when a ``GeoPoint`` or
``FacilityPerimeter`` is built; passing anything else is rejected with
``InvalidCoordinate`` before any computation runs.
"""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import InvalidCoordinate
from .model import FacilityPerimeter, GeoPoint, GeofenceCheck


def _require_point(value, name: str) -> GeoPoint:
    if not isinstance(value, GeoPoint):
        raise InvalidCoordinate(f"{name} must be a GeoPoint")
    return value


def _require_perimeter(value) -> FacilityPerimeter:
    if not isinstance(value, FacilityPerimeter):
        raise InvalidCoordinate("perimeter must be a FacilityPerimeter")
    return value


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points on a sphere of mean Earth radius."""
    a = _require_point(a, "a")
    b = _require_point(b, "b")

    phi1, phi2 = radians(a.latitude), radians(b.latitude)
    d_phi = radians(b.latitude - a.latitude)
    d_lambda = radians(b.longitude - a.longitude)

    h = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def is_within_perimeter(point: GeoPoint, perimeter: FacilityPerimeter) -> bool:
    """True when ``point`` lies inside or exactly on the perimeter boundary."""
    perimeter = _require_perimeter(perimeter)
    return distance_meters(_require_point(point, "point"), perimeter.center) <= perimeter.radius_meters


class GeofenceValidator:
    """Gate for location-restricted clock actions."""

    def check(self, point: GeoPoint, perimeter: FacilityPerimeter) -> GeofenceCheck:
        perimeter = _require_perimeter(perimeter)
        distance = distance_meters(_require_point(point, "point"), perimeter.center)
        return GeofenceCheck(
            distance_meters=distance,
            radius_meters=perimeter.radius_meters,
            within=distance <= perimeter.radius_meters,
        )

    def is_within_perimeter(self, point: GeoPoint, perimeter: FacilityPerimeter) -> bool:
        return self.check(point, perimeter).within
