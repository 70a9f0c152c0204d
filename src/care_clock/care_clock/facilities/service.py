from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_latitude, require_longitude, require_radius
from ..core.exceptions import NotFoundError, ValidationError
from ..geofence.model import FacilityPerimeter, GeoPoint, GeofenceCheck
from ..geofence.validator import GeofenceValidator
from .model import FacilitySettings
from .repository import FacilityRepository

logger = logging.getLogger(__name__)


class FacilityService:
    """Use case: read and edit the facility location and clock-in perimeter.

    When no facility row exists yet, ``default`` (built from settings) is used
    for reads so a fresh deployment still has a working geofence.
    """

    def __init__(
        self,
        facilities: FacilityRepository,
        *,
        default: Optional[FacilitySettings] = None,
        validator: Optional[GeofenceValidator] = None,
    ):
        self._facilities = facilities
        self._default = default
        self._validator = validator or GeofenceValidator()

    def get_settings(self, facility_id: Optional[int] = None) -> FacilitySettings:
        if facility_id is not None:
            settings = self._facilities.get_by_id(int(facility_id))
        else:
            settings = self._facilities.get_current() or self._default
        if not settings:
            raise NotFoundError("No facility settings found")
        return settings

    def current_perimeter(self, facility_id: Optional[int] = None) -> FacilityPerimeter:
        return self.get_settings(facility_id).perimeter

    def distance_to_facility(self, latitude, longitude, *, facility_id: Optional[int] = None) -> GeofenceCheck:
        point = GeoPoint(latitude, longitude)
        return self._validator.check(point, self.current_perimeter(facility_id))

    def update_settings(
        self,
        *,
        latitude,
        longitude,
        radius_meters,
        name: Optional[str] = None,
        facility_id: Optional[int] = None,
    ) -> FacilitySettings:
        latitude = require_latitude(latitude)
        longitude = require_longitude(longitude)
        radius_meters = require_radius(radius_meters)

        existing = self._facilities.get_by_id(int(facility_id)) if facility_id is not None else self._facilities.get_current()
        if not existing or existing.facility_id is None:
            raise NotFoundError("No facility settings found to update")

        ok = self._facilities.update(
            facility_id=existing.facility_id,
            name=(name or "").strip() or existing.name,
            latitude=latitude,
            longitude=longitude,
            radius_meters=radius_meters,
        )
        if not ok:
            raise ValidationError("Failed to update facility settings")

        logger.info(
            "Facility %s perimeter set to (%.6f, %.6f) r=%.1fm",
            existing.facility_id, latitude, longitude, radius_meters,
        )
        return self.get_settings(existing.facility_id)
