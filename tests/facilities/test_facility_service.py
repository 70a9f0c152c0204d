from __future__ import annotations

import pytest

from src.care_clock.care_clock.core.exceptions import InvalidCoordinate, NotFoundError, ValidationError
from src.care_clock.care_clock.facilities.model import FacilitySettings
from src.care_clock.care_clock.facilities.service import FacilityService

from tests.fakes import InMemoryFacilities


def test_current_perimeter_uses_stored_settings(facilities_repo):
    perimeter = FacilityService(facilities_repo).current_perimeter()

    assert perimeter.center.latitude == 40.7128
    assert perimeter.radius_meters == 200.0


def test_falls_back_to_default_when_table_is_empty():
    default = FacilitySettings(facility_id=None, name="Default", latitude=12.9, longitude=77.5, radius_meters=2000.0)
    svc = FacilityService(InMemoryFacilities(), default=default)

    assert svc.get_settings().name == "Default"
    assert svc.current_perimeter().radius_meters == 2000.0


def test_missing_settings_raise_not_found():
    with pytest.raises(NotFoundError):
        FacilityService(InMemoryFacilities()).get_settings()


def test_update_settings_validates_and_persists(facilities_repo):
    svc = FacilityService(facilities_repo)

    updated = svc.update_settings(latitude=51.5, longitude=-0.12, radius_meters=500, name="  ")

    assert updated.latitude == 51.5
    assert updated.radius_meters == 500.0
    assert updated.name == "Riverside Care Home"


@pytest.mark.parametrize(
    "lat,lng,radius",
    [(91, 0, 10), (0, -181, 10), (0, 0, 0), (0, 0, -1), ("1", 0, 10)],
)
def test_update_settings_rejects_out_of_range_values(facilities_repo, lat, lng, radius):
    with pytest.raises(InvalidCoordinate):
        FacilityService(facilities_repo).update_settings(latitude=lat, longitude=lng, radius_meters=radius)


def test_update_without_stored_facility_is_not_found():
    with pytest.raises(NotFoundError):
        FacilityService(InMemoryFacilities()).update_settings(latitude=1, longitude=1, radius_meters=1)


def test_distance_to_facility(facilities_repo):
    check = FacilityService(facilities_repo).distance_to_facility(40.7128, -74.0042)

    assert check.within
    assert 100 < check.distance_meters < 200


class _VanishingFacilities(InMemoryFacilities):
    """Row is deleted between the lookup and the write."""

    def update(self, **kwargs) -> bool:
        self._settings = None
        return super().update(**kwargs)


def test_update_reports_a_row_that_disappeared(facility):
    svc = FacilityService(_VanishingFacilities(facility))

    with pytest.raises(ValidationError, match="Failed to update facility settings"):
        svc.update_settings(latitude=1, longitude=1, radius_meters=10)
