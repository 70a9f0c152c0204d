from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.care_clock.care_clock.facilities.model import FacilitySettings

from tests.fakes import InMemoryEmployees, InMemoryFacilities, InMemorySignups, InMemoryTimeEntries, make_employee


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def facility():
    return FacilitySettings(
        facility_id=1,
        name="Riverside Care Home",
        latitude=40.7128,
        longitude=-74.0060,
        radius_meters=200.0,
        manager_name="Mina Park",
    )


@pytest.fixture
def employees_repo():
    return InMemoryEmployees(
        [
            make_employee(1, "EMP001", name="Ada Lovelace", department="Care"),
            make_employee(2, "EMP002", name="Bo Chen", department="Nursing"),
        ]
    )


@pytest.fixture
def facilities_repo(facility):
    return InMemoryFacilities(facility)


@pytest.fixture
def entries_repo():
    return InMemoryTimeEntries()


@pytest.fixture
def signups_repo():
    return InMemorySignups()
