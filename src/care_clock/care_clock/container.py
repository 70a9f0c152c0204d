from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .analytics.service import AnalyticsService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .facilities.model import FacilitySettings
from .facilities.mysql_facility_repository import MySQLFacilityRepository
from .facilities.repository import FacilityRepository
from .facilities.service import FacilityService
from .geofence.validator import GeofenceValidator
from .signups.mysql_signup_repository import MySQLSignupRepository
from .signups.repository import SignupRepository
from .signups.service import SignupService
from .timeclock.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timeclock.reconstructor import AttendanceReconstructor
from .timeclock.repository import TimeEntryRepository
from .timeclock.service import TimeEntryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    facilities_repo: FacilityRepository
    time_entries_repo: TimeEntryRepository
    signups_repo: SignupRepository

    reconstructor: AttendanceReconstructor
    employee_service: EmployeeService
    facility_service: FacilityService
    time_entry_service: TimeEntryService
    signup_service: SignupService
    analytics_service: AnalyticsService


def default_facility(settings: Any) -> FacilitySettings:
    return FacilitySettings(
        facility_id=None,
        name=str(getattr(settings, "DEFAULT_FACILITY_NAME", constants.DEFAULT_FACILITY_NAME)),
        latitude=float(getattr(settings, "DEFAULT_FACILITY_LATITUDE", constants.DEFAULT_FACILITY_LATITUDE)),
        longitude=float(getattr(settings, "DEFAULT_FACILITY_LONGITUDE", constants.DEFAULT_FACILITY_LONGITUDE)),
        radius_meters=float(
            getattr(settings, "DEFAULT_PERIMETER_RADIUS_METERS", constants.DEFAULT_PERIMETER_RADIUS_METERS)
        ),
    )


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    facilities_repo: FacilityRepository,
    time_entries_repo: TimeEntryRepository,
    signups_repo: SignupRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    reconstructor = AttendanceReconstructor()
    validator = GeofenceValidator()

    employee_service = EmployeeService(employees_repo)
    facility_service = FacilityService(facilities_repo, default=default_facility(settings), validator=validator)
    time_entry_service = TimeEntryService(
        time_entries_repo,
        employee_service,
        facility_service,
        reconstructor=reconstructor,
        validator=validator,
        geofence_enabled=bool(getattr(settings, "GEOFENCE_ENABLED", True)),
        geofence_clock_out=bool(getattr(settings, "GEOFENCE_CLOCK_OUT", False)),
    )
    signup_service = SignupService(
        signups_repo,
        employees_repo,
        employee_service,
        default_password=str(getattr(settings, "DEFAULT_EMPLOYEE_PASSWORD", "careworker123")),
    )
    analytics_service = AnalyticsService(time_entries_repo, employee_service, reconstructor=reconstructor)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        facilities_repo=facilities_repo,
        time_entries_repo=time_entries_repo,
        signups_repo=signups_repo,
        reconstructor=reconstructor,
        employee_service=employee_service,
        facility_service=facility_service,
        time_entry_service=time_entry_service,
        signup_service=signup_service,
        analytics_service=analytics_service,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        facilities_repo=MySQLFacilityRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        signups_repo=MySQLSignupRepository(conn),
        settings=settings,
        conn=conn,
    )
