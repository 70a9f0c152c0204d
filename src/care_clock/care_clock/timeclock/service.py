from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import ensure_utc, now_utc
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import DutyStatus, EntryType
from ..core.exceptions import OutsidePerimeterError, ValidationError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..facilities.service import FacilityService
from ..geofence.model import GeoPoint
from ..geofence.validator import GeofenceValidator
from .model import AttendanceEvent, AttendanceState, ShiftReconstruction
from .reconstructor import AttendanceReconstructor
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class TimeEntryService:
    """Use case: record clock actions and answer status/history queries.

    The sequence check runs as a guard inside the repository write, so a
    concurrent duplicate submission sees the first one's event.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeService,
        facilities: FacilityService,
        *,
        reconstructor: Optional[AttendanceReconstructor] = None,
        validator: Optional[GeofenceValidator] = None,
        geofence_enabled: bool = True,
        geofence_clock_out: bool = False,
    ):
        self._entries = entries
        self._employees = employees
        self._facilities = facilities
        self._reconstructor = reconstructor or AttendanceReconstructor()
        self._validator = validator or GeofenceValidator()
        self._geofence_enabled = bool(geofence_enabled)
        self._geofence_clock_out = bool(geofence_clock_out)

    def _requires_geofence(self, kind: EntryType) -> bool:
        if not self._geofence_enabled:
            return False
        return kind == EntryType.CLOCK_IN or (kind == EntryType.CLOCK_OUT and self._geofence_clock_out)

    def _check_location(self, kind: EntryType, location: Optional[GeoPoint]) -> None:
        if not self._requires_geofence(kind):
            return
        if location is None:
            raise ValidationError("Location is required to clock in")

        result = self._validator.check(location, self._facilities.current_perimeter())
        if not result.within:
            raise OutsidePerimeterError(
                f"You are outside the facility perimeter ({result.distance_meters:.0f} m away, "
                f"allowed {result.radius_meters:.0f} m)",
                distance_meters=result.distance_meters,
                radius_meters=result.radius_meters,
            )

    @staticmethod
    def _check_sequence(kind: EntryType, state: AttendanceState) -> None:
        if kind == EntryType.CLOCK_OUT and not state.on_duty:
            raise ValidationError("Cannot clock out - employee is not currently clocked in")
        if kind == EntryType.BREAK_START and state.status != DutyStatus.ON_DUTY:
            raise ValidationError("Cannot start a break - employee is not on duty")
        if kind == EntryType.BREAK_END and state.status != DutyStatus.ON_BREAK:
            raise ValidationError("Cannot end a break - employee is not on a break")

    def record_entry(
        self,
        employee_code: str,
        kind,
        *,
        latitude=None,
        longitude=None,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        employee = self._employees.get(employee_code)
        try:
            kind = EntryType(kind)
        except (TypeError, ValueError):
            raise ValidationError("Invalid entry type")

        location = None
        if latitude is not None or longitude is not None:
            location = GeoPoint(latitude, longitude)

        now = ensure_utc(now) if now else now_utc()
        note = (note or "").strip() or None

        self._check_location(kind, location)

        def guard(history: Sequence[AttendanceEvent]) -> None:
            self._check_sequence(kind, self._reconstructor.current_state(history, now))

        event = self._entries.record_event(
            employee_id=employee.employee_pk,
            kind=kind,
            timestamp=now,
            location=location,
            note=note,
            guard=guard,
        )

        logger.info("Recorded %s for %s at %s", kind.value, employee.employee_code, now.isoformat())
        return event

    def _state_for(self, employee: Employee, as_of: datetime) -> AttendanceState:
        events = self._entries.fetch_events(employee.employee_pk, end=as_of)
        return self._reconstructor.current_state(events, as_of)

    def current_status(self, employee_code: str, *, as_of: Optional[datetime] = None) -> AttendanceState:
        employee = self._employees.get(employee_code)
        return self._state_for(employee, ensure_utc(as_of) if as_of else now_utc())

    def history(
        self,
        employee_code: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[AttendanceEvent]:
        employee = self._employees.get(employee_code)
        events = self._entries.fetch_events(employee.employee_pk, start=start, end=end)
        ordered = sorted(events, key=lambda e: ensure_utc(e.timestamp), reverse=True)
        return ordered[: int(limit)] if limit else ordered

    def all_entries(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[AttendanceEvent]:
        """Every employee's events in range, newest first."""
        events = self._entries.fetch_all_events(start=start, end=end)
        ordered = sorted(events, key=lambda e: ensure_utc(e.timestamp), reverse=True)
        return ordered[: int(limit)] if limit else ordered

    def shifts(
        self,
        employee_code: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> ShiftReconstruction:
        """Shifts whose clock-in lies in ``[start, end]``, with their anomalies."""
        employee = self._employees.get(employee_code)
        events = covering_events(self._entries, employee.employee_pk, start=start, end=end)
        result = self._reconstructor.reconstruct_shifts(events)
        return self._reconstructor.clip_to_range(result, start, end)


def covering_events(
    entries: TimeEntryRepository,
    employee_id: int,
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Sequence[AttendanceEvent]:
    """Events for ``[start, end]`` widened so shifts crossing either bound still pair up.

    The fetch starts at the last clock-in at or before ``start`` and runs to the
    first clock-out at or after ``end``.
    """
    fetch_start, fetch_end = start, end
    if start is not None:
        clock_in = entries.last_event_before(employee_id, EntryType.CLOCK_IN, start)
        if clock_in is not None:
            fetch_start = clock_in.timestamp
    if end is not None:
        clock_out = entries.first_event_after(employee_id, EntryType.CLOCK_OUT, end)
        if clock_out is not None:
            fetch_end = clock_out.timestamp
    return entries.fetch_events(employee_id, start=fetch_start, end=fetch_end)
