"""In-memory repositories implementing the storage protocols for tests."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

from src.care_clock.care_clock.core.enums import Role, SignupStatus
from src.care_clock.care_clock.employees.model import Employee
from src.care_clock.care_clock.facilities.model import FacilitySettings
from src.care_clock.care_clock.signups.model import SignupRequest
from src.care_clock.care_clock.timeclock.model import AttendanceEvent


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_code: dict[str, Employee] = {}
        self._next_pk = 1
        for e in employees:
            self._by_code[e.employee_code] = e
            self._next_pk = max(self._next_pk, e.employee_pk + 1)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._by_code.get(employee_code)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_code.values() if e.email == email), None)

    def list_all(self):
        return sorted(self._by_code.values(), key=lambda e: e.name)

    def create(self, *, employee_code, name, email, role, department, position, password_hash, hired_at=None) -> int:
        pk = self._next_pk
        self._next_pk += 1
        self._by_code[employee_code] = Employee(
            employee_pk=pk,
            employee_code=employee_code,
            name=name,
            email=email,
            role=role,
            department=department,
            position=position,
            password_hash=password_hash,
            hired_at=hired_at,
        )
        return pk

    def update(self, *, employee_code, name, department, position, is_active) -> bool:
        e = self._by_code.get(employee_code)
        if not e:
            return False
        self._by_code[employee_code] = replace(
            e, name=name, department=department, position=position, is_active=is_active
        )
        return True

    def delete_by_code(self, employee_code: str) -> bool:
        return self._by_code.pop(employee_code, None) is not None


class InMemoryFacilities:
    def __init__(self, settings: Optional[FacilitySettings] = None):
        self._settings = settings

    def get_current(self):
        return self._settings

    def get_by_id(self, facility_id: int):
        if self._settings and self._settings.facility_id == facility_id:
            return self._settings
        return None

    def update(self, *, facility_id, name, latitude, longitude, radius_meters) -> bool:
        if not self._settings or self._settings.facility_id != facility_id:
            return False
        self._settings = replace(
            self._settings, name=name, latitude=latitude, longitude=longitude, radius_meters=radius_meters
        )
        return True


class InMemoryTimeEntries:
    def __init__(self, events=()):
        self.events: list[AttendanceEvent] = list(events)
        self._write_lock = threading.Lock()

    @staticmethod
    def _in_range(e: AttendanceEvent, start: Optional[datetime], end: Optional[datetime]) -> bool:
        if start is not None and e.timestamp < start:
            return False
        if end is not None and e.timestamp > end:
            return False
        return True

    def fetch_events(self, employee_id, start=None, end=None):
        return [e for e in self.events if e.employee_id == employee_id and self._in_range(e, start, end)]

    def fetch_all_events(self, start=None, end=None):
        return [e for e in self.events if self._in_range(e, start, end)]

    def last_event_before(self, employee_id, kind, at):
        found = [e for e in self.events if e.employee_id == employee_id and e.kind == kind and e.timestamp <= at]
        return max(found, key=lambda e: e.timestamp, default=None)

    def first_event_after(self, employee_id, kind, at):
        found = [e for e in self.events if e.employee_id == employee_id and e.kind == kind and e.timestamp >= at]
        return min(found, key=lambda e: e.timestamp, default=None)

    def record_event(self, *, employee_id, kind, timestamp, location=None, note=None, guard=None) -> AttendanceEvent:
        with self._write_lock:
            if guard is not None:
                guard(self.fetch_events(employee_id, end=timestamp))
            event = AttendanceEvent(
                employee_id=employee_id,
                kind=kind,
                timestamp=timestamp,
                location=location,
                note=note,
                entry_id=len(self.events) + 1,
            )
            self.events.append(event)
            return event


class InMemorySignups:
    def __init__(self):
        self._by_id: dict[int, SignupRequest] = {}
        self._next_id = 1

    def create(self, *, name, email, phone, experience, preferred_department, message, submitted_at) -> int:
        rid = self._next_id
        self._next_id += 1
        self._by_id[rid] = SignupRequest(
            request_id=rid,
            name=name,
            email=email,
            phone=phone,
            experience=experience,
            preferred_department=preferred_department,
            message=message,
            status=SignupStatus.PENDING,
            submitted_at=submitted_at,
        )
        return rid

    def get(self, request_id: int):
        return self._by_id.get(int(request_id))

    def get_by_email(self, email: str):
        return next((r for r in self._by_id.values() if r.email == email), None)

    def list_requests(self, *, status=None):
        items = [r for r in self._by_id.values() if status is None or r.status == status]
        return sorted(items, key=lambda r: (r.submitted_at, r.request_id), reverse=True)

    def decide(self, *, request_id, status, reviewed_at, review_notes=None, employee_code=None) -> bool:
        req = self._by_id.get(int(request_id))
        if not req or req.status == SignupStatus.APPROVED:
            return False
        self._by_id[int(request_id)] = replace(
            req,
            status=status,
            reviewed_at=reviewed_at,
            review_notes=review_notes,
            employee_code=employee_code or req.employee_code,
        )
        return True


def make_employee(pk: int, code: str, *, name: str = "Care Worker", department: str = "Care", role=Role.EMPLOYEE):
    return Employee(
        employee_pk=pk,
        employee_code=code,
        name=name,
        email=f"{code.lower()}@example.com",
        role=role,
        department=department,
        position="Care Worker",
        password_hash="pbkdf2:sha256:placeholder",
    )
