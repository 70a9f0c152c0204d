from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import ensure_utc, now_utc
from ..core.constants import RECENT_ACTIVITY_LIMIT
from ..core.enums import DutyStatus, EntryType
from ..employees.service import EmployeeService
from ..timeclock.reconstructor import AttendanceReconstructor, order_events
from ..timeclock.repository import TimeEntryRepository
from ..timeclock.service import covering_events

_ACTION_LABELS = {
    EntryType.CLOCK_IN: "Clocked In",
    EntryType.CLOCK_OUT: "Clocked Out",
    EntryType.BREAK_START: "Started Break",
    EntryType.BREAK_END: "Ended Break",
}


@dataclass(frozen=True)
class EmployeeStats:
    total_hours: float
    total_days: int
    average_hours_per_day: float
    clock_ins: int
    clock_outs: int
    anomaly_count: int = 0

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "totalDays": self.total_days,
            "averageHoursPerDay": self.average_hours_per_day,
            "clockIns": self.clock_ins,
            "clockOuts": self.clock_outs,
            "anomalyCount": self.anomaly_count,
        }


@dataclass(frozen=True)
class OverallStats:
    totals: dict
    realtime: dict
    departments: list[dict]
    recent_activity: list[dict]


class AnalyticsService:
    """Dashboard figures computed from the raw event log on every query."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeService,
        *,
        reconstructor: Optional[AttendanceReconstructor] = None,
    ):
        self._entries = entries
        self._employees = employees
        self._reconstructor = reconstructor or AttendanceReconstructor()

    def employee_stats(
        self,
        employee_code: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> EmployeeStats:
        employee = self._employees.get(employee_code)
        events = self._entries.fetch_events(employee.employee_pk, start=start, end=end)
        covering = covering_events(self._entries, employee.employee_pk, start=start, end=end)

        result = self._reconstructor.clip_to_range(self._reconstructor.reconstruct_shifts(covering), start, end)
        shifts = result.shifts
        kinds = Counter(e.kind for e in order_events(events)[0])

        total = self._reconstructor.total_hours(shifts)
        days = {ensure_utc(s.start).date() for s in shifts}
        average = 0.0
        if shifts:
            range_start = start or min(s.start for s in shifts)
            range_end = end or max(s.start for s in shifts)
            average = self._reconstructor.average_hours_per_day(shifts, range_start, range_end)

        return EmployeeStats(
            total_hours=round(total, 2),
            total_days=len(days),
            average_hours_per_day=round(average, 2),
            clock_ins=kinds[EntryType.CLOCK_IN],
            clock_outs=kinds[EntryType.CLOCK_OUT],
            anomaly_count=len(result.anomalies),
        )

    def _states_by_employee(self, as_of: datetime) -> dict:
        by_employee = defaultdict(list)
        for event in self._entries.fetch_all_events(end=as_of):
            by_employee[event.employee_id].append(event)
        return {pk: self._reconstructor.current_state(events, as_of) for pk, events in by_employee.items()}

    def department_stats(
        self,
        department: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        as_of: Optional[datetime] = None,
    ) -> list[dict]:
        as_of = ensure_utc(as_of) if as_of else now_utc()
        states = self._states_by_employee(as_of)

        rows = []
        for employee in self._employees.list_staff(department=department):
            events, _ = order_events(self._entries.fetch_events(employee.employee_pk, start=start, end=end))
            kinds = Counter(e.kind for e in events)
            state = states.get(employee.employee_pk)
            rows.append(
                {
                    "employeeId": employee.employee_code,
                    "name": employee.name,
                    "department": employee.department,
                    "position": employee.position,
                    "clockIns": kinds[EntryType.CLOCK_IN],
                    "clockOuts": kinds[EntryType.CLOCK_OUT],
                    "isClockedIn": bool(state and state.on_duty),
                    "status": state.status.value if state else DutyStatus.OFF_DUTY.value,
                }
            )
        return rows

    def overall_stats(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        as_of: Optional[datetime] = None,
    ) -> OverallStats:
        as_of = ensure_utc(as_of) if as_of else now_utc()
        events, invalid = order_events(self._entries.fetch_all_events(start=start, end=end))
        kinds = Counter(e.kind for e in events)

        staff = self._employees.list_staff(include_inactive=False)
        states = self._states_by_employee(as_of)
        status_counts = Counter(
            (states[e.employee_pk].status if e.employee_pk in states else DutyStatus.OFF_DUTY) for e in staff
        )

        departments = Counter((e.department or "Unassigned") for e in staff)
        names = {e.employee_pk: e.name for e in self._employees.list_staff()}

        recent = [
            {
                "time": e.timestamp.isoformat(),
                "action": _ACTION_LABELS[e.kind],
                "staffName": names.get(e.employee_id, "Unknown"),
                "type": e.kind.value,
            }
            for e in reversed(events[-RECENT_ACTIVITY_LIMIT:])
        ]

        return OverallStats(
            totals={
                "totalTimeEntries": len(events),
                "totalClockIns": kinds[EntryType.CLOCK_IN],
                "totalClockOuts": kinds[EntryType.CLOCK_OUT],
                "totalBreaks": kinds[EntryType.BREAK_START] + kinds[EntryType.BREAK_END],
                "invalidEntries": len(invalid),
                "period": {
                    "start": start.isoformat() if start else None,
                    "end": end.isoformat() if end else None,
                },
            },
            realtime={
                "totalStaff": len(staff),
                "activeStaff": status_counts[DutyStatus.ON_DUTY],
                "onBreak": status_counts[DutyStatus.ON_BREAK],
                "offDuty": status_counts[DutyStatus.OFF_DUTY],
            },
            departments=[{"department": d, "count": c} for d, c in sorted(departments.items())],
            recent_activity=recent,
        )
