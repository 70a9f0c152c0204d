from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import optional_range, parse_iso_datetime
from ..common.responses import fail, json_api, json_body, ok
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from .model import AnomalousEvent, AttendanceEvent, AttendanceState, ShiftSegment


def event_to_dict(e: AttendanceEvent) -> dict:
    return {
        "id": e.entry_id,
        "type": getattr(e.kind, "value", e.kind),
        "timestamp": e.timestamp.isoformat(),
        "latitude": e.location.latitude if e.location else None,
        "longitude": e.location.longitude if e.location else None,
        "note": e.note,
    }


def anomaly_to_dict(a: AnomalousEvent) -> dict:
    events = a.event if isinstance(a.event, tuple) else (a.event,)
    return {
        "kind": a.kind.value,
        "reason": a.reason,
        "entries": [event_to_dict(e) for e in events if isinstance(e, AttendanceEvent)],
    }


def state_to_dict(s: AttendanceState) -> dict:
    return {
        "status": s.status.value,
        "isClockedIn": s.on_duty,
        "onBreak": s.on_break,
        "lastClockIn": s.last_clock_in.isoformat() if s.last_clock_in else None,
        "lastClockOut": s.last_clock_out.isoformat() if s.last_clock_out else None,
        "anomalies": [anomaly_to_dict(a) for a in s.anomalies],
    }


def shift_to_dict(s: ShiftSegment) -> dict:
    return {
        "start": s.start.isoformat(),
        "end": s.end.isoformat(),
        "durationHours": round(s.duration_hours, 2),
    }


def register(app: Flask, container: Container) -> None:
    service = container.time_entry_service

    @app.route("/api/time-entries", methods=["POST"], endpoint="time_entries_create")
    @json_api
    def create_time_entry():
        data = json_body()
        employee_code = (data.get("employeeId") or "").strip()
        kind = data.get("type")
        if not employee_code or not kind:
            return fail("Employee ID and entry type are required", 400)

        event = service.record_entry(
            employee_code,
            kind,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            note=data.get("note"),
        )
        return ok(timeEntry=event_to_dict(event), message="Time entry created successfully")

    @app.route("/api/time-entries", methods=["GET"], endpoint="time_entries_list")
    @json_api
    def list_time_entries():
        employee_code = (request.args.get("employeeId") or "").strip()
        start, end = optional_range(request.args.get("startDate"), request.args.get("endDate"))
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)

        if employee_code:
            events = service.history(employee_code, start=start, end=end, limit=limit)
            return ok(timeEntries=[event_to_dict(e) for e in events], count=len(events))

        staff = {e.employee_pk: e for e in container.employee_service.list_staff()}
        events = service.all_entries(start=start, end=end, limit=limit)
        rows = []
        for e in events:
            employee = staff.get(e.employee_id)
            row = event_to_dict(e)
            row["employeeId"] = employee.employee_code if employee else None
            row["staffName"] = employee.name if employee else None
            rows.append(row)
        return ok(timeEntries=rows, count=len(rows))

    @app.route("/api/time-entries/status", methods=["GET"], endpoint="time_entries_status")
    @json_api
    def time_entry_status():
        employee_code = (request.args.get("employeeId") or "").strip()
        if not employee_code:
            return fail("employeeId is required", 400)

        as_of = request.args.get("asOf")
        state = service.current_status(employee_code, as_of=parse_iso_datetime(as_of) if as_of else None)
        return ok(clockStatus=state_to_dict(state))

    @app.route("/api/time-entries/shifts", methods=["GET"], endpoint="time_entries_shifts")
    @json_api
    def time_entry_shifts():
        employee_code = (request.args.get("employeeId") or "").strip()
        if not employee_code:
            return fail("employeeId is required", 400)

        start, end = optional_range(request.args.get("startDate"), request.args.get("endDate"))
        result = service.shifts(employee_code, start=start, end=end)
        total = container.reconstructor.total_hours(result.shifts)
        return ok(
            shifts=[shift_to_dict(s) for s in result.shifts],
            anomalies=[anomaly_to_dict(a) for a in result.anomalies],
            openClockIn=event_to_dict(result.open_clock_in) if result.open_clock_in else None,
            totalHours=round(total, 2),
        )
