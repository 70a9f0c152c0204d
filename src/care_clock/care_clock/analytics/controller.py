from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import optional_range
from ..common.responses import json_api, ok
from ..container import Container
from ..timeclock.controller import state_to_dict


def register(app: Flask, container: Container) -> None:
    service = container.analytics_service

    @app.route("/api/analytics", methods=["GET"], endpoint="analytics")
    @json_api
    def analytics():
        employee_code = (request.args.get("employeeId") or "").strip()
        department = (request.args.get("department") or "").strip()
        start, end = optional_range(request.args.get("startDate"), request.args.get("endDate"))

        if employee_code:
            stats = service.employee_stats(employee_code, start=start, end=end)
            state = container.time_entry_service.current_status(employee_code)
            return ok(data={"employeeStats": stats.to_dict(), "clockStatus": state_to_dict(state)})

        if department:
            return ok(data={"departmentStats": service.department_stats(department, start=start, end=end)})

        overall = service.overall_stats(start=start, end=end)
        return ok(
            data={
                "overallStats": overall.totals,
                "realTimeStatus": overall.realtime,
                "departments": overall.departments,
                "recentActivity": overall.recent_activity,
            }
        )
