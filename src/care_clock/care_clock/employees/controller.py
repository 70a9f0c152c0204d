from __future__ import annotations

from flask import Flask, request

from ..common.responses import json_api, json_body, ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @json_api
    def list_employees():
        staff = service.list_staff(department=request.args.get("department") or None)
        return ok(employees=[e.to_public_dict() for e in staff], count=len(staff))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @json_api
    def create_employee():
        data = json_body()
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Invalid role")

        employee = service.create_employee(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            department=data.get("department"),
            position=data.get("position"),
            role=role,
            employee_code=data.get("employeeId"),
        )
        return ok(201, employee=employee.to_public_dict())

    @app.route("/api/employees/<employee_code>", methods=["GET"], endpoint="employees_get")
    @json_api
    def get_employee(employee_code: str):
        return ok(employee=service.get(employee_code).to_public_dict())

    @app.route("/api/employees/<employee_code>", methods=["PUT"], endpoint="employees_update")
    @json_api
    def update_employee(employee_code: str):
        data = json_body()
        employee = service.update_employee(
            employee_code,
            name=data.get("name"),
            department=data.get("department"),
            position=data.get("position"),
            is_active=data.get("isActive"),
        )
        return ok(employee=employee.to_public_dict())

    @app.route("/api/employees/<employee_code>", methods=["DELETE"], endpoint="employees_delete")
    @json_api
    def delete_employee(employee_code: str):
        service.delete_employee(employee_code)
        return ok(message="Employee deleted")
