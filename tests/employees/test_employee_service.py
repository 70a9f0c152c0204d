from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.care_clock.care_clock.core.enums import Role
from src.care_clock.care_clock.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.care_clock.care_clock.employees.service import EmployeeService, generate_employee_code

from tests.fakes import InMemoryEmployees, make_employee


def test_create_employee_hashes_password(employees_repo):
    svc = EmployeeService(employees_repo)

    employee = svc.create_employee(name="Cara Diaz", email="Cara@Example.com", password="secret1", department="Care")

    assert employee.email == "cara@example.com"
    assert employee.role == Role.EMPLOYEE
    assert employee.password_hash != "secret1"
    assert svc.verify_password(employee.employee_code, "secret1")
    assert not svc.verify_password(employee.employee_code, "wrong")


def test_create_employee_validation(employees_repo):
    svc = EmployeeService(employees_repo)

    with pytest.raises(ValidationError):
        svc.create_employee(name=" ", email="a@example.com", password="secret1")
    with pytest.raises(ValidationError):
        svc.create_employee(name="A", email="a@example.com", password="123")
    with pytest.raises(ValidationError):
        svc.create_employee(name="A", email="not-an-email", password="secret1")
    with pytest.raises(ConflictError):
        svc.create_employee(name="A", email="emp001@example.com", password="secret1")
    with pytest.raises(ConflictError):
        svc.create_employee(name="A", email="new@example.com", password="secret1", employee_code="EMP001")


def test_update_and_list(employees_repo):
    svc = EmployeeService(employees_repo)

    svc.update_employee("EMP002", department="Care", is_active=False)

    assert [e.employee_code for e in svc.list_staff(department="Care")] == ["EMP001", "EMP002"]
    assert [e.employee_code for e in svc.list_staff(include_inactive=False)] == ["EMP001"]


def test_verify_password_tolerates_unparseable_hash(employees_repo):
    assert EmployeeService(employees_repo).verify_password("EMP001", "anything") is False


def test_delete_rules():
    repo = InMemoryEmployees([make_employee(1, "MGR001", role=Role.MANAGER), make_employee(2, "EMP002")])
    svc = EmployeeService(repo)

    with pytest.raises(ValidationError):
        svc.delete_employee("MGR001")
    svc.delete_employee("EMP002")
    with pytest.raises(NotFoundError):
        svc.get("EMP002")


def test_generated_codes_carry_the_timestamp():
    code = generate_employee_code(datetime(2025, 3, 10, 8, 0, 0, tzinfo=timezone.utc))

    assert code.startswith("EMP20250310080000")
    assert len(code) == len("EMP20250310080000") + 4
