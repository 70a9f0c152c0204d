from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.care_clock.care_clock.core.enums import SignupStatus
from src.care_clock.care_clock.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.care_clock.care_clock.employees.service import EmployeeService
from src.care_clock.care_clock.signups.service import SignupService

SUBMITTED = datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(signups_repo, employees_repo):
    return SignupService(
        signups_repo,
        employees_repo,
        EmployeeService(employees_repo),
        default_password="careworker123",
    )


def submit(service, **overrides):
    data = dict(
        name="Dana Reyes",
        email="dana@example.com",
        phone="555-0100",
        experience="3 years in elder care",
        preferred_department="Nursing",
        now=SUBMITTED,
    )
    data.update(overrides)
    return service.submit(**data)


def test_submit_creates_pending_request(service):
    req = submit(service)

    assert req.status == SignupStatus.PENDING
    assert req.submitted_at == SUBMITTED
    assert [r.request_id for r in service.list_requests()] == [req.request_id]
    assert service.list_requests(status="APPROVED") == []


def test_submit_requires_core_fields(service):
    with pytest.raises(ValidationError, match="Missing required fields"):
        submit(service, phone="")


def test_duplicate_emails_conflict(service):
    submit(service)

    with pytest.raises(ConflictError):
        submit(service)
    with pytest.raises(ConflictError):
        submit(service, email="emp001@example.com")


def test_approve_creates_employee(service, employees_repo):
    req = submit(service)

    decided = service.decide(req.request_id, "APPROVED", review_notes="Welcome aboard")

    assert decided.status == SignupStatus.APPROVED
    assert decided.review_notes == "Welcome aboard"
    employee = employees_repo.get_by_code(decided.employee_code)
    assert employee.email == "dana@example.com"
    assert employee.department == "Nursing"
    assert employee.position == "Care Worker"
    assert EmployeeService(employees_repo).verify_password(employee.employee_code, "careworker123")


def test_approved_request_is_final(service):
    req = submit(service)
    service.decide(req.request_id, SignupStatus.APPROVED)

    with pytest.raises(ValidationError):
        service.decide(req.request_id, SignupStatus.REJECTED)


def test_reject_and_contacted_do_not_create_accounts(service, employees_repo):
    req = submit(service, preferred_department=None)

    service.decide(req.request_id, "CONTACTED")
    decided = service.decide(req.request_id, "REJECTED")

    assert decided.status == SignupStatus.REJECTED
    assert decided.employee_code is None
    assert employees_repo.get_by_email("dana@example.com") is None


def test_decide_errors(service):
    with pytest.raises(NotFoundError):
        service.decide(99, "APPROVED")

    req = submit(service)
    with pytest.raises(ValidationError, match="Invalid status"):
        service.decide(req.request_id, "MAYBE")
