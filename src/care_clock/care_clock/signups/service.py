from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_DEPARTMENT, DEFAULT_POSITION
from ..core.enums import Role, SignupStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeService
from .model import SignupRequest
from .repository import SignupRepository

logger = logging.getLogger(__name__)


class SignupService:
    """Use case: care workers apply, managers review.

    Approving a request creates the employee account; an approved request is final.
    """

    def __init__(
        self,
        signups: SignupRepository,
        employees: EmployeeRepository,
        employee_service: EmployeeService,
        *,
        default_password: str,
    ):
        self._signups = signups
        self._employees = employees
        self._employee_service = employee_service
        self._default_password = default_password

    def submit(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        experience: str,
        preferred_department: Optional[str] = None,
        message: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SignupRequest:
        try:
            name = require_non_empty(name, "Name")
            email = require_non_empty(email, "Email").lower()
            phone = require_non_empty(phone, "Phone")
            experience = require_non_empty(experience, "Experience")
        except ValidationError:
            raise ValidationError("Missing required fields: name, email, phone, and experience are required")

        if self._signups.get_by_email(email):
            raise ConflictError("An application with this email already exists")
        if self._employees.get_by_email(email):
            raise ConflictError("A user with this email already exists in our system")

        request_id = self._signups.create(
            name=name,
            email=email,
            phone=phone,
            experience=experience,
            preferred_department=(preferred_department or "").strip() or None,
            message=(message or "").strip() or None,
            submitted_at=now or now_utc(),
        )
        logger.info("New signup request %s from %s", request_id, email)
        return self.get(request_id)

    def get(self, request_id: int) -> SignupRequest:
        req = self._signups.get(int(request_id))
        if not req:
            raise NotFoundError("Signup request not found")
        return req

    def list_requests(self, *, status: Optional[str] = None) -> list[SignupRequest]:
        wanted = None
        if status:
            try:
                wanted = SignupStatus(status)
            except ValueError:
                raise ValidationError("Invalid status")
        return list(self._signups.list_requests(status=wanted))

    def decide(
        self,
        request_id: int,
        status,
        *,
        review_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SignupRequest:
        try:
            status = SignupStatus(status)
        except ValueError:
            valid = ", ".join(s.value for s in SignupStatus)
            raise ValidationError(f"Invalid status. Must be one of: {valid}")

        req = self.get(request_id)
        if req.status == SignupStatus.APPROVED:
            raise ValidationError("Signup request has already been approved")

        now = now or now_utc()
        employee_code = None
        if status == SignupStatus.APPROVED:
            employee = self._employee_service.create_employee(
                name=req.name,
                email=req.email,
                password=self._default_password,
                department=req.preferred_department or DEFAULT_DEPARTMENT,
                position=DEFAULT_POSITION,
                role=Role.EMPLOYEE,
                now=now,
            )
            employee_code = employee.employee_code

        decided = self._signups.decide(
            request_id=req.request_id,
            status=status,
            reviewed_at=now,
            review_notes=(review_notes or "").strip() or None,
            employee_code=employee_code,
        )
        if not decided:
            raise ValidationError("Failed to update signup request")

        logger.info("Signup request %s marked %s", req.request_id, status.value)
        return self.get(req.request_id)
