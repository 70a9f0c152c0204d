from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def generate_employee_code(now: Optional[datetime] = None) -> str:
    now = now or now_utc()
    return f"EMP{now:%Y%m%d%H%M%S}{secrets.token_hex(2).upper()}"


class EmployeeService:
    """Use case: manage staff records (manager)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_code: str) -> Employee:
        employee = self._employees.get_by_code(employee_code)
        if not employee:
            raise NotFoundError(f"Employee with ID {employee_code} not found")
        return employee

    def list_staff(self, *, department: Optional[str] = None, include_inactive: bool = True) -> list[Employee]:
        staff = list(self._employees.list_all())
        if department:
            staff = [e for e in staff if (e.department or "") == department]
        if not include_inactive:
            staff = [e for e in staff if e.is_active]
        return staff

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        password: str,
        department: Optional[str] = None,
        position: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
        employee_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if "@" not in email:
            raise ValidationError("Email is invalid")

        if self._employees.get_by_email(email):
            raise ConflictError("A user with this email already exists in our system")

        role = Role(role)
        now = now or now_utc()
        code = (employee_code or "").strip() or generate_employee_code(now)
        if self._employees.get_by_code(code):
            raise ConflictError(f"Employee ID {code} is already in use")

        self._employees.create(
            employee_code=code,
            name=name,
            email=email,
            role=role,
            department=(department or "").strip() or None,
            position=(position or "").strip() or None,
            password_hash=generate_password_hash(password),
            hired_at=now,
        )
        logger.info("Created employee %s (%s)", code, role.value)
        return self.get(code)

    def update_employee(
        self,
        employee_code: str,
        *,
        name: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        current = self.get(employee_code)
        ok = self._employees.update(
            employee_code=employee_code,
            name=require_non_empty(name, "Name") if name is not None else current.name,
            department=department if department is not None else current.department,
            position=position if position is not None else current.position,
            is_active=bool(is_active) if is_active is not None else current.is_active,
        )
        if not ok:
            raise ValidationError("Failed to update employee")
        return self.get(employee_code)

    def delete_employee(self, employee_code: str) -> None:
        employee = self.get(employee_code)
        if employee.role == Role.MANAGER:
            raise ValidationError("Manager accounts cannot be deleted")
        if not self._employees.delete_by_code(employee_code):
            raise ValidationError("Failed to delete employee")
        logger.info("Deleted employee %s", employee_code)

    def verify_password(self, employee_code: str, password: str) -> bool:
        """Credential check for the host application's sign-in layer; no route here calls it."""
        employee = self._employees.get_by_code(employee_code)
        if not employee or not employee.is_active:
            return False
        try:
            return check_password_hash(employee.password_hash, password)
        except ValueError:
            # e.g. placeholder or legacy hashes that werkzeug cannot parse
            return False
