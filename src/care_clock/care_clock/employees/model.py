from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member.

    Note: Plain data object (no DB access code). ``employee_pk`` is the storage
    key used on time entries; ``employee_code`` is the public identifier.
    """

    employee_pk: int
    employee_code: str
    name: str
    email: str
    role: Role
    department: Optional[str]
    position: Optional[str]
    password_hash: str
    is_active: bool = True
    hired_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "employeeId": self.employee_code,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "position": self.position,
            "isActive": self.is_active,
            "hiredAt": self.hired_at.isoformat() if self.hired_at else None,
        }
