from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        role: Role,
        department: Optional[str],
        position: Optional[str],
        password_hash: str,
        hired_at: Optional[datetime] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_code: str,
        name: str,
        department: Optional[str],
        position: Optional[str],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete_by_code(self, employee_code: str) -> bool:
        raise NotImplementedError
