from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SignupStatus


@dataclass(frozen=True)
class SignupRequest:
    """A care worker's application, reviewed by a manager."""

    request_id: int
    name: str
    email: str
    phone: str
    experience: str
    preferred_department: Optional[str]
    message: Optional[str]
    status: SignupStatus
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    employee_code: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "experience": self.experience,
            "preferredDepartment": self.preferred_department,
            "message": self.message,
            "status": self.status.value,
            "submittedAt": self.submitted_at.isoformat(),
            "reviewedAt": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "reviewNotes": self.review_notes,
            "employeeId": self.employee_code,
        }
