from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SignupStatus
from .model import SignupRequest


class SignupRepository(Protocol):
    def create(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        experience: str,
        preferred_department: Optional[str],
        message: Optional[str],
        submitted_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[SignupRequest]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[SignupRequest]:
        raise NotImplementedError

    def list_requests(self, *, status: Optional[SignupStatus] = None) -> Sequence[SignupRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: SignupStatus,
        reviewed_at: datetime,
        review_notes: Optional[str] = None,
        employee_code: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
