from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCoordinate(ValidationError):
    """Raised when a latitude, longitude or radius is outside its domain."""


class InvalidEvent(ValidationError):
    """Raised when an attendance event record is malformed."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when a record would duplicate an existing one."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class OutsidePerimeterError(DomainError):
    """Raised when a clock action is attempted outside the facility perimeter."""

    def __init__(self, message: str, *, distance_meters: float, radius_meters: Optional[float] = None):
        super().__init__(message)
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters
